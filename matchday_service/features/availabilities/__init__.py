"""Availabilities feature package."""

from .models import Availability
from .repository import AvailabilityRepository, get_availability_repository
from .service import AvailabilityService

__all__ = ["Availability", "AvailabilityRepository", "AvailabilityService", "get_availability_repository"]
