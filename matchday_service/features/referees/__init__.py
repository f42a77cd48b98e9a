"""Referees feature package."""

from .event_handlers import RefereeEventHandler
from .models import Referee
from .repository import RefereeRepository, get_referee_repository
from .service import RefereeService

__all__ = [
    "Referee",
    "RefereeEventHandler",
    "RefereeRepository",
    "RefereeService",
    "get_referee_repository",
]
