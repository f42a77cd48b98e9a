"""Teams feature package."""

from .models import Team
from .repository import TeamRepository, get_team_repository
from .service import TeamService

__all__ = ["Team", "TeamRepository", "TeamService", "get_team_repository"]
