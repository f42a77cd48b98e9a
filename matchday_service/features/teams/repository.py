"""Repository for the teams feature."""

from __future__ import annotations

from matchday_service.core.database import BaseRepository
from matchday_service.features.teams.models import Team


class TeamRepository(BaseRepository[Team]):
    def __init__(self) -> None:
        super().__init__(Team)


_team_repository: TeamRepository | None = None


def get_team_repository() -> TeamRepository:
    global _team_repository
    if _team_repository is None:
        _team_repository = TeamRepository()
    return _team_repository
