# database/repositories/team_repository.py
"""
Team-specific repository implementation.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from database.schemas import FOOTBALL_SPORT_ID, Team

from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TeamRepository(BaseRepository[Team]):
    """
    Repository for Team entity operations.
    """

    def __init__(self, session: Session):
        super().__init__(session, Team)

    def get_by_name(self, name: str, sport_id: str = FOOTBALL_SPORT_ID) -> Optional[Team]:
        return self.session.scalar(
            select(Team).where(Team.sport_id == sport_id, Team.name == name)
        )

    def upsert(
        self,
        name: str,
        url: Optional[str] = None,
        sport_id: str = FOOTBALL_SPORT_ID,
    ) -> Team:
        """
        Find a team by (sport, name) or create it. A supplied URL always
        overwrites the stored one; ``None`` leaves it untouched.

        Args:
            name: Team display name
            url: Profile URL if known
            sport_id: Sport key

        Returns:
            The persistent Team (flushed, so ``id`` is set)

        Raises:
            ValueError: If name is empty
        """
        if not name or not name.strip():
            raise ValueError("Team name must be a non-empty string")

        team = self.get_by_name(name, sport_id)
        if team is None:
            team = self.add(Team(sport_id=sport_id, name=name, url=url))
            logger.debug("Created team %s (id=%s)", name, team.id)
        elif url and team.url != url:
            team.url = url
            self.session.flush()
        return team
