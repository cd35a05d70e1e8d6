# database/repositories/player_repository.py
"""
Player identity and per-match fact rows.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from database.schemas import Player, PlayerMatchStat
from extractors.records import PlayerStats

from .base_repository import BaseRepository


class PlayerRepository(BaseRepository[Player]):
    """
    Repository for Player and PlayerMatchStat rows.
    """

    def __init__(self, session: Session):
        super().__init__(session, Player)

    def get_by_name(self, name: str) -> Optional[Player]:
        return self.session.scalar(select(Player).where(Player.name == name))

    def get_or_create(self, name: str) -> Player:
        player = self.get_by_name(name)
        if player is None:
            player = self.add(Player(name=name))
        return player

    def add_match_stat(
        self, player_id: int, match_id: int, team_id: int, stats: PlayerStats
    ) -> PlayerMatchStat:
        """
        Append one player's line for a match.
        """
        return self.add(
            PlayerMatchStat(
                player_id=player_id,
                match_id=match_id,
                team_id=team_id,
                position=stats.position,
                minutes=stats.minutes,
                goals=stats.goals,
                assists=stats.assists,
                shots=stats.shots,
                shots_on_target=stats.shots_on_target,
                xg=stats.xg,
                xa=stats.xa,
                sca=stats.sca,
                tackles=stats.tackles,
                interceptions=stats.interceptions,
                fouls_committed=stats.fouls_committed,
                fouls_drawn=stats.fouls_drawn,
            )
        )
