# database/schemas/__init__.py

from .football_schema import (
    FOOTBALL_SPORT_ID,
    Event,
    EventStatus,
    FootballStats,
    Player,
    PlayerMatchStat,
    Sport,
    Team,
)

__all__ = [
    "FOOTBALL_SPORT_ID",
    "Sport",
    "Team",
    "Event",
    "EventStatus",
    "FootballStats",
    "Player",
    "PlayerMatchStat",
]
