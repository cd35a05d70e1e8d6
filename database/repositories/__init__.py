from .base_repository import BaseRepository
from .event_repository import EventRepository
from .form_repository import FormRepository, LeagueAverages, TeamResult
from .player_repository import PlayerRepository
from .team_repository import TeamRepository

__all__ = [
    "BaseRepository",
    "TeamRepository",
    "EventRepository",
    "PlayerRepository",
    "FormRepository",
    "LeagueAverages",
    "TeamResult",
]
