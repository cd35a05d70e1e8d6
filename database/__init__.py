from .core.database_manager import DatabaseManager
from .core.schema_manager import LEGACY_BACKUP_TABLE, SchemaManager
from .schemas import Event, EventStatus, FootballStats, Player, PlayerMatchStat, Sport, Team
from .services.database_service import FootballDatabaseService

__all__ = [
    "DatabaseManager",
    "SchemaManager",
    "LEGACY_BACKUP_TABLE",
    "FootballDatabaseService",
    "Sport",
    "Team",
    "Event",
    "EventStatus",
    "FootballStats",
    "Player",
    "PlayerMatchStat",
]
