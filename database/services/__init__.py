from .database_service import FootballDatabaseService

__all__ = ["FootballDatabaseService"]
