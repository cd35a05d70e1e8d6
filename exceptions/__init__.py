from .analysis import InsufficientHistory
from .database import (
    DatabaseConfigurationError,
    DatabaseConnectionError,
    PersistenceConflict,
    PersistenceFailed,
    SchemaInitializationError,
    StorageBusy,
)
from .fetcher import FetchFailed, TimeoutWaitingForContent
from .parsers import NoSuitableTable, ParsingError

__all__ = [
    "FetchFailed",
    "TimeoutWaitingForContent",
    "ParsingError",
    "NoSuitableTable",
    "PersistenceFailed",
    "PersistenceConflict",
    "StorageBusy",
    "DatabaseConnectionError",
    "DatabaseConfigurationError",
    "SchemaInitializationError",
    "InsufficientHistory",
]
