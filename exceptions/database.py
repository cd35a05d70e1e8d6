# pylint: disable=unnecessary-pass
"""
Custom exceptions for database operations.
"""


class PersistenceFailed(Exception):
    """
    Base class for storage-layer failures. The enclosing transaction has
    already been rolled back when this is raised.
    """

    pass


class PersistenceConflict(PersistenceFailed):
    """
    Exception raised when a unique constraint rejects a write,
    typically because a concurrent writer inserted the same key first
    """

    pass


class StorageBusy(PersistenceFailed):
    """
    Exception raised when the database is locked by another writer
    """

    pass


class DatabaseConnectionError(PersistenceFailed):
    """
    Exception raised for errors in the database connection
    """

    pass


class DatabaseConfigurationError(PersistenceFailed):
    """
    Exception raised for invalid database configuration
    """

    pass


class SchemaInitializationError(PersistenceFailed):
    """
    Exception raised when schema creation, seeding or legacy migration fails
    """

    pass
