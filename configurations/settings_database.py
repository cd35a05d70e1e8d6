# configurations/settings_database.py
"""
Database settings per environment.

- development: SQLite file under ``SQLITE_DIR`` (default ``data/``)
- testing: SQLite in memory
- production: PostgreSQL assembled from ``POSTGRES_*`` variables
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
from urllib.parse import quote_plus

from dotenv import load_dotenv

from configurations.settings_base import EnvironmentVariables
from exceptions import DatabaseConfigurationError

logger = logging.getLogger(__name__)

# ***> Load environment variables from .env file <***
env_path = EnvironmentVariables.env_file_path
if env_path and Path(env_path).exists():
    load_dotenv(env_path)
    logger.info("Loaded environment from: %s", env_path)

SUPPORTED_ENVIRONMENTS = ["development", "testing", "production"]
DEFAULT_ENVIRONMENT = "development"

# ***> Stored when a match date cannot be read; never replaces a real date <***
UNKNOWN_MATCH_DATE = "1900-01-01"

# ***> Engine options per environment; URLs are resolved separately <***
ENVIRONMENT_PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {"database_type": "sqlite", "pool_size": 3},
    "testing": {"database_type": "sqlite", "pool_size": 1, "busy_timeout": 1},
    "production": {
        "database_type": "postgresql",
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 60,
    },
}


@dataclass
class DatabaseConfig:
    """
    Connection URL plus engine tuning for one environment.
    """

    database_url: str
    database_type: str  # ***> sqlite, postgresql <***
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 3600
    busy_timeout: int = 15

    @staticmethod
    def sqlite_url(environment: str) -> str:
        if environment == "testing":
            return "sqlite:///:memory:"
        db_file = Path(os.getenv("SQLITE_DIR", "data")) / f"{environment}_database.db"
        return f"sqlite:///{db_file}"

    @staticmethod
    def postgres_url() -> str:
        """
        Raises:
            DatabaseConfigurationError: If POSTGRES_PASSWORD is not set
        """
        password = os.getenv("POSTGRES_PASSWORD")
        if not password:
            raise DatabaseConfigurationError(
                "POSTGRES_PASSWORD is required for the production database"
            )

        user = os.getenv("POSTGRES_USER", "football")
        host = os.getenv("POSTGRES_HOST", "localhost")
        port = os.getenv("POSTGRES_PORT", "5432")
        name = os.getenv("POSTGRES_DB", "football_stats")

        logger.info("PostgreSQL target: %s@%s:%s/%s", user, host, port, name)
        return (
            f"postgresql+psycopg://{quote_plus(user)}:{quote_plus(password)}"
            f"@{host}:{port}/{name}"
        )

    @classmethod
    def for_environment(cls, environment: str) -> "DatabaseConfig":
        environment = environment.lower()
        preset = dict(
            ENVIRONMENT_PRESETS.get(environment, ENVIRONMENT_PRESETS[DEFAULT_ENVIRONMENT])
        )

        if preset["database_type"] == "postgresql":
            url = cls.postgres_url()
        else:
            url = cls.sqlite_url(environment)
        return cls(database_url=url, **preset)

    @classmethod
    def development(cls) -> "DatabaseConfig":
        return cls.for_environment("development")

    @classmethod
    def testing(cls) -> "DatabaseConfig":
        return cls.for_environment("testing")

    @classmethod
    def production(cls) -> "DatabaseConfig":
        return cls.for_environment("production")

    @classmethod
    def from_url(cls, url: str) -> "DatabaseConfig":
        """
        Wrap an explicit URL; the type follows the URL scheme.
        """
        db_type = "postgresql" if url.startswith("postgresql") else "sqlite"
        return cls(database_url=url, database_type=db_type)

    def is_sqlite(self) -> bool:
        return self.database_type == "sqlite"

    def is_postgresql(self) -> bool:
        return self.database_type == "postgresql"


def get_database_config(environment: str = "") -> DatabaseConfig:
    """
    Config for ``environment``, else for the ENVIRONMENT variable.
    Unknown names fall back to development with a warning.
    """
    environment = environment or os.getenv("ENVIRONMENT", DEFAULT_ENVIRONMENT)

    if environment not in SUPPORTED_ENVIRONMENTS:
        logger.warning(
            "Unknown environment '%s', using default '%s'",
            environment,
            DEFAULT_ENVIRONMENT,
        )
        environment = DEFAULT_ENVIRONMENT

    return DatabaseConfig.for_environment(environment)
