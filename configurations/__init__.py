# configurations/__init__.py
"""
configuration module
"""

from .factory import ConfigFactory, get_config
from .settings_base import EnvironmentVariables
from .settings_database import DatabaseConfig, get_database_config
from .settings_fetcher import FetcherConfig
from .settings_orchestrator import AppConfig, CrawlerConfig, recent_seasons

__all__ = [
    "EnvironmentVariables",
    "DatabaseConfig",
    "FetcherConfig",
    "CrawlerConfig",
    "AppConfig",
    "ConfigFactory",
    "get_config",
    "get_database_config",
    "recent_seasons",
]
