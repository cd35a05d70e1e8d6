# configurations/factory.py
"""
Configuration factory for creating environment-specific configurations.
"""

from typing import Optional

from .settings_database import DatabaseConfig
from .settings_fetcher import FetcherConfig
from .settings_orchestrator import AppConfig, CrawlerConfig


class ConfigFactory:
    """
    Factory for creating environment-specific configurations
    """

    @staticmethod
    def development() -> AppConfig:
        """
        Development environment configuration
        """
        return AppConfig(
            database=DatabaseConfig.development(),
            fetcher=FetcherConfig.from_env(),
            crawler=CrawlerConfig(),
            log_level="DEBUG",
            _environment="development",
        )

    @staticmethod
    def testing() -> AppConfig:
        """
        Testing environment configuration: in-memory store, no delays,
        no log files
        """
        return AppConfig(
            database=DatabaseConfig.testing(),
            fetcher=FetcherConfig(poll_interval=0.0, poll_attempts=2),
            crawler=CrawlerConfig(delay_range=(0.0, 0.0)),
            log_level="ERROR",
            log_dir=None,
            _environment="testing",
        )

    @staticmethod
    def production() -> AppConfig:
        """
        Production environment configuration
        """
        return AppConfig(
            database=DatabaseConfig.production(),
            fetcher=FetcherConfig.from_env(),
            crawler=CrawlerConfig(report_mode="browser"),
            log_level="INFO",
            log_rotation="daily",
            _environment="production",
        )

    @staticmethod
    def custom(
        environment: str = "development",
        database_url: Optional[str] = None,
        **kwargs,
    ) -> AppConfig:
        """
        Create a custom configuration with specified parameters.
        Keyword arguments are matched against the app, crawler and fetcher
        settings, in that order.
        """
        config = get_config(environment)
        config._environment = f"custom-{environment}"

        if database_url:
            config.database = DatabaseConfig.from_url(database_url)

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            elif hasattr(config.crawler, key):
                setattr(config.crawler, key, value)
            elif hasattr(config.fetcher, key):
                setattr(config.fetcher, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        return config


def get_config(environment: str = "development") -> AppConfig:
    """
    Get configuration for specified environment
    """
    environment = environment.lower()

    if environment == "development":
        return ConfigFactory.development()
    elif environment == "testing":
        return ConfigFactory.testing()
    elif environment == "production":
        return ConfigFactory.production()
    else:
        raise ValueError(f"Unknown environment: {environment}")
