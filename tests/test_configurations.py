"""
Tests for configuration assembly and logging setup.
"""

import logging
from datetime import date
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler

import pytest

from configurations import (
    ConfigFactory,
    DatabaseConfig,
    FetcherConfig,
    get_config,
    get_database_config,
    recent_seasons,
)
from exceptions import DatabaseConfigurationError
from logger import build_file_handler, configure_logging


class TestRecentSeasons:
    def test_season_starts_in_july(self):
        assert recent_seasons(3, date(2026, 10, 17)) == [
            "2026-2027",
            "2025-2026",
            "2024-2025",
        ]

    def test_before_july_belongs_to_previous_season(self):
        assert recent_seasons(2, date(2026, 3, 1)) == ["2025-2026", "2024-2025"]


class TestConfigFactory:
    def test_testing_config_has_no_delays(self):
        config = ConfigFactory.testing()

        assert config.environment == "testing"
        assert config.crawler.delay_range == (0.0, 0.0)
        assert config.database.database_url == "sqlite:///:memory:"
        assert config.log_dir is None

    def test_production_uses_browser_reports(self, monkeypatch):
        monkeypatch.setenv("POSTGRES_PASSWORD", "s3cret@")
        config = ConfigFactory.production()

        assert config.crawler.report_mode == "browser"
        assert config.database.is_postgresql()
        assert "s3cret%40" in config.database.database_url

    def test_production_requires_password(self, monkeypatch):
        monkeypatch.delenv("POSTGRES_PASSWORD", raising=False)
        with pytest.raises(DatabaseConfigurationError):
            DatabaseConfig.production()

    def test_unknown_environment(self):
        with pytest.raises(ValueError):
            get_config("staging")

    def test_custom_overrides(self):
        config = ConfigFactory.custom(
            "testing",
            database_url="sqlite:///custom.db",
            log_level="WARNING",
            form_window=10,
            poll_attempts=4,
        )

        assert config.environment == "custom-testing"
        assert config.database.database_url == "sqlite:///custom.db"
        assert config.log_level == "WARNING"
        assert config.crawler.form_window == 10
        assert config.fetcher.poll_attempts == 4

    def test_custom_rejects_unknown_option(self):
        with pytest.raises(ValueError):
            ConfigFactory.custom("testing", not_a_setting=1)


class TestDatabaseConfig:
    def test_from_url(self):
        assert DatabaseConfig.from_url("postgresql+psycopg://u:p@h/db").is_postgresql()
        assert DatabaseConfig.from_url("sqlite:///x.db").is_sqlite()

    def test_development_file_location(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SQLITE_DIR", str(tmp_path))
        config = DatabaseConfig.development()
        assert config.database_url == f"sqlite:///{tmp_path / 'development_database.db'}"

    def test_environment_variable_selects_config(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "testing")
        assert get_database_config().database_url == "sqlite:///:memory:"


class TestFetcherConfig:
    def test_solver_endpoints(self):
        config = FetcherConfig(solver_url="http://solver:8191")
        assert config.solver_endpoint == "http://solver:8191/v1"
        assert config.solver_health_endpoint == "http://solver:8191/"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SOLVER_URL", "http://other:9000/")
        monkeypatch.setenv("BROWSER_HEADLESS", "false")

        config = FetcherConfig.from_env()

        assert config.solver_url == "http://other:9000"
        assert config.headless is False


@pytest.fixture
def root_logger():
    """Restore the root logger after configure_logging replaced its handlers."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogging:
    def test_session_file_is_created(self, tmp_path, root_logger):
        configure_logging("INFO", tmp_path, session_name="crawl", enable_colors=False)

        logging.getLogger("pipelines.test").info("hello")
        for handler in root_logger.handlers:
            handler.flush()

        (log_file,) = tmp_path.glob("crawl_*.log")
        assert "hello" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_console_only(self, root_logger):
        configure_logging("DEBUG", None, enable_colors=False)

        assert root_logger.level == logging.DEBUG
        assert not any(isinstance(h, logging.FileHandler) for h in root_logger.handlers)

    @pytest.mark.parametrize(
        "rotation, handler_type",
        [("daily", TimedRotatingFileHandler), ("size", RotatingFileHandler)],
    )
    def test_rotating_file_handlers(self, tmp_path, rotation, handler_type):
        handler = build_file_handler(tmp_path / "logs", "crawler", rotation)
        try:
            assert isinstance(handler, handler_type)
            assert handler.baseFilename.endswith("crawler.log")
        finally:
            handler.close()

    def test_unknown_rotation(self, tmp_path):
        with pytest.raises(ValueError):
            build_file_handler(tmp_path, "crawler", "weekly")

    def test_production_rotates_daily(self, monkeypatch):
        monkeypatch.setenv("POSTGRES_PASSWORD", "pw")
        assert ConfigFactory.production().log_rotation == "daily"
