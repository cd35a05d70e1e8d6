# configurations/settings_orchestrator.py
"""
Main orchestrator configuration combining all components.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from .settings_database import UNKNOWN_MATCH_DATE, DatabaseConfig
from .settings_fetcher import FetcherConfig


def recent_seasons(count: int = 3, today: Optional[date] = None) -> List[str]:
    """
    Build the most recent season labels, newest first.

    A season starts in July, so in October 2026 the window is
    ["2026-2027", "2025-2026", "2024-2025"].

    Args:
        count: Number of seasons in the window
        today: Reference date (defaults to the current date)

    Returns:
        Season labels in the source's "YYYY-YYYY" format
    """
    today = today or date.today()
    start_year = today.year if today.month >= 7 else today.year - 1
    return [f"{year}-{year + 1}" for year in range(start_year, start_year - count, -1)]


@dataclass
class CrawlerConfig:
    """
    Crawl traversal settings: source host, season window and politeness.
    """

    base_url: str = "https://fbref.com"
    seasons: List[str] = field(default_factory=recent_seasons)
    delay_range: Tuple[float, float] = (2.0, 5.0)
    fixture_horizon_days: int = 30
    report_mode: str = "fetch"  # ***> fetch | browser <***
    report_ready_selector: str = ".scorebox"
    unknown_match_date: str = UNKNOWN_MATCH_DATE

    # ***> Prediction settings <***
    form_window: int = 20
    league_home_prior: float = 1.5
    league_away_prior: float = 1.2
    max_goals: int = 9


@dataclass
class AppConfig:
    """
    Combined configuration for fetcher, crawler and database operations.
    """

    database: DatabaseConfig = field(
        default_factory=lambda: DatabaseConfig.development()
    )
    fetcher: FetcherConfig = field(default_factory=FetcherConfig)
    crawler: CrawlerConfig = field(default_factory=CrawlerConfig)

    # Logging settings
    log_level: str = "INFO"
    log_dir: Optional[str] = "logs"
    log_rotation: str = "session"  # ***> session | daily | size <***

    # Environment tracking
    _environment: Optional[str] = None

    @property
    def environment(self) -> str:
        return self._environment or "development"
