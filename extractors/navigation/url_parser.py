# extractors/navigation/url_parser.py
"""
URL parsing and construction utilities.
Handles absolute URL conversion, squad ids and season match-log URLs.
"""

from typing import Optional
from urllib.parse import urljoin, urlparse

from .navigation_config import NavigationConfig


class URLParser:
    """
    Handles URL parsing and manipulation operations.
    """

    def __init__(self, config: Optional[NavigationConfig] = None):
        self.config = config or NavigationConfig()

    def make_absolute_url(self, url: Optional[str]) -> Optional[str]:
        """
        Convert relative URL to absolute URL.

        Args:
            url: URL to convert (can be relative or absolute)

        Returns:
            Absolute URL, or None for an empty input
        """
        if not url:
            return None
        if url.startswith(("http://", "https://")):
            return url
        return urljoin(f"{self.config.base_url}/", url)

    def extract_squad_id(self, url: Optional[str]) -> Optional[str]:
        """
        Return the path segment following ``squads``.

        "/en/squads/abc123/Team-A-Stats" -> "abc123"
        """
        if not url:
            return None
        parts = [part for part in urlparse(url).path.split("/") if part]
        for index, part in enumerate(parts[:-1]):
            if part == self.config.SQUADS_SEGMENT:
                return parts[index + 1]
        return None

    def squad_profile_url(self, squad_id: str) -> str:
        return self.config.base_url + self.config.SQUAD_PROFILE_PATH.format(
            squad_id=squad_id
        )

    def season_matchlog_url(self, team_url: str, season: str) -> str:
        """
        Build the all-competitions schedule URL of one team season.

        Args:
            team_url: Team profile URL (any page under the squad's path)
            season: Season label, e.g. "2024-2025"

        Returns:
            ".../squads/{id}/{season}/matchlogs/all_comps/schedule/"
        """
        squad_id = self.extract_squad_id(team_url)
        if squad_id:
            base = self.squad_profile_url(squad_id)
        else:
            base = team_url if team_url.endswith("/") else f"{team_url}/"
        return base + self.config.MATCHLOG_PATH.format(season=season)

    def synthetic_fixture_url(self, date: str, home: str, away: str) -> str:
        """
        Deterministic identity for a fixture that has no report link yet.
        """
        return self.config.SYNTHETIC_FIXTURE_URL.format(date=date, home=home, away=away)

    @staticmethod
    def is_synthetic(url: str) -> bool:
        return url.startswith(NavigationConfig.SYNTHETIC_SCHEME)
