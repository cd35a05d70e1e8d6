# extractors/parsers/fixture_parser.py
"""
League schedule parser harvesting upcoming fixtures.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional

from bs4 import BeautifulSoup

from extractors.extractor_fixture import FixtureRowExtractor
from extractors.navigation.navigation_config import NavigationConfig
from extractors.records import FixtureRow

from .base_parser import BaseParser

logger = logging.getLogger(__name__)


class FixtureTableParser(BaseParser):
    """
    Reads upcoming fixtures from a league "Scores & Fixtures" table.

    Played matches are skipped, and because rows are date ordered the scan
    stops at the first row beyond the horizon.
    """

    def __init__(
        self,
        horizon_days: int = 30,
        base_url: str = NavigationConfig.BASE_URL,
    ):
        super().__init__()
        self.horizon_days = horizon_days
        self.row_extractor = FixtureRowExtractor(base_url)

    def parse_fixtures(
        self, soup: BeautifulSoup, today: Optional[date] = None
    ) -> List[FixtureRow]:
        """
        Args:
            soup: Parsed schedule page
            today: Reference date for the horizon (defaults to the current date)

        Returns:
            Upcoming fixtures in table order
        """
        today = today or date.today()
        limit = today + timedelta(days=self.horizon_days)
        fixtures = []

        for row in soup.select(self.config.FIXTURE_ROWS_SELECTOR):
            if self._should_skip_header_row(row):
                continue

            match_date = self.row_extractor.row_date(row)
            if match_date is None:
                continue

            if match_date > limit:
                logger.debug("Reached fixture horizon at %s", match_date)
                break

            if self.row_extractor.is_finished(row):
                continue

            fixture = self.row_extractor.extract_fixture_from_row(row, match_date)
            if fixture:
                fixtures.append(fixture)

        logger.info("Parsed %d upcoming fixtures (until %s)", len(fixtures), limit)
        return fixtures
