# extractors/parsers/team_parser.py
"""
Roster table parser for league standings pages.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from exceptions import NoSuitableTable
from extractors.extractor_team import TeamRowExtractor
from extractors.navigation.navigation_config import NavigationConfig
from extractors.records import TeamSource

from .base_parser import BaseParser

logger = logging.getLogger(__name__)


class RosterTableParser(BaseParser):
    """
    HTML parser specialized for extracting the teams of a league.
    """

    def __init__(self, base_url: str = NavigationConfig.BASE_URL):
        super().__init__()
        self.row_extractor = TeamRowExtractor(base_url)

    def parse_teams(self, soup: BeautifulSoup) -> List[TeamSource]:
        """
        Args:
            soup: Parsed league page

        Returns:
            One TeamSource per body row with a squad link

        Raises:
            NoSuitableTable: If no table header mentions a squad/team/club
        """
        table = self._find_roster_table(soup)
        if table is None:
            raise NoSuitableTable("roster")

        teams = []
        for row in self._get_data_rows(table):
            team = self.row_extractor.extract_team_from_row(row)
            if team:
                teams.append(team)

        logger.info("Found %d teams in roster table", len(teams))
        return teams

    def _find_roster_table(self, soup: BeautifulSoup) -> Optional[Tag]:
        """
        First table having a header cell that mentions a roster marker.
        """
        for table in soup.find_all("table"):
            for header in table.find_all(self.config.TABLE_HEADER_SELECTOR):
                text = header.get_text(strip=True).lower()
                if any(marker in text for marker in self.config.ROSTER_HEADER_MARKERS):
                    return table
        return None
