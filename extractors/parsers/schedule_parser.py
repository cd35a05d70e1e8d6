# extractors/parsers/schedule_parser.py
"""
Team match-log parser collecting match report links.
"""

import logging
from typing import Set

from bs4 import BeautifulSoup

from extractors.navigation.navigation_config import NavigationConfig
from extractors.navigation.url_parser import URLParser

from .base_parser import BaseParser

logger = logging.getLogger(__name__)


class MatchLogParser(BaseParser):
    """
    Reads a team's season schedule and returns the played matches' report URLs.
    """

    def __init__(self, base_url: str = NavigationConfig.BASE_URL):
        super().__init__()
        self.url_parser = URLParser(NavigationConfig(base_url))

    def parse_match_report_urls(self, soup: BeautifulSoup) -> Set[str]:
        """
        Returns:
            Absolute report URLs; empty when the page has no match-log table
        """
        table = soup.select_one(self.config.MATCHLOG_TABLE_SELECTOR)
        if table is None:
            logger.warning("No match log table found on page")
            return set()

        urls = set()
        for row in self._get_data_rows(table):
            link = row.select_one(self.config.MATCH_REPORT_LINK_SELECTOR)
            if link is None:
                continue
            if link.get_text(strip=True) != self.config.MATCH_REPORT_LINK_TEXT:
                continue
            url = self.url_parser.make_absolute_url(link.get("href"))
            if url:
                urls.add(url)

        return urls
