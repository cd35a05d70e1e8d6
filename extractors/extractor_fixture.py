# extractors/extractor_fixture.py
"""
Row-level extraction for league schedule (fixture) tables.
"""

import re
from datetime import date, datetime
from typing import Optional

from bs4 import Tag

from extractors.navigation.navigation_config import NavigationConfig
from extractors.navigation.url_parser import URLParser

from .base_extractor import BaseDataExtractor
from .records import FixtureRow


class FixtureItems:
    """
    ``data-stat`` markers of the schedule table
    """

    DATE = "date"
    START_TIME = "start_time"
    HOME_TEAM = "home_team"
    AWAY_TEAM = "away_team"
    SCORE = "score"
    VENUE = "venue"
    MATCH_REPORT = "match_report"

    DEFAULT_VENUE = "Unknown Venue"
    DATE_FORMAT = "%Y-%m-%d"


class FixtureRowExtractor(BaseDataExtractor):
    """
    Extracts one ``FixtureRow`` from a schedule table row.
    """

    def __init__(self, base_url: str = NavigationConfig.BASE_URL):
        super().__init__(base_url)
        self.url_parser = URLParser(NavigationConfig(base_url))

    def row_date(self, row: Tag) -> Optional[date]:
        """
        Parse the row's match date, or None when the cell is empty/unreadable.
        """
        cell = self.stat_cell(row, FixtureItems.DATE)
        if cell is None:
            return None
        link = cell.find("a")
        text = self.extract_text_from_cell(link or cell)
        try:
            return datetime.strptime(text, FixtureItems.DATE_FORMAT).date()
        except ValueError:
            return None

    def is_finished(self, row: Tag) -> bool:
        """
        A played match shows digits around the score separator, e.g. "2–1".
        """
        score = self.stat_text(row, FixtureItems.SCORE)
        return self.config.SCORE_SEPARATOR in score and bool(re.search(r"\d", score))

    def _team_link(self, row: Tag, stat: str) -> Optional[Tag]:
        return row.select_one(f"td[data-stat='{stat}'] a")

    def _link_href(self, row: Tag, stat: str) -> Optional[str]:
        link = self._team_link(row, stat)
        if link is None:
            return None
        return self.make_absolute_url(link.get("href"))

    def extract_fixture_from_row(
        self, row: Tag, match_date: date
    ) -> Optional[FixtureRow]:
        """
        Build a fixture record from a data row.

        Args:
            row: Schedule table row
            match_date: Already parsed date of the row

        Returns:
            FixtureRow, or None when either team is missing
        """
        home_link = self._team_link(row, FixtureItems.HOME_TEAM)
        away_link = self._team_link(row, FixtureItems.AWAY_TEAM)
        if home_link is None or away_link is None:
            return None

        home = self.extract_text_from_cell(home_link)
        away = self.extract_text_from_cell(away_link)
        if not home or not away:
            return None

        date_text = match_date.strftime(FixtureItems.DATE_FORMAT)
        url = (
            self._link_href(row, FixtureItems.SCORE)
            or self._link_href(row, FixtureItems.MATCH_REPORT)
            or self.url_parser.synthetic_fixture_url(date_text, home, away)
        )

        return FixtureRow(
            date=date_text,
            time=self.stat_text(row, FixtureItems.START_TIME),
            venue=self.stat_text(row, FixtureItems.VENUE) or FixtureItems.DEFAULT_VENUE,
            home_team=home,
            away_team=away,
            url=url,
            home_url=self.make_absolute_url(home_link.get("href")),
            away_url=self.make_absolute_url(away_link.get("href")),
        )
