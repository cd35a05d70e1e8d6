# extractors/extractor_match.py
"""
Match report extraction: header metadata, team names and the per-player
category tables of a single match page.
"""

import logging
import re
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from exceptions import NoSuitableTable
from extractors.navigation.navigation_config import NavigationConfig
from extractors.parsers.html_parser import make_soup

from .base_extractor import BaseDataExtractor
from .extraction_config import MatchReportConfig
from .records import MatchContext, MatchReport, PartialPlayerStats

logger = logging.getLogger(__name__)

PlayerMap = Dict[str, PartialPlayerStats]
RowHandler = Callable[[Tag, PartialPlayerStats], None]


class MatchStatItems:
    """
    ``data-stat`` markers read from the category tables
    """

    POSITION = "position"
    MINUTES = "minutes"

    # summary
    GOALS = "goals"
    ASSISTS = "assists"
    SHOTS = "shots"
    SHOTS_ON_TARGET = "shots_on_target"
    XG = "xg"
    SCA = "sca"
    GCA = "gca"

    # passing
    PASSES_COMPLETED = "passes_completed"
    PROGRESSIVE_PASSES = "progressive_passes"
    PASSES_FINAL_THIRD = "passes_into_final_third"
    PASSES_PENALTY_AREA = "passes_into_penalty_area"
    KEY_PASSES = "passes_key"
    XA = "xg_assist"

    # passing types
    CORNERS = "corner_kicks"

    # defense
    TACKLES_WON = "tackles_won"
    INTERCEPTIONS = "interceptions"
    BLOCKS = "blocks"
    CLEARANCES = "clearances"

    # misc
    YELLOW_CARDS = "cards_yellow"
    RED_CARDS = "cards_red"
    FOULS = "fouls"
    FOULS_DRAWN = "fouls_drawn"
    AERIALS_WON = "aerials_won"
    AERIALS_LOST = "aerials_lost"


class MatchReportExtractor(BaseDataExtractor):
    """
    Builds a ``MatchReport`` from one match page.

    Category tables are matched by their id and cells by their ``data-stat``
    marker, so column order changes on the source do not matter. A category
    with fewer than two tables is skipped and recorded as missing.
    """

    def __init__(self, base_url: str = NavigationConfig.BASE_URL):
        super().__init__(base_url)
        self.report_config = MatchReportConfig()
        self._handlers: Dict[str, RowHandler] = {
            "summary": self._apply_summary,
            "passing": self._apply_passing,
            "passing_types": self._apply_passing_types,
            "defense": self._apply_defense,
            "misc": self._apply_misc,
            "gca": self._apply_gca,
        }

    def extract(self, html: str, url: str) -> MatchReport:
        """
        Args:
            html: Raw match page
            url: Page URL, also used as a last resort for the match date

        Returns:
            MatchReport with whatever categories could be read

        Raises:
            NoSuitableTable: If the scorebox or its two team names are absent
        """
        soup = make_soup(html, uncomment=True)

        home_team, away_team = self.extract_team_names(soup)
        team_urls = self.extract_team_urls(soup)
        context = self.extract_context(soup, url)

        home_players: PlayerMap = {}
        away_players: PlayerMap = {}
        missing: List[str] = []

        for category, excludes in self.report_config.CATEGORIES.items():
            tables = self._find_category_tables(soup, category, excludes)
            if len(tables) < 2:
                missing.append(category)
                continue

            handler = self._handlers[category]
            self._process_table(tables[0], home_players, handler)
            self._process_table(tables[1], away_players, handler)

        if missing:
            logger.warning(
                "Match report %s is incomplete, missing categories: %s",
                url,
                ", ".join(missing),
            )

        return MatchReport(
            url=url,
            context=context,
            home_team=home_team,
            away_team=away_team,
            home_url=team_urls[0] if len(team_urls) > 0 else None,
            away_url=team_urls[1] if len(team_urls) > 1 else None,
            home_players=home_players,
            away_players=away_players,
            missing_categories=tuple(missing),
        )

    # ***> Header <***

    def extract_team_names(self, soup: BeautifulSoup) -> Tuple[str, str]:
        if soup.select_one(self.report_config.SCOREBOX) is None:
            raise NoSuitableTable("scorebox")

        names = [
            self.extract_text_from_cell(link)
            for link in soup.select(self.report_config.TEAM_NAME_LINKS)
        ]
        names = [name for name in names if name]
        if len(names) < 2:
            raise NoSuitableTable("scorebox")
        return names[0], names[1]

    def extract_team_urls(self, soup: BeautifulSoup) -> List[str]:
        """
        Profile URLs of both teams, home first, taken from scorebox links.
        """
        urls: List[str] = []
        for link in soup.select(self.report_config.TEAM_PROFILE_LINKS):
            href = link.get("href") or ""
            if f"/{self.config.SQUADS_SEGMENT}/" not in href:
                continue
            url = self.make_absolute_url(href)
            if url not in urls:
                urls.append(url)
        return urls

    def extract_context(self, soup: BeautifulSoup, url: str) -> MatchContext:
        context = MatchContext(date=self._extract_date(soup, url))

        for row in soup.select(self.report_config.SCOREBOX_META_ROWS):
            text = " ".join(row.stripped_strings)
            if self.report_config.VENUE_LABEL in text:
                context.venue = self._strip_labels(
                    text, (self.report_config.VENUE_LABEL,)
                )
            elif self.report_config.ATTENDANCE_LABEL in text:
                value = self._strip_labels(text, (self.report_config.ATTENDANCE_LABEL,))
                attendance = self.to_int(value)
                context.attendance = attendance or None
            elif any(label in text for label in self.report_config.REFEREE_LABELS):
                officials = self._strip_labels(text, self.report_config.REFEREE_STRIP)
                context.referee = officials.split("·")[0].strip() or None

        scores = [
            self.extract_text_from_cell(cell)
            for cell in soup.select(self.report_config.TEAM_SCORES)
        ]
        if len(scores) >= 2 and scores[0].isdigit() and scores[1].isdigit():
            context.home_score = int(scores[0])
            context.away_score = int(scores[1])

        return context

    @staticmethod
    def _strip_labels(text: str, labels: Tuple[str, ...]) -> str:
        for label in labels:
            text = text.replace(label, "")
        return text.replace(":", "").strip()

    def _extract_date(self, soup: BeautifulSoup, url: str) -> Optional[str]:
        venue_time = soup.select_one(self.report_config.VENUE_TIME)
        if venue_time is not None and venue_time.get(self.report_config.VENUE_DATE_ATTR):
            return venue_time[self.report_config.VENUE_DATE_ATTR]

        for link in soup.select(self.report_config.MATCHES_DATE_LINKS):
            match = re.search(r"/matches/" + self.config.ISO_DATE_PATTERN, link["href"])
            if match:
                return match.group(1)

        match = re.search(self.config.SLUG_DATE_PATTERN, url)
        if match:
            month, day, year = match.groups()
            return datetime.strptime(f"{month} {day} {year}", "%B %d %Y").strftime(
                "%Y-%m-%d"
            )
        return None

    # ***> Category tables <***

    def _find_category_tables(
        self, soup: BeautifulSoup, category: str, excludes: Tuple[str, ...]
    ) -> List[Tag]:
        tables = []
        for table in soup.find_all("table"):
            table_id = table.get("id") or ""
            if category not in table_id:
                continue
            if any(exclude in table_id for exclude in excludes):
                continue
            tables.append(table)
        return tables

    def _process_table(self, table: Tag, players: PlayerMap, handler: RowHandler) -> None:
        body = table.find("tbody") or table
        for row in body.find_all("tr"):
            if any("thead" in cls for cls in row.get("class", [])):
                continue

            link = row.select_one(self.report_config.PLAYER_CELL)
            if link is None:
                continue
            name = self.extract_text_from_cell(link)
            if not name:
                continue

            entry = players.setdefault(name, PartialPlayerStats(name=name))
            entry.merge_identity(
                self.stat_text(row, MatchStatItems.POSITION),
                self.stat_int(row, MatchStatItems.MINUTES),
            )
            handler(row, entry)

    def _apply_summary(self, row: Tag, stats: PartialPlayerStats) -> None:
        stats.goals = self.stat_int(row, MatchStatItems.GOALS)
        stats.assists = self.stat_int(row, MatchStatItems.ASSISTS)
        stats.shots = self.stat_int(row, MatchStatItems.SHOTS)
        stats.shots_on_target = self.stat_int(row, MatchStatItems.SHOTS_ON_TARGET)
        stats.xg = self.stat_float(row, MatchStatItems.XG)
        stats.sca = self.stat_int(row, MatchStatItems.SCA)
        stats.gca = self.stat_int(row, MatchStatItems.GCA)

    def _apply_passing(self, row: Tag, stats: PartialPlayerStats) -> None:
        stats.passes_completed = self.stat_int(row, MatchStatItems.PASSES_COMPLETED)
        stats.progressive_passes = self.stat_int(row, MatchStatItems.PROGRESSIVE_PASSES)
        stats.passes_final_third = self.stat_int(row, MatchStatItems.PASSES_FINAL_THIRD)
        stats.passes_penalty_area = self.stat_int(
            row, MatchStatItems.PASSES_PENALTY_AREA
        )
        stats.key_passes = self.stat_int(row, MatchStatItems.KEY_PASSES)
        if stats.xa == 0.0:
            stats.xa = self.stat_float(row, MatchStatItems.XA)

    def _apply_passing_types(self, row: Tag, stats: PartialPlayerStats) -> None:
        stats.corners = self.stat_int(row, MatchStatItems.CORNERS)

    def _apply_defense(self, row: Tag, stats: PartialPlayerStats) -> None:
        stats.tackles_won = self.stat_int(row, MatchStatItems.TACKLES_WON)
        stats.interceptions = self.stat_int(row, MatchStatItems.INTERCEPTIONS)
        stats.blocks = self.stat_int(row, MatchStatItems.BLOCKS)
        stats.clearances = self.stat_int(row, MatchStatItems.CLEARANCES)

    def _apply_misc(self, row: Tag, stats: PartialPlayerStats) -> None:
        stats.yellow_cards = self.stat_int(row, MatchStatItems.YELLOW_CARDS)
        stats.red_cards = self.stat_int(row, MatchStatItems.RED_CARDS)
        stats.fouls_committed = self.stat_int(row, MatchStatItems.FOULS)
        stats.fouls_drawn = self.stat_int(row, MatchStatItems.FOULS_DRAWN)
        stats.aerials_won = self.stat_int(row, MatchStatItems.AERIALS_WON)
        stats.aerials_lost = self.stat_int(row, MatchStatItems.AERIALS_LOST)

    def _apply_gca(self, row: Tag, stats: PartialPlayerStats) -> None:
        # Summary already carries both counts; this table only backfills them
        if stats.sca == 0:
            stats.sca = self.stat_int(row, MatchStatItems.SCA)
        if stats.gca == 0:
            stats.gca = self.stat_int(row, MatchStatItems.GCA)
