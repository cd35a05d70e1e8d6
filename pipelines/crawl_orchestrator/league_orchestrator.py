# pipelines/crawl_orchestrator/league_orchestrator.py
"""
League crawl: league page -> teams -> team match history -> match reports.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional, Set

from exceptions import (
    FetchFailed,
    ParsingError,
    PersistenceFailed,
    TimeoutWaitingForContent,
)
from extractors.extractor_match import MatchReportExtractor
from extractors.navigation.navigation_config import NavigationConfig
from extractors.navigation.url_parser import URLParser
from extractors.parsers import (
    FixtureTableParser,
    MatchLogParser,
    RosterTableParser,
    make_soup,
)
from extractors.records import FootballMatchStats, TeamSource
from extractors.stats_aggregator import build_match_stats

from .base_orchestrator import BaseOrchestrator
from .orchestrator_config import OrchestratorConfig
from .orchestrator_utils import BatchReport, OrchestratorUtils

logger = logging.getLogger(__name__)

# ***> Failures isolated to one item of a batch <***
ITEM_ERRORS = (FetchFailed, TimeoutWaitingForContent, ParsingError, PersistenceFailed)


class CrawlOrchestrator(BaseOrchestrator):
    """
    Sequences the crawl with deduplication against the store.

    Dedup boundaries: match-log URLs are collected into a set across seasons,
    and a report URL whose event already has a result is never fetched again.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        base_url = self.crawler_config.base_url
        self.url_parser = URLParser(NavigationConfig(base_url))
        self.roster_parser = RosterTableParser(base_url)
        self.match_log_parser = MatchLogParser(base_url)
        self.fixture_parser = FixtureTableParser(
            self.crawler_config.fixture_horizon_days, base_url
        )
        self.report_extractor = MatchReportExtractor(base_url)

    # ***> League -> teams <***

    def get_teams(self, league_url: str) -> List[TeamSource]:
        """
        Raises:
            FetchFailed: If the league page cannot be retrieved
            NoSuitableTable: If the page has no roster table
        """
        html = self._fetch(league_url)
        return self.roster_parser.parse_teams(make_soup(html))

    # ***> Team -> match history <***

    def get_team_match_history(self, team_url: str) -> Set[str]:
        """
        Collect report URLs from the team's match logs over the season window.
        A season that fails to load is logged and skipped.
        """
        urls: Set[str] = set()
        for season in self.crawler_config.seasons:
            season_url = self.url_parser.season_matchlog_url(team_url, season)
            try:
                html = self._fetch(season_url)
            except FetchFailed as error:
                logger.warning("Skipping season %s: %s", season, error.reason)
                continue

            found = self.match_log_parser.parse_match_report_urls(
                make_soup(html, uncomment=True)
            )
            logger.info("Season %s: %d match reports", season, len(found))
            urls.update(found)
        return urls

    # ***> Match history -> stored stats <***

    def scrape_match(self, url: str) -> FootballMatchStats:
        """
        Fetch and extract one match report.

        Raises:
            FetchFailed / TimeoutWaitingForContent: If the page cannot be loaded
            NoSuitableTable: If the page has no scorebox
        """
        if self.crawler_config.report_mode == OrchestratorConfig.REPORT_MODE_BROWSER:
            self._before_navigation()
            html = self.fetcher.fetch_ready(url, self.crawler_config.report_ready_selector)
        else:
            html = self._fetch(url)

        report = self.report_extractor.extract(html, url)
        return build_match_stats(report)

    def backfill_matches(self, urls: Iterable[str]) -> BatchReport:
        """
        Scrape and store every report URL that has no stored result yet.
        One failing match never stops the batch.
        """
        report = BatchReport()
        for url in sorted(set(urls)):
            if self.database.has_completed_match(url):
                report.skipped += 1
                continue

            try:
                stats = self.scrape_match(url)
                match_date = stats.context.date or self.crawler_config.unknown_match_date
                if self.database.save_match_complete(stats, match_date, url):
                    report.succeeded += 1
                else:
                    report.skipped += 1
            except ITEM_ERRORS as error:
                logger.error(
                    "Failed match %s: %s",
                    OrchestratorUtils.format_url_for_display(
                        url, OrchestratorConfig.URL_TRUNCATE_LENGTH
                    ),
                    error,
                )
                report.record_failure(url)

        logger.info("Match backfill finished: %s", report.summary())
        return report

    # ***> Fixtures <***

    def sync_fixtures(self, league_url: str, today: Optional[date] = None) -> BatchReport:
        """
        Store the league's upcoming fixtures.

        Raises:
            FetchFailed: If the schedule page cannot be retrieved
        """
        html = self._fetch(league_url)
        fixtures = self.fixture_parser.parse_fixtures(make_soup(html), today)

        report = BatchReport()
        for fixture in fixtures:
            try:
                self.database.save_fixture(
                    fixture.home_team,
                    fixture.away_team,
                    fixture.date,
                    fixture.url,
                    venue=fixture.venue,
                    time=fixture.time,
                    home_url=fixture.home_url,
                    away_url=fixture.away_url,
                )
                report.succeeded += 1
            except PersistenceFailed as error:
                logger.error("Failed to save fixture %s: %s", fixture.url, error)
                report.record_failure(fixture.url)

        logger.info("Fixture sync finished: %s", report.summary())
        return report

    # ***> Full traversals <***

    def crawl_league(self, league_url: str) -> BatchReport:
        """
        League page -> every team's recent history -> every missing match.
        """
        teams = self.get_teams(league_url)
        report = BatchReport()
        history: Set[str] = set()

        for team in teams:
            try:
                self.database.upsert_team(team.name, team.base_url)
            except PersistenceFailed as error:
                logger.error("Failed to store team %s: %s", team.name, error)
                report.record_failure(team.base_url)
                continue

            team_urls = self.get_team_match_history(team.base_url)
            logger.info("%s: %d matches in history", team.name, len(team_urls))
            history.update(team_urls)

        logger.info("%d unique matches across %d teams", len(history), len(teams))
        return report.merge(self.backfill_matches(history))

    def backfill_event_teams(self, event_id: int) -> BatchReport:
        """
        Backfill the recent history of both teams of a stored event.

        Team URLs missing from the store are recovered from the event's own
        match page when it has a real report URL.

        Raises:
            LookupError: If the event does not exist
            ValueError: If a team URL is still unknown
        """
        match = self.database.get_match(event_id)
        if match is None:
            raise LookupError(f"Match {event_id} not found")

        home_url, away_url = match["home_url"], match["away_url"]
        if not (home_url and away_url) and not self.url_parser.is_synthetic(match["url"]):
            home_url, away_url = self._recover_team_urls(match, home_url, away_url)

        if not home_url or not away_url:
            raise ValueError(
                f"Missing team URLs for {match['home_team']} vs {match['away_team']}"
            )

        report = BatchReport()
        for team_url in (home_url, away_url):
            report.merge(self.backfill_matches(self.get_team_match_history(team_url)))
        return report

    def _recover_team_urls(self, match: dict, home_url, away_url):
        try:
            html = self._fetch(match["url"])
        except FetchFailed as error:
            logger.warning("Could not load %s for team URLs: %s", match["url"], error.reason)
            return home_url, away_url

        found = self.report_extractor.extract_team_urls(make_soup(html, uncomment=True))
        if len(found) >= 2:
            home_url = home_url or found[0]
            away_url = away_url or found[1]
            self.database.upsert_team(match["home_team"], home_url)
            self.database.upsert_team(match["away_team"], away_url)
        return home_url, away_url
