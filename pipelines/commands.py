# pipelines/commands.py
"""
Command surface consumed by the CLI shell: fixture sync, history backfill,
stored match listing and predictions.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from analysis.prediction_engine import MatchPrediction, PredictionEngine
from configurations import AppConfig, ConfigFactory
from database.services.database_service import FootballDatabaseService
from exceptions import InsufficientHistory
from extractors.navigation.page_fetcher import PageFetcher

from .crawl_orchestrator import BatchReport, CrawlOrchestrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchPreview:
    """
    One stored match as shown in listings.
    """

    id: int
    date: str
    time: Optional[str]
    home_team: str
    away_team: str
    score: str
    status: str
    xg_home: Optional[float]
    xg_away: Optional[float]
    venue: Optional[str]

    @classmethod
    def from_match(cls, match: Dict[str, Any]) -> "MatchPreview":
        if match["home_score"] is None or match["away_score"] is None:
            score = "vs"
        else:
            score = f"{match['home_score']}-{match['away_score']}"

        return cls(
            id=match["id"],
            date=match["date"],
            time=match["time"],
            home_team=match["home_team"],
            away_team=match["away_team"],
            score=score,
            status=match["status"],
            xg_home=match["xg_home"],
            xg_away=match["xg_away"],
            venue=match["venue"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MatchAnalysis:
    """
    A stored match with its prediction, or the reason there is none.
    """

    match: MatchPreview
    referee: Optional[str]
    attendance: Optional[int]
    prediction: Optional[MatchPrediction] = None
    prediction_error: Optional[str] = None


class FootballCommands:
    """
    Facade over the crawler, the store and the predictor.
    """

    def __init__(
        self,
        orchestrator: CrawlOrchestrator,
        database: FootballDatabaseService,
        engine: PredictionEngine,
    ):
        self.orchestrator = orchestrator
        self.database = database
        self.engine = engine

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "FootballCommands":
        """
        Wire every collaborator from configuration. The schema is initialized
        before any command runs.

        Raises:
            SchemaInitializationError: If the store cannot be prepared
        """
        config = config or ConfigFactory.development()
        database = FootballDatabaseService(config.database)
        database.init_schema()

        fetcher = PageFetcher.from_config(config.fetcher)
        orchestrator = CrawlOrchestrator(fetcher, database, config)
        engine = PredictionEngine.from_config(database, config.crawler)
        return cls(orchestrator, database, engine)

    def __enter__(self) -> "FootballCommands":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()

    def cleanup(self) -> None:
        self.orchestrator.cleanup()

    # ***> Crawl commands <***

    def sync_upcoming_fixtures(self, league_url: str) -> int:
        """
        Returns:
            Number of fixtures saved
        """
        report = self.orchestrator.sync_fixtures(league_url)
        return report.succeeded

    def backfill_history(self, event_id: int) -> BatchReport:
        return self.orchestrator.backfill_event_teams(event_id)

    def crawl_league(self, league_url: str) -> BatchReport:
        return self.orchestrator.crawl_league(league_url)

    # ***> Read commands <***

    def get_stored_matches(self) -> List[MatchPreview]:
        return [MatchPreview.from_match(match) for match in self.database.list_matches()]

    def get_prediction(self, event_id: int) -> MatchPrediction:
        """
        Raises:
            LookupError: If the event does not exist
            InsufficientHistory: If either team has no finished matches
        """
        match = self._require_match(event_id)
        return self.engine.predict(match["home_team_id"], match["away_team_id"])

    def get_match_analysis(self, event_id: int) -> MatchAnalysis:
        """
        Raises:
            LookupError: If the event does not exist
        """
        match = self._require_match(event_id)
        prediction, error = None, None
        try:
            prediction = self.engine.predict(match["home_team_id"], match["away_team_id"])
        except InsufficientHistory as exc:
            logger.info("No prediction for match %s: %s", event_id, exc)
            error = str(exc)

        return MatchAnalysis(
            match=MatchPreview.from_match(match),
            referee=match["referee"],
            attendance=match["attendance"],
            prediction=prediction,
            prediction_error=error,
        )

    def _require_match(self, event_id: int) -> Dict[str, Any]:
        match = self.database.get_match(event_id)
        if match is None:
            raise LookupError(f"Match {event_id} not found")
        return match
