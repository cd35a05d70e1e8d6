# database/services/database_service.py
"""
High-level database service layer.
Each public write is one transaction spanning the repositories it needs.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

import backoff
from sqlalchemy.orm import Session

from configurations.settings_database import (
    UNKNOWN_MATCH_DATE,
    DatabaseConfig,
    get_database_config,
)
from database.schemas import Event, EventStatus, FootballStats
from exceptions import PersistenceConflict, StorageBusy
from extractors.records import FootballMatchStats

from ..core.database_manager import DatabaseManager
from ..core.schema_manager import SchemaManager
from ..repositories.event_repository import EventRepository
from ..repositories.form_repository import FormRepository, LeagueAverages, TeamResult
from ..repositories.player_repository import PlayerRepository
from ..repositories.team_repository import TeamRepository

logger = logging.getLogger(__name__)


def _log_retry(details: Dict[str, Any]) -> None:
    logger.warning(
        "Retrying %s after write conflict (attempt %d, waiting %.1fs)",
        details["target"].__name__,
        details["tries"],
        details["wait"],
    )


# ***> A lost race on a unique key is retried; the retry finds the winner's row <***
retry_on_conflict = backoff.on_exception(
    backoff.expo,
    (PersistenceConflict, StorageBusy),
    max_tries=3,
    on_backoff=_log_retry,
)


class FootballDatabaseService:
    """
    Transactional facade over the football schema.
    """

    def __init__(
        self,
        config: Optional[DatabaseConfig] = None,
        db_manager: Optional[DatabaseManager] = None,
    ):
        """
        Args:
            config: Database settings; defaults to the ENVIRONMENT-selected config
            db_manager: Pre-built manager, takes precedence over ``config``
        """
        if db_manager is None:
            config = config or get_database_config()
            db_manager = DatabaseManager.from_config(config)
        self.db_manager = db_manager
        self.schema_manager = SchemaManager(db_manager)

    def init_schema(self) -> None:
        """
        Create tables, seed static rows and migrate legacy data.

        Raises:
            SchemaInitializationError: Fatal; do not use the store afterwards
        """
        self.schema_manager.init_schema()

    def cleanup(self) -> None:
        self.db_manager.dispose()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        with self.db_manager.get_session() as session:
            yield session

    # ***> Writes <***

    @retry_on_conflict
    def upsert_team(self, name: str, url: Optional[str] = None) -> int:
        """
        Returns:
            Team id (existing or newly created)
        """
        with self.transaction() as session:
            return TeamRepository(session).upsert(name, url).id

    @retry_on_conflict
    def save_fixture(
        self,
        home: str,
        away: str,
        date: str,
        url: str,
        venue: Optional[str] = None,
        time: Optional[str] = None,
        home_url: Optional[str] = None,
        away_url: Optional[str] = None,
    ) -> int:
        """
        Store or refresh a scheduled match. A finished event is never
        overwritten by fixture data.

        Returns:
            Event id
        """
        with self.transaction() as session:
            teams = TeamRepository(session)
            events = EventRepository(session)

            home_team = teams.upsert(home, home_url)
            away_team = teams.upsert(away, away_url)

            event = events.get_by_url(url)
            if event is None:
                event = events.create(
                    url=url,
                    date=date,
                    time=time,
                    venue=venue,
                    home_team_id=home_team.id,
                    away_team_id=away_team.id,
                )
                logger.debug("Scheduled %s vs %s on %s", home, away, date)
            elif not event.is_finished:
                event.date = date
                event.venue = venue
                event.time = time
            else:
                logger.debug("Ignoring fixture data for finished event %s", url)
            return event.id

    @retry_on_conflict
    def save_match_complete(
        self, stats: FootballMatchStats, date: str, url: str
    ) -> bool:
        """
        Store a finished match with its result and every player's line.

        Re-processing a match that already has a result is a no-op, so the
        pipeline can be re-run without duplicating player rows.

        Returns:
            True if the match was written, False if it was already complete
        """
        with self.transaction() as session:
            teams = TeamRepository(session)
            events = EventRepository(session)
            players = PlayerRepository(session)

            home_team = teams.upsert(stats.home.name, stats.home.url)
            away_team = teams.upsert(stats.away.name, stats.away.url)

            event = events.get_by_url(url)
            if event is None:
                event = events.create(
                    url=url,
                    date=date,
                    home_team_id=home_team.id,
                    away_team_id=away_team.id,
                    status=EventStatus.FINISHED,
                    venue=stats.context.venue,
                    attendance=stats.context.attendance,
                )
            else:
                if events.get_stats(event.id) is not None:
                    logger.info("Match %s already has stats, skipping", url)
                    return False
                event.status = EventStatus.FINISHED.value
                if date and date != UNKNOWN_MATCH_DATE:
                    event.date = date
                event.home_team_id = home_team.id
                event.away_team_id = away_team.id
                if stats.context.venue:
                    event.venue = stats.context.venue
                if stats.context.attendance:
                    event.attendance = stats.context.attendance

            session.merge(
                FootballStats(
                    event_id=event.id,
                    home_score=stats.home_score,
                    away_score=stats.away_score,
                    xg_home=stats.home.xg,
                    xg_away=stats.away.xg,
                    referee=stats.context.referee,
                )
            )

            seen = set()
            for side, team in ((stats.home, home_team), (stats.away, away_team)):
                for line in side.players:
                    player = players.get_or_create(line.name)
                    if player.id in seen:
                        logger.warning(
                            "Player %s listed for both sides of %s, keeping first",
                            line.name,
                            url,
                        )
                        continue
                    seen.add(player.id)
                    players.add_match_stat(player.id, event.id, team.id, line)

            logger.info(
                "Saved %s %d-%d %s (%d player rows)",
                stats.home.name,
                stats.home_score,
                stats.away_score,
                stats.away.name,
                len(seen),
            )
            return True

    # ***> Reads <***

    def has_completed_match(self, url: str) -> bool:
        with self.transaction() as session:
            return EventRepository(session).has_completed_stats(url)

    def list_matches(self) -> List[Dict[str, Any]]:
        with self.transaction() as session:
            return [
                self._event_to_dict(event)
                for event in EventRepository(session).list_with_details()
            ]

    def get_match(self, event_id: int) -> Optional[Dict[str, Any]]:
        with self.transaction() as session:
            event = EventRepository(session).get_with_details(event_id)
            return self._event_to_dict(event) if event else None

    def get_team_urls(self, event_id: int) -> Tuple[Optional[str], Optional[str]]:
        """
        Returns:
            (home_url, away_url) of the event's teams

        Raises:
            LookupError: If the event does not exist
        """
        match = self.get_match(event_id)
        if match is None:
            raise LookupError(f"Match {event_id} not found")
        return match["home_url"], match["away_url"]

    def league_averages(self) -> LeagueAverages:
        with self.transaction() as session:
            return FormRepository(session).league_averages()

    def recent_results(self, team_id: int, limit: int = 20) -> List[TeamResult]:
        with self.transaction() as session:
            return FormRepository(session).recent_results(team_id, limit)

    @staticmethod
    def _event_to_dict(event: Event) -> Dict[str, Any]:
        stats = event.stats
        return {
            "id": event.id,
            "date": event.date,
            "time": event.time,
            "venue": event.venue,
            "attendance": event.attendance,
            "url": event.url,
            "status": event.status,
            "home_team_id": event.home_team_id,
            "home_team": event.home_team.name,
            "home_url": event.home_team.url,
            "away_team_id": event.away_team_id,
            "away_team": event.away_team.name,
            "away_url": event.away_team.url,
            "home_score": stats.home_score if stats else None,
            "away_score": stats.away_score if stats else None,
            "xg_home": stats.xg_home if stats else None,
            "xg_away": stats.xg_away if stats else None,
            "referee": stats.referee if stats else None,
        }
