# database/core/schema_manager.py
"""
Schema creation, static seeding and the one-time move from the legacy
single-table ``matches`` layout to the events / football_stats split.
"""

import logging
from typing import List

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from configurations.settings_database import UNKNOWN_MATCH_DATE
from database.core.database_manager import DatabaseManager
from database.schemas import FOOTBALL_SPORT_ID, Sport
from exceptions import PersistenceFailed, SchemaInitializationError

logger = logging.getLogger(__name__)

LEGACY_TABLE = "matches"
LEGACY_BACKUP_TABLE = "_matches_v1_backup"

# ***> Target column -> fallback SQL when the legacy table lacks it <***
LEGACY_EVENT_COLUMNS = {
    "date": f"'{UNKNOWN_MATCH_DATE}'",
    "time": "NULL",
    "venue": "NULL",
}
LEGACY_STATS_COLUMNS = ("home_score", "away_score", "xg_home", "xg_away", "referee")


class SchemaManager:
    """
    Brings a database up to the current schema. Safe to run on every start.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def init_schema(self) -> None:
        """
        Create missing tables, seed the sport row and migrate legacy data.

        Raises:
            SchemaInitializationError: If any step fails; the store must not
                be used afterwards
        """
        try:
            self._upgrade_legacy_teams()
            self.db_manager.create_tables()
            self._seed_sports()
            self.migrate_legacy_matches()
        except SchemaInitializationError:
            raise
        except (PersistenceFailed, SQLAlchemyError) as error:
            raise SchemaInitializationError(
                f"Schema initialization failed: {error}"
            ) from error

        logger.info("Schema ready on %s database", self.db_manager.db_type)

    def _table_columns(self, table_name: str) -> List[str]:
        inspector = inspect(self.db_manager.engine)
        if not inspector.has_table(table_name):
            return []
        return [column["name"] for column in inspector.get_columns(table_name)]

    def _upgrade_legacy_teams(self) -> None:
        """
        Older stores created ``teams`` without a sport or profile URL.
        """
        columns = self._table_columns("teams")
        if not columns:
            return

        statements = []
        if "url" not in columns:
            statements.append("ALTER TABLE teams ADD COLUMN url TEXT")
        if "sport_id" not in columns:
            statements.append(
                f"ALTER TABLE teams ADD COLUMN sport_id VARCHAR(50) "
                f"DEFAULT '{FOOTBALL_SPORT_ID}'"
            )

        if statements:
            logger.info("Upgrading legacy teams table: %s", statements)
            with self.db_manager.engine.begin() as conn:
                for statement in statements:
                    conn.execute(text(statement))

    def _seed_sports(self) -> None:
        with self.db_manager.get_session() as session:
            if session.get(Sport, FOOTBALL_SPORT_ID) is None:
                session.add(Sport(id=FOOTBALL_SPORT_ID, name="Football"))

    def migrate_legacy_matches(self) -> int:
        """
        Copy every legacy ``matches`` row into events (and football_stats
        for rows with a score), then rename the legacy table.

        Everything runs in one transaction: either all rows move and the
        table is renamed, or nothing changes.

        Returns:
            Number of legacy rows found (0 when there was nothing to migrate)
        """
        columns = self._table_columns(LEGACY_TABLE)
        if not columns:
            return 0

        def legacy(column: str, fallback: str = "NULL") -> str:
            return f"m.{column}" if column in columns else fallback

        if "home_score" in columns:
            status_sql = (
                "CASE WHEN m.home_score IS NOT NULL "
                "THEN 'FINISHED' ELSE 'SCHEDULED' END"
            )
        else:
            status_sql = "'SCHEDULED'"

        event_columns = ", ".join(
            f"COALESCE({legacy(name)}, {fallback})"
            if name == "date"
            else legacy(name, fallback)
            for name, fallback in LEGACY_EVENT_COLUMNS.items()
        )

        copy_events = f"""
            INSERT INTO events (id, sport_id, date, time, venue, url, status,
                                home_team_id, away_team_id)
            SELECT m.id, '{FOOTBALL_SPORT_ID}', {event_columns},
                   COALESCE(m.url, 'legacy://' || m.id), {status_sql},
                   m.home_team_id, m.away_team_id
            FROM {LEGACY_TABLE} m
            WHERE NOT EXISTS (
                SELECT 1 FROM events e
                WHERE e.id = m.id OR e.url = COALESCE(m.url, 'legacy://' || m.id)
            )
        """

        stats_columns = ", ".join(legacy(name) for name in LEGACY_STATS_COLUMNS)
        copy_stats = f"""
            INSERT INTO football_stats (event_id, home_score, away_score,
                                        xg_home, xg_away, referee)
            SELECT m.id, {stats_columns}
            FROM {LEGACY_TABLE} m
            WHERE {legacy('home_score')} IS NOT NULL
              AND EXISTS (SELECT 1 FROM events e WHERE e.id = m.id)
              AND NOT EXISTS (
                  SELECT 1 FROM football_stats fs WHERE fs.event_id = m.id
              )
        """

        with self.db_manager.engine.begin() as conn:
            legacy_rows = conn.execute(
                text(f"SELECT COUNT(*) FROM {LEGACY_TABLE}")
            ).scalar_one()
            logger.info(
                "Migrating %d legacy '%s' rows to events + football_stats",
                legacy_rows,
                LEGACY_TABLE,
            )
            conn.execute(text(copy_events))
            conn.execute(text(copy_stats))
            if self.db_manager.db_type == "postgresql":
                # ***> explicit ids above leave the serial sequence behind <***
                conn.execute(
                    text(
                        "SELECT setval(pg_get_serial_sequence('events', 'id'), "
                        "COALESCE((SELECT MAX(id) FROM events), 1))"
                    )
                )
            conn.execute(
                text(f"ALTER TABLE {LEGACY_TABLE} RENAME TO {LEGACY_BACKUP_TABLE}")
            )

        logger.info("Legacy migration complete, backup kept as %s", LEGACY_BACKUP_TABLE)
        return legacy_rows
