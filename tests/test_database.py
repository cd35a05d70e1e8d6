"""
Tests for the football store: schema setup, legacy migration, upsert
semantics and the form queries.
"""

import time

import pytest
from sqlalchemy import func, inspect, select, text

from conftest import make_match_stats, player_line
from configurations import DatabaseConfig
from configurations.settings_database import UNKNOWN_MATCH_DATE
from database.core.database_manager import DatabaseManager
from database.core.schema_manager import LEGACY_BACKUP_TABLE, LEGACY_TABLE
from database.repositories.team_repository import TeamRepository
from database.schemas import (
    FOOTBALL_SPORT_ID,
    Event,
    FootballStats,
    PlayerMatchStat,
    Sport,
    Team,
)
from database.services.database_service import FootballDatabaseService
from exceptions import DatabaseConfigurationError, PersistenceConflict

MATCH_URL = "https://fbref.com/en/matches/m1/Team-A-Team-B"


def count(database, model):
    with database.transaction() as session:
        return session.scalar(select(func.count()).select_from(model))


class TestDatabaseManager:
    def test_rejects_unsupported_url(self):
        with pytest.raises(DatabaseConfigurationError):
            DatabaseManager("mysql://localhost/db")

    def test_from_config_carries_engine_options(self, tmp_path):
        config = DatabaseConfig.from_url(f"sqlite:///{tmp_path / 'store' / 'x.db'}")
        config.busy_timeout = 3
        manager = DatabaseManager.from_config(config)
        try:
            assert manager.busy_timeout == 3
            assert manager.pool_options["pool_size"] == config.pool_size
            assert (tmp_path / "store").is_dir()
        finally:
            manager.dispose()

    def test_memory_database_is_shared_between_sessions(self, database):
        database.upsert_team("Team A")
        assert count(database, Team) == 1

    def test_integrity_error_maps_to_conflict(self, database):
        with pytest.raises(PersistenceConflict):
            with database.transaction() as session:
                session.add(Team(name="Dup"))
                session.add(Team(name="Dup"))
                session.flush()
        assert count(database, Team) == 0


class TestSchemaInitialization:
    def test_tables_and_sport_seed(self, database):
        tables = set(inspect(database.db_manager.engine).get_table_names())
        assert {
            "sports",
            "teams",
            "events",
            "football_stats",
            "players",
            "player_match_stats",
        } <= tables
        with database.transaction() as session:
            assert session.get(Sport, "football") is not None

    def test_init_is_repeatable(self, database):
        database.init_schema()
        assert count(database, Sport) == 1


@pytest.fixture
def legacy_service():
    """
    A store laid out the old way: teams without url/sport and a single
    ``matches`` table holding schedule and result columns.
    """
    service = FootballDatabaseService(DatabaseConfig.testing())
    with service.db_manager.engine.begin() as conn:
        conn.execute(text("CREATE TABLE teams (id INTEGER PRIMARY KEY, name TEXT)"))
        conn.execute(text("INSERT INTO teams (id, name) VALUES (1, 'Team A'), (2, 'Team B')"))
        conn.execute(
            text(
                "CREATE TABLE matches (id INTEGER PRIMARY KEY, date TEXT, time TEXT, "
                "venue TEXT, url TEXT, home_team_id INTEGER, away_team_id INTEGER, "
                "home_score INTEGER, away_score INTEGER, xg_home REAL, xg_away REAL, "
                "referee TEXT)"
            )
        )
        conn.execute(
            text(
                "INSERT INTO matches VALUES "
                "(10, '2025-08-17', '15:00', 'Ground', 'https://fbref.com/m/10', 1, 2, 2, 1, 1.4, 0.8, 'Ref'),"
                "(11, '2025-08-24', '17:30', 'Ground', 'https://fbref.com/m/11', 2, 1, 0, 0, 0.5, 0.6, NULL),"
                "(12, '2026-11-01', NULL, NULL, 'https://fbref.com/m/12', 1, 2, NULL, NULL, NULL, NULL, NULL)"
            )
        )
    yield service
    service.cleanup()


class TestLegacyMigration:
    def test_rows_move_and_table_is_kept_as_backup(self, legacy_service):
        legacy_service.init_schema()

        assert count(legacy_service, Event) == 3
        assert count(legacy_service, FootballStats) == 2

        tables = inspect(legacy_service.db_manager.engine).get_table_names()
        assert LEGACY_TABLE not in tables
        assert LEGACY_BACKUP_TABLE in tables

    def test_status_and_ids_are_preserved(self, legacy_service):
        legacy_service.init_schema()

        played = legacy_service.get_match(10)
        upcoming = legacy_service.get_match(12)

        assert played["status"] == "FINISHED"
        assert (played["home_score"], played["away_score"]) == (2, 1)
        assert played["referee"] == "Ref"
        assert upcoming["status"] == "SCHEDULED"
        assert upcoming["home_score"] is None

    def test_legacy_teams_are_upgraded(self, legacy_service):
        legacy_service.init_schema()

        columns = {
            column["name"]
            for column in inspect(legacy_service.db_manager.engine).get_columns("teams")
        }
        assert {"url", "sport_id"} <= columns
        assert legacy_service.upsert_team("Team A", "https://fbref.com/en/squads/aaa111/") == 1

    def test_second_start_does_not_migrate_again(self, legacy_service):
        legacy_service.init_schema()
        assert legacy_service.schema_manager.migrate_legacy_matches() == 0
        assert count(legacy_service, Event) == 3


class TestTeamUpsert:
    def test_same_name_same_id(self, database):
        first = database.upsert_team("Team A")
        assert database.upsert_team("Team A") == first
        assert count(database, Team) == 1

    def test_url_is_overwritten_when_supplied(self, database):
        team_id = database.upsert_team("Team A", "https://old")
        database.upsert_team("Team A", "https://new")
        database.upsert_team("Team A", None)

        with database.transaction() as session:
            assert session.get(Team, team_id).url == "https://new"

    def test_empty_name_rejected(self, database):
        with pytest.raises(ValueError):
            database.upsert_team("  ")

    def test_lost_insert_race_retries_and_returns_existing_id(
        self, database, monkeypatch, recording_sleep
    ):
        existing = database.upsert_team("Team A")
        original = TeamRepository.get_by_name
        lookups = []

        def stale_first_lookup(self, name, sport_id=FOOTBALL_SPORT_ID):
            lookups.append(name)
            if len(lookups) == 1:
                return None
            return original(self, name, sport_id)

        monkeypatch.setattr(TeamRepository, "get_by_name", stale_first_lookup)
        monkeypatch.setattr(time, "sleep", recording_sleep)

        assert database.upsert_team("Team A") == existing
        assert lookups == ["Team A", "Team A"]
        assert len(recording_sleep.calls) == 1
        assert count(database, Team) == 1


class TestSaveFixture:
    def test_creates_scheduled_event_and_teams(self, database):
        event_id = database.save_fixture(
            "Team A", "Team B", "2026-10-20", "fixture://2026-10-20/Team A/Team B",
            venue="Ground", time="15:00", home_url="https://a", away_url="https://b",
        )

        match = database.get_match(event_id)
        assert match["status"] == "SCHEDULED"
        assert (match["home_url"], match["away_url"]) == ("https://a", "https://b")
        assert match["home_score"] is None

    def test_rescheduling_updates_fields(self, database):
        url = "fixture://x"
        event_id = database.save_fixture("Team A", "Team B", "2026-10-20", url)
        assert database.save_fixture(
            "Team A", "Team B", "2026-10-22", url, venue="New Ground", time="20:00"
        ) == event_id

        match = database.get_match(event_id)
        assert (match["date"], match["venue"], match["time"]) == (
            "2026-10-22",
            "New Ground",
            "20:00",
        )

    def test_never_downgrades_finished_event(self, database):
        database.save_match_complete(make_match_stats(), "2025-08-17", MATCH_URL)

        event_id = database.save_fixture(
            "Team A", "Team B", "2030-01-01", MATCH_URL, venue="Elsewhere", time="12:00"
        )

        match = database.get_match(event_id)
        assert match["status"] == "FINISHED"
        assert match["date"] == "2025-08-17"
        assert match["venue"] == "Old Trafford"
        assert (match["home_score"], match["away_score"]) == (2, 1)


class TestSaveMatchComplete:
    def test_is_idempotent(self, database):
        stats = make_match_stats()

        assert database.save_match_complete(stats, "2025-08-17", MATCH_URL) is True
        with database.transaction() as session:
            first_rows = {
                tuple(row)
                for row in session.execute(
                    select(PlayerMatchStat.player_id, PlayerMatchStat.match_id)
                )
            }

        assert database.save_match_complete(stats, "2025-08-17", MATCH_URL) is False

        assert count(database, Event) == 1
        assert count(database, FootballStats) == 1
        with database.transaction() as session:
            second_rows = {
                tuple(row)
                for row in session.execute(
                    select(PlayerMatchStat.player_id, PlayerMatchStat.match_id)
                )
            }
        assert first_rows == second_rows
        assert len(second_rows) == 2

    def test_completes_a_stored_fixture(self, database):
        event_id = database.save_fixture("Team A", "Team B", "2025-08-17", MATCH_URL)

        database.save_match_complete(make_match_stats(), "2025-08-17", MATCH_URL)

        match = database.get_match(event_id)
        assert match["status"] == "FINISHED"
        assert match["xg_home"] == pytest.approx(1.6)
        assert match["attendance"] == 70000
        assert count(database, Event) == 1

    def test_unknown_report_date_keeps_fixture_date(self, database):
        event_id = database.save_fixture("Team A", "Team B", "2025-08-17", MATCH_URL)

        database.save_match_complete(make_match_stats(), UNKNOWN_MATCH_DATE, MATCH_URL)

        match = database.get_match(event_id)
        assert match["status"] == "FINISHED"
        assert match["date"] == "2025-08-17"

    def test_player_on_both_sides_is_stored_once(self, database):
        stats = make_match_stats(
            home_players=[player_line("Twin", goals=1)],
            away_players=[player_line("Twin"), player_line("Other", goals=1)],
        )

        database.save_match_complete(stats, "2025-08-17", MATCH_URL)

        assert count(database, PlayerMatchStat) == 2

    def test_has_completed_match(self, database):
        assert not database.has_completed_match(MATCH_URL)
        database.save_fixture("Team A", "Team B", "2025-08-17", MATCH_URL)
        assert not database.has_completed_match(MATCH_URL)
        database.save_match_complete(make_match_stats(), "2025-08-17", MATCH_URL)
        assert database.has_completed_match(MATCH_URL)

    def test_team_urls_are_recorded(self, database):
        stats = make_match_stats(home_url="https://a", away_url="https://b")
        database.save_match_complete(stats, "2025-08-17", MATCH_URL)

        (match,) = database.list_matches()
        assert database.get_team_urls(match["id"]) == ("https://a", "https://b")

    def test_get_team_urls_unknown_event(self, database):
        with pytest.raises(LookupError):
            database.get_team_urls(999)


class TestFormQueries:
    def save(self, database, index, home, away, home_score, away_score, date):
        stats = make_match_stats(home, away, home_score, away_score)
        database.save_match_complete(stats, date, f"https://fbref.com/m/{index}")

    def test_league_averages(self, database):
        self.save(database, 1, "A", "B", 2, 0, "2025-08-01")
        self.save(database, 2, "B", "A", 1, 1, "2025-08-08")
        database.save_fixture("A", "B", "2026-11-01", "fixture://later")

        averages = database.league_averages()

        assert averages.matches == 2
        assert averages.home_goals == pytest.approx(1.5)
        assert averages.away_goals == pytest.approx(0.5)

    def test_empty_league(self, database):
        assert database.league_averages().matches == 0

    def test_recent_results_from_team_point_of_view(self, database):
        self.save(database, 1, "A", "B", 2, 0, "2025-08-01")
        self.save(database, 2, "B", "A", 3, 1, "2025-08-08")
        team_a = database.upsert_team("A")

        results = database.recent_results(team_a)

        assert [(r.date, r.scored, r.conceded) for r in results] == [
            ("2025-08-08", 1, 3),
            ("2025-08-01", 2, 0),
        ]

    def test_recent_results_limit_keeps_newest(self, database):
        for index in range(5):
            self.save(database, index, "A", "B", index, 0, f"2025-08-0{index + 1}")
        team_a = database.upsert_team("A")

        results = database.recent_results(team_a, limit=2)

        assert [r.date for r in results] == ["2025-08-05", "2025-08-04"]

    def test_list_matches_newest_first(self, database):
        self.save(database, 1, "A", "B", 2, 0, "2025-08-01")
        database.save_fixture("A", "B", "2026-11-01", "fixture://later")

        matches = database.list_matches()

        assert [m["date"] for m in matches] == ["2026-11-01", "2025-08-01"]
        assert matches[0]["home_score"] is None
