"""
Shared fixtures: in-memory store, fake fetcher, recording sleep and
builders for the source's page shapes.
"""

from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from configurations import ConfigFactory, DatabaseConfig
from database.services.database_service import FootballDatabaseService
from exceptions import FetchFailed
from extractors.records import FootballMatchStats, MatchContext, PlayerStats, TeamStats

BASE_URL = "https://fbref.com"
SEASON = "2025-2026"

CATEGORY_TABLES = ("summary", "passing", "passing_types", "defense", "misc", "gca")


# ***> Page builders <***


def roster_page(teams: Iterable[Tuple[str, str]]) -> str:
    rows = "".join(
        f'<tr><th data-stat="rank">{index}</th>'
        f'<td data-stat="team"><a href="{href}">{name}</a></td>'
        f'<td data-stat="points">{30 - index}</td></tr>'
        for index, (name, href) in enumerate(teams, start=1)
    )
    return (
        "<html><body>"
        '<table id="results2025-202691_overall" class="stats_table">'
        "<thead><tr><th>Rk</th><th>Squad</th><th>Pts</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>"
        "</body></html>"
    )


def matchlog_page(report_hrefs: Iterable[str], commented: bool = False) -> str:
    rows = "".join(
        f'<tr><th data-stat="date">2025-08-{10 + index}</th>'
        f'<td data-stat="match_report"><a href="{href}">Match Report</a></td></tr>'
        for index, href in enumerate(report_hrefs)
    )
    rows += (
        '<tr><th data-stat="date">2026-05-20</th>'
        '<td data-stat="match_report"><a href="/en/stathead/matchup/x">Head-to-Head</a>'
        "</td></tr>"
    )
    table = (
        '<table id="matchlogs_for" class="stats_table">'
        '<thead><tr><th>Date</th><th>Match Report</th></tr></thead>'
        f"<tbody>{rows}</tbody></table>"
    )
    if commented:
        table = f"<!--{table}-->"
    return f"<html><body><div>{table}</div></body></html>"


def fixture_row(
    date: str,
    home: Tuple[str, str],
    away: Tuple[str, str],
    score: str = "",
    score_href: Optional[str] = None,
    time: str = "15:00",
    venue: str = "Stadium",
) -> str:
    score_cell = f'<a href="{score_href}">{score}</a>' if score_href else score
    return (
        '<tr><th data-stat="gameweek">1</th>'
        f'<td data-stat="date"><a href="/en/matches/{date}">{date}</a></td>'
        f'<td data-stat="start_time">{time}</td>'
        f'<td data-stat="home_team"><a href="{home[1]}">{home[0]}</a></td>'
        f'<td data-stat="score">{score_cell}</td>'
        f'<td data-stat="away_team"><a href="{away[1]}">{away[0]}</a></td>'
        f'<td data-stat="venue">{venue}</td>'
        '<td data-stat="match_report"></td></tr>'
    )


def fixture_page(rows: Iterable[str]) -> str:
    return (
        "<html><body>"
        '<table id="sched_2025-2026_9_1" class="stats_table">'
        "<thead><tr><th>Wk</th><th>Date</th></tr></thead>"
        f'<tbody>{"".join(rows)}<tr class="thead"><th>Wk</th></tr></tbody>'
        "</table></body></html>"
    )


def player_rows(players: Dict[str, Dict[str, str]]) -> str:
    rows = []
    for name, stats in players.items():
        cells = "".join(
            f'<td data-stat="{stat}">{value}</td>' for stat, value in stats.items()
        )
        rows.append(
            f'<tr><th data-stat="player"><a href="/en/players/x/{name}">{name}</a></th>'
            f"{cells}</tr>"
        )
    return "".join(rows)


def match_report_page(
    home: Tuple[str, str],
    away: Tuple[str, str],
    home_players: Dict[str, Dict[str, str]],
    away_players: Dict[str, Dict[str, str]],
    score: Optional[Tuple[int, int]] = None,
    match_date: Optional[str] = "2025-08-17",
    categories: Iterable[str] = CATEGORY_TABLES,
) -> str:
    """
    A match report with a scorebox and two tables per category. Every table
    but the summary sits inside an HTML comment, as on the live source.
    """
    home_name, home_href = home
    away_name, away_href = away

    scores = ""
    if score is not None:
        scores = (
            f'<div class="score">{score[0]}</div><div class="score">{score[1]}</div>'
        )

    venue_time = ""
    if match_date:
        venue_time = (
            f'<div><span class="venuetime" data-venue-date="{match_date}">'
            "15:00</span></div>"
        )

    scorebox = (
        '<div class="scorebox">'
        f'<div itemprop="performer"><strong><a href="{home_href}">{home_name}</a>'
        "</strong></div>"
        f'<div itemprop="performer"><strong><a href="{away_href}">{away_name}</a>'
        "</strong></div>"
        f"{scores}"
        '<div class="scorebox_meta">'
        f"{venue_time}"
        "<div><small><b>Attendance</b></small>: <small>73,297</small></div>"
        "<div><small><b>Venue</b></small>: <small>Old Trafford, Manchester</small></div>"
        "<div><small><b>Officials</b></small>: <small><span>"
        "Anthony Taylor (Referee) · Gary Beswick (AR1)</span></small></div>"
        "</div></div>"
    )

    tables = []
    for category in categories:
        for squad, players in (("aaa111", home_players), ("bbb222", away_players)):
            table = (
                f'<table id="stats_{squad}_{category}">'
                "<thead><tr><th>Player</th></tr></thead>"
                f"<tbody>{player_rows(players)}</tbody></table>"
            )
            if category != "summary":
                table = f"<!--{table}-->"
            tables.append(f"<div>{table}</div>")

    return f"<html><body>{scorebox}{''.join(tables)}</body></html>"


def player(
    position: str = "FW",
    minutes: int = 90,
    goals: int = 0,
    xg: float = 0.0,
    **extra: str,
) -> Dict[str, str]:
    stats = {
        "position": position,
        "minutes": str(minutes),
        "goals": str(goals),
        "assists": "0",
        "shots": "2",
        "shots_on_target": "1",
        "xg": str(xg),
        "sca": "3",
        "gca": "1",
        "passes_completed": "25",
        "xg_assist": "0.1",
        "tackles_won": "1",
        "interceptions": "2",
        "fouls": "1",
        "fouls_drawn": "2",
        "cards_yellow": "0",
    }
    stats.update(extra)
    return stats


def team_href(squad_id: str, name: str) -> str:
    return f"/en/squads/{squad_id}/{name.replace(' ', '-')}-Stats"


def season_url(squad_id: str, season: str = SEASON) -> str:
    return f"{BASE_URL}/en/squads/{squad_id}/{season}/matchlogs/all_comps/schedule/"


# ***> Record builders <***


def player_line(name: str, goals: int = 0, xg: float = 0.0) -> PlayerStats:
    return PlayerStats(
        name=name,
        position="FW",
        minutes=90,
        goals=goals,
        assists=0,
        shots=2,
        shots_on_target=1,
        xg=xg,
        xa=0.0,
        sca=1,
        tackles=0,
        interceptions=0,
        fouls_committed=1,
        fouls_drawn=0,
    )


def make_match_stats(
    home: str = "Team A",
    away: str = "Team B",
    home_score: int = 2,
    away_score: int = 1,
    home_players: Optional[List[PlayerStats]] = None,
    away_players: Optional[List[PlayerStats]] = None,
    home_url: Optional[str] = None,
    away_url: Optional[str] = None,
) -> FootballMatchStats:
    home_players = home_players if home_players is not None else [
        player_line("Home Striker", goals=home_score, xg=1.6)
    ]
    away_players = away_players if away_players is not None else [
        player_line("Away Striker", goals=away_score, xg=0.9)
    ]
    home_xg = sum(line.xg for line in home_players)
    away_xg = sum(line.xg for line in away_players)
    return FootballMatchStats(
        context=MatchContext(
            referee="Anthony Taylor",
            venue="Old Trafford",
            attendance=70000,
            home_score=home_score,
            away_score=away_score,
        ),
        home=TeamStats(name=home, xg=home_xg, xga=away_xg, url=home_url, players=home_players),
        away=TeamStats(name=away, xg=away_xg, xga=home_xg, url=away_url, players=away_players),
    )


# ***> Fakes <***


class FakeFetcher:
    """
    Serves canned pages by URL; unknown URLs fail like an exhausted chain.
    """

    def __init__(self, pages: Optional[Dict[str, str]] = None):
        self.pages = dict(pages or {})
        self.calls: List[str] = []
        self.ready_calls: List[Tuple[str, str]] = []
        self.closed = False

    def _page(self, url: str) -> str:
        page = self.pages.get(url)
        if page is None:
            raise FetchFailed(url, "direct request returned 404")
        return page

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        return self._page(url)

    def fetch_ready(self, url: str, selector: str) -> str:
        self.ready_calls.append((url, selector))
        return self._page(url)

    def close(self) -> None:
        self.closed = True


class RecordingSleep:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


# ***> Fixtures <***


@pytest.fixture
def database():
    """Fresh in-memory store with the schema initialized."""
    service = FootballDatabaseService(DatabaseConfig.testing())
    service.init_schema()
    yield service
    service.cleanup()


@pytest.fixture
def app_config():
    config = ConfigFactory.testing()
    config.crawler.seasons = [SEASON]
    return config


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
