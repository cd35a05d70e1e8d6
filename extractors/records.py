# extractors/records.py
"""
Structured records produced by the extraction layer and consumed by the
aggregator and the repository.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

UNKNOWN_POSITION = "N/A"


@dataclass(frozen=True)
class FixtureRow:
    """
    One upcoming match read from a league schedule table.
    """

    date: str
    time: str
    venue: str
    home_team: str
    away_team: str
    url: str
    home_url: Optional[str] = None
    away_url: Optional[str] = None


@dataclass(frozen=True)
class TeamSource:
    """
    A team row from a league roster: display name, source id and profile URL.
    """

    name: str
    id: str
    base_url: str


@dataclass
class MatchContext:
    """
    Match-level metadata read from the report header.
    """

    referee: Optional[str] = None
    venue: Optional[str] = None
    attendance: Optional[int] = None
    date: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None


@dataclass
class PartialPlayerStats:
    """
    Running per-player record while category tables are processed.

    Each category handler fills only its own fields; ``position`` and
    ``minutes`` are identity fields where the first non-default value wins.
    """

    name: str
    position: str = UNKNOWN_POSITION
    minutes: int = 0

    # ***> summary <***
    goals: int = 0
    assists: int = 0
    shots: int = 0
    shots_on_target: int = 0
    xg: float = 0.0
    sca: int = 0
    gca: int = 0

    # ***> passing / passing types <***
    xa: float = 0.0
    passes_completed: int = 0
    progressive_passes: int = 0
    passes_final_third: int = 0
    passes_penalty_area: int = 0
    key_passes: int = 0
    corners: int = 0

    # ***> defense <***
    tackles_won: int = 0
    interceptions: int = 0
    blocks: int = 0
    clearances: int = 0

    # ***> misc <***
    yellow_cards: int = 0
    red_cards: int = 0
    fouls_committed: int = 0
    fouls_drawn: int = 0
    aerials_won: int = 0
    aerials_lost: int = 0

    def merge_identity(self, position: str, minutes: int) -> None:
        """
        Fold identity columns seen in another category table.
        """
        if position and self.position == UNKNOWN_POSITION:
            self.position = position
        if minutes and self.minutes == 0:
            self.minutes = minutes

    def to_player_stats(self) -> "PlayerStats":
        return PlayerStats(
            name=self.name,
            position=self.position,
            minutes=self.minutes,
            goals=self.goals,
            assists=self.assists,
            shots=self.shots,
            shots_on_target=self.shots_on_target,
            xg=self.xg,
            xa=self.xa,
            sca=self.sca,
            tackles=self.tackles_won,
            interceptions=self.interceptions,
            fouls_committed=self.fouls_committed,
            fouls_drawn=self.fouls_drawn,
        )


@dataclass(frozen=True)
class PlayerStats:
    """
    Final per-player line stored as one player_match_stats row.
    """

    name: str
    position: str
    minutes: int
    goals: int
    assists: int
    shots: int
    shots_on_target: int
    xg: float
    xa: float
    sca: int
    tackles: int
    interceptions: int
    fouls_committed: int
    fouls_drawn: int


@dataclass
class TeamStats:
    """
    One side's totals, summed over its players.

    ``possession``, ``saves`` and ``psxg`` are not available from the
    player tables and stay at zero.
    """

    name: str
    xg: float = 0.0
    xga: float = 0.0
    possession: float = 0.0
    goals: int = 0
    assists: int = 0
    shots: int = 0
    shots_on_target: int = 0
    sca: int = 0
    gca: int = 0
    passes_completed: int = 0
    progressive_passes: int = 0
    passes_final_third: int = 0
    key_passes: int = 0
    corners: int = 0
    tackles_won: int = 0
    interceptions: int = 0
    blocks: int = 0
    clearances: int = 0
    aerials_won: int = 0
    aerials_lost: int = 0
    saves: int = 0
    psxg: float = 0.0
    fouls: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    url: Optional[str] = None
    players: List[PlayerStats] = field(default_factory=list)


@dataclass
class FootballMatchStats:
    """
    Canonical statistics of one finished match, ready to be stored.
    """

    context: MatchContext
    home: TeamStats
    away: TeamStats

    @property
    def home_score(self) -> int:
        if self.context.home_score is not None:
            return self.context.home_score
        return self.home.goals

    @property
    def away_score(self) -> int:
        if self.context.away_score is not None:
            return self.context.away_score
        return self.away.goals


@dataclass
class MatchReport:
    """
    Everything read from one match report page before aggregation.

    ``missing_categories`` lists stat categories that had fewer than two
    tables; the report is still usable, just less complete.
    """

    url: str
    context: MatchContext
    home_team: str
    away_team: str
    home_url: Optional[str] = None
    away_url: Optional[str] = None
    home_players: Dict[str, PartialPlayerStats] = field(default_factory=dict)
    away_players: Dict[str, PartialPlayerStats] = field(default_factory=dict)
    missing_categories: Tuple[str, ...] = ()

    @property
    def is_complete(self) -> bool:
        return not self.missing_categories
