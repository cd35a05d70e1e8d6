# analysis/prediction_engine.py
"""
Poisson match prediction from stored form.

Team strengths are the team's recent scoring / conceding rates relative to
the league's home and away averages; the projected goal rates feed an
independent Poisson score grid.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Tuple

import numpy as np
from scipy.stats import poisson

from configurations.settings_orchestrator import CrawlerConfig
from database.services.database_service import FootballDatabaseService
from exceptions import InsufficientHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchPrediction:
    """
    Projected goals and market probabilities for one fixture.

    ``home_win + draw + away_win == 1``; ``over_2_5`` and ``btts`` are
    independent markets read straight off the score grid.
    """

    xg_home: float
    xg_away: float
    home_win: float
    draw: float
    away_win: float
    over_2_5: float
    btts: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def strength_ratio(team_rate: float, league_rate: float) -> float:
    """
    Team rate relative to the league; neutral (1.0) without a league rate.
    """
    if not league_rate:
        return 1.0
    return team_rate / league_rate


def score_grid(xg_home: float, xg_away: float, max_goals: int = 9) -> MatchPrediction:
    """
    Accumulate Poisson scoreline probabilities for 0..max_goals per side.

    Args:
        xg_home: Expected goals of the home side
        xg_away: Expected goals of the away side
        max_goals: Highest goal count per side on the grid

    Returns:
        MatchPrediction with the 1X2 buckets renormalized over the grid
    """
    goals = np.arange(max_goals + 1)
    # ***> rows: home goals, columns: away goals <***
    grid = np.outer(poisson.pmf(goals, xg_home), poisson.pmf(goals, xg_away))

    home_win = float(np.tril(grid, -1).sum())
    draw = float(np.trace(grid))
    away_win = float(np.triu(grid, 1).sum())
    total = home_win + draw + away_win

    totals = np.add.outer(goals, goals)
    over_2_5 = float(grid[totals > 2].sum())
    btts = float(grid[1:, 1:].sum())

    return MatchPrediction(
        xg_home=float(xg_home),
        xg_away=float(xg_away),
        home_win=home_win / total,
        draw=draw / total,
        away_win=away_win / total,
        over_2_5=over_2_5,
        btts=btts,
    )


class PredictionEngine:
    """
    Read-only predictor over the football store.
    """

    def __init__(
        self,
        database: FootballDatabaseService,
        form_window: int = 20,
        home_prior: float = 1.5,
        away_prior: float = 1.2,
        max_goals: int = 9,
    ):
        self.database = database
        self.form_window = form_window
        self.home_prior = home_prior
        self.away_prior = away_prior
        self.max_goals = max_goals

    @classmethod
    def from_config(
        cls, database: FootballDatabaseService, config: CrawlerConfig
    ) -> "PredictionEngine":
        return cls(
            database,
            form_window=config.form_window,
            home_prior=config.league_home_prior,
            away_prior=config.league_away_prior,
            max_goals=config.max_goals,
        )

    def league_baseline(self) -> Tuple[float, float]:
        """
        League home/away goal averages, or the priors on an empty league.
        """
        averages = self.database.league_averages()
        if averages.matches == 0:
            logger.info(
                "No finished matches stored, using priors %.2f / %.2f",
                self.home_prior,
                self.away_prior,
            )
            return self.home_prior, self.away_prior
        return averages.home_goals, averages.away_goals

    def team_form(self, team_id: int) -> Tuple[float, float]:
        """
        Average goals scored and conceded over the team's recent matches.

        Raises:
            InsufficientHistory: If the team has no finished matches
        """
        results = self.database.recent_results(team_id, self.form_window)
        if not results:
            raise InsufficientHistory(team_id)

        scored = np.mean([result.scored for result in results])
        conceded = np.mean([result.conceded for result in results])
        return float(scored), float(conceded)

    def predict(self, home_team_id: int, away_team_id: int) -> MatchPrediction:
        """
        Args:
            home_team_id: Stored id of the home side
            away_team_id: Stored id of the away side

        Returns:
            MatchPrediction for the fixture

        Raises:
            InsufficientHistory: If either team has no finished matches
        """
        league_home, league_away = self.league_baseline()
        home_scored, home_conceded = self.team_form(home_team_id)
        away_scored, away_conceded = self.team_form(away_team_id)

        home_attack = strength_ratio(home_scored, league_home)
        home_defense = strength_ratio(home_conceded, league_away)
        away_attack = strength_ratio(away_scored, league_away)
        away_defense = strength_ratio(away_conceded, league_home)

        xg_home = home_attack * away_defense * league_home
        xg_away = away_attack * home_defense * league_away

        logger.debug(
            "Projected goals %.2f - %.2f for teams %s vs %s",
            xg_home,
            xg_away,
            home_team_id,
            away_team_id,
        )
        return score_grid(xg_home, xg_away, self.max_goals)
