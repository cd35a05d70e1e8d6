# database/repositories/form_repository.py
"""
Read-only aggregates over finished matches, used by the prediction engine.
"""

from typing import List, NamedTuple, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from database.schemas import FOOTBALL_SPORT_ID, Event, EventStatus, FootballStats


class LeagueAverages(NamedTuple):
    home_goals: Optional[float]
    away_goals: Optional[float]
    matches: int


class TeamResult(NamedTuple):
    date: str
    scored: int
    conceded: int


class FormRepository:
    """
    Queries over finished football events that have a stored score.
    """

    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def _finished_with_score():
        return and_(
            Event.sport_id == FOOTBALL_SPORT_ID,
            Event.status == EventStatus.FINISHED.value,
            FootballStats.home_score.is_not(None),
            FootballStats.away_score.is_not(None),
        )

    def league_averages(self) -> LeagueAverages:
        """
        Mean goals of home and away sides over every finished match.
        """
        row = self.session.execute(
            select(
                func.avg(FootballStats.home_score),
                func.avg(FootballStats.away_score),
                func.count(FootballStats.event_id),
            )
            .join(Event, Event.id == FootballStats.event_id)
            .where(self._finished_with_score())
        ).one()

        home_avg, away_avg, matches = row
        return LeagueAverages(
            float(home_avg) if home_avg is not None else None,
            float(away_avg) if away_avg is not None else None,
            int(matches or 0),
        )

    def recent_results(self, team_id: int, limit: int = 20) -> List[TeamResult]:
        """
        The team's most recent finished matches, newest first, from its own
        point of view (scored / conceded) whichever side it played.
        """
        rows = self.session.execute(
            select(
                Event.date,
                Event.home_team_id,
                FootballStats.home_score,
                FootballStats.away_score,
            )
            .join(FootballStats, FootballStats.event_id == Event.id)
            .where(
                self._finished_with_score(),
                or_(Event.home_team_id == team_id, Event.away_team_id == team_id),
            )
            .order_by(Event.date.desc(), Event.id.desc())
            .limit(limit)
        ).all()

        results = []
        for date, home_team_id, home_score, away_score in rows:
            if home_team_id == team_id:
                results.append(TeamResult(date, home_score, away_score))
            else:
                results.append(TeamResult(date, away_score, home_score))
        return results
