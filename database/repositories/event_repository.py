# database/repositories/event_repository.py
"""
Event (match) repository: lookup by natural URL key and listings.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from database.schemas import FOOTBALL_SPORT_ID, Event, EventStatus, FootballStats

from .base_repository import BaseRepository


class EventRepository(BaseRepository[Event]):
    """
    Repository for Event and its FootballStats row.
    """

    def __init__(self, session: Session):
        super().__init__(session, Event)

    def get_by_url(self, url: str) -> Optional[Event]:
        return self.session.scalar(select(Event).where(Event.url == url))

    def get_with_details(self, event_id: int) -> Optional[Event]:
        """
        Load an event with its teams and stats eagerly, so it can be read
        after the session closes.
        """
        return self.session.scalar(
            select(Event)
            .options(
                joinedload(Event.home_team),
                joinedload(Event.away_team),
                joinedload(Event.stats),
            )
            .where(Event.id == event_id)
        )

    def list_with_details(self, sport_id: str = FOOTBALL_SPORT_ID) -> List[Event]:
        return list(
            self.session.scalars(
                select(Event)
                .options(
                    joinedload(Event.home_team),
                    joinedload(Event.away_team),
                    joinedload(Event.stats),
                )
                .where(Event.sport_id == sport_id)
                .order_by(Event.date.desc(), Event.id.desc())
            ).unique()
        )

    def get_stats(self, event_id: int) -> Optional[FootballStats]:
        return self.session.get(FootballStats, event_id)

    def has_completed_stats(self, url: str) -> bool:
        """
        True when an event with this URL exists and already carries a result.
        """
        stats_id = self.session.scalar(
            select(FootballStats.event_id)
            .join(Event, Event.id == FootballStats.event_id)
            .where(Event.url == url)
        )
        return stats_id is not None

    def create(
        self,
        url: str,
        date: str,
        home_team_id: int,
        away_team_id: int,
        status: EventStatus = EventStatus.SCHEDULED,
        time: Optional[str] = None,
        venue: Optional[str] = None,
        attendance: Optional[int] = None,
    ) -> Event:
        return self.add(
            Event(
                sport_id=FOOTBALL_SPORT_ID,
                url=url,
                date=date,
                time=time,
                venue=venue,
                attendance=attendance,
                status=status.value,
                home_team_id=home_team_id,
                away_team_id=away_team_id,
            )
        )
