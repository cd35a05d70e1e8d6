# database/schemas/football_schema.py
"""
Database models for sports, teams, events and their football statistics.

Events are the entity rows (one per scheduled or played match), while
football_stats and player_match_stats hold the facts attached once a
match is finished.
"""

import enum

from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from database.base import Base

FOOTBALL_SPORT_ID = "football"


class EventStatus(str, enum.Enum):
    """
    Lifecycle of an event. FINISHED implies a football_stats row.
    """

    SCHEDULED = "SCHEDULED"
    FINISHED = "FINISHED"


class Sport(Base):
    """
    Static lookup of supported sports. Seeded on schema init.
    """

    __tablename__ = "sports"

    id = Column(String(50), primary_key=True)
    name = Column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Sport(id='{self.id}', name='{self.name}')>"


class Team(Base):
    """
    Team model. Created lazily the first time a fixture or a completed
    match references it; the profile URL is filled in once observed.
    """

    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sport_id = Column(
        String(50),
        ForeignKey("sports.id"),
        nullable=False,
        default=FOOTBALL_SPORT_ID,
        doc="Sport this team plays",
    )
    name = Column(String(255), nullable=False, doc="Display name as shown on the source")
    url = Column(Text, nullable=True, doc="Squad profile URL, used to crawl history")

    __table_args__ = (UniqueConstraint("sport_id", "name", name="uq_team_sport_name"),)

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name='{self.name}')>"


class Event(Base):
    """
    One scheduled or completed match. ``url`` is the natural external key:
    the same source match is never stored twice.
    """

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sport_id = Column(
        String(50), ForeignKey("sports.id"), nullable=False, default=FOOTBALL_SPORT_ID
    )
    date = Column(String(10), nullable=False, doc="ISO date, YYYY-MM-DD")
    time = Column(String(10), nullable=True)
    venue = Column(String(255), nullable=True)
    attendance = Column(Integer, nullable=True)
    url = Column(Text, nullable=False, unique=True)
    status = Column(String(20), nullable=False, default=EventStatus.SCHEDULED.value)
    home_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    away_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)

    home_team = relationship("Team", foreign_keys=[home_team_id])
    away_team = relationship("Team", foreign_keys=[away_team_id])
    stats = relationship("FootballStats", uselist=False, back_populates="event")

    @property
    def is_finished(self) -> bool:
        return self.status == EventStatus.FINISHED.value

    def __repr__(self) -> str:
        return (
            f"<Event(id={self.id}, date='{self.date}', status='{self.status}', "
            f"url='{self.url}')>"
        )


class FootballStats(Base):
    """
    Result row of a finished football event (1:1 with events).
    """

    __tablename__ = "football_stats"

    event_id = Column(Integer, ForeignKey("events.id"), primary_key=True)
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)
    xg_home = Column(Float, nullable=True)
    xg_away = Column(Float, nullable=True)
    referee = Column(String(255), nullable=True)

    event = relationship("Event", back_populates="stats")

    def __repr__(self) -> str:
        return (
            f"<FootballStats(event_id={self.event_id}, "
            f"score={self.home_score}-{self.away_score})>"
        )


class Player(Base):
    """
    Player identity. Names are global across teams, so a transfer
    reuses the same row.
    """

    __tablename__ = "players"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name='{self.name}')>"


class PlayerMatchStat(Base):
    """
    Append-only fact row: one player's line in one match.
    """

    __tablename__ = "player_match_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    match_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    position = Column(String(20), nullable=True)
    minutes = Column(Integer, default=0)
    goals = Column(Integer, default=0)
    assists = Column(Integer, default=0)
    shots = Column(Integer, default=0)
    shots_on_target = Column(Integer, default=0)
    xg = Column(Float, default=0.0)
    xa = Column(Float, default=0.0)
    sca = Column(Integer, default=0)
    tackles = Column(Integer, default=0)
    interceptions = Column(Integer, default=0)
    fouls_committed = Column(Integer, default=0)
    fouls_drawn = Column(Integer, default=0)

    player = relationship("Player")

    __table_args__ = (
        UniqueConstraint("player_id", "match_id", name="uq_player_match"),
    )

    def __repr__(self) -> str:
        return (
            f"<PlayerMatchStat(player_id={self.player_id}, "
            f"match_id={self.match_id}, team_id={self.team_id})>"
        )
