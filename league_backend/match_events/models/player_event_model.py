from sqlalchemy import Column, String, Integer, DateTime, func
from league_backend.core.database import Base


class PlayerEventMixin:
    """Columns shared by the four event logs.

    player_id/match_id/team_id are plain references: players can be deleted
    without touching their events, and readers skip whatever no longer resolves.
    """
    event_id = Column(String, primary_key=True, index=True)
    player_id = Column(String, nullable=False, index=True)
    match_id = Column(String, nullable=False, index=True)
    match_day = Column(Integer, nullable=False)
    team_id = Column(String, nullable=True)
    timestamp = Column(DateTime, nullable=False, server_default=func.now())


class Goal(PlayerEventMixin, Base):
    __tablename__ = "goals"
    id_prefix = "G"


class Assist(PlayerEventMixin, Base):
    __tablename__ = "assists"
    id_prefix = "A"


class YellowCard(PlayerEventMixin, Base):
    __tablename__ = "yellow_cards"
    id_prefix = "YC"


class RedCard(PlayerEventMixin, Base):
    __tablename__ = "red_cards"
    id_prefix = "RC"


# Keyed by the names used in request payloads
EVENT_MODELS = {
    "goals": Goal,
    "assists": Assist,
    "yellows": YellowCard,
    "reds": RedCard,
}
