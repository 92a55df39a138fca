from sqlalchemy import Column, String, Integer, Date, DateTime, func
from league_backend.core.database import Base

MATCH_STATUS_UPCOMING = "upcoming"
MATCH_STATUS_PLAYED = "played"
MATCH_STATUSES = (MATCH_STATUS_UPCOMING, MATCH_STATUS_PLAYED)


class Match(Base):
    __tablename__ = "matches"

    match_id = Column(String, primary_key=True, index=True)
    match_day = Column(Integer, nullable=False, index=True)

    # No FK constraint: a deleted team must not take its fixtures with it
    home_team_id = Column(String, nullable=False, index=True)
    away_team_id = Column(String, nullable=False, index=True)

    home_score = Column(Integer, nullable=False, default=0)
    away_score = Column(Integer, nullable=False, default=0)
    home_yellows = Column(Integer, nullable=False, default=0)
    away_yellows = Column(Integer, nullable=False, default=0)
    home_reds = Column(Integer, nullable=False, default=0)
    away_reds = Column(Integer, nullable=False, default=0)
    home_points = Column(Integer, nullable=False, default=0)
    away_points = Column(Integer, nullable=False, default=0)
    minutes_played = Column(Integer, nullable=True)

    league = Column(String, nullable=False)
    status = Column(String, nullable=False, default=MATCH_STATUS_UPCOMING)
    scheduled_date = Column(Date, nullable=True)
    time = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
