from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict

MatchStatus = Literal["upcoming", "played"]


class MatchCreate(BaseModel):
    home_team_id: str
    away_team_id: str
    home_score: int = 0
    away_score: int = 0
    home_yellows: int = 0
    away_yellows: int = 0
    home_reds: int = 0
    away_reds: int = 0
    minutes_played: Optional[int] = None
    match_day: Optional[int] = None
    status: MatchStatus = "upcoming"
    scheduled_date: Optional[date] = None
    time: Optional[str] = None
    league: Optional[str] = None


class MatchUpdate(BaseModel):
    home_team_id: Optional[str] = None
    away_team_id: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    home_yellows: Optional[int] = None
    away_yellows: Optional[int] = None
    home_reds: Optional[int] = None
    away_reds: Optional[int] = None
    minutes_played: Optional[int] = None
    match_day: Optional[int] = None
    status: Optional[MatchStatus] = None
    scheduled_date: Optional[date] = None
    time: Optional[str] = None
    league: Optional[str] = None


class MatchOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    match_id: str
    match_day: int
    home_team_id: str
    away_team_id: str
    home_score: int
    away_score: int
    home_yellows: int
    away_yellows: int
    home_reds: int
    away_reds: int
    home_points: int
    away_points: int
    minutes_played: Optional[int] = None
    league: str
    status: MatchStatus
    scheduled_date: Optional[date] = None
    time: Optional[str] = None
    created_at: Optional[datetime] = None
