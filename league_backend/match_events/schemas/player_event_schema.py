from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class EventEntry(BaseModel):
    player_id: str
    # Taken from the player's current team when omitted
    team_id: Optional[str] = None


class MatchEventsCreate(BaseModel):
    goals: List[EventEntry] = []
    assists: List[EventEntry] = []
    yellows: List[EventEntry] = []
    reds: List[EventEntry] = []


class PlayerEventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_id: str
    player_id: str
    match_id: str
    match_day: int
    team_id: Optional[str] = None
    timestamp: Optional[datetime] = None
