from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel
from league_backend.teams.schemas.team_schema import TeamOut
from league_backend.players.schemas.player_schema import PlayerOut
from league_backend.matches.schemas.match_schema import MatchOut


class PlayerStats(BaseModel):
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    matches: int = 0

    @property
    def total_cards(self) -> int:
        return self.yellow_cards + self.red_cards


class LeaderboardEntry(BaseModel):
    player: PlayerOut
    stats: PlayerStats


class PlayerMatchRecord(BaseModel):
    id: str
    player_id: str
    match_id: str
    match_date: Optional[date] = None
    opponent: str
    goals: int
    assists: int
    yellow_cards: int
    red_cards: int
    minutes_played: int


class StandingsRow(BaseModel):
    team_id: str
    name: str
    logo: Optional[str] = None
    color: str = ""
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0


class PlayerTally(BaseModel):
    player: PlayerOut
    count: int


class TeamOverview(BaseModel):
    team: TeamOut
    players: List[PlayerOut]
    manager: Optional[PlayerOut] = None
    matches: List[MatchOut]
    total_goals: int
    total_assists: int
    top_scorer: Optional[PlayerTally] = None
    top_assister: Optional[PlayerTally] = None
    form: List[str]


class RecentEvent(BaseModel):
    type: str
    event_id: str
    player_id: str
    match_id: str
    team_id: Optional[str] = None
    timestamp: Optional[datetime] = None


class DashboardSummary(BaseModel):
    teams: int
    players: int
    played_matches: int
    upcoming_matches: int
    total_goals: int
    total_assists: int
    average_goals: float
    top_scorers: List[LeaderboardEntry]
    recent_activity: List[RecentEvent]
