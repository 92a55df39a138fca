import logging
from dataclasses import dataclass, field
from typing import List
from sqlalchemy.orm import Session
from league_backend.teams.models.team_model import Team
from league_backend.players.models.player_model import Player
from league_backend.matches.models.match_model import Match
from league_backend.match_events.models.player_event_model import Goal, Assist, YellowCard, RedCard

logger = logging.getLogger(__name__)


@dataclass
class LeagueSnapshot:
    """Everything the league pages read, fetched in one go."""
    teams: List[Team] = field(default_factory=list)
    players: List[Player] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)
    assists: List[Assist] = field(default_factory=list)
    yellow_cards: List[YellowCard] = field(default_factory=list)
    red_cards: List[RedCard] = field(default_factory=list)


class SnapshotService:
    def __init__(self, db: Session):
        self.db = db

    def load(self) -> LeagueSnapshot:
        """Fetch all seven collections wholesale. Nothing is cached between calls."""
        snapshot = LeagueSnapshot(
            teams=self.db.query(Team).all(),
            players=self.db.query(Player).all(),
            matches=self.db.query(Match).order_by(Match.match_day.desc()).all(),
            goals=self.db.query(Goal).all(),
            assists=self.db.query(Assist).all(),
            yellow_cards=self.db.query(YellowCard).all(),
            red_cards=self.db.query(RedCard).all(),
        )
        logger.debug(
            f"Loaded snapshot: {len(snapshot.teams)} teams, {len(snapshot.players)} players, "
            f"{len(snapshot.matches)} matches"
        )
        return snapshot
