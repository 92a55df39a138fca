import logging
from sqlalchemy.orm import Session
from league_backend.core.utils import generate_custom_id
from league_backend.players.models.player_model import Player
from league_backend.matches.services.match_service import MatchService
from league_backend.match_events.models.player_event_model import EVENT_MODELS

logger = logging.getLogger(__name__)


class MatchEventService:
    def __init__(self, db: Session):
        self.db = db
        self.match_service = MatchService(db)

    def record_match_events(self, match_id: str, events_data: dict):
        """
        Store goals, assists, yellows and reds for a match in one transaction.

        ``events_data`` maps each kind to a list of {"player_id", "team_id"} entries.
        The match day is copied from the match, the team from the player when
        the entry doesn't carry one.
        """
        match = self.match_service.get_match(match_id)
        created = {kind: 0 for kind in EVENT_MODELS}

        try:
            for kind, model in EVENT_MODELS.items():
                for entry in events_data.get(kind) or []:
                    team_id = entry.get("team_id")
                    if not team_id:
                        player = self.db.query(Player).filter(Player.player_id == entry["player_id"]).first()
                        team_id = player.team_id if player else None

                    event = model(
                        event_id=generate_custom_id(self.db, model, model.id_prefix, "event_id"),
                        player_id=entry["player_id"],
                        match_id=match.match_id,
                        match_day=match.match_day,
                        team_id=team_id,
                    )
                    self.db.add(event)
                    # Flush so the next generated id sees this row
                    self.db.flush()
                    created[kind] += 1
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Recorded events for match {match_id}: {created}")
        return created

    def get_match_events(self, match_id: str):
        self.match_service.get_match(match_id)
        return {
            kind: self.db.query(model).filter(model.match_id == match_id).all()
            for kind, model in EVENT_MODELS.items()
        }

    def delete_match_events(self, match_id: str):
        """Clear every event recorded against a match, keeping the match itself."""
        deleted = {}
        try:
            for kind, model in EVENT_MODELS.items():
                deleted[kind] = (
                    self.db.query(model)
                    .filter(model.match_id == match_id)
                    .delete(synchronize_session=False)
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Cleared events for match {match_id}: {deleted}")
        return deleted
