import logging
from fastapi import HTTPException
from sqlalchemy import update
from sqlalchemy.orm import Session
from league_backend.players.models.player_model import Player
from league_backend.teams.services.team_service import TeamService
from league_backend.core.utils import generate_custom_id, apply_updates

logger = logging.getLogger(__name__)

PLAYER_FIELDS = ("name", "position", "number", "team_id", "photo")


class PlayerService:
    def __init__(self, db: Session):
        self.db = db
        self.team_service = TeamService(db)

    def get_all_players(self):
        return self.db.query(Player).all()

    def get_player(self, player_id: str) -> Player:
        player = self.db.query(Player).filter(Player.player_id == player_id).first()
        if not player:
            raise HTTPException(status_code=404, detail=f"Player {player_id} not found")
        return player

    def create_player(self, player_data: dict) -> Player:
        """Register a player on an existing team."""
        team = self.team_service.get_team(player_data["team_id"])

        new_id = generate_custom_id(self.db, Player, "P", "player_id")
        player = Player(
            player_id=new_id,
            name=player_data["name"],
            position=player_data["position"],
            number=player_data["number"],
            team_id=team.team_id,
            is_manager=False,
            photo=player_data.get("photo"),
        )
        self.db.add(player)
        self.db.commit()
        self.db.refresh(player)
        logger.info(f"Created player {player.player_id} '{player.name}' for team {team.team_id}")

        if player_data.get("is_manager"):
            self.set_manager(team.team_id, player.player_id)
            self.db.refresh(player)
        return player

    def update_player(self, player_id: str, updates: dict) -> Player:
        player = self.get_player(player_id)
        if updates.get("team_id"):
            self.team_service.get_team(updates["team_id"])

        changed = apply_updates(player, updates, PLAYER_FIELDS)
        # A player moving team cannot keep managing the old one
        if "team_id" in changed:
            player.is_manager = False
        if updates.get("is_manager") is False:
            player.is_manager = False
        self.db.commit()

        if updates.get("is_manager"):
            self.set_manager(player.team_id, player.player_id)

        self.db.refresh(player)
        logger.info(f"Updated player {player_id}: {changed}")
        return player

    def delete_player(self, player_id: str):
        """Delete a player. Their recorded events are left in place."""
        player = self.get_player(player_id)
        self.db.delete(player)
        self.db.commit()
        logger.info(f"Deleted player {player_id}")

    def set_manager(self, team_id: str, player_id: str) -> Player:
        """Make ``player_id`` the only manager of ``team_id``.

        Clearing the old manager and flagging the new one is a single UPDATE,
        so readers never see two managers or none.
        """
        player = self.get_player(player_id)
        if player.team_id != team_id:
            raise ValueError(f"Player {player_id} does not belong to team {team_id}")

        try:
            self.db.execute(
                update(Player)
                .where(Player.team_id == team_id)
                .values(is_manager=(Player.player_id == player_id))
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(player)
        logger.info(f"Player {player_id} is now manager of team {team_id}")
        return player
