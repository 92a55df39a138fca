import logging
from typing import Optional
from fastapi import HTTPException
from rapidfuzz import fuzz
from sqlalchemy import func
from sqlalchemy.orm import Session
from league_backend.teams.models.team_model import Team
from league_backend.players.models.player_model import Player
from league_backend.core.utils import generate_custom_id, apply_updates

logger = logging.getLogger(__name__)

TEAM_FIELDS = ("name", "primary_color", "founded", "stadium", "logo")


class TeamService:
    def __init__(self, db: Session):
        self.db = db

    def get_all_teams(self):
        return self.db.query(Team).all()

    def get_team(self, team_id: str) -> Team:
        team = self.db.query(Team).filter(Team.team_id == team_id).first()
        if not team:
            raise HTTPException(status_code=404, detail=f"Team {team_id} not found")
        return team

    def find_team_by_name(self, team_name: str) -> Optional[Team]:
        """Resolve a team by exact name, then case-insensitively, then by fuzzy match."""
        team = self.db.query(Team).filter(Team.name == team_name).first()
        if team:
            return team

        team = self.db.query(Team).filter(func.lower(Team.name) == team_name.lower()).first()
        if team:
            return team

        best_team, best_score = None, 0
        for existing_team in self.db.query(Team).all():
            similarity_score = fuzz.ratio(team_name.lower(), existing_team.name.lower())
            if similarity_score > best_score:
                best_team, best_score = existing_team, similarity_score

        # If similarity is high, assume it's the same team
        if best_score > 85:
            logger.info(f"Matched '{team_name}' to team '{best_team.name}' (score {best_score:.0f})")
            return best_team
        return None

    def _ensure_unique_name(self, name: str, team_id: str = None):
        query = self.db.query(Team).filter(Team.name == name)
        if team_id:
            query = query.filter(Team.team_id != team_id)
        if query.first():
            raise ValueError(f"A team named '{name}' already exists")

    def create_team(self, team_data: dict) -> Team:
        """Register a new team."""
        self._ensure_unique_name(team_data["name"])

        new_id = generate_custom_id(self.db, Team, "T", "team_id")
        team = Team(
            team_id=new_id,
            name=team_data["name"],
            primary_color=team_data.get("primary_color") or "",
            founded=team_data.get("founded") or "",
            stadium=team_data.get("stadium") or "",
            logo=team_data.get("logo"),
        )
        self.db.add(team)
        self.db.commit()
        self.db.refresh(team)
        logger.info(f"Created team {team.team_id} '{team.name}'")
        return team

    def update_team(self, team_id: str, updates: dict) -> Team:
        team = self.get_team(team_id)
        if updates.get("name"):
            self._ensure_unique_name(updates["name"], team_id)

        changed = apply_updates(team, updates, TEAM_FIELDS)
        self.db.commit()
        self.db.refresh(team)
        logger.info(f"Updated team {team_id}: {changed}")
        return team

    def delete_team(self, team_id: str):
        """Delete a team. Teams that still own players are kept."""
        team = self.get_team(team_id)

        has_players = self.db.query(Player).filter(Player.team_id == team_id).first() is not None
        if has_players:
            raise ValueError("Cannot delete team with active players")

        self.db.delete(team)
        self.db.commit()
        logger.info(f"Deleted team {team_id}")

    def get_team_players(self, team_id: str):
        self.get_team(team_id)
        return self.db.query(Player).filter(Player.team_id == team_id).all()

    def get_team_manager(self, team_id: str) -> Optional[Player]:
        self.get_team(team_id)
        return (
            self.db.query(Player)
            .filter(Player.team_id == team_id, Player.is_manager.is_(True))
            .first()
        )
