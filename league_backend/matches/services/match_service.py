import logging
from typing import Optional
from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session
from league_backend.core.config import settings
from league_backend.core.utils import generate_custom_id, apply_updates
from league_backend.matches.models.match_model import Match, MATCH_STATUS_PLAYED, MATCH_STATUS_UPCOMING, MATCH_STATUSES
from league_backend.match_events.models.player_event_model import EVENT_MODELS
from league_backend.statistics.services.statistics_engine import match_points

logger = logging.getLogger(__name__)

MATCH_FIELDS = (
    "home_team_id", "away_team_id",
    "home_score", "away_score",
    "home_yellows", "away_yellows",
    "home_reds", "away_reds",
    "minutes_played", "match_day", "status",
    "scheduled_date", "time", "league",
)
SCORING_FIELDS = ("home_score", "away_score", "status")


def points_for(match) -> tuple:
    """(home_points, away_points) for a match; matches not yet played earn nothing."""
    if match.status != MATCH_STATUS_PLAYED:
        return 0, 0
    return match_points(match.home_score or 0, match.away_score or 0)


class MatchService:
    def __init__(self, db: Session):
        self.db = db

    def get_matches(self, status: Optional[str] = None):
        """All matches, latest match day first, optionally filtered by status."""
        query = self.db.query(Match)
        if status:
            if status not in MATCH_STATUSES:
                raise ValueError(f"Unknown match status '{status}'")
            query = query.filter(Match.status == status)
        return query.order_by(Match.match_day.desc(), Match.scheduled_date, Match.time).all()

    def get_matches_by_match_day(self, status: Optional[str] = None):
        """Matches grouped by match day, latest day first."""
        grouped = {}
        for match in self.get_matches(status):
            grouped.setdefault(match.match_day or 0, []).append(match)
        return [
            {"match_day": match_day, "matches": grouped[match_day]}
            for match_day in sorted(grouped, reverse=True)
        ]

    def get_match(self, match_id: str) -> Match:
        match = self.db.query(Match).filter(Match.match_id == match_id).first()
        if not match:
            raise HTTPException(status_code=404, detail=f"Match {match_id} not found")
        return match

    def next_match_day(self) -> int:
        latest = self.db.query(func.max(Match.match_day)).scalar()
        return latest + 1 if latest else 1

    def create_match(self, match_data: dict) -> Match:
        """Create a match record. Match day defaults to one after the latest."""
        if match_data["home_team_id"] == match_data["away_team_id"]:
            raise ValueError("Home and away teams must be different")

        match_day = match_data.get("match_day") or self.next_match_day()

        new_id = generate_custom_id(self.db, Match, "M", "match_id")
        match = Match(
            match_id=new_id,
            match_day=match_day,
            home_team_id=match_data["home_team_id"],
            away_team_id=match_data["away_team_id"],
            home_score=match_data.get("home_score") or 0,
            away_score=match_data.get("away_score") or 0,
            home_yellows=match_data.get("home_yellows") or 0,
            away_yellows=match_data.get("away_yellows") or 0,
            home_reds=match_data.get("home_reds") or 0,
            away_reds=match_data.get("away_reds") or 0,
            minutes_played=match_data.get("minutes_played"),
            league=match_data.get("league") or settings.LEAGUE_NAME,
            status=match_data.get("status") or MATCH_STATUS_UPCOMING,
            scheduled_date=match_data.get("scheduled_date"),
            time=match_data.get("time"),
        )
        match.home_points, match.away_points = points_for(match)

        self.db.add(match)
        self.db.commit()
        self.db.refresh(match)
        logger.info(f"Created match {match.match_id} (Match Day {match_day}): {match.home_team_id} vs {match.away_team_id}")
        return match

    def update_match(self, match_id: str, updates: dict) -> Match:
        """Apply updates; points follow the scores whenever a score or the status changes."""
        match = self.get_match(match_id)

        home_team_id = updates.get("home_team_id") or match.home_team_id
        away_team_id = updates.get("away_team_id") or match.away_team_id
        if home_team_id == away_team_id:
            raise ValueError("Home and away teams must be different")

        changed = apply_updates(match, updates, MATCH_FIELDS)
        if any(field in updates for field in SCORING_FIELDS):
            match.home_points, match.away_points = points_for(match)

        self.db.commit()
        self.db.refresh(match)
        logger.info(f"Updated match {match_id}: {changed}")
        return match

    def delete_match(self, match_id: str):
        """Delete a match together with every event recorded against it."""
        match = self.get_match(match_id)
        try:
            for model in EVENT_MODELS.values():
                self.db.query(model).filter(model.match_id == match_id).delete(synchronize_session=False)
            self.db.delete(match)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Deleted match {match_id} and its events")
