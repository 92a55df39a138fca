import logging
import pandas as pd
from datetime import datetime
from io import StringIO
from sqlalchemy.orm import Session
from fastapi import UploadFile
from league_backend.matches.models.match_model import MATCH_STATUSES, MATCH_STATUS_UPCOMING
from league_backend.matches.services.match_service import MatchService
from league_backend.teams.services.team_service import TeamService

logger = logging.getLogger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")


class UploadService:

    def __init__(self, db: Session):
        self.db = db
        self.match_service = MatchService(db)
        self.team_service = TeamService(db)

    def safe_str(self, value):
        if value is None:
            return ""
        if isinstance(value, float) and str(value) == "nan":
            return ""
        return str(value).strip()

    def safe_int(self, value):
        try:
            if value is None:
                return 0
            if isinstance(value, float) and str(value) == "nan":
                return 0
            return int(value)
        except (ValueError, TypeError):
            return 0

    def safe_date(self, value):
        text = self.safe_str(value)
        for date_format in DATE_FORMATS:
            try:
                return datetime.strptime(text, date_format).date()
            except ValueError:
                continue
        return None

    def process_dataframe(self, df: pd.DataFrame):
        """Create one match per row; rows naming unknown teams are skipped."""
        # Blank cells arrive as NaN; safe_str/safe_int turn them into ""/0
        created, skipped = [], []
        for index, row in df.iterrows():
            home_name = self.safe_str(row.get("HomeTeam"))
            away_name = self.safe_str(row.get("AwayTeam"))
            home_team = self.team_service.find_team_by_name(home_name) if home_name else None
            away_team = self.team_service.find_team_by_name(away_name) if away_name else None

            if not home_team or not away_team:
                logger.warning(f"[WARN] Row {index}: could not resolve teams '{home_name}' / '{away_name}'")
                skipped.append({"row": int(index), "reason": "unknown team"})
                continue

            status = self.safe_str(row.get("Status")).lower() or MATCH_STATUS_UPCOMING
            if status not in MATCH_STATUSES:
                skipped.append({"row": int(index), "reason": f"unknown status '{status}'"})
                continue

            match_data = {
                "home_team_id": home_team.team_id,
                "away_team_id": away_team.team_id,
                "home_score": self.safe_int(row.get("HomeScore")),
                "away_score": self.safe_int(row.get("AwayScore")),
                "match_day": self.safe_int(row.get("MatchDay")) or None,
                "scheduled_date": self.safe_date(row.get("Date")),
                "time": self.safe_str(row.get("Time")) or None,
                "status": status,
            }
            try:
                match = self.match_service.create_match(match_data)
            except ValueError as e:
                skipped.append({"row": int(index), "reason": str(e)})
                continue
            created.append(match.match_id)

        return created, skipped

    async def process_csv(self, file: UploadFile):
        """Reads the CSV, processes data, and calls necessary services."""
        try:
            contents = await file.read()
            df = pd.read_csv(StringIO(contents.decode("utf-8")), dtype=str)

            created, skipped = self.process_dataframe(df)
            return {
                "message": "CSV uploaded and processed successfully",
                "created": created,
                "skipped": skipped,
            }

        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to process matches CSV: {e}")
            return {"error": f"Failed to process CSV: {str(e)}"}
