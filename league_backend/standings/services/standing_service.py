import pandas as pd
from sqlalchemy.orm import Session
from league_backend.statistics.services.statistics_service import StatisticsService

STANDINGS_CSV_COLUMNS = {
    "position": "Position",
    "name": "Team",
    "played": "Played",
    "won": "Wins",
    "drawn": "Draws",
    "lost": "Losses",
    "goals_for": "Goals For",
    "goals_against": "Goals Against",
    "goal_difference": "Goal Difference",
    "points": "Points",
}


class StandingService:
    def __init__(self, db: Session):
        self.db = db
        self.statistics_service = StatisticsService(db)

    def get_standings(self):
        """Current league table, recomputed from played matches."""
        return self.statistics_service.engine().standings()

    def standings_dataframe(self) -> pd.DataFrame:
        rows = [row.model_dump() for row in self.get_standings()]
        df = pd.DataFrame(rows, columns=[c for c in STANDINGS_CSV_COLUMNS if c != "position"])
        df.insert(0, "position", range(1, len(df) + 1))
        return df.rename(columns=STANDINGS_CSV_COLUMNS)

    def export_csv(self) -> str:
        return self.standings_dataframe().to_csv(index=False)
