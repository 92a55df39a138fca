import logging
from sqlalchemy.orm import Session
from league_backend.statistics.services.snapshot_service import SnapshotService
from league_backend.statistics.services.statistics_engine import LeagueStatistics

logger = logging.getLogger(__name__)


def log_referential_gap(kind: str, ref_id: str):
    logger.warning(f"[WARN] Skipping reference to missing {kind} '{ref_id}'")


class StatisticsService:
    def __init__(self, db: Session):
        self.db = db
        self.snapshot_service = SnapshotService(db)

    def engine(self) -> LeagueStatistics:
        """Fresh statistics over a freshly loaded snapshot."""
        return LeagueStatistics(self.snapshot_service.load(), on_referential_gap=log_referential_gap)

    def get_player_stats(self, player_id: str):
        return self.engine().player_stats(player_id)

    def get_player_records(self, player_id: str):
        # Newest first, matches without a date last
        records = self.engine().player_records(player_id)
        dated = sorted((r for r in records if r.match_date), key=lambda r: r.match_date, reverse=True)
        return dated + [r for r in records if not r.match_date]

    def get_top_scorers(self, limit: int = 10):
        return self.engine().top_scorers(limit=limit)

    def get_leaderboard(self, category: str, search: str = None):
        return self.engine().leaderboard(category=category, search=search)

    def get_team_overview(self, team_id: str):
        return self.engine().team_overview(team_id)

    def get_dashboard(self):
        return self.engine().dashboard()
