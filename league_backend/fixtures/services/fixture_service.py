import logging
from sqlalchemy.orm import Session
from league_backend.core.config import settings
from league_backend.teams.services.team_service import TeamService
from league_backend.matches.services.match_service import MatchService
from league_backend.fixtures.services.fixture_generator import generate_fixtures

logger = logging.getLogger(__name__)


class FixtureService:
    def __init__(self, db: Session):
        self.db = db
        self.team_service = TeamService(db)
        self.match_service = MatchService(db)

    def generate_and_save(self, weeks: int = None):
        """Generate a round-robin schedule for every team and store each fixture."""
        teams = self.team_service.get_all_teams()
        if len(teams) < 2:
            raise ValueError("Add more teams first! At least two teams are needed to generate fixtures")

        weeks = weeks or settings.FIXTURE_WEEKS
        fixtures = generate_fixtures(
            [team.team_id for team in teams],
            weeks=weeks,
            weekday=settings.FIXTURE_WEEKDAY,
            time_slots=settings.FIXTURE_TIME_SLOTS,
            league=settings.LEAGUE_NAME,
        )
        logger.info(f"Generated {len(fixtures)} fixtures over {weeks} weeks for {len(teams)} teams")

        # One write per fixture, in order
        saved = []
        for fixture in fixtures:
            saved.append(self.match_service.create_match(fixture))
        return saved
