from fastapi import APIRouter
from league_backend.teams.controllers.team_controller import router as team_router
from league_backend.players.controllers.player_controller import router as player_router
from league_backend.matches.controllers.match_controller import router as match_router
from league_backend.fixtures.controllers.fixture_controller import router as fixture_router
from league_backend.standings.controllers.standings_controller import router as standings_router
from league_backend.statistics.controllers.statistics_controller import router as statistics_router
from league_backend.users.controllers.user_controller import invite_router, user_router

api_router = APIRouter()

api_router.include_router(team_router, prefix="/teams", tags=["teams"])
api_router.include_router(player_router, prefix="/players", tags=["players"])
api_router.include_router(match_router, prefix="/matches", tags=["matches"])
api_router.include_router(fixture_router, prefix="/fixtures", tags=["fixtures"])
api_router.include_router(standings_router, prefix="/standings", tags=["standings"])
api_router.include_router(statistics_router, prefix="/stats", tags=["stats"])
api_router.include_router(invite_router, prefix="/invites", tags=["invites"])
api_router.include_router(user_router, prefix="/users", tags=["users"])
