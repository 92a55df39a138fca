from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from sqlalchemy.orm import Session
from league_backend.core.context import UserContext, require_admin
from league_backend.core.database import get_db
from league_backend.teams.schemas.team_schema import TeamCreate, TeamUpdate, TeamOut
from league_backend.players.schemas.player_schema import PlayerOut
from league_backend.statistics.schemas.statistics_schema import TeamOverview
from league_backend.teams.services.team_service import TeamService
from league_backend.statistics.services.statistics_service import StatisticsService
from league_backend.media.services.image_upload_service import ImageUploadService, ImageUploadError

router = APIRouter()


@router.get("/", response_model=List[TeamOut])
def get_teams(db: Session = Depends(get_db)):
    try:
        return TeamService(db).get_all_teams()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/", response_model=TeamOut, status_code=201)
def create_team(payload: TeamCreate, db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    """Register a new team."""
    try:
        return TeamService(db).create_team(payload.model_dump())
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{team_id}", response_model=TeamOut)
def get_team(team_id: str, db: Session = Depends(get_db)):
    return TeamService(db).get_team(team_id)


@router.put("/{team_id}", response_model=TeamOut)
def update_team(team_id: str, payload: TeamUpdate, db: Session = Depends(get_db),
                context: UserContext = Depends(require_admin)):
    try:
        return TeamService(db).update_team(team_id, payload.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{team_id}")
def delete_team(team_id: str, db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    """
    Delete a team. Refused while the team still has players.
    """
    try:
        TeamService(db).delete_team(team_id)
        return {"message": f"Team {team_id} deleted successfully"}
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{team_id}/players", response_model=List[PlayerOut])
def get_team_players(team_id: str, db: Session = Depends(get_db)):
    return TeamService(db).get_team_players(team_id)


@router.get("/{team_id}/manager", response_model=Optional[PlayerOut])
def get_team_manager(team_id: str, db: Session = Depends(get_db)):
    return TeamService(db).get_team_manager(team_id)


@router.get("/{team_id}/overview", response_model=TeamOverview)
def get_team_overview(team_id: str, db: Session = Depends(get_db)):
    """
    Squad, manager, fixtures, goal and assist leaders, and recent form.
    """
    overview = StatisticsService(db).get_team_overview(team_id)
    if overview is None:
        raise HTTPException(status_code=404, detail=f"Team {team_id} not found")
    return overview


@router.post("/{team_id}/logo", response_model=TeamOut)
async def upload_team_logo(team_id: str, file: UploadFile = File(...), db: Session = Depends(get_db),
                           context: UserContext = Depends(require_admin)):
    """Upload a logo image and attach its hosted URL to the team."""
    team_service = TeamService(db)
    team_service.get_team(team_id)
    try:
        url = await ImageUploadService().upload(file.filename, await file.read())
        return team_service.update_team(team_id, {"logo": url})
    except ImageUploadError as e:
        raise HTTPException(status_code=502, detail=str(e))
