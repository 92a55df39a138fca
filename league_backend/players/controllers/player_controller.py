from typing import List
from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from sqlalchemy.orm import Session
from league_backend.core.context import UserContext, require_admin
from league_backend.core.database import get_db
from league_backend.players.schemas.player_schema import PlayerCreate, PlayerUpdate, PlayerOut
from league_backend.statistics.schemas.statistics_schema import PlayerStats, PlayerMatchRecord
from league_backend.players.services.player_service import PlayerService
from league_backend.statistics.services.statistics_service import StatisticsService
from league_backend.media.services.image_upload_service import ImageUploadService, ImageUploadError

router = APIRouter()


@router.get("/", response_model=List[PlayerOut])
def get_players(db: Session = Depends(get_db)):
    try:
        return PlayerService(db).get_all_players()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/", response_model=PlayerOut, status_code=201)
def create_player(payload: PlayerCreate, db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    try:
        return PlayerService(db).create_player(payload.model_dump())
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{player_id}", response_model=PlayerOut)
def get_player(player_id: str, db: Session = Depends(get_db)):
    return PlayerService(db).get_player(player_id)


@router.put("/{player_id}", response_model=PlayerOut)
def update_player(player_id: str, payload: PlayerUpdate, db: Session = Depends(get_db),
                  context: UserContext = Depends(require_admin)):
    try:
        return PlayerService(db).update_player(player_id, payload.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{player_id}")
def delete_player(player_id: str, db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    try:
        PlayerService(db).delete_player(player_id)
        return {"message": f"Player {player_id} deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{player_id}/manager", response_model=PlayerOut)
def set_manager(player_id: str, db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    """
    Make this player the manager of their team, replacing any previous manager.
    """
    try:
        player_service = PlayerService(db)
        player = player_service.get_player(player_id)
        return player_service.set_manager(player.team_id, player_id)
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{player_id}/stats", response_model=PlayerStats)
def get_player_stats(player_id: str, db: Session = Depends(get_db)):
    """Career totals rebuilt from the event logs."""
    PlayerService(db).get_player(player_id)
    return StatisticsService(db).get_player_stats(player_id)


@router.get("/{player_id}/records", response_model=List[PlayerMatchRecord])
def get_player_records(player_id: str, db: Session = Depends(get_db)):
    """Per-match history for the player, newest first."""
    PlayerService(db).get_player(player_id)
    return StatisticsService(db).get_player_records(player_id)


@router.post("/{player_id}/photo", response_model=PlayerOut)
async def upload_player_photo(player_id: str, file: UploadFile = File(...), db: Session = Depends(get_db),
                              context: UserContext = Depends(require_admin)):
    player_service = PlayerService(db)
    player_service.get_player(player_id)
    try:
        url = await ImageUploadService().upload(file.filename, await file.read())
        return player_service.update_player(player_id, {"photo": url})
    except ImageUploadError as e:
        raise HTTPException(status_code=502, detail=str(e))
