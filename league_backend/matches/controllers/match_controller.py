from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from sqlalchemy.orm import Session
from league_backend.core.context import UserContext, require_admin
from league_backend.core.database import get_db
from league_backend.matches.schemas.match_schema import MatchCreate, MatchUpdate, MatchOut
from league_backend.match_events.schemas.player_event_schema import MatchEventsCreate, PlayerEventOut
from league_backend.matches.services.match_service import MatchService
from league_backend.matches.services.match_upload_service import UploadService
from league_backend.match_events.services.match_event_service import MatchEventService

router = APIRouter()


@router.get("/", response_model=List[MatchOut])
def get_matches(status: Optional[str] = None, db: Session = Depends(get_db)):
    """
    All matches, latest match day first. Filter with ?status=played or ?status=upcoming.
    """
    try:
        return MatchService(db).get_matches(status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/by-match-day")
def get_matches_by_match_day(status: Optional[str] = None, db: Session = Depends(get_db)):
    try:
        groups = MatchService(db).get_matches_by_match_day(status)
        return [
            {"match_day": group["match_day"], "matches": [MatchOut.model_validate(m) for m in group["matches"]]}
            for group in groups
        ]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/", response_model=MatchOut, status_code=201)
def create_match(payload: MatchCreate, db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    try:
        return MatchService(db).create_match(payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/upload-matches-csv/")
async def upload_csv(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),  # Session managed by FastAPI
    context: UserContext = Depends(require_admin),
):
    """Upload CSV and delegate processing to the service layer."""
    upload_service = UploadService(db)
    return await upload_service.process_csv(file)


@router.get("/{match_id}", response_model=MatchOut)
def get_match(match_id: str, db: Session = Depends(get_db)):
    return MatchService(db).get_match(match_id)


@router.put("/{match_id}", response_model=MatchOut)
def update_match(match_id: str, payload: MatchUpdate, db: Session = Depends(get_db),
                 context: UserContext = Depends(require_admin)):
    """
    Update a match. Points are recalculated when the score or status changes.
    """
    try:
        return MatchService(db).update_match(match_id, payload.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{match_id}")
def delete_match(match_id: str, db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    """Delete a match and every goal, assist and card recorded against it."""
    try:
        MatchService(db).delete_match(match_id)
        return {"message": "Match deleted"}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{match_id}/events")
def get_match_events(match_id: str, db: Session = Depends(get_db)):
    events = MatchEventService(db).get_match_events(match_id)
    return {kind: [PlayerEventOut.model_validate(e) for e in rows] for kind, rows in events.items()}


@router.post("/{match_id}/events", status_code=201)
def record_match_events(match_id: str, payload: MatchEventsCreate, db: Session = Depends(get_db),
                        context: UserContext = Depends(require_admin)):
    """
    Record the goals, assists and cards of a match.
    """
    try:
        created = MatchEventService(db).record_match_events(match_id, payload.model_dump())
        return {"message": "Match statistics recorded", "created": created}
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{match_id}/events")
def delete_match_events(match_id: str, db: Session = Depends(get_db), context: UserContext = Depends(require_admin)):
    try:
        deleted = MatchEventService(db).delete_match_events(match_id)
        return {"message": "Match events cleared", "deleted": deleted}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
