from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from league_backend.core.context import UserContext, require_admin
from league_backend.core.database import get_db
from league_backend.matches.schemas.match_schema import MatchOut
from league_backend.fixtures.services.fixture_service import FixtureService

router = APIRouter()


@router.post("/generate", response_model=List[MatchOut], status_code=201)
def generate_fixtures(
    weeks: int = Query(None, ge=1, le=20),
    db: Session = Depends(get_db),
    context: UserContext = Depends(require_admin),
):
    """
    Generate a round-robin schedule of upcoming fixtures and store every match.
    Running it again adds a second schedule; nothing is deduplicated.
    """
    try:
        return FixtureService(db).generate_and_save(weeks)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to save some fixtures: {e}")
