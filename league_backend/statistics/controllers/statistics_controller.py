from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from league_backend.core.database import get_db
from league_backend.statistics.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/top-scorers")
def get_top_scorers(limit: int = Query(10, ge=1), db: Session = Depends(get_db)):
    """
    Players ranked by goals.
    """
    try:
        return StatisticsService(db).get_top_scorers(limit=limit)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/leaderboard")
def get_leaderboard(category: str = "goals", search: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Players ranked by goals, assists or cards, optionally filtered by name.
    """
    try:
        return StatisticsService(db).get_leaderboard(category, search)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/dashboard")
def get_dashboard(db: Session = Depends(get_db)):
    """
    Headline numbers, top five scorers and the latest events.
    """
    try:
        return StatisticsService(db).get_dashboard()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
