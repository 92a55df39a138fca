from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session
from league_backend.core.database import get_db
from league_backend.standings.services.standing_service import StandingService

router = APIRouter()


@router.get("/")
def get_standings(db: Session = Depends(get_db)):
    """
    League table derived from every played match.
    """
    try:
        return StandingService(db).get_standings()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/export-csv")
def export_standings_csv(db: Session = Depends(get_db)):
    """Download the league table as CSV."""
    try:
        csv_content = StandingService(db).export_csv()
        return Response(
            content=csv_content,
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="standings.csv"'},
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
