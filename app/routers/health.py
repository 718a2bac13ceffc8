# app/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB, with zone and event counts.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func, text
from app.database import get_db
from app.models.parking_event import ParkingEvent
from app.models.parking_zone import ParkingZone
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db)):
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "zones": None,
        "events": None,
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
        result["zones"] = db.query(func.count(ParkingZone.id)).scalar()
        result["events"] = db.query(func.count(ParkingEvent.id)).scalar()
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
