# app/routers/forecast.py
"""Tomorrow's occupancy forecast: weighted 7-day peak history per zone."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.forecast import ForecastResponse
from app.services.forecast_service import build_forecast

router = APIRouter()


@router.get("/forecast", response_model=ForecastResponse, summary="Forecast tomorrow's occupancy")
def get_forecast(db: Session = Depends(get_db)):
    """
    Deterministic, recomputed on every call:
    - weighted average of each zone's last 7 completed days of peak occupancy
    - +15% for Saturday/Sunday, +20% for Friday, capped at 100%
    - zones without history fall back to live occupancy (min 10%)
    """
    return ForecastResponse(forecast=build_forecast(db))
