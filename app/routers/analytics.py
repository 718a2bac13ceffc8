# app/routers/analytics.py
"""Dashboard chart data + demo history seeding."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.analytics import AnalyticsSummaryResponse, SeedResponse
from app.services.analytics_service import build_summary, seed_history

router = APIRouter()


@router.get("/analytics/summary", response_model=AnalyticsSummaryResponse,
            summary="Weekly trend, tomorrow's hourly curve and zone probabilities")
def get_summary(db: Session = Depends(get_db)):
    return AnalyticsSummaryResponse(data=build_summary(db))


@router.post("/analytics/seed", response_model=SeedResponse, summary="Seed 14 days of demo events")
def seed(db: Session = Depends(get_db)):
    """Creates synthetic entry events, weighted toward weekends and peak hours."""
    created = seed_history(db)
    return SeedResponse(message=f"Seeded {created} historical events", created=created)
