# app/services/event_store.py
"""
Event Store: append-only log of vehicle entry/exit events.
Written by vehicle_service and the seeder; read by daily_peak_service
and analytics_service. Never updates or deletes rows.
"""

from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session
from app.models.parking_event import ParkingEvent
from app.utils.timeutils import day_of_week
from app.utils.logger import get_logger

logger = get_logger(__name__)

EVENT_TYPES = ("entry", "exit")


def create_parking_event(db: Session, vehicle_number: str, vehicle_type: str, zone_id: str,
                         event_type: str, event_time: Optional[datetime] = None,
                         commit: bool = True) -> ParkingEvent:
    """Append one event. day_of_week / hour_of_day are derived from event_time."""
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown event type: {event_type}")
    event_time = event_time or datetime.now()
    event = ParkingEvent(
        vehicle_number=vehicle_number,
        vehicle_type=vehicle_type,
        zone_id=zone_id,
        event_type=event_type,
        event_time=event_time,
        day_of_week=day_of_week(event_time),
        hour_of_day=event_time.hour,
    )
    db.add(event)
    if commit:
        db.commit()
    logger.debug(f"[EVENT] {event_type} {vehicle_number} zone={zone_id} at {event_time:%Y-%m-%d %H:%M}")
    return event


def get_recent_events(db: Session, days: int, now: Optional[datetime] = None) -> list[ParkingEvent]:
    """Events from the last `days` days, newest first."""
    cutoff = (now or datetime.now()) - timedelta(days=days)
    return (
        db.query(ParkingEvent)
        .filter(ParkingEvent.event_time >= cutoff)
        .order_by(ParkingEvent.event_time.desc())
        .all()
    )


def get_zone_events_since(db: Session, zone_id: str, since: datetime) -> list[ParkingEvent]:
    """All events for one zone at or after `since`, oldest first."""
    return (
        db.query(ParkingEvent)
        .filter(ParkingEvent.zone_id == zone_id, ParkingEvent.event_time >= since)
        .order_by(ParkingEvent.event_time, ParkingEvent.id)
        .all()
    )
