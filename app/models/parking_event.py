# app/models/parking_event.py
"""
Append-only parking event log (Event Store).
One row per vehicle entry and one per exit. Rows are never updated or deleted;
the forecast and analytics services only read them.
day_of_week (Sunday=0) and hour_of_day are derived from event_time at insert.
"""

from sqlalchemy import Column, Integer, String, DateTime
from app.database import Base


class ParkingEvent(Base):
    __tablename__ = "parking_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_number = Column(String(50), nullable=False)
    vehicle_type = Column(String(20), nullable=False)
    zone_id = Column(String(50), nullable=False, index=True)
    event_type = Column(String(10), nullable=False)      # entry | exit
    event_time = Column(DateTime, nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False, index=True)
    hour_of_day = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<ParkingEvent {self.id} {self.event_type} zone={self.zone_id} at={self.event_time}>"
