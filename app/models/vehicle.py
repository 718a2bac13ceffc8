# app/models/vehicle.py
"""
Currently parked vehicles. A row exists between entry and exit only;
the permanent history lives in parking_events.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from app.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String(36), primary_key=True)
    number = Column(String(50), nullable=False, index=True)
    vehicle_type = Column(String(20), nullable=False)  # heavy | medium | light
    zone_id = Column(String(50), ForeignKey("parking_zones.id"), nullable=False, index=True)
    slot = Column(String(50))
    ticket_id = Column(String(50), nullable=False)
    entry_time = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Vehicle {self.number} type={self.vehicle_type} zone={self.zone_id}>"
