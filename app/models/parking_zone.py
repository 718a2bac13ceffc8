# app/models/parking_zone.py
"""
Parking zones table (Zone Registry).
Capacity plus per-vehicle-class sub-limits. Live occupancy is NOT stored here;
it is derived by counting rows in the vehicles table.
`position` is the registration order used when auto-assigning a zone.
"""

from sqlalchemy import Column, Integer, String, DateTime
from app.database import Base


class ParkingZone(Base):
    __tablename__ = "parking_zones"

    id = Column(String(50), primary_key=True)
    name = Column(String(200), nullable=False)
    capacity = Column(Integer, nullable=False)
    heavy_limit = Column(Integer, nullable=False)
    medium_limit = Column(Integer, nullable=False)
    light_limit = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime)

    def limit_for(self, vehicle_type: str) -> int:
        return {
            "heavy": self.heavy_limit,
            "medium": self.medium_limit,
            "light": self.light_limit,
        }[vehicle_type]

    def __repr__(self):
        return f"<ParkingZone {self.id} name={self.name} capacity={self.capacity}>"
