# app/services/zone_service.py
"""
Zone Registry: zone definitions plus live occupancy derived from parked vehicles.
Zones are always returned in registration order (ParkingZone.position); that
order decides which zone an unassigned vehicle is parked in.
"""

from datetime import datetime
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.config import settings
from app.exceptions import NotFoundError, ValidationError
from app.models.parking_zone import ParkingZone
from app.models.vehicle import Vehicle
from app.schemas.zone import ZoneCreate, ZoneUpdate
from app.utils.logger import get_logger

logger = get_logger(__name__)

VEHICLE_TYPES = ("heavy", "medium", "light")


def list_zones(db: Session) -> list[ParkingZone]:
    return db.query(ParkingZone).order_by(ParkingZone.position, ParkingZone.id).all()


def get_zone(db: Session, zone_id: str) -> ParkingZone:
    zone = db.query(ParkingZone).filter(ParkingZone.id == zone_id).first()
    if not zone:
        raise NotFoundError("Zone not found")
    return zone


def _next_position(db: Session) -> int:
    current = db.query(func.max(ParkingZone.position)).scalar()
    return (current or 0) + 1


def create_zone(db: Session, body: ZoneCreate, commit: bool = True) -> ParkingZone:
    if db.query(ParkingZone).filter(ParkingZone.id == body.id).first():
        raise ValidationError(f"Zone {body.id} already exists")
    zone = ParkingZone(
        id=body.id,
        name=body.name,
        capacity=body.capacity,
        heavy_limit=body.heavy_limit,
        medium_limit=body.medium_limit,
        light_limit=body.light_limit,
        position=_next_position(db),
        created_at=datetime.now(),
    )
    db.add(zone)
    if commit:
        db.commit()
    else:
        db.flush()
    if zone.heavy_limit + zone.medium_limit + zone.light_limit > zone.capacity:
        logger.warning(f"[ZONES] {zone.id}: class limits exceed capacity {zone.capacity}")
    logger.info(f"[ZONES] Created {zone.id} ({zone.name}) capacity={zone.capacity}")
    return zone


def update_zone(db: Session, zone_id: str, body: ZoneUpdate) -> ParkingZone:
    zone = get_zone(db, zone_id)
    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(zone, field, value)
    db.commit()
    logger.info(f"[ZONES] Updated {zone_id}")
    return zone


def delete_zone(db: Session, zone_id: str):
    zone = get_zone(db, zone_id)
    parked = db.query(func.count(Vehicle.id)).filter(Vehicle.zone_id == zone_id).scalar()
    if parked:
        raise ValidationError(f"Zone {zone.name} still has {parked} parked vehicle(s)")
    db.delete(zone)
    db.commit()
    logger.info(f"[ZONES] Deleted {zone_id}")


def initialize_default_zones(db: Session, count: int = None, capacity: int = None) -> list[ParkingZone]:
    """
    Register Z1..Zn, each split 20% heavy / 30% medium / rest light.
    Refused once any zone exists.
    """
    if db.query(ParkingZone).first():
        raise ValidationError("Zones already initialized")
    if count is None:
        count = settings.DEFAULT_ZONE_COUNT
    if capacity is None:
        capacity = settings.DEFAULT_ZONE_CAPACITY
    heavy = capacity * 20 // 100
    medium = capacity * 30 // 100

    zones = [
        create_zone(db, ZoneCreate(
            id=f"Z{i}",
            name=f"Parking Zone {i}",
            capacity=capacity,
            heavy_limit=heavy,
            medium_limit=medium,
            light_limit=capacity - heavy - medium,
        ), commit=False)
        for i in range(1, count + 1)
    ]
    db.commit()
    logger.info(f"[ZONES] Initialized {len(zones)} default zones")
    return zones


def zones_with_stats(db: Session) -> list[dict]:
    """Zones in registration order with occupancy, class limits and parked vehicles."""
    vehicles_by_zone = {}
    for vehicle in db.query(Vehicle).order_by(Vehicle.entry_time).all():
        vehicles_by_zone.setdefault(vehicle.zone_id, []).append(vehicle)

    result = []
    for zone in list_zones(db):
        parked = vehicles_by_zone.get(zone.id, [])
        result.append({
            "id": zone.id,
            "name": zone.name,
            "capacity": zone.capacity,
            "occupied": len(parked),
            "limits": {t: zone.limit_for(t) for t in VEHICLE_TYPES},
            "stats": {t: sum(1 for v in parked if v.vehicle_type == t) for t in VEHICLE_TYPES},
            "vehicles": [
                {
                    "id": v.id,
                    "number": v.number,
                    "type": v.vehicle_type,
                    "entry_time": v.entry_time,
                    "ticket_id": v.ticket_id,
                    "slot": v.slot,
                }
                for v in parked
            ],
        })
    return result
