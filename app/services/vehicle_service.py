# app/services/vehicle_service.py
"""
Vehicle entry (ticketing), exit and lookup.

A vehicle is either parked (a row in `vehicles`) or gone. Entry and exit each
append a ParkingEvent, which is all the forecast side ever sees.

Capacity checks are check-then-insert, so they run under a per-zone lock:
the zone's counts are re-read inside the lock and the insert is committed
before it is released. Two tickets racing for the last space of a zone cannot
both succeed. The lock is in-process; run a single worker per database.
"""

import random
import threading
import time
import uuid
from collections import defaultdict
from datetime import datetime
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.exceptions import CapacityExceededError, NotFoundError, ValidationError
from app.models.parking_zone import ParkingZone
from app.models.vehicle import Vehicle
from app.services.event_store import create_parking_event
from app.services.zone_service import VEHICLE_TYPES, get_zone, list_zones
from app.utils.logger import get_logger

logger = get_logger(__name__)

_zone_locks = defaultdict(threading.Lock)
_registry_lock = threading.Lock()


def _lock_for(zone_id: str) -> threading.Lock:
    with _registry_lock:
        return _zone_locks[zone_id]


def _zone_counts(db: Session, zone_id: str, vehicle_type: str) -> tuple[int, int]:
    """(total parked, parked of this class) for one zone."""
    total = db.query(func.count(Vehicle.id)).filter(Vehicle.zone_id == zone_id).scalar()
    of_type = db.query(func.count(Vehicle.id)).filter(
        Vehicle.zone_id == zone_id, Vehicle.vehicle_type == vehicle_type
    ).scalar()
    return total, of_type


def _capacity_problem(db: Session, zone: ParkingZone, vehicle_type: str) -> Optional[str]:
    """Human-readable reason the zone cannot take this vehicle, or None."""
    total, of_type = _zone_counts(db, zone.id, vehicle_type)
    if total >= zone.capacity:
        return f"Zone {zone.name} is full!"
    if of_type >= zone.limit_for(vehicle_type):
        return f"Zone {zone.name} is full for {vehicle_type} vehicles!"
    return None


def _new_ticket_id() -> str:
    return f"TKT-{int(time.time() * 1000)}-{random.randint(0, 999)}"


def _park(db: Session, zone: ParkingZone, number: str, vehicle_type: str,
          slot: Optional[str]) -> Vehicle:
    now = datetime.now()
    vehicle = Vehicle(
        id=str(uuid.uuid4()),
        number=number,
        vehicle_type=vehicle_type,
        zone_id=zone.id,
        slot=slot or None,
        ticket_id=_new_ticket_id(),
        entry_time=now,
    )
    db.add(vehicle)
    create_parking_event(db, number, vehicle_type, zone.id, "entry", event_time=now, commit=False)
    db.commit()
    return vehicle


def _try_park(db: Session, zone: ParkingZone, number: str, vehicle_type: str,
              slot: Optional[str]):
    """Park under the zone lock. Returns (vehicle, None) or (None, reason)."""
    with _lock_for(zone.id):
        problem = _capacity_problem(db, zone, vehicle_type)
        if problem:
            return None, problem
        return _park(db, zone, number, vehicle_type, slot), None


def enter_vehicle(db: Session, vehicle_number: Optional[str], vehicle_type: str = "light",
                  zone_id: Optional[str] = None, slot: Optional[str] = None):
    """
    Issue a ticket. With zone_id the vehicle goes there or is refused;
    without it the first zone (registration order) with room for the class is used.
    Returns (vehicle, zone).
    """
    number = (vehicle_number or "").strip()
    if not number:
        raise ValidationError("Vehicle number required")
    if vehicle_type not in VEHICLE_TYPES:
        raise ValidationError(f"Unknown vehicle type: {vehicle_type}")

    if zone_id:
        zone = get_zone(db, zone_id)
        vehicle, problem = _try_park(db, zone, number, vehicle_type, slot)
        if problem:
            logger.warning(f"[ENTRY] {number} refused: {problem}")
            raise CapacityExceededError(problem)
    else:
        for zone in list_zones(db):
            vehicle, _ = _try_park(db, zone, number, vehicle_type, slot)
            if vehicle:
                break
        else:
            message = f"All parking zones are full for {vehicle_type} vehicles!"
            logger.warning(f"[ENTRY] {number} refused: {message}")
            raise CapacityExceededError(message)

    logger.info(f"[ENTRY] {number} ({vehicle_type}) → {zone.id} ticket={vehicle.ticket_id}")
    return vehicle, zone


def exit_vehicle(db: Session, vehicle_id: str):
    """Record the exit event, then free the space."""
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if not vehicle:
        raise NotFoundError("Vehicle not found")
    number, zone_id = vehicle.number, vehicle.zone_id
    create_parking_event(db, number, vehicle.vehicle_type, zone_id, "exit", commit=False)
    db.delete(vehicle)
    db.commit()
    logger.info(f"[EXIT] {number} left {zone_id}")


def search_vehicle(db: Session, number: str):
    """First parked vehicle whose number contains `number` (case-insensitive), with its zone name."""
    term = (number or "").strip()
    if not term:
        raise ValidationError("Vehicle number required")
    vehicle = (
        db.query(Vehicle)
        .filter(func.lower(Vehicle.number).contains(term.lower(), autoescape=True))
        .order_by(Vehicle.entry_time)
        .first()
    )
    if not vehicle:
        return None
    zone = db.query(ParkingZone).filter(ParkingZone.id == vehicle.zone_id).first()
    return {
        "id": vehicle.id,
        "number": vehicle.number,
        "type": vehicle.vehicle_type,
        "entry_time": vehicle.entry_time,
        "ticket_id": vehicle.ticket_id,
        "slot": vehicle.slot,
        "zone_name": zone.name if zone else "Unknown",
    }
