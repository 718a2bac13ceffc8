# app/routers/zones.py
"""Zone Registry: list with live stats, CRUD, default initialization."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.zone import ZoneCreate, ZoneOut, ZoneUpdate, ZoneWithStatsOut
from app.services import zone_service

router = APIRouter()


@router.get("/zones", response_model=list[ZoneWithStatsOut], summary="All zones with occupancy")
def list_zones(db: Session = Depends(get_db)):
    """Zones in registration order with per-class counts and parked vehicles."""
    return zone_service.zones_with_stats(db)


@router.post("/zones/initialize", summary="Register the default zones")
def initialize_zones(db: Session = Depends(get_db)):
    zones = zone_service.initialize_default_zones(db)
    return {"success": True, "zones": [ZoneOut.model_validate(z) for z in zones]}


@router.post("/zones", summary="Create a zone")
def create_zone(body: ZoneCreate, db: Session = Depends(get_db)):
    zone = zone_service.create_zone(db, body)
    return {"success": True, "zone": ZoneOut.model_validate(zone)}


@router.patch("/zones/{zone_id}", summary="Update a zone")
def update_zone(zone_id: str, body: ZoneUpdate, db: Session = Depends(get_db)):
    zone = zone_service.update_zone(db, zone_id, body)
    return {"success": True, "zone": ZoneOut.model_validate(zone)}


@router.delete("/zones/{zone_id}", summary="Delete an empty zone")
def delete_zone(zone_id: str, db: Session = Depends(get_db)):
    zone_service.delete_zone(db, zone_id)
    return {"success": True}
