# app/routers/vehicles.py
"""Ticketing: vehicle entry, exit and search."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.vehicle import TicketOut, VehicleEnter, VehicleSearchOut
from app.services.vehicle_service import enter_vehicle, exit_vehicle, search_vehicle

router = APIRouter()


@router.post("/vehicles/enter", summary="Park a vehicle and issue a ticket")
def enter(body: VehicleEnter, db: Session = Depends(get_db)):
    """
    Without zoneId the first zone (registration order) with room for the
    vehicle class is used. 400 with a zone-specific message when full.
    """
    vehicle, zone = enter_vehicle(db, body.vehicle_number, body.vehicle_type, body.zone_id, body.slot)
    ticket = TicketOut(
        vehicle_id=vehicle.id,
        vehicle_number=vehicle.number,
        zone_name=zone.name,
        ticket_id=vehicle.ticket_id,
        time=vehicle.entry_time.strftime("%I:%M:%S %p"),
        type=vehicle.vehicle_type,
        slot=vehicle.slot,
    )
    return {"success": True, "ticket": ticket}


@router.get("/vehicles/search", summary="Find a parked vehicle by number")
def search(number: str = None, db: Session = Depends(get_db)):
    found = search_vehicle(db, number)
    return {"success": True, "vehicle": VehicleSearchOut(**found) if found else None}


@router.delete("/vehicles/{vehicle_id}", summary="Vehicle exit")
def exit_(vehicle_id: str, db: Session = Depends(get_db)):
    """Records the exit event, then removes the parked vehicle."""
    exit_vehicle(db, vehicle_id)
    return {"success": True}
