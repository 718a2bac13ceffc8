# app/schemas/vehicle.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional


class VehicleEnter(BaseModel):
    vehicle_number: Optional[str] = None
    vehicle_type: str = Field(default="light", alias="type")   # heavy | medium | light
    zone_id: Optional[str] = None
    slot: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TicketOut(BaseModel):
    vehicle_id: str
    vehicle_number: str
    zone_name: str
    ticket_id: str
    time: str
    type: str
    slot: Optional[str]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class VehicleSearchOut(BaseModel):
    id: str
    number: str
    type: str
    entry_time: datetime
    ticket_id: str
    slot: Optional[str]
    zone_name: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True
