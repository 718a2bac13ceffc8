# app/schemas/zone.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional


class ZoneCreate(BaseModel):
    id: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1)
    capacity: int = Field(ge=0)
    heavy_limit: int = Field(ge=0)
    medium_limit: int = Field(ge=0)
    light_limit: int = Field(ge=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ZoneUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    capacity: Optional[int] = Field(default=None, ge=0)
    heavy_limit: Optional[int] = Field(default=None, ge=0)
    medium_limit: Optional[int] = Field(default=None, ge=0)
    light_limit: Optional[int] = Field(default=None, ge=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ZoneOut(BaseModel):
    id: str
    name: str
    capacity: int
    heavy_limit: int
    medium_limit: int
    light_limit: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ZoneLimits(BaseModel):
    heavy: int
    medium: int
    light: int


class ParkedVehicleOut(BaseModel):
    id: str
    number: str
    type: str
    entry_time: datetime
    ticket_id: str
    slot: Optional[str]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ZoneWithStatsOut(BaseModel):
    id: str
    name: str
    capacity: int
    occupied: int
    limits: ZoneLimits
    stats: ZoneLimits            # parked count per vehicle class
    vehicles: list[ParkedVehicleOut]
