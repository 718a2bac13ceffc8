# app/schemas/forecast.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Literal

Confidence = Literal["high", "medium", "low"]


class ZoneForecastOut(BaseModel):
    zone_id: str
    zone_name: str
    capacity: int
    current_occupancy: int
    current_occupancy_percent: int
    forecasted_occupancy_percent: int
    forecasted_vehicles: int
    data_points: int
    confidence: Confidence
    method: Literal["weighted_average", "baseline_estimate"]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class OverallForecastOut(BaseModel):
    total_capacity: int
    current_occupancy: int
    current_occupancy_percent: int
    forecasted_occupancy_percent: int
    forecasted_vehicles: int
    confidence: Confidence

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ForecastOut(BaseModel):
    generated_at: datetime
    forecast_date: str                 # YYYY-MM-DD
    forecast_day_of_week: str          # "Saturday"
    is_peak_day: bool
    is_weekend: bool
    overall: OverallForecastOut
    zones: list[ZoneForecastOut]
    methodology: dict

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ForecastResponse(BaseModel):
    success: bool = True
    forecast: ForecastOut
