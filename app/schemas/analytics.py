# app/schemas/analytics.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from app.schemas.forecast import Confidence


class WeeklyTrendPoint(BaseModel):
    day: str          # Sun … Sat
    occupancy: int


class HourlyProbability(BaseModel):
    time: str         # 4am, 8am, …
    prob: int


class ZonePrediction(BaseModel):
    id: str
    name: str
    prob: int


class TomorrowOverall(BaseModel):
    probability: int
    peak_time: str
    confidence: Confidence

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AnalyticsSummaryOut(BaseModel):
    current_occupancy: int
    total_vehicles: int
    total_capacity: int
    weekly_trend: list[WeeklyTrendPoint]
    tomorrow_hourly: list[HourlyProbability]
    zone_predictions: list[ZonePrediction]
    tomorrow_overall: TomorrowOverall
    data_points: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AnalyticsSummaryResponse(BaseModel):
    success: bool = True
    data: AnalyticsSummaryOut


class SeedResponse(BaseModel):
    success: bool = True
    message: str
    created: int
