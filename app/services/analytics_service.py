# app/services/analytics_service.py
"""
Trend/Probability Summary for the dashboard charts.

A looser companion to forecast_service: it averages per-date peaks over the
last ANALYTICS_LOOKBACK_DAYS by weekday instead of weighting by recency.

  weekly trend      Sun..Sat → average daily peak % for that weekday
  tomorrow hourly   4am/8am/12pm/4pm/8pm/12am → average hourly % on tomorrow's weekday
  zone predictions  50% live occupancy + 30% historical peak + 10 points, floor 5, cap 100
  overall           mean of (average zone probability, busiest hourly bucket)

Every chart has a fixed fallback curve, so an empty event log still renders.
Nothing here is random; the seeder at the bottom is the only random code and
takes an injectable RNG.
"""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, Sequence
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.config import settings
from app.exceptions import ValidationError
from app.models.vehicle import Vehicle
from app.schemas.analytics import (
    AnalyticsSummaryOut, HourlyProbability, TomorrowOverall, WeeklyTrendPoint, ZonePrediction,
)
from app.services.daily_peak_service import group_by_date, replay_day
from app.services.event_store import create_parking_event, get_recent_events
from app.services.zone_service import VEHICLE_TYPES, list_zones
from app.utils.timeutils import (
    SHORT_DAY_NAMES, clock_label, day_of_week, hour_label, is_weekend, percent, round_half_up,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_WEEKLY_TREND = [75, 45, 50, 55, 60, 70, 85]       # Sun..Sat
HOURLY_BUCKETS = (4, 8, 12, 16, 20, 0)
DEFAULT_HOURLY = {4: 30, 8: 50, 12: 80, 16: 70, 20: 50, 0: 20}

LIVE_WEIGHT = Decimal("0.5")
HISTORY_WEIGHT = Decimal("0.3")
BUFFER_POINTS = 10
NO_HISTORY_BUFFER = 15
MIN_PROBABILITY = 5
DEFAULT_ZONE_PROBABILITY = 50

PEAK_HOURS = [8, 9, 10, 11, 12, 16, 17, 18, 19, 20]
OFF_PEAK_HOURS = [4, 5, 6, 7, 13, 14, 15, 21, 22, 23]


@dataclass(frozen=True)
class DayStats:
    day_of_week: int
    peak_percent: int
    hourly_percent: dict      # hour → occupancy %


def _average(values: Sequence[int]) -> int:
    return round_half_up(Decimal(sum(values)) / len(values))


def zone_date_stats(events, zones) -> dict:
    """zone id → [DayStats per calendar date that has events]."""
    by_zone = {}
    for event in events:
        by_zone.setdefault(event.zone_id, []).append(event)

    stats = {}
    for zone in zones:
        days = []
        for day, day_events in group_by_date(by_zone.get(zone.id, [])).items():
            replay = replay_day(day_events)
            days.append(DayStats(
                day_of_week=day_of_week(day),
                peak_percent=min(percent(replay.peak, zone.capacity), 100),
                hourly_percent={h: min(percent(b, zone.capacity), 100) for h, b in replay.hourly.items()},
            ))
        stats[zone.id] = days
    return stats


def weekly_trend(stats: dict, has_data: bool) -> list[WeeklyTrendPoint]:
    trend = []
    for dow, name in enumerate(SHORT_DAY_NAMES):
        peaks = [d.peak_percent for days in stats.values() for d in days if d.day_of_week == dow]
        occupancy = _average(peaks) if has_data and peaks else DEFAULT_WEEKLY_TREND[dow]
        trend.append(WeeklyTrendPoint(day=name, occupancy=occupancy))
    return trend


def tomorrow_hourly(stats: dict, tomorrow_dow: int) -> list[HourlyProbability]:
    matching = [d for days in stats.values() for d in days if d.day_of_week == tomorrow_dow]
    curve = []
    for hour in HOURLY_BUCKETS:
        values = [d.hourly_percent[hour] for d in matching]
        prob = _average(values) if values else DEFAULT_HOURLY[hour]
        curve.append(HourlyProbability(time=hour_label(hour), prob=prob))
    return curve


def zone_probability(current_percent: int, historical_peaks: Sequence[int]) -> int:
    if historical_peaks:
        blended = round_half_up(
            current_percent * LIVE_WEIGHT + _average(historical_peaks) * HISTORY_WEIGHT + BUFFER_POINTS
        )
        predicted = min(blended, 100)
    else:
        predicted = min(current_percent + NO_HISTORY_BUFFER, 100)
    return max(predicted, MIN_PROBABILITY)


def summary_confidence(event_count: int) -> str:
    """Event-count tiers, looser than forecast_service.confidence_for."""
    if event_count > 50:
        return "high"
    if event_count > 10:
        return "medium"
    return "low"


def tomorrow_overall(predictions: Sequence[ZonePrediction], hourly: Sequence[HourlyProbability],
                     event_count: int) -> TomorrowOverall:
    avg_zone = (
        Decimal(sum(p.prob for p in predictions)) / len(predictions)
        if predictions else Decimal(DEFAULT_ZONE_PROBABILITY)
    )
    peak = max(hourly, key=lambda h: h.prob)      # first bucket wins a tie
    peak_hour = HOURLY_BUCKETS[list(hourly).index(peak)]
    return TomorrowOverall(
        probability=round_half_up((avg_zone + peak.prob) / 2),
        peak_time=clock_label(peak_hour),
        confidence=summary_confidence(event_count),
    )


def build_summary(db: Session, now: Optional[datetime] = None) -> AnalyticsSummaryOut:
    now = now or datetime.now()
    events = get_recent_events(db, settings.ANALYTICS_LOOKBACK_DAYS, now=now)
    zones = list_zones(db)
    counts = dict(db.query(Vehicle.zone_id, func.count(Vehicle.id)).group_by(Vehicle.zone_id).all())

    total_capacity = sum(z.capacity for z in zones)
    total_vehicles = sum(counts.values())
    tomorrow_dow = day_of_week(now + timedelta(days=1))

    stats = zone_date_stats(events, zones)
    trend = weekly_trend(stats, has_data=bool(events) and bool(zones))
    hourly = tomorrow_hourly(stats, tomorrow_dow)

    predictions = [
        ZonePrediction(
            id=zone.id,
            name=zone.name,
            prob=zone_probability(
                percent(counts.get(zone.id, 0), zone.capacity),
                [d.peak_percent for d in stats[zone.id] if d.day_of_week == tomorrow_dow],
            ),
        )
        for zone in zones
    ]

    return AnalyticsSummaryOut(
        current_occupancy=percent(total_vehicles, total_capacity),
        total_vehicles=total_vehicles,
        total_capacity=total_capacity,
        weekly_trend=trend,
        tomorrow_hourly=hourly,
        zone_predictions=predictions,
        tomorrow_overall=tomorrow_overall(predictions, hourly, len(events)),
        data_points=len(events),
    )


# ── Demo data ────────────────────────────────────────────────────────────────

def _random_plate(rng: random.Random) -> str:
    letters = "".join(chr(65 + rng.randrange(26)) for _ in range(2))
    return f"KL-{rng.randrange(100)}-{letters}-{rng.randint(1000, 9999)}"


def seed_history(db: Session, days: Optional[int] = None, now: Optional[datetime] = None,
                 rng: Optional[random.Random] = None) -> int:
    """
    Write synthetic entry events for the last `days` days: busier on weekends,
    70% of them in the 8-12 / 16-20 peak hours. Returns the number created.
    """
    zones = list_zones(db)
    if not zones:
        raise ValidationError("Initialize zones first")
    if days is None:
        days = settings.SEED_HISTORY_DAYS
    now = now or datetime.now()
    rng = rng or random.Random()

    created = 0
    for days_ago in range(1, days + 1):
        day = now - timedelta(days=days_ago)
        base = 30 if is_weekend(day_of_week(day)) else 15
        for _ in range(base + rng.randrange(20)):
            hours = PEAK_HOURS if rng.random() > 0.3 else OFF_PEAK_HOURS
            event_time = day.replace(hour=rng.choice(hours), minute=rng.randrange(60),
                                     second=0, microsecond=0)
            create_parking_event(db, _random_plate(rng), rng.choice(VEHICLE_TYPES),
                                 rng.choice(zones).id, "entry", event_time=event_time, commit=False)
            created += 1
    db.commit()
    logger.info(f"[SEED] Seeded {created} historical events over {days} day(s)")
    return created
