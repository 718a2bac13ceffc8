# app/services/forecast_service.py
"""
Weighted Forecast Engine: tomorrow's occupancy per zone and overall.

For every zone the last FORECAST_HISTORY_DAYS completed days of peak
occupancy (daily_peak_service) are blended with recency weights:

    yesterday        40%
    2 days ago       25%
    3 days ago       15%
    4-7 days ago     20% split evenly between the days present

The weighted sum is divided by the weights actually used, so a short history
is renormalised instead of dragged towards zero. The result is then scaled
for tomorrow's day type (weekend ×1.15, Friday ×1.20) and capped at 100%.

Decimal arithmetic keeps the .5 cases exact: 50% on a Saturday is 57.5 → 58,
not the 57 that float 50 * 1.15 would give.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Sequence
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.config import settings
from app.models.vehicle import Vehicle
from app.schemas.forecast import ForecastOut, OverallForecastOut, ZoneForecastOut
from app.services.daily_peak_service import DailyPeak, get_zone_daily_peak_occupancy
from app.services.zone_service import list_zones
from app.utils.timeutils import (
    DAY_NAMES, FRIDAY, day_of_week, is_weekend, percent, round_half_up,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)

WEIGHT_YESTERDAY = Decimal("0.40")
WEIGHT_TWO_DAYS_AGO = Decimal("0.25")
WEIGHT_THREE_DAYS_AGO = Decimal("0.15")
WEIGHT_REMAINING = Decimal("0.20")       # shared by days 4-7
REMAINING_DAYS = range(4, 8)

WEEKEND_ADJUSTMENT = Decimal("1.15")
PEAK_DAY_ADJUSTMENT = Decimal("1.20")    # Friday, pre-weekend rush
NO_ADJUSTMENT = Decimal("1")

BASELINE_MIN_PERCENT = 10
MAX_PERCENT = 100

METHODOLOGY = {
    "description": "Weighted average of last 7 days peak occupancy with day-based adjustments",
    "weights": {
        "yesterday": "40%",
        "twoDaysAgo": "25%",
        "threeDaysAgo": "15%",
        "remainingDays": "20% (split equally)",
    },
    "adjustments": {
        "weekend": "+15% for Saturday/Sunday",
        "friday": "+20% for Friday (pre-weekend rush)",
        "weekday": "No adjustment",
    },
    "constraints": {
        "maxPercent": "100% (capped at zone capacity)",
        "minDataDays": "7 days recommended for high confidence",
    },
}


# ── Weights ──────────────────────────────────────────────────────────────────

def weight_for(days_ago: int, remaining_count: int) -> Decimal:
    if days_ago == 1:
        return WEIGHT_YESTERDAY
    if days_ago == 2:
        return WEIGHT_TWO_DAYS_AGO
    if days_ago == 3:
        return WEIGHT_THREE_DAYS_AGO
    if days_ago in REMAINING_DAYS and remaining_count:
        return WEIGHT_REMAINING / remaining_count
    return Decimal(0)


def applied_weights(peaks: Sequence[DailyPeak]) -> list[Decimal]:
    """The weight each history day contributes, in the order given."""
    remaining = sum(1 for p in peaks if p.days_ago in REMAINING_DAYS)
    return [weight_for(p.days_ago, remaining) for p in peaks]


def day_percent(peak_count: int, capacity: int) -> int:
    return min(percent(peak_count, capacity), MAX_PERCENT)


def weighted_base_percent(peaks: Sequence[DailyPeak], capacity: int) -> Optional[int]:
    """
    Renormalised weighted average of the daily peak percentages.
    None when no day carries weight (caller falls back to live occupancy).
    """
    weighted_sum = Decimal(0)
    used_weight = Decimal(0)
    for peak, weight in zip(peaks, applied_weights(peaks)):
        weighted_sum += day_percent(peak.peak_count, capacity) * weight
        used_weight += weight
    if not used_weight:
        return None
    return round_half_up(weighted_sum / used_weight)


# ── Day type ─────────────────────────────────────────────────────────────────

def day_type_multiplier(target_dow: int) -> Decimal:
    if is_weekend(target_dow):
        return WEEKEND_ADJUSTMENT
    if target_dow == FRIDAY:
        return PEAK_DAY_ADJUSTMENT
    return NO_ADJUSTMENT


def adjust_for_day(base_percent: int, target_dow: int) -> int:
    """Scale by tomorrow's day type, round half up, cap at 100."""
    adjusted = round_half_up(Decimal(base_percent) * day_type_multiplier(target_dow))
    return min(adjusted, MAX_PERCENT)


def confidence_for(data_points: float) -> str:
    if data_points >= 7:
        return "high"
    if data_points >= 3:
        return "medium"
    return "low"


# ── Per zone ─────────────────────────────────────────────────────────────────

def forecast_zone(zone, peaks: Sequence[DailyPeak], current_vehicles: int,
                  target: date) -> ZoneForecastOut:
    """Pure forecast for one zone from its peak history and live count."""
    target_dow = day_of_week(target)
    current_percent = percent(current_vehicles, zone.capacity)

    base = weighted_base_percent(peaks, zone.capacity) if peaks else None
    if base is None:
        base = current_percent if peaks else max(current_percent, BASELINE_MIN_PERCENT)
    forecasted_percent = adjust_for_day(base, target_dow)

    return ZoneForecastOut(
        zone_id=zone.id,
        zone_name=zone.name,
        capacity=zone.capacity,
        current_occupancy=current_vehicles,
        current_occupancy_percent=current_percent,
        forecasted_occupancy_percent=forecasted_percent,
        forecasted_vehicles=round_half_up(Decimal(forecasted_percent) / 100 * zone.capacity),
        data_points=len(peaks),
        confidence=confidence_for(len(peaks)) if peaks else "low",
        method="weighted_average" if peaks else "baseline_estimate",
    )


def summarize(zone_forecasts: Sequence[ZoneForecastOut], total_capacity: int,
              total_current: int) -> OverallForecastOut:
    """All-zones aggregate built from the per-zone vehicle forecasts."""
    forecasted_vehicles = sum(z.forecasted_vehicles for z in zone_forecasts)
    avg_data_points = (
        sum(z.data_points for z in zone_forecasts) / len(zone_forecasts)
        if zone_forecasts else 0
    )
    return OverallForecastOut(
        total_capacity=total_capacity,
        current_occupancy=total_current,
        current_occupancy_percent=percent(total_current, total_capacity),
        forecasted_occupancy_percent=min(percent(forecasted_vehicles, total_capacity), MAX_PERCENT),
        forecasted_vehicles=forecasted_vehicles,
        confidence=confidence_for(avg_data_points),
    )


# ── Endpoint entry point ────────────────────────────────────────────────────

def _vehicle_counts(db: Session) -> dict:
    rows = db.query(Vehicle.zone_id, func.count(Vehicle.id)).group_by(Vehicle.zone_id).all()
    return {zone_id: count for zone_id, count in rows}


def build_forecast(db: Session, now: Optional[datetime] = None,
                   history_days: Optional[int] = None) -> ForecastOut:
    """
    Tomorrow's forecast for every registered zone. Recomputed from the event
    log on every call; nothing is cached or written.
    """
    now = now or datetime.now()
    if history_days is None:
        history_days = settings.FORECAST_HISTORY_DAYS
    target = now.date() + timedelta(days=1)
    target_dow = day_of_week(target)

    zones = list_zones(db)
    counts = _vehicle_counts(db)

    zone_forecasts = [
        forecast_zone(
            zone,
            get_zone_daily_peak_occupancy(db, zone.id, history_days, now=now),
            counts.get(zone.id, 0),
            target,
        )
        for zone in zones
    ]
    overall = summarize(
        zone_forecasts,
        total_capacity=sum(z.capacity for z in zones),
        total_current=sum(counts.values()),
    )
    logger.info(
        f"[FORECAST] {target} ({DAY_NAMES[target_dow]}): "
        f"{overall.forecasted_occupancy_percent}% across {len(zones)} zone(s), "
        f"confidence={overall.confidence}"
    )

    return ForecastOut(
        generated_at=now,
        forecast_date=target.isoformat(),
        forecast_day_of_week=DAY_NAMES[target_dow],
        is_peak_day=is_weekend(target_dow) or target_dow == FRIDAY,
        is_weekend=is_weekend(target_dow),
        overall=overall,
        zones=zone_forecasts,
        methodology=METHODOLOGY,
    )
