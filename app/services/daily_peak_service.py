# app/services/daily_peak_service.py
"""
Daily Peak Aggregator.

Replays one calendar day of entry/exit events for a zone and reports the
highest simultaneous occupancy reached that day, plus the occupancy at the end
of every hour. Peaks are computed on read from the immutable event log; a
completed day's peak never changes, the current (incomplete) day is never
reported.

    entry → balance += 1
    exit  → balance = max(0, balance - 1)
    peak  = max(peak, balance) after every event
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Optional
from sqlalchemy.orm import Session
from app.models.parking_event import ParkingEvent
from app.services.event_store import get_zone_events_since
from app.utils.timeutils import day_of_week
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DayReplay:
    peak: int
    hourly: dict = field(default_factory=dict)   # hour (0-23) → balance at end of hour


@dataclass(frozen=True)
class DailyPeak:
    date: date
    day_of_week: int          # Sunday=0
    peak_count: int
    days_ago: int             # 1 = yesterday
    hourly: dict = field(default_factory=dict)


def _apply(balance: int, event_type: str) -> int:
    if event_type == "entry":
        return balance + 1
    return max(0, balance - 1)


def replay_day(events: Iterable[ParkingEvent]) -> DayReplay:
    """Fold one day's events in chronological order into peak + hourly occupancy."""
    ordered = sorted(events, key=lambda e: (e.event_time, e.id or 0))   # same instant: insertion order
    balance = peak = 0
    hourly = {}
    idx = 0
    for hour in range(24):
        while idx < len(ordered) and ordered[idx].event_time.hour <= hour:
            balance = _apply(balance, ordered[idx].event_type)
            peak = max(peak, balance)
            idx += 1
        hourly[hour] = balance
    return DayReplay(peak=peak, hourly=hourly)


def group_by_date(events: Iterable[ParkingEvent]) -> dict:
    """Bucket events by the local calendar date of event_time."""
    by_date = defaultdict(list)
    for event in events:
        by_date[event.event_time.date()].append(event)
    return dict(by_date)


def compute_daily_peaks(events: Iterable[ParkingEvent], days: int, today: date) -> list[DailyPeak]:
    """
    One DailyPeak per completed date that has events, yesterday first,
    at most `days` entries. Today and any date after it are dropped.
    """
    peaks = []
    for day, day_events in group_by_date(events).items():
        days_ago = (today - day).days
        if days_ago < 1:
            continue
        replay = replay_day(day_events)
        peaks.append(DailyPeak(
            date=day,
            day_of_week=day_of_week(day),
            peak_count=replay.peak,
            days_ago=days_ago,
            hourly=replay.hourly,
        ))
    peaks.sort(key=lambda p: p.days_ago)
    return peaks[:days]


def get_zone_daily_peak_occupancy(db: Session, zone_id: str, days: int,
                                  now: Optional[datetime] = None) -> list[DailyPeak]:
    """
    Peak occupancy per completed day for one zone over the last `days` days.
    Fetches one extra day so that dropping today still leaves `days` candidates.
    An empty list means "no history", not an error.
    """
    now = now or datetime.now()
    events = get_zone_events_since(db, zone_id, now - timedelta(days=days + 1))
    peaks = compute_daily_peaks(events, days, now.date())
    logger.debug(f"[PEAKS] {zone_id}: {len(peaks)} day(s) from {len(events)} event(s)")
    return peaks
