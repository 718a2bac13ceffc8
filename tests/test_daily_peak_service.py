# tests/test_daily_peak_service.py
"""Unit tests for the daily peak aggregator."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, datetime, timedelta
from app.models.parking_event import ParkingEvent
from app.services.daily_peak_service import (
    compute_daily_peaks, get_zone_daily_peak_occupancy, replay_day,
)
from app.services.event_store import create_parking_event, get_recent_events

NOW = datetime(2026, 10, 14, 15, 0)     # Wednesday afternoon


def make_event(when, event_type="entry", zone_id="Z1"):
    return ParkingEvent(vehicle_number="KL-1-AA-1000", vehicle_type="light", zone_id=zone_id,
                        event_type=event_type, event_time=when,
                        day_of_week=0, hour_of_day=when.hour)


def at(day, hour, minute=0):
    return datetime.combine(day, datetime.min.time()).replace(hour=hour, minute=minute)


class TestReplayDay:
    def test_peak_tracks_running_maximum(self):
        day = date(2026, 10, 13)
        events = [
            make_event(at(day, 8)), make_event(at(day, 9)), make_event(at(day, 10)),
            make_event(at(day, 11), "exit"), make_event(at(day, 12)),
        ]
        assert replay_day(events).peak == 3

    def test_events_are_sorted_before_folding(self):
        day = date(2026, 10, 13)
        events = [make_event(at(day, 12), "exit"), make_event(at(day, 8)), make_event(at(day, 9))]
        assert replay_day(events).peak == 2

    def test_exits_only_never_negative(self):
        day = date(2026, 10, 13)
        replay = replay_day([make_event(at(day, h), "exit") for h in (7, 8, 9)])
        assert replay.peak == 0
        assert all(v == 0 for v in replay.hourly.values())

    def test_more_exits_than_entries_floors_at_zero(self):
        day = date(2026, 10, 13)
        events = [
            make_event(at(day, 6), "exit"), make_event(at(day, 7), "exit"),
            make_event(at(day, 8)), make_event(at(day, 9), "exit"), make_event(at(day, 10), "exit"),
            make_event(at(day, 11)),
        ]
        replay = replay_day(events)
        assert replay.peak == 1
        assert min(replay.hourly.values()) == 0
        assert replay.hourly[11] == 1

    def test_hourly_carries_balance_forward(self):
        day = date(2026, 10, 13)
        replay = replay_day([make_event(at(day, 8, 15)), make_event(at(day, 8, 45)),
                             make_event(at(day, 14), "exit")])
        assert len(replay.hourly) == 24
        assert replay.hourly[7] == 0
        assert replay.hourly[8] == 2
        assert replay.hourly[13] == 2
        assert replay.hourly[23] == 1


class TestComputeDailyPeaks:
    def test_sorted_by_days_ago_and_capped(self):
        today = NOW.date()
        events = [make_event(at(today - timedelta(days=d), 9)) for d in range(1, 11)]
        peaks = compute_daily_peaks(events, days=7, today=today)
        assert [p.days_ago for p in peaks] == [1, 2, 3, 4, 5, 6, 7]

    def test_today_and_future_excluded(self):
        today = NOW.date()
        events = [
            make_event(at(today, 9)),
            make_event(at(today + timedelta(days=1), 9)),
            make_event(at(today - timedelta(days=2), 9)),
        ]
        peaks = compute_daily_peaks(events, days=7, today=today)
        assert [p.days_ago for p in peaks] == [2]
        assert peaks[0].date == today - timedelta(days=2)

    def test_day_of_week_is_sunday_based(self):
        sunday = date(2026, 10, 11)
        peaks = compute_daily_peaks([make_event(at(sunday, 9))], days=7, today=NOW.date())
        assert peaks[0].day_of_week == 0
        assert peaks[0].days_ago == 3

    def test_no_events_means_no_history(self):
        assert compute_daily_peaks([], days=7, today=NOW.date()) == []


class TestZoneDailyPeakQuery:
    def test_excludes_today_even_with_events(self, db):
        for hour in (8, 9, 10):
            create_parking_event(db, f"T-{hour}", "light", "Z1", "entry", event_time=NOW.replace(hour=hour))
        create_parking_event(db, "Y-1", "light", "Z1", "entry", event_time=NOW - timedelta(days=1))

        peaks = get_zone_daily_peak_occupancy(db, "Z1", 7, now=NOW)

        assert NOW.date() not in [p.date for p in peaks]
        assert [(p.days_ago, p.peak_count) for p in peaks] == [(1, 1)]

    def test_other_zones_and_old_events_ignored(self, db):
        create_parking_event(db, "A", "light", "Z2", "entry", event_time=NOW - timedelta(days=1))
        create_parking_event(db, "B", "light", "Z1", "entry", event_time=NOW - timedelta(days=12))

        assert get_zone_daily_peak_occupancy(db, "Z1", 7, now=NOW) == []

    def test_exit_heavy_day_returns_zero_peak(self, db):
        yesterday = NOW - timedelta(days=1)
        create_parking_event(db, "A", "light", "Z1", "exit", event_time=yesterday.replace(hour=7))
        create_parking_event(db, "B", "light", "Z1", "exit", event_time=yesterday.replace(hour=8))

        peaks = get_zone_daily_peak_occupancy(db, "Z1", 7, now=NOW)
        assert peaks[0].peak_count == 0


class TestSameInstantOrdering:
    def test_entry_then_exit_at_same_time_nets_zero(self, db):
        when = (NOW - timedelta(days=1)).replace(hour=9, minute=0)
        create_parking_event(db, "A", "light", "Z1", "entry", event_time=when)
        create_parking_event(db, "A", "light", "Z1", "exit", event_time=when)

        # newest-first query order must not leak into the replay
        replay = replay_day(get_recent_events(db, 30, now=NOW))

        assert replay.peak == 1
        assert replay.hourly[9] == 0
