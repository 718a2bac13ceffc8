# app/utils/timeutils.py
"""
Calendar and rounding helpers shared by the forecast and analytics services.
Day-of-week values follow the event log convention: Sunday=0 … Saturday=6.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
SHORT_DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

SUNDAY, FRIDAY, SATURDAY = 0, 5, 6

Number = Union[int, float, Decimal]


def day_of_week(value: Union[date, datetime]) -> int:
    """Sunday=0 day index (Python's weekday() is Monday=0)."""
    return (value.weekday() + 1) % 7


def is_weekend(dow: int) -> bool:
    return dow in (SATURDAY, SUNDAY)


def round_half_up(value: Number) -> int:
    """Round .5 away from zero instead of Python's banker's rounding."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent(part: Number, whole: Number) -> int:
    """Rounded part/whole percentage, 0 when whole is 0."""
    if not whole:
        return 0
    return round_half_up(Decimal(part) * 100 / Decimal(whole))


def hour_label(hour: int) -> str:
    """0 → '12am', 4 → '4am', 12 → '12pm', 16 → '4pm'."""
    suffix = "am" if hour < 12 else "pm"
    return f"{hour % 12 or 12}{suffix}"


def clock_label(hour: int) -> str:
    """0 → '12:00 AM', 16 → '4:00 PM'."""
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:00 {suffix}"
