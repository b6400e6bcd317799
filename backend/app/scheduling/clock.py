from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

from app.scheduling.errors import FormatError


CLOCK_TIME_PATTERN = re.compile(r"([0-1]?[0-9]|2[0-3]):([0-5][0-9])")
INTERVAL_SEPARATOR = " - "


def parse_clock_time(value: str) -> time:
    """Parse a 24h ``HH:mm`` string (leading zero optional on the hour)."""
    if not isinstance(value, str):
        raise FormatError(f"Invalid time format: {value!r}")
    match = CLOCK_TIME_PATTERN.fullmatch(value)
    if match is None:
        raise FormatError(f"Invalid time format: {value!r}")
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def combine(day: date | datetime, clock_time: time) -> datetime:
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, clock_time.replace(second=0, microsecond=0))


def day_bounds(day: date | datetime) -> tuple[datetime, datetime]:
    start_of_day = combine(day, time.min)
    return start_of_day, start_of_day + timedelta(days=1)


def intervals_overlap(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    return a_start < b_end and a_end > b_start


def minutes_since_midnight(value: datetime | time) -> int:
    return value.hour * 60 + value.minute


def format_clock_time(value: datetime | time) -> str:
    return value.strftime("%H:%M")


def format_interval(start: datetime, end: datetime) -> str:
    return f"{format_clock_time(start)}{INTERVAL_SEPARATOR}{format_clock_time(end)}"


def parse_interval_label(day: date | datetime, label: str) -> tuple[datetime, datetime]:
    parts = (label or "").split(INTERVAL_SEPARATOR)
    if len(parts) != 2:
        raise FormatError(f"Invalid interval format: {label!r}")
    start = combine(day, parse_clock_time(parts[0].strip()))
    end = combine(day, parse_clock_time(parts[1].strip()))
    return start, end
