from __future__ import annotations

from datetime import date, datetime, timedelta

from app.scheduling.clock import combine, parse_clock_time
from app.scheduling.errors import InvalidScheduleError


def operating_window(
    opening_hour: str,
    closing_hour: str,
    day: date | datetime,
) -> tuple[datetime, datetime]:
    opening = combine(day, parse_clock_time(opening_hour))
    closing = combine(day, parse_clock_time(closing_hour))
    if opening >= closing:
        raise InvalidScheduleError(
            f"Opening hour {opening_hour} must be before closing hour {closing_hour}"
        )
    return opening, closing


def generate_slot_starts(
    opening_hour: str,
    closing_hour: str,
    day: date | datetime,
    total_duration_minutes: int,
) -> list[datetime]:
    """Step from opening by the requested duration while the start is before closing.

    The last start may produce a slot that runs past closing; it is kept here and
    left for the caller to decide on.
    """
    if total_duration_minutes <= 0:
        return []

    opening, closing = operating_window(opening_hour, closing_hour, day)
    step = timedelta(minutes=total_duration_minutes)

    starts: list[datetime] = []
    cursor = opening
    while cursor < closing:
        starts.append(cursor)
        cursor += step
    return starts
