from app.scheduling.availability import (
    AvailableSlot,
    filter_available_slots,
    find_available_slots,
    is_interval_free,
    total_duration_minutes,
)
from app.scheduling.clock import (
    combine,
    day_bounds,
    format_interval,
    intervals_overlap,
    parse_clock_time,
    parse_interval_label,
)
from app.scheduling.slots import generate_slot_starts, operating_window

__all__ = [
    "AvailableSlot",
    "filter_available_slots",
    "find_available_slots",
    "is_interval_free",
    "total_duration_minutes",
    "combine",
    "day_bounds",
    "format_interval",
    "intervals_overlap",
    "parse_clock_time",
    "parse_interval_label",
    "generate_slot_starts",
    "operating_window",
]
