from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any, Iterable

from app.db.models import RESERVATION_STATUS_CANCELLED
from app.scheduling.clock import day_bounds, format_interval, intervals_overlap
from app.scheduling.errors import StoreError
from app.scheduling.slots import generate_slot_starts, operating_window

if TYPE_CHECKING:
    from app.store.interface import DocumentStore


logger = logging.getLogger("groombook.scheduling.availability")


@dataclass(frozen=True)
class AvailableSlot:
    start: datetime
    end: datetime
    ends_after_close: bool = False

    @property
    def label(self) -> str:
        return format_interval(self.start, self.end)

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "start_time": self.start.isoformat(),
            "end_time": self.end.isoformat(),
            "ends_after_close": self.ends_after_close,
        }


def document_field(document: Any, name: str) -> Any:
    if isinstance(document, dict):
        return document.get(name)
    return getattr(document, name, None)


def total_duration_minutes(services: Iterable[Any]) -> int:
    return sum(int(document_field(service, "duration") or 0) for service in services)


def occupied_intervals(occupied: Iterable[Any]) -> list[tuple[datetime, datetime]]:
    """Normalize reservations, reservation documents or ``(start, end)`` pairs.

    Cancelled entries never block. Any other entry whose interval cannot be read
    raises ``StoreError`` so an unreadable row is never treated as free time.
    """
    intervals: list[tuple[datetime, datetime]] = []
    for item in occupied:
        if isinstance(item, (tuple, list)):
            if len(item) != 2:
                raise StoreError(f"Unreadable occupied interval: {item!r}")
            start, end = item
        else:
            status = str(document_field(item, "status") or "").lower()
            if status == RESERVATION_STATUS_CANCELLED:
                continue
            start = document_field(item, "start_time")
            end = document_field(item, "end_time")
        intervals.append((_as_timestamp(start, item), _as_timestamp(end, item)))
    return intervals


def _as_timestamp(value: Any, item: Any) -> datetime:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip()).replace(tzinfo=None)
        except ValueError as exc:
            raise StoreError(f"Unreadable occupied interval: {item!r}") from exc
    if not isinstance(value, datetime):
        raise StoreError(f"Unreadable occupied interval: {item!r}")
    return value


def is_interval_free(start: datetime, end: datetime, occupied: Iterable[Any]) -> bool:
    return not any(
        intervals_overlap(start, end, busy_start, busy_end)
        for busy_start, busy_end in occupied_intervals(occupied)
    )


def filter_available_slots(
    candidates: Iterable[datetime],
    total_duration_minutes: int,
    occupied: Iterable[Any],
    closing: datetime | None = None,
) -> list[AvailableSlot]:
    busy = occupied_intervals(occupied)
    step = timedelta(minutes=total_duration_minutes)

    available: list[AvailableSlot] = []
    for start in candidates:
        end = start + step
        if any(intervals_overlap(start, end, busy_start, busy_end) for busy_start, busy_end in busy):
            continue
        available.append(
            AvailableSlot(
                start=start,
                end=end,
                ends_after_close=closing is not None and end > closing,
            )
        )
    return available


def find_available_slots(
    store: DocumentStore,
    groomer_id: str,
    day: date | datetime,
    services: list[Any],
) -> list[AvailableSlot]:
    duration = total_duration_minutes(services)
    if duration <= 0:
        return []

    groomer = store.get_groomer(groomer_id)
    _, closing = operating_window(groomer.opening_hour, groomer.closing_hour, day)
    candidates = generate_slot_starts(
        groomer.opening_hour,
        groomer.closing_hour,
        day,
        duration,
    )
    day_start, day_end = day_bounds(day)
    reservations = store.list_confirmed_reservations(groomer_id, day_start, day_end)

    slots = filter_available_slots(candidates, duration, reservations, closing=closing)
    logger.info(
        "Availability groomer_id=%s day=%s duration=%s candidates=%s available=%s",
        groomer_id,
        day_start.date().isoformat(),
        duration,
        len(candidates),
        len(slots),
    )
    return slots
