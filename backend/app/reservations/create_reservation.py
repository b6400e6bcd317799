from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field

from app.db.models import RESERVATION_STATUS_CONFIRMED, Reservation
from app.scheduling.availability import is_interval_free, document_field, total_duration_minutes
from app.scheduling.clock import day_bounds, format_interval, parse_interval_label
from app.scheduling.errors import (
    FormatError,
    NotFoundError,
    OutOfHoursError,
    ReservationValidationError,
    SlotConflictError,
)
from app.scheduling.slots import operating_window
from app.store.interface import DocumentStore


logger = logging.getLogger("groombook.reservations.create")


class CreateReservationArgs(BaseModel):
    groomer_id: str = Field(min_length=1)
    pet_id: str | None = None
    service_ids: list[str] = Field(default_factory=list)
    day: date | None = Field(default=None, alias="date")
    interval: str | None = None
    start_time: str | None = None
    end_time: str | None = None


def parse_create_reservation_args(raw_args: dict[str, Any]) -> CreateReservationArgs:
    return CreateReservationArgs.model_validate(raw_args)


def resolve_chosen_interval(
    args: CreateReservationArgs,
) -> tuple[datetime | str | None, datetime | str | None]:
    """Pick the requested slot from an ``HH:mm - HH:mm`` label or explicit timestamps."""
    if args.interval:
        if args.day is None:
            raise ReservationValidationError("A date is required with a time interval.")
        try:
            return parse_interval_label(args.day, args.interval)
        except FormatError as exc:
            raise ReservationValidationError(f"Invalid interval: {args.interval}") from exc
    return args.start_time, args.end_time


def create_reservation(
    store: DocumentStore,
    groomer_id: str,
    pet_id: str | None,
    owner_id: str | None,
    services: list[Any],
    chosen_start: datetime | str | None,
    chosen_end: datetime | str | None,
) -> Reservation:
    if not pet_id:
        raise ReservationValidationError("Please select a pet.")
    if not owner_id:
        raise ReservationValidationError("No authenticated user.")
    if not services:
        raise ReservationValidationError("Please select at least one service.")

    start = _parse_timestamp(chosen_start)
    end = _parse_timestamp(chosen_end)
    if start is None or end is None:
        raise ReservationValidationError("Please select a valid time slot.")
    if end <= start:
        raise ReservationValidationError("Reservation end must be after its start.")
    if start.date() != end.date():
        raise ReservationValidationError("Reservation must start and end on the same day.")

    duration = total_duration_minutes(services)
    if duration <= 0:
        raise ReservationValidationError("Selected services have no duration.")
    if end - start != timedelta(minutes=duration):
        raise ReservationValidationError(
            f"Time slot {format_interval(start, end)} does not match the "
            f"{duration} minutes the selected services take."
        )

    pet = store.get_pet(pet_id)
    if pet.owner_id != owner_id:
        raise NotFoundError(f"Pet not found: {pet_id}")

    groomer = store.get_groomer(groomer_id)
    opening, closing = operating_window(groomer.opening_hour, groomer.closing_hour, start)
    if start < opening or end > closing:
        raise OutOfHoursError(
            f"Reservation {format_interval(start, end)} is outside operating hours "
            f"({groomer.opening_hour}-{groomer.closing_hour})."
        )

    reservation = Reservation(
        id=str(uuid.uuid4()),
        groomer_id=groomer_id,
        pet_id=pet_id,
        owner_id=owner_id,
        services_json=[_service_snapshot(service) for service in services],
        start_time=start,
        end_time=end,
        status=RESERVATION_STATUS_CONFIRMED,
    )

    day_start, day_end = day_bounds(start)
    committed = store.run_atomic(
        groomer_id,
        day_start,
        day_end,
        lambda occupied: is_interval_free(start, end, occupied),
        reservation,
    )
    if not committed:
        logger.info(
            "Reservation rejected: slot taken groomer_id=%s slot=%s",
            groomer_id,
            format_interval(start, end),
        )
        raise SlotConflictError(
            f"Time slot {format_interval(start, end)} overlaps another reservation."
        )

    logger.info(
        "Reservation created reservation_id=%s groomer_id=%s pet_id=%s slot=%s",
        reservation.id,
        groomer_id,
        pet_id,
        format_interval(start, end),
    )
    return reservation


def serialize_reservation(reservation: Reservation) -> dict[str, Any]:
    return {
        "reservation_id": reservation.id,
        "groomer_id": reservation.groomer_id,
        "pet_id": reservation.pet_id,
        "owner_id": reservation.owner_id,
        "services": list(reservation.services_json or []),
        "start_time": reservation.start_time.isoformat(),
        "end_time": reservation.end_time.isoformat(),
        "interval": format_interval(reservation.start_time, reservation.end_time),
        "status": reservation.status,
    }


def _service_snapshot(service: Any) -> dict[str, Any]:
    return {
        "id": document_field(service, "id"),
        "name": document_field(service, "name"),
        "duration": int(document_field(service, "duration") or 0),
        "price": float(document_field(service, "price") or 0),
    }


def _parse_timestamp(value: datetime | str | None) -> datetime | None:
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    # Local wall-clock time at minute resolution.
    return value.replace(tzinfo=None, second=0, microsecond=0)
