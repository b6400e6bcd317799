from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from app.db.models import RESERVATION_STATUS_CANCELLED, RESERVATION_STATUS_CONFIRMED, Reservation
from app.scheduling.errors import NotFoundError
from app.store.interface import DocumentStore


logger = logging.getLogger("groombook.reservations.manage")


class ListReservationsArgs(BaseModel):
    pet_id: str | None = None


def parse_list_reservations_args(raw_args: dict[str, Any]) -> ListReservationsArgs:
    return ListReservationsArgs.model_validate(raw_args)


def list_reservations(
    store: DocumentStore,
    owner_id: str,
    args: ListReservationsArgs,
) -> list[Reservation]:
    return store.list_reservations(owner_id=owner_id, pet_id=args.pet_id or None)


def cancel_reservation(
    store: DocumentStore,
    reservation_id: str,
    owner_id: str | None = None,
) -> Reservation:
    """Move a confirmed reservation to cancelled.

    Cancelling twice is a no-op; a cancelled reservation is never reactivated. When
    ``owner_id`` is given, reservations of other accounts are reported as missing.
    """
    reservation = store.get_reservation(reservation_id)
    if owner_id is not None and reservation.owner_id != owner_id:
        raise NotFoundError(f"Reservation not found: {reservation_id}")

    if str(reservation.status).lower() == RESERVATION_STATUS_CANCELLED:
        return reservation

    updated = store.update_reservation_status(
        reservation_id,
        RESERVATION_STATUS_CANCELLED,
        expected_status=RESERVATION_STATUS_CONFIRMED,
    )
    logger.info(
        "Reservation cancelled reservation_id=%s groomer_id=%s status=%s",
        updated.id,
        updated.groomer_id,
        updated.status,
    )
    return updated
