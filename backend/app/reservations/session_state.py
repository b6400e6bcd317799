from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any

from app.db.models import Reservation
from app.reservations.create_reservation import create_reservation
from app.reservations.manage_reservation import cancel_reservation
from app.scheduling.availability import AvailableSlot, find_available_slots
from app.scheduling.errors import BookingError, ReservationValidationError
from app.store.interface import DocumentStore


logger = logging.getLogger("groombook.reservations.session")


class SlotBoard:
    """Availability and booking state for one client session on one groomer.

    Store calls run in worker threads. Only the most recent ``refresh`` may publish
    its result; older in-flight results are dropped when they arrive.
    """

    def __init__(self, store: DocumentStore, groomer_id: str, owner_id: str | None) -> None:
        self._store = store
        self._groomer_id = groomer_id
        self._owner_id = owner_id
        self._generation = 0
        self._selection: tuple[date, list[Any]] | None = None

        self.available_slots: list[AvailableSlot] = []
        self.error_message: str | None = None
        self.is_loading = False

    async def refresh(self, day: date, services: list[Any]) -> list[AvailableSlot]:
        self._generation += 1
        generation = self._generation
        self._selection = (day, list(services))
        self.is_loading = True

        try:
            slots = await asyncio.to_thread(
                find_available_slots,
                self._store,
                self._groomer_id,
                day,
                list(services),
            )
        except BookingError as exc:
            if generation != self._generation:
                return self.available_slots
            logger.warning(
                "Availability refresh failed groomer_id=%s error_code=%s",
                self._groomer_id,
                exc.error_code,
            )
            self.available_slots = []
            self.error_message = str(exc)
            return []
        finally:
            if generation == self._generation:
                self.is_loading = False

        if generation != self._generation:
            return self.available_slots
        self.available_slots = slots
        self.error_message = None
        return slots

    async def book(self, pet_id: str | None, slot: AvailableSlot | None) -> Reservation | None:
        """Commit the chosen slot; on failure keep the offered slots and set the message."""
        if self._selection is None or slot is None:
            self.error_message = str(ReservationValidationError("Please select a time slot."))
            return None

        day, services = self._selection
        try:
            reservation = await asyncio.to_thread(
                create_reservation,
                self._store,
                self._groomer_id,
                pet_id,
                self._owner_id,
                services,
                slot.start,
                slot.end,
            )
        except BookingError as exc:
            self.error_message = str(exc)
            return None

        self.error_message = None
        await self.refresh(day, services)
        return reservation

    async def cancel(self, reservation_id: str) -> Reservation | None:
        try:
            reservation = await asyncio.to_thread(
                cancel_reservation,
                self._store,
                reservation_id,
                self._owner_id,
            )
        except BookingError as exc:
            self.error_message = str(exc)
            return None

        if self._selection is not None:
            day, services = self._selection
            await self.refresh(day, services)
        return reservation
