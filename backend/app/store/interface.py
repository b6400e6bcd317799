from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Sequence

from app.db.models import Groomer, Pet, Reservation, Service


OccupancyPredicate = Callable[[Sequence[Reservation]], bool]


class DocumentStore(ABC):
    """Persistence contract shared by the scheduling core and the HTTP layer.

    Implementations raise ``NotFoundError`` for absent entities and wrap transport
    failures in ``StoreError``.
    """

    @abstractmethod
    def get_groomer(self, groomer_id: str) -> Groomer: ...

    @abstractmethod
    def list_groomers(self) -> list[Groomer]: ...

    @abstractmethod
    def add_groomer(self, groomer: Groomer) -> Groomer: ...

    @abstractmethod
    def list_services(self) -> list[Service]: ...

    @abstractmethod
    def get_services(self, service_ids: Sequence[str]) -> list[Service]:
        """Return services in the requested order; ``NotFoundError`` if any is missing."""

    @abstractmethod
    def add_service(self, service: Service) -> Service: ...

    @abstractmethod
    def get_pet(self, pet_id: str) -> Pet: ...

    @abstractmethod
    def list_pets(self, owner_id: str) -> list[Pet]: ...

    @abstractmethod
    def add_pet(self, pet: Pet) -> Pet: ...

    @abstractmethod
    def get_reservation(self, reservation_id: str) -> Reservation: ...

    @abstractmethod
    def list_reservations(self, owner_id: str, pet_id: str | None = None) -> list[Reservation]: ...

    @abstractmethod
    def list_confirmed_reservations(
        self,
        groomer_id: str,
        day_start: datetime,
        day_end: datetime,
    ) -> list[Reservation]:
        """Confirmed reservations of a groomer starting in ``[day_start, day_end)``."""

    @abstractmethod
    def run_atomic(
        self,
        groomer_id: str,
        day_start: datetime,
        day_end: datetime,
        predicate: OccupancyPredicate,
        reservation: Reservation,
    ) -> bool:
        """Re-read the day's confirmed reservations and insert ``reservation`` iff
        ``predicate(occupied)`` holds, as one serialized unit per groomer.

        Returns False when the predicate rejects. May raise ``SlotConflictError`` when a
        concurrent writer wins.
        """

    @abstractmethod
    def update_reservation_status(
        self,
        reservation_id: str,
        new_status: str,
        expected_status: str | None = None,
    ) -> Reservation:
        """Set the status; when ``expected_status`` is given, only write if the current
        status matches it. Returns the reservation as stored afterwards."""


class AccountProvider(ABC):
    @abstractmethod
    def current_user_id(self) -> str | None: ...
