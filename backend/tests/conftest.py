import threading
import uuid
from datetime import datetime
from typing import Sequence

import pytest

from app.db.models import (
    RESERVATION_STATUS_CONFIRMED,
    Groomer,
    Pet,
    Reservation,
    Service,
)
from app.scheduling.errors import NotFoundError
from app.store.interface import DocumentStore, OccupancyPredicate


class FakeDocumentStore(DocumentStore):
    """In-memory store; ``run_atomic`` and status updates are serialized by a lock."""

    def __init__(self, groomers=(), services=(), pets=(), reservations=()):
        self.groomers = {g.id: g for g in groomers}
        self.services = {s.id: s for s in services}
        self.pets = {p.id: p for p in pets}
        self.reservations = {r.id: r for r in reservations}
        self.atomic_calls = 0
        self._lock = threading.Lock()

    def _with_id(self, row):
        if getattr(row, "id", None) is None:
            row.id = str(uuid.uuid4())
        return row

    def get_groomer(self, groomer_id: str) -> Groomer:
        if groomer_id not in self.groomers:
            raise NotFoundError(f"Groomer not found: {groomer_id}")
        return self.groomers[groomer_id]

    def list_groomers(self) -> list[Groomer]:
        return sorted(self.groomers.values(), key=lambda g: (g.name, g.id))

    def add_groomer(self, groomer: Groomer) -> Groomer:
        self._with_id(groomer)
        self.groomers[groomer.id] = groomer
        return groomer

    def list_services(self) -> list[Service]:
        return sorted(self.services.values(), key=lambda s: (s.name, s.id))

    def get_services(self, service_ids: Sequence[str]) -> list[Service]:
        missing = [service_id for service_id in service_ids if service_id not in self.services]
        if missing:
            raise NotFoundError(f"Service not found: {', '.join(missing)}")
        return [self.services[service_id] for service_id in service_ids]

    def add_service(self, service: Service) -> Service:
        self._with_id(service)
        self.services[service.id] = service
        return service

    def get_pet(self, pet_id: str) -> Pet:
        if pet_id not in self.pets:
            raise NotFoundError(f"Pet not found: {pet_id}")
        return self.pets[pet_id]

    def list_pets(self, owner_id: str) -> list[Pet]:
        return [p for p in self.pets.values() if p.owner_id == owner_id]

    def add_pet(self, pet: Pet) -> Pet:
        self._with_id(pet)
        self.pets[pet.id] = pet
        return pet

    def get_reservation(self, reservation_id: str) -> Reservation:
        if reservation_id not in self.reservations:
            raise NotFoundError(f"Reservation not found: {reservation_id}")
        return self.reservations[reservation_id]

    def list_reservations(self, owner_id: str, pet_id: str | None = None) -> list[Reservation]:
        rows = [
            r
            for r in self.reservations.values()
            if r.owner_id == owner_id and (not pet_id or r.pet_id == pet_id)
        ]
        return sorted(rows, key=lambda r: r.start_time, reverse=True)

    def list_confirmed_reservations(
        self,
        groomer_id: str,
        day_start: datetime,
        day_end: datetime,
    ) -> list[Reservation]:
        rows = [
            r
            for r in list(self.reservations.values())
            if r.groomer_id == groomer_id
            and r.status == RESERVATION_STATUS_CONFIRMED
            and day_start <= r.start_time < day_end
        ]
        return sorted(rows, key=lambda r: r.start_time)

    def run_atomic(
        self,
        groomer_id: str,
        day_start: datetime,
        day_end: datetime,
        predicate: OccupancyPredicate,
        reservation: Reservation,
    ) -> bool:
        with self._lock:
            self.atomic_calls += 1
            self.get_groomer(groomer_id)
            occupied = self.list_confirmed_reservations(groomer_id, day_start, day_end)
            if not predicate(occupied):
                return False
            self.reservations[reservation.id] = reservation
            return True

    def update_reservation_status(
        self,
        reservation_id: str,
        new_status: str,
        expected_status: str | None = None,
    ) -> Reservation:
        with self._lock:
            reservation = self.get_reservation(reservation_id)
            if expected_status is None or reservation.status == expected_status:
                reservation.status = new_status
            return reservation


def make_groomer(groomer_id="groomer-1", opening_hour="09:00", closing_hour="12:00"):
    return Groomer(
        id=groomer_id,
        name="Happy Paws",
        address="Calle Mayor 1",
        description="Dog grooming",
        lat=40.4,
        lng=-3.7,
        photo_url=None,
        opening_hour=opening_hour,
        closing_hour=closing_hour,
    )


def make_reservation(start, end, groomer_id="groomer-1", status="confirmed", owner_id="user-2"):
    return Reservation(
        id=str(uuid.uuid4()),
        groomer_id=groomer_id,
        pet_id="pet-other",
        owner_id=owner_id,
        services_json=[],
        start_time=start,
        end_time=end,
        status=status,
    )


@pytest.fixture
def store():
    return FakeDocumentStore(
        groomers=[make_groomer()],
        services=[
            Service(id="svc-bath", name="Bath", duration=30, price=20.0),
            Service(id="svc-cut", name="Haircut", duration=30, price=25.5),
            Service(id="svc-full", name="Full groom", duration=60, price=50.0),
            Service(id="svc-trim", name="Nail trim", duration=20, price=10.0),
        ],
        pets=[
            Pet(id="pet-1", owner_id="user-1", name="Luna", breed="Beagle"),
            Pet(id="pet-2", owner_id="user-1", name="Toby", breed="Poodle"),
            Pet(id="pet-other", owner_id="user-2", name="Rex", breed="Boxer"),
        ],
    )


@pytest.fixture
def add_reservation(store):
    def _add(start, end, **kwargs):
        reservation = make_reservation(start, end, **kwargs)
        store.reservations[reservation.id] = reservation
        return reservation

    return _add
