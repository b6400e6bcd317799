from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models import RESERVATION_STATUS_CONFIRMED, Groomer, Pet, Reservation, Service
from app.scheduling.errors import NotFoundError, StoreError
from app.store.interface import DocumentStore, OccupancyPredicate


logger = logging.getLogger("groombook.store")


class SqlAlchemyDocumentStore(DocumentStore):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Store operation failed: %s", operation)
            raise StoreError(f"Temporary issue during {operation}.") from exc
        finally:
            db.close()

    def _add(self, row, operation: str):
        with self._session(operation) as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            return row

    def get_groomer(self, groomer_id: str) -> Groomer:
        with self._session("groomer lookup") as db:
            groomer = db.get(Groomer, groomer_id)
            if groomer is None:
                raise NotFoundError(f"Groomer not found: {groomer_id}")
            return groomer

    def list_groomers(self) -> list[Groomer]:
        with self._session("groomer listing") as db:
            return db.query(Groomer).order_by(Groomer.name, Groomer.id).all()

    def add_groomer(self, groomer: Groomer) -> Groomer:
        return self._add(groomer, "groomer creation")

    def list_services(self) -> list[Service]:
        with self._session("service listing") as db:
            return db.query(Service).order_by(Service.name, Service.id).all()

    def get_services(self, service_ids: Sequence[str]) -> list[Service]:
        with self._session("service lookup") as db:
            rows = db.query(Service).filter(Service.id.in_(list(service_ids))).all()
        by_id = {row.id: row for row in rows}
        missing = [service_id for service_id in service_ids if service_id not in by_id]
        if missing:
            raise NotFoundError(f"Service not found: {', '.join(missing)}")
        return [by_id[service_id] for service_id in service_ids]

    def add_service(self, service: Service) -> Service:
        return self._add(service, "service creation")

    def get_pet(self, pet_id: str) -> Pet:
        with self._session("pet lookup") as db:
            pet = db.get(Pet, pet_id)
            if pet is None:
                raise NotFoundError(f"Pet not found: {pet_id}")
            return pet

    def list_pets(self, owner_id: str) -> list[Pet]:
        with self._session("pet listing") as db:
            return (
                db.query(Pet)
                .filter(Pet.owner_id == owner_id)
                .order_by(Pet.created_at, Pet.id)
                .all()
            )

    def add_pet(self, pet: Pet) -> Pet:
        return self._add(pet, "pet creation")

    def get_reservation(self, reservation_id: str) -> Reservation:
        with self._session("reservation lookup") as db:
            reservation = db.get(Reservation, reservation_id)
            if reservation is None:
                raise NotFoundError(f"Reservation not found: {reservation_id}")
            return reservation

    def list_reservations(self, owner_id: str, pet_id: str | None = None) -> list[Reservation]:
        with self._session("reservation listing") as db:
            query = db.query(Reservation).filter(Reservation.owner_id == owner_id)
            if pet_id:
                query = query.filter(Reservation.pet_id == pet_id)
            return query.order_by(Reservation.start_time.desc()).all()

    def list_confirmed_reservations(
        self,
        groomer_id: str,
        day_start: datetime,
        day_end: datetime,
    ) -> list[Reservation]:
        with self._session("reservation listing") as db:
            return _confirmed_for_day(db, groomer_id, day_start, day_end).all()

    def run_atomic(
        self,
        groomer_id: str,
        day_start: datetime,
        day_end: datetime,
        predicate: OccupancyPredicate,
        reservation: Reservation,
    ) -> bool:
        with self._session("reservation commit") as db:
            with db.begin():
                _take_write_lock(db)
                # The groomer row lock serializes commits for the same groomer.
                groomer = (
                    db.query(Groomer)
                    .filter(Groomer.id == groomer_id)
                    .with_for_update()
                    .first()
                )
                if groomer is None:
                    raise NotFoundError(f"Groomer not found: {groomer_id}")

                occupied = _confirmed_for_day(db, groomer_id, day_start, day_end).all()
                if not predicate(occupied):
                    return False
                db.add(reservation)
            db.refresh(reservation)
            return True

    def update_reservation_status(
        self,
        reservation_id: str,
        new_status: str,
        expected_status: str | None = None,
    ) -> Reservation:
        with self._session("reservation status update") as db:
            with db.begin():
                _take_write_lock(db)
                reservation = db.get(Reservation, reservation_id, with_for_update=True)
                if reservation is None:
                    raise NotFoundError(f"Reservation not found: {reservation_id}")
                if expected_status is None or reservation.status == expected_status:
                    reservation.status = new_status
            return reservation


def _confirmed_for_day(db: Session, groomer_id: str, day_start: datetime, day_end: datetime):
    return (
        db.query(Reservation)
        .filter(Reservation.groomer_id == groomer_id)
        .filter(Reservation.status == RESERVATION_STATUS_CONFIRMED)
        .filter(Reservation.start_time >= day_start)
        .filter(Reservation.start_time < day_end)
        .order_by(Reservation.start_time)
    )


def _take_write_lock(db: Session) -> None:
    """SQLite has no row locks; take the database write lock before reading instead."""
    if db.get_bind().dialect.name == "sqlite":
        db.connection().exec_driver_sql("BEGIN IMMEDIATE")
