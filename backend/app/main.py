import json
import logging
import time
import uuid
from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.admin.catalog import (
    CreateGroomerArgs,
    CreateServiceArgs,
    create_groomer,
    create_service,
    serialize_groomer,
    serialize_service,
)
from app.config import LOG_LEVEL
from app.db.session import SessionLocal
from app.pets.registry import parse_create_pet_args, register_pet, serialize_pet
from app.reservations.check_availability import (
    check_availability,
    map_validation_error,
    parse_check_availability_args,
)
from app.reservations.create_reservation import (
    create_reservation,
    parse_create_reservation_args,
    resolve_chosen_interval,
    serialize_reservation,
)
from app.reservations.manage_reservation import (
    cancel_reservation,
    list_reservations,
    parse_list_reservations_args,
)
from app.scheduling.errors import BookingError
from app.security.dependencies import get_account_provider, require_admin_api_key
from app.store.interface import AccountProvider, DocumentStore
from app.store.sqlalchemy_store import SqlAlchemyDocumentStore


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=LOG_LEVEL, format="%(message)s")
    return logging.getLogger("groombook.backend")


logger = configure_logging()
app = FastAPI(title="GroomBook Backend")


def get_store() -> DocumentStore:
    return SqlAlchemyDocumentStore(session_factory=SessionLocal)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    start_time = time.perf_counter()

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    response.headers["x-request-id"] = request_id

    logger.info(
        json.dumps(
            {
                "event": "http_request",
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            }
        )
    )
    return response


def _booking_error_response(exc: BookingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


def _invalid_args_response(exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"ok": False, **map_validation_error(exc)})


def _auth_required_response() -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={
            "ok": False,
            "error_code": "AUTH_REQUIRED",
            "human_message": "No authenticated user.",
        },
    )


@app.get("/health")
async def health():
    return JSONResponse(content={"ok": True})


@app.post("/v1/admin/groomers", dependencies=[Depends(require_admin_api_key)])
def admin_create_groomer(
    payload: dict[str, Any],
    store: DocumentStore = Depends(get_store),
) -> JSONResponse:
    try:
        args = CreateGroomerArgs.model_validate(payload)
    except ValidationError as exc:
        return _invalid_args_response(exc)

    try:
        groomer = create_groomer(store=store, args=args)
    except BookingError as exc:
        return _booking_error_response(exc)
    return JSONResponse(content={"ok": True, "data": {"groomer": serialize_groomer(groomer)}})


@app.post("/v1/admin/services", dependencies=[Depends(require_admin_api_key)])
def admin_create_service(
    payload: dict[str, Any],
    store: DocumentStore = Depends(get_store),
) -> JSONResponse:
    try:
        args = CreateServiceArgs.model_validate(payload)
    except ValidationError as exc:
        return _invalid_args_response(exc)

    try:
        service = create_service(store=store, args=args)
    except BookingError as exc:
        return _booking_error_response(exc)
    return JSONResponse(content={"ok": True, "data": {"service": serialize_service(service)}})


@app.get("/v1/groomers")
def list_groomers(store: DocumentStore = Depends(get_store)) -> JSONResponse:
    try:
        groomers = store.list_groomers()
    except BookingError as exc:
        return _booking_error_response(exc)
    return JSONResponse(
        content={"ok": True, "data": {"groomers": [serialize_groomer(g) for g in groomers]}}
    )


@app.get("/v1/groomers/{groomer_id}")
def get_groomer(groomer_id: str, store: DocumentStore = Depends(get_store)) -> JSONResponse:
    try:
        groomer = store.get_groomer(groomer_id)
    except BookingError as exc:
        return _booking_error_response(exc)
    return JSONResponse(content={"ok": True, "data": {"groomer": serialize_groomer(groomer)}})


@app.get("/v1/services")
def list_services(store: DocumentStore = Depends(get_store)) -> JSONResponse:
    try:
        services = store.list_services()
    except BookingError as exc:
        return _booking_error_response(exc)
    return JSONResponse(
        content={"ok": True, "data": {"services": [serialize_service(s) for s in services]}}
    )


@app.post("/v1/pets")
def create_pet(
    payload: dict[str, Any],
    store: DocumentStore = Depends(get_store),
    accounts: AccountProvider = Depends(get_account_provider),
) -> JSONResponse:
    owner_id = accounts.current_user_id()
    if owner_id is None:
        return _auth_required_response()

    try:
        args = parse_create_pet_args(payload)
    except ValidationError as exc:
        return _invalid_args_response(exc)

    try:
        pet = register_pet(store=store, owner_id=owner_id, args=args)
    except BookingError as exc:
        return _booking_error_response(exc)
    return JSONResponse(content={"ok": True, "data": {"pet": serialize_pet(pet)}})


@app.get("/v1/pets")
def list_pets(
    store: DocumentStore = Depends(get_store),
    accounts: AccountProvider = Depends(get_account_provider),
) -> JSONResponse:
    owner_id = accounts.current_user_id()
    if owner_id is None:
        return _auth_required_response()

    try:
        pets = store.list_pets(owner_id)
    except BookingError as exc:
        return _booking_error_response(exc)
    return JSONResponse(content={"ok": True, "data": {"pets": [serialize_pet(p) for p in pets]}})


@app.get("/v1/groomers/{groomer_id}/availability")
def groomer_availability(
    groomer_id: str,
    date: str | None = None,
    service_ids: list[str] = Query(default=[]),
    store: DocumentStore = Depends(get_store),
) -> JSONResponse:
    try:
        args = parse_check_availability_args({"date": date, "service_ids": service_ids})
    except ValidationError as exc:
        return _invalid_args_response(exc)

    try:
        slots = check_availability(store=store, groomer_id=groomer_id, args=args)
    except BookingError as exc:
        response = exc.to_response()
        response["data"] = {"slots": []}
        return JSONResponse(status_code=exc.status_code, content=response)

    return JSONResponse(
        content={
            "ok": True,
            "data": {
                "result": "AVAILABLE" if slots else "NO_AVAILABILITY",
                "slots": [slot.to_dict() for slot in slots],
            },
        }
    )


@app.post("/v1/reservations")
def create_reservation_endpoint(
    payload: dict[str, Any],
    store: DocumentStore = Depends(get_store),
    accounts: AccountProvider = Depends(get_account_provider),
) -> JSONResponse:
    owner_id = accounts.current_user_id()
    if owner_id is None:
        return _auth_required_response()

    try:
        args = parse_create_reservation_args(payload)
    except ValidationError as exc:
        return _invalid_args_response(exc)

    try:
        chosen_start, chosen_end = resolve_chosen_interval(args)
        services = store.get_services(args.service_ids) if args.service_ids else []
        reservation = create_reservation(
            store=store,
            groomer_id=args.groomer_id,
            pet_id=args.pet_id,
            owner_id=owner_id,
            services=services,
            chosen_start=chosen_start,
            chosen_end=chosen_end,
        )
    except BookingError as exc:
        return _booking_error_response(exc)

    return JSONResponse(
        status_code=201,
        content={"ok": True, "data": {"reservation": serialize_reservation(reservation)}},
    )


@app.get("/v1/reservations")
def list_reservations_endpoint(
    pet_id: str | None = None,
    store: DocumentStore = Depends(get_store),
    accounts: AccountProvider = Depends(get_account_provider),
) -> JSONResponse:
    owner_id = accounts.current_user_id()
    if owner_id is None:
        return _auth_required_response()

    args = parse_list_reservations_args({"pet_id": pet_id})
    try:
        reservations = list_reservations(store=store, owner_id=owner_id, args=args)
    except BookingError as exc:
        return _booking_error_response(exc)
    return JSONResponse(
        content={
            "ok": True,
            "data": {"reservations": [serialize_reservation(r) for r in reservations]},
        }
    )


@app.post("/v1/reservations/{reservation_id}/cancel")
def cancel_reservation_endpoint(
    reservation_id: str,
    store: DocumentStore = Depends(get_store),
    accounts: AccountProvider = Depends(get_account_provider),
) -> JSONResponse:
    owner_id = accounts.current_user_id()
    if owner_id is None:
        return _auth_required_response()

    try:
        reservation = cancel_reservation(
            store=store,
            reservation_id=reservation_id,
            owner_id=owner_id,
        )
    except BookingError as exc:
        return _booking_error_response(exc)
    return JSONResponse(
        content={"ok": True, "data": {"reservation": serialize_reservation(reservation)}}
    )
