from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from app.scheduling.availability import AvailableSlot, find_available_slots
from app.store.interface import DocumentStore


class CheckAvailabilityArgs(BaseModel):
    day: date = Field(alias="date")
    service_ids: list[str] = Field(default_factory=list)


def parse_check_availability_args(raw_args: dict[str, Any]) -> CheckAvailabilityArgs:
    return CheckAvailabilityArgs.model_validate(raw_args)


def check_availability(
    store: DocumentStore,
    groomer_id: str,
    args: CheckAvailabilityArgs,
) -> list[AvailableSlot]:
    if not args.service_ids:
        return []
    services = store.get_services(args.service_ids)
    return find_available_slots(store, groomer_id, args.day, services)


def map_validation_error(error: ValidationError) -> dict[str, str]:
    return {
        "error_code": "INVALID_ARGS",
        "human_message": f"Invalid args: {error.errors()[0]['msg']}",
    }
