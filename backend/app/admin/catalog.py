from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.db.models import Groomer, Service
from app.scheduling.clock import minutes_since_midnight, parse_clock_time
from app.scheduling.errors import FormatError
from app.store.interface import DocumentStore


class CreateGroomerArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    description: str = Field(min_length=1)
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    photo_url: str | None = None
    opening_hour: str
    closing_hour: str

    @field_validator("opening_hour", "closing_hour")
    @classmethod
    def validate_clock_time(cls, value: str) -> str:
        try:
            parse_clock_time(value)
        except FormatError as exc:
            raise ValueError(f"{value!r} is not a valid HH:mm time") from exc
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "CreateGroomerArgs":
        opening = minutes_since_midnight(parse_clock_time(self.opening_hour))
        closing = minutes_since_midnight(parse_clock_time(self.closing_hour))
        if opening >= closing:
            raise ValueError("Opening hour must be before closing hour.")
        return self


class CreateServiceArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    duration: int = Field(gt=0)
    price: float = Field(ge=0)


def create_groomer(store: DocumentStore, args: CreateGroomerArgs) -> Groomer:
    groomer = Groomer(
        name=args.name,
        address=args.address,
        description=args.description,
        lat=args.lat,
        lng=args.lng,
        photo_url=args.photo_url,
        opening_hour=args.opening_hour,
        closing_hour=args.closing_hour,
    )
    return store.add_groomer(groomer)


def create_service(store: DocumentStore, args: CreateServiceArgs) -> Service:
    service = Service(name=args.name, duration=args.duration, price=args.price)
    return store.add_service(service)


def serialize_groomer(groomer: Groomer) -> dict[str, Any]:
    return {
        "id": groomer.id,
        "name": groomer.name,
        "address": groomer.address,
        "description": groomer.description,
        "lat": groomer.lat,
        "lng": groomer.lng,
        "photo_url": groomer.photo_url,
        "opening_hour": groomer.opening_hour,
        "closing_hour": groomer.closing_hour,
    }


def serialize_service(service: Service) -> dict[str, Any]:
    return {
        "id": service.id,
        "name": service.name,
        "duration": service.duration,
        "price": service.price,
    }
