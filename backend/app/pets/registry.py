from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from app.db.models import Pet
from app.store.interface import DocumentStore


class CreatePetArgs(BaseModel):
    name: str = Field(min_length=1)
    breed: str = Field(min_length=1)
    notes: str | None = None
    photo_url: str | None = None


def parse_create_pet_args(raw_args: dict[str, Any]) -> CreatePetArgs:
    return CreatePetArgs.model_validate(raw_args)


def register_pet(store: DocumentStore, owner_id: str, args: CreatePetArgs) -> Pet:
    pet = Pet(
        owner_id=owner_id,
        name=args.name.strip(),
        breed=args.breed.strip(),
        notes=(args.notes or "").strip() or None,
        photo_url=args.photo_url,
    )
    return store.add_pet(pet)


def serialize_pet(pet: Pet) -> dict[str, Any]:
    return {
        "id": pet.id,
        "owner_id": pet.owner_id,
        "name": pet.name,
        "breed": pet.breed,
        "notes": pet.notes,
        "photo_url": pet.photo_url,
    }
