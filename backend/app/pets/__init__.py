from app.pets.registry import CreatePetArgs, parse_create_pet_args, register_pet, serialize_pet

__all__ = [
    "CreatePetArgs",
    "parse_create_pet_args",
    "register_pet",
    "serialize_pet",
]
