from app.admin.catalog import (
    CreateGroomerArgs,
    CreateServiceArgs,
    create_groomer,
    create_service,
    serialize_groomer,
    serialize_service,
)

__all__ = [
    "CreateGroomerArgs",
    "CreateServiceArgs",
    "create_groomer",
    "create_service",
    "serialize_groomer",
    "serialize_service",
]
