from app.db.base import Base
from app.db.models import (
    RESERVATION_STATUS_CANCELLED,
    RESERVATION_STATUS_CONFIRMED,
    Groomer,
    Pet,
    Reservation,
    Service,
)

__all__ = [
    "Base",
    "Groomer",
    "Pet",
    "Reservation",
    "Service",
    "RESERVATION_STATUS_CANCELLED",
    "RESERVATION_STATUS_CONFIRMED",
]
