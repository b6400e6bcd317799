from app.reservations.check_availability import (
    CheckAvailabilityArgs,
    check_availability,
    map_validation_error,
    parse_check_availability_args,
)
from app.reservations.create_reservation import (
    CreateReservationArgs,
    create_reservation,
    parse_create_reservation_args,
    resolve_chosen_interval,
    serialize_reservation,
)
from app.reservations.manage_reservation import (
    ListReservationsArgs,
    cancel_reservation,
    list_reservations,
    parse_list_reservations_args,
)
from app.reservations.session_state import SlotBoard

__all__ = [
    "CheckAvailabilityArgs",
    "check_availability",
    "map_validation_error",
    "parse_check_availability_args",
    "CreateReservationArgs",
    "create_reservation",
    "parse_create_reservation_args",
    "resolve_chosen_interval",
    "serialize_reservation",
    "ListReservationsArgs",
    "cancel_reservation",
    "list_reservations",
    "parse_list_reservations_args",
    "SlotBoard",
]
