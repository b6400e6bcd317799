from __future__ import annotations


class BookingError(Exception):
    error_code = "BOOKING_ERROR"
    status_code = 400

    def to_response(self) -> dict[str, object]:
        return {
            "ok": False,
            "error_code": self.error_code,
            "human_message": str(self),
        }


class FormatError(BookingError, ValueError):
    error_code = "INVALID_TIME_FORMAT"


class InvalidScheduleError(BookingError, ValueError):
    error_code = "INVALID_SCHEDULE"


class ReservationValidationError(BookingError, ValueError):
    error_code = "VALIDATION_ERROR"


class OutOfHoursError(BookingError):
    error_code = "OUT_OF_HOURS"
    status_code = 422


class SlotConflictError(BookingError):
    error_code = "SLOT_CONFLICT"
    status_code = 409


class NotFoundError(BookingError, LookupError):
    error_code = "NOT_FOUND"
    status_code = 404


class StoreError(BookingError):
    """Persistence failure; the original exception is chained as ``__cause__``."""

    error_code = "STORE_ERROR"
    status_code = 503
