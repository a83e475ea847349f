"""Domain errors for booking admission.

Booking errors carry a stable code, a short title and a user-safe message so
the HTTP layer can surface the first violated rule verbatim.
"""

from enum import StrEnum

GENERIC_RETRY_MESSAGE = "Unable to process your request right now."


class ErrorCode(StrEnum):
    LOGIN_REQUIRED = "LOGIN_REQUIRED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SLOT_UNAVAILABLE = "SLOT_UNAVAILABLE"
    AVAILABILITY_CHECK_FAILED = "AVAILABILITY_CHECK_FAILED"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"
    INVOICE_CREATION_FAILED = "INVOICE_CREATION_FAILED"


class MalformedTimeError(ValueError):
    """Raised when a value is not a zero-padded "HH:MM" wall-clock time."""


class StoreError(Exception):
    """Raised by repositories when the relational store cannot serve a call."""


class GatewayError(Exception):
    """Raised by remote collaborators (notification RPC, invoice service)."""


class BookingError(Exception):
    code: ErrorCode = ErrorCode.VALIDATION_ERROR
    title: str = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class LoginRequired(BookingError):
    code = ErrorCode.LOGIN_REQUIRED
    title = "Login Required"

    def __init__(self) -> None:
        super().__init__("Please login to book a venue.")


class ValidationError(BookingError):
    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, field: str, message: str, *, title: str = "Invalid Booking") -> None:
        super().__init__(message)
        self.field = field
        self.title = title


class SlotUnavailable(BookingError):
    code = ErrorCode.SLOT_UNAVAILABLE
    title = "Unavailable"

    def __init__(self) -> None:
        super().__init__("Those hours are already booked for this date.")


class AvailabilityCheckFailed(BookingError):
    code = ErrorCode.AVAILABILITY_CHECK_FAILED

    def __init__(self) -> None:
        super().__init__(GENERIC_RETRY_MESSAGE)


class PersistenceFailed(BookingError):
    code = ErrorCode.PERSISTENCE_FAILED

    def __init__(self) -> None:
        super().__init__(GENERIC_RETRY_MESSAGE)


class NotificationFailed(BookingError):
    """Non-fatal: logged by the admission protocol, never shown to the user."""

    code = ErrorCode.NOTIFICATION_FAILED
    title = "Notification Failed"


class InvoiceCreationFailed(BookingError):
    code = ErrorCode.INVOICE_CREATION_FAILED
    title = "Booking Created"

    def __init__(self) -> None:
        super().__init__(
            "We could not start the payment automatically. "
            "Please contact support to complete your reservation."
        )
