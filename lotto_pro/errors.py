"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Conflict (e.g., unique constraint)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class UnauthorizedError(AppError):
    """Missing, malformed or expired bearer token."""

    def __init__(self, message: str = "Unauthorized", details: Any | None = None) -> None:
        super().__init__(code="unauthorized", message=message, status_code=401, details=details)


class ForbiddenError(AppError):
    """Authenticated, but not allowed."""

    def __init__(self, message: str = "Forbidden", details: Any | None = None) -> None:
        super().__init__(code="forbidden", message=message, status_code=403, details=details)


class StoreAccessError(AppError):
    """Store access denied; status is 401, 403 or 404 depending on the cause."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(code="store_access_denied", message=message, status_code=status_code)


# --- Scan errors -------------------------------------------------------------
#
# Every scan rejection is user-correctable and surfaces as a 400 with its own
# machine-readable code.


class ScanError(AppError):
    """Base class for rejected scans."""

    default_code = "scan_error"
    default_message = "Scan rejected"

    def __init__(self, message: str | None = None, details: Any | None = None) -> None:
        super().__init__(
            code=self.default_code,
            message=message or self.default_message,
            status_code=400,
            details=details,
        )


class InvalidFormatError(ScanError):
    default_code = "invalid_format"
    default_message = "Invalid barcode format"


class MissingFieldsError(ScanError):
    default_code = "missing_fields"
    default_message = "Provide either barcode_data or lottery_number, ticket_serial, and ticket_number"


class InvalidNumberError(ScanError):
    default_code = "invalid_number"
    default_message = "ticket_number must be a number"


class InvalidDirectionError(ScanError):
    default_code = "invalid_direction"
    default_message = 'Direction must be either "asc" or "desc"'


class OutOfRangeError(ScanError):
    default_code = "out_of_range"
    default_message = "Ticket number is outside the valid range"


class DirectionRequiredError(ScanError):
    default_code = "direction_required"
    default_message = "Direction is required for the first scan of a book"


class DirectionConflictError(ScanError):
    default_code = "direction_conflict"
    default_message = "Book direction is already set"


class BackwardMovementError(ScanError):
    default_code = "backward_movement"
    default_message = "Scanned ticket number moved backwards for an ascending book"


class ForwardMovementError(ScanError):
    default_code = "forward_movement"
    default_message = "Scanned ticket number moved forwards for a descending book"


class BookExhaustedError(ScanError):
    default_code = "book_exhausted"
    default_message = "All tickets have already been sold for this book"
