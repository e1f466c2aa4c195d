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


class InvalidArgumentError(AppError):
    """A draw argument is out of range (e.g. count < 1)."""

    def __init__(self, message: str = "Invalid argument", details: Any | None = None) -> None:
        super().__init__(code="invalid_argument", message=message, status_code=400, details=details)


class InsufficientInventoryError(AppError):
    """Requested count exceeds the prize's remaining quantity."""

    def __init__(self, remaining: int) -> None:
        super().__init__(
            code="insufficient_inventory",
            message=f"Not enough prizes left, remaining: {remaining}",
            status_code=400,
            details={"remaining": remaining},
        )
        self.remaining = remaining


class InsufficientParticipantsError(AppError):
    """Requested count exceeds the number of eligible participants."""

    def __init__(self, available: int) -> None:
        super().__init__(
            code="insufficient_participants",
            message=f"Not enough eligible participants, available: {available}",
            status_code=400,
            details={"available": available},
        )
        self.available = available


class ConflictError(AppError):
    """Conflict (e.g., unique constraint)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class ConcurrencyConflictError(AppError):
    """Another writer changed the same draw state; the request may be retried."""

    def __init__(self, message: str = "Concurrent update, please retry", details: Any | None = None) -> None:
        super().__init__(code="concurrency_conflict", message=message, status_code=409, details=details)
