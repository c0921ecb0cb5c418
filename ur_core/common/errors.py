# ur_core/common/errors.py
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """
    Base class for business-rule failures raised by services.

    `kind` is a stable, machine-checkable identifier (e.g. "ALREADY_ACTIVE").
    Services never depend on DRF; the API exception handler maps each family
    below to an HTTP status.
    """
    kind = "DOMAIN_ERROR"
    default_message = "Operation not allowed."

    def __init__(self, message: str | None = None, *, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class NotFoundError(DomainError):
    kind = "NOT_FOUND"
    default_message = "Resource not found."


class ConflictError(DomainError):
    kind = "CONFLICT"
    default_message = "Conflict."


class InvalidOperationError(DomainError):
    kind = "INVALID_OPERATION"
    default_message = "Invalid operation."


class InvalidStateError(DomainError):
    kind = "INVALID_STATE_TRANSITION"
    default_message = "Operation not allowed in the current state."
