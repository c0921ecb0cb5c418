# ur_core/subscriptions/errors.py
from __future__ import annotations

from ur_core.common.errors import (
    ConflictError,
    InvalidOperationError,
    InvalidStateError,
    NotFoundError,
)


class AssignmentNotFound(NotFoundError):
    kind = "ASSIGNMENT_NOT_FOUND"
    default_message = "Assignment not found."


class ServiceNotFoundOrInactive(NotFoundError):
    kind = "SERVICE_NOT_FOUND_OR_INACTIVE"
    default_message = "Service not found or inactive."


class LinkNotFound(NotFoundError):
    kind = "LINK_NOT_FOUND"
    default_message = "The service is not subscribed for this assignment."


class AlreadyActive(ConflictError):
    kind = "ALREADY_ACTIVE"
    default_message = "The service is already active for this assignment."


class AlreadyPending(ConflictError):
    kind = "ALREADY_PENDING"
    default_message = "The service is already scheduled for the next billing cycle."


class BaseServiceImmutable(InvalidOperationError):
    kind = "BASE_SERVICE_IMMUTABLE"
    default_message = "Base services are included with the unit and cannot be added or removed."


class NotOffered(InvalidOperationError):
    kind = "NOT_OFFERED"
    default_message = "The unit does not offer this service."


class TenantEmailMissing(InvalidOperationError):
    kind = "TENANT_EMAIL_MISSING"
    default_message = "The tenant has no email address on file."


class InvalidStateTransition(InvalidStateError):
    kind = "INVALID_STATE_TRANSITION"
