"""Domain errors raised by the service layer and mapped to HTTP responses in main."""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base class: carries a user-facing message and the HTTP status to report."""

    status_code = 500
    kind = "InternalError"

    def __init__(self, message: str, data: Any = None):
        super().__init__(message)
        self.message = message
        self.data = data


class ValidationError(ServiceError):
    """Missing or malformed field, bad date/time, or a reference to nothing."""

    status_code = 400
    kind = "ValidationError"


class NotFoundError(ServiceError):
    status_code = 404
    kind = "NotFound"


class ConflictError(ServiceError):
    """Double booking or duplicate unique value."""

    status_code = 409
    kind = "Conflict"


class ForbiddenError(ServiceError):
    status_code = 403
    kind = "Forbidden"


class InvalidStateError(ServiceError):
    """The entity is in a state that does not support the operation."""

    status_code = 400
    kind = "InvalidState"
