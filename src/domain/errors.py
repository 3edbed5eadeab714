from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base class for expected failures raised by the service layer."""


class NotFoundError(ServiceError):
    pass


class ForbiddenError(ServiceError):
    pass


class ConflictError(ServiceError):
    pass


class ValidationFailed(ServiceError):
    """Input rejected with one message per offending field."""

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))


_HTTP_STATUS: dict[type[ServiceError], int] = {
    NotFoundError: 404,
    ForbiddenError: 403,
    ConflictError: 409,
    ValidationFailed: 422,
}


def service_error_http_status(exc: ServiceError) -> int:
    for error_type, status_code in _HTTP_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


def service_error_detail(exc: ServiceError) -> Any:
    if isinstance(exc, ValidationFailed):
        return {"type": "validation_failed", "errors": exc.errors}
    return str(exc)
