"""
api/errors.py
-------------
Bridge between service results and HTTP responses.

unwrap() hands back the value of a Success and raises ServiceFailure for a
Failure; the handler registered in main.py renders it as

    {"detail": "<message>", "errors": {"<field>": ["<message>", ...]}}

with the status code matching the failure kind.

Bodies that fail schema parsing (missing fields, a string where a number is
expected) are rendered in the same shape by request_validation_handler, with
fields keyed by their dotted location, e.g. "devices.1.power_watts".
"""

from typing import Any, Sequence, TypeVar

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotel_energy.core.logging import get_logger
from hotel_energy.core.result import Failure, FailureKind, Result

logger = get_logger(__name__)

T = TypeVar("T")

REQUEST_INVALID = "Invalid request data"

STATUS_BY_KIND = {
    FailureKind.validation: 422,
    FailureKind.conflict: status.HTTP_409_CONFLICT,
    FailureKind.not_found: status.HTTP_404_NOT_FOUND,
}

_SOURCES = ("body", "query", "path", "header")


class ServiceFailure(Exception):
    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.message)
        self.failure = failure


def unwrap(result: Result[T]) -> T:
    if isinstance(result, Failure):
        raise ServiceFailure(result)
    return result.value


def field_key(loc: Sequence[Any]) -> str:
    """("body", "devices", 1, "power_watts") -> "devices.1.power_watts"."""
    parts = list(loc)
    if parts and parts[0] in _SOURCES:
        parts = parts[1:]
    # A missing or unparsable body has no field below the source
    return ".".join(str(part) for part in parts) or "body"


async def service_failure_handler(request: Request, exc: ServiceFailure) -> JSONResponse:
    failure = exc.failure
    logger.info(
        "Request rejected",
        kind=failure.kind.value,
        reason=failure.message,
    )
    return JSONResponse(
        status_code=STATUS_BY_KIND[failure.kind],
        content={"detail": failure.message, "errors": failure.field_errors},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(field_key(error["loc"]), []).append(error["msg"])

    logger.info(
        "Request rejected",
        kind=FailureKind.validation.value,
        reason=REQUEST_INVALID,
        fields=sorted(errors),
    )
    return JSONResponse(
        status_code=STATUS_BY_KIND[FailureKind.validation],
        content={"detail": REQUEST_INVALID, "errors": errors},
    )
