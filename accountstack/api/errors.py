"""Mapping of domain exceptions to HTTP error responses"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from accountstack.api.dependencies import get_request_id
from accountstack.domain.exceptions import (
    DomainException,
    FeatureDisabledError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

# exception type -> (status code, error code)
ERROR_STATUS = {
    NotFoundError: (404, "not_found"),
    ForbiddenError: (403, "forbidden"),
    UnauthenticatedError: (401, "unauthorized"),
    FeatureDisabledError: (503, "service_unavailable"),
    InvalidInputError: (400, "bad_request"),
}


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    for exc_type, (status_code, error) in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return error_response(status_code, error, str(exc))

    # InternalError and any other domain fault
    logger.error(
        f"Internal error: {exc}",
        extra={
            "request_id": get_request_id(request),
            "path": request.url.path,
            "user_id": getattr(request.state, "user_id", None),
        },
    )
    return error_response(500, "internal_error", "Internal server error")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Invalid request", extra={"request_id": get_request_id(request), "errors": str(exc.errors())})
    return error_response(400, "bad_request", "Invalid request")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unexpected error: {exc!r}",
        extra={
            "request_id": get_request_id(request),
            "path": request.url.path,
            "user_id": getattr(request.state, "user_id", None),
        },
    )
    return error_response(500, "internal_error", "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
