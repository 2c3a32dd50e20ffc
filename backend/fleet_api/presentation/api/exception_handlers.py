"""Maps domain exceptions to HTTP responses.

Services raise framework-independent errors; this is the only place they
become status codes. Bodies use FastAPI's ``{"detail": ...}`` shape.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fleet_api.domain.exceptions import (
    AuthenticationError,
    CarrierConflictError,
    EntityNotFoundError,
    EntityValidationError,
    InvalidCursorError,
    OwnershipError,
    StorageError,
)

logger = logging.getLogger(__name__)


def _detail(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message, **extra})


async def validation_error_handler(request: Request, exc: EntityValidationError) -> JSONResponse:
    """400 with the failure report under ``validation``.

    ``validation.rule_index`` counts the field's rules from 0, and rule 0 is
    always the type check (e.g. a boat ``length`` of 0 fails rule 1, the
    minimum). A missing field reports ``rule_index: null``.
    """
    return _detail(status.HTTP_400_BAD_REQUEST, str(exc), validation=exc.report.as_dict())


async def invalid_cursor_handler(request: Request, exc: InvalidCursorError) -> JSONResponse:
    return _detail(status.HTTP_400_BAD_REQUEST, str(exc))


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    response = _detail(status.HTTP_401_UNAUTHORIZED, str(exc))
    response.headers["WWW-Authenticate"] = "Bearer"
    return response


async def forbidden_handler(request: Request, exc: Exception) -> JSONResponse:
    return _detail(status.HTTP_403_FORBIDDEN, str(exc))


async def not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _detail(status.HTTP_404_NOT_FOUND, str(exc))


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    # Driver details were logged where the fault was caught.
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return _detail(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected storage error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EntityValidationError, validation_error_handler)
    app.add_exception_handler(InvalidCursorError, invalid_cursor_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(OwnershipError, forbidden_handler)
    app.add_exception_handler(CarrierConflictError, forbidden_handler)
    app.add_exception_handler(EntityNotFoundError, not_found_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
