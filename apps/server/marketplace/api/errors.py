"""Render service errors and request validation failures as JSON."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from marketplace.services.exceptions import ServiceError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    # Server-side failures are logged with their cause where they are caught.
    if exc.status_code < 500:
        logger.info(
            "%s %s rejected: %s (%d)",
            request.method,
            request.url.path,
            exc.message,
            exc.status_code,
        )
    return _error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Validation error") if errors else "Validation error"
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


__all__ = [
    "register_exception_handlers",
    "service_error_handler",
    "validation_error_handler",
]
