"""
Global exception handlers.

Every error response carries a ``message``. Outside production an extra
``detail`` field carries diagnostics (error code, exception text or
field-level validation errors). Unexpected exceptions never leak
internals in production.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import MarketplaceError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        production = _is_production(request)
        if exc.status_code >= 500:
            logger.error(f"{exc.code} on {request.url.path}: {exc.message}", exc_info=exc)
        else:
            logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")

        message = exc.message
        if production and exc.status_code >= 500:
            message = GENERIC_ERROR_MESSAGE
        return _error_response(
            exc.status_code,
            message,
            exc.detail if exc.detail is not None else exc.code,
            production,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"Validation error on {request.url.path}: {errors}")
        details = [
            {
                "field": ".".join(str(loc) for loc in e["loc"] if loc != "body"),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in errors
        ]
        message = _first_message(details)
        return _error_response(status.HTTP_400_BAD_REQUEST, message, details, _is_production(request))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail), None, _is_production(request))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - logged with full detail, never leaks internals in production."""
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            GENERIC_ERROR_MESSAGE,
            f"{type(exc).__name__}: {exc}",
            _is_production(request),
        )


def _is_production(request: Request) -> bool:
    return request.app.state.settings.is_production


def _error_response(status_code: int, message: str, detail, production: bool) -> JSONResponse:
    content = {"message": message}
    if not production and detail is not None:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)


def _first_message(details: list) -> str:
    if not details:
        return "Invalid request data"
    first = details[0]
    # pydantic prefixes messages raised from validators with "Value error, "
    text = first["message"].removeprefix("Value error, ")
    if first["field"]:
        return f"{first['field']}: {text}"
    return text
