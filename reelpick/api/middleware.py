"""API middleware: request logging and error translation.

This is the only place that knows how application errors map to HTTP
status codes:

    ReelpickError subclass                     Status  Body "error"
    ───────────────────────────────────────────────────────────────────────
    RequestValidationError (title, provider)   400     the error's message
    LLMError kind=UNAUTHORIZED                 401     Invalid API key
    LLMError kind=RATE_LIMITED                 429     Rate limit exceeded...
    LLMError kind=UPSTREAM_UNAVAILABLE         502     AI service unavailable...
    any other ReelpickError                    500     Error fetching recommendations: <msg>
    any other exception                        500     Error fetching recommendations: <str(exc)>

# ─── MIDDLEWARE EXECUTION ORDER ────────────────────────────────────────
#
# Starlette middleware is a stack (last added, first executed):
#
#   In main.py:
#     app.add_middleware(ErrorHandlingMiddleware)   # added 1st → inner
#     app.add_middleware(RequestLoggingMiddleware)  # added 2nd → outer
#
#   Request flow:
#     Client → RequestLogging → ErrorHandling → route handler
#
# RequestLoggingMiddleware therefore logs the translated status code.
#
# Body validation errors raised by FastAPI itself never reach middleware
# (FastAPI handles them inside the router), so they get an exception
# handler instead: see install_error_handlers().
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from reelpick.api.schemas import ErrorResponse
from reelpick.utils.errors import (
    LLMError,
    MissingTitleError,
    ProviderErrorKind,
    ReelpickError,
    RequestValidationError,
)
from reelpick.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_PROVIDER_ERROR_RESPONSES: dict[ProviderErrorKind, tuple[int, str]] = {
    ProviderErrorKind.UNAUTHORIZED: (401, "Invalid API key"),
    ProviderErrorKind.RATE_LIMITED: (429, "Rate limit exceeded. Please try again later."),
    ProviderErrorKind.UPSTREAM_UNAVAILABLE: (
        502,
        "AI service unavailable. Please try again later.",
    ),
}


def translate_error(exc: ReelpickError) -> tuple[int, str]:
    """Return the ``(status_code, error_message)`` pair for *exc*."""
    if isinstance(exc, RequestValidationError):
        return 400, exc.message
    if isinstance(exc, LLMError) and exc.kind in _PROVIDER_ERROR_RESPONSES:
        return _PROVIDER_ERROR_RESPONSES[exc.kind]
    return 500, f"Error fetching recommendations: {exc.message}"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the ``{"error": message}`` JSON response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Return the JSON error envelope for any exception a route raises.

    ``ReelpickError`` subclasses go through :func:`translate_error`; any
    other exception becomes a 500.  The provider name, upstream status,
    and exception type go to the server log.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except ReelpickError as exc:
            status_code, message = translate_error(exc)
            log = _logger.warning if status_code < 500 else _logger.error
            log(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                kind=getattr(exc, "kind", None),
                upstream_status=getattr(exc, "status_code", None),
                failures=getattr(exc, "failures", None),
                status=status_code,
                path=str(request.url.path),
            )
            return error_response(status_code, message)
        except Exception as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=str(exc),
                status=500,
                path=str(request.url.path),
                exc_info=True,
            )
            return error_response(500, f"Error fetching recommendations: {exc}")


async def _body_validation_handler(request: Request, exc: BodyValidationError) -> JSONResponse:
    """Answer an unparseable or mistyped request body with a 400."""
    _logger.warning(
        "request_body_invalid",
        path=str(request.url.path),
        errors=exc.errors(),
    )
    return error_response(400, MissingTitleError().message)


def install_error_handlers(app: FastAPI) -> None:
    """Register error translation on *app*: middleware plus body-validation handler."""
    app.add_exception_handler(BodyValidationError, _body_validation_handler)
    app.add_middleware(ErrorHandlingMiddleware)
