"""API middleware: CORS, request logging, and error handling.

Routes never catch domain errors themselves.  ``ErrorHandlingMiddleware``
turns any ``DocumentInsightsError`` escaping a handler into an
``ErrorResponse`` body (``{"error": <class name>, "detail": <message>}``)
with the status from ``status_for_error``.

main.py adds ErrorHandlingMiddleware before RequestLoggingMiddleware, so
the logging layer wraps the error layer and records the mapped status
rather than a bare 500.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.api.schemas import ErrorResponse
from src.utils.errors import (
    ConfigurationError,
    DocumentInsightsError,
    DocumentNotFoundError,
    EmptyContentError,
    EmptyResponseError,
    EncryptedDocumentError,
    ExtractionError,
    FileTooLargeError,
    MisconfiguredProviderError,
    RemoteError,
    RequestTimeoutError,
    UnresolvableReferenceError,
    UnsupportedFormatError,
    UnsupportedProviderError,
)
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

# First matching class wins; anything unlisted is a 500.
_STATUS_BY_ERROR: tuple[tuple[type[DocumentInsightsError], int], ...] = (
    (UnsupportedFormatError, 415),
    (FileTooLargeError, 413),
    (EmptyContentError, 422),
    (EncryptedDocumentError, 422),
    (ExtractionError, 422),
    (UnresolvableReferenceError, 422),
    (DocumentNotFoundError, 404),
    (UnsupportedProviderError, 400),
    (MisconfiguredProviderError, 400),
    (RemoteError, 502),
    (EmptyResponseError, 502),
    (RequestTimeoutError, 504),
    (ConfigurationError, 500),
)


def status_for_error(exc: DocumentInsightsError) -> int:
    """Return the HTTP status code for a domain error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]`` for
        development; set ``FRONTEND_URL`` in production.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
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
    """Catch ``DocumentInsightsError`` subclasses and return structured JSON errors.

    The client sees the exception class name and its message.  Remote
    response bodies and stack traces are logged server-side only.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except DocumentInsightsError as exc:
            status_code = status_for_error(exc)
            log = _logger.error if status_code >= 500 else _logger.warning
            log(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                status=status_code,
                remote_status=exc.status if isinstance(exc, RemoteError) else None,
                path=str(request.url.path),
            )
            body = ErrorResponse(
                error=type(exc).__name__,
                detail=exc.message,
            )
            return JSONResponse(
                status_code=status_code,
                content=body.model_dump(),
            )
