"""Global exception handlers converting failures into error envelopes.

Handled layers:
    - Routing misses (404) echo the request path and query string.
    - Other framework HTTP errors keep their status code and headers.
    - Any other exception becomes a 500; failure kind and stack are only
      exposed outside production.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_template.config import AppSettings

from .envelope import api_envelope_response, envelope_error
from .schemas import FailurePayload, RequestPathPayload

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "The requested resource was not found"
PRODUCTION_FAILURE_MESSAGE = "Something went wrong"
PRODUCTION_FAILURE_KIND = "Internal Server Error"


def register_error_handlers(application: FastAPI, settings: AppSettings) -> None:
    """Register all global error handlers on the FastAPI application.

    Args:
        application: Application receiving the handlers.
        settings: Runtime settings deciding how much failure detail is exposed.

    Returns:
        None: Handlers are registered as side effect.

    Raises:
        ValueError: Raised when settings is invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    @application.exception_handler(StarletteHTTPException)
    async def api_http_error_handler(request: Request, error: StarletteHTTPException) -> JSONResponse:
        """Convert framework HTTP errors, including routing misses, into error envelopes."""

        request_path = api_request_path_with_query(request)
        if error.status_code == status.HTTP_404_NOT_FOUND:
            message = NOT_FOUND_MESSAGE
        else:
            message = str(error.detail)
        envelope = envelope_error(
            error.status_code,
            message,
            payload=RequestPathPayload(path=request_path),
        )
        return api_envelope_response(envelope, headers=getattr(error, "headers", None))

    @application.exception_handler(Exception)
    async def api_unhandled_error_handler(request: Request, error: Exception) -> JSONResponse:
        """Convert any failure that escaped the middleware stack into a 500 error envelope."""

        return api_unhandled_failure_response(request, error, settings)


def api_unhandled_failure_response(request: Request, error: Exception, settings: AppSettings) -> JSONResponse:
    """Log one uncaught failure and build its 500 error envelope response.

    Args:
        request: Request whose handling failed.
        error: Uncaught exception.
        settings: Runtime settings deciding how much failure detail is exposed.

    Returns:
        JSONResponse: 500 response carrying the error envelope.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        error,
        exc_info=error,
        extra={"method": request.method, "path": request.url.path, "error_kind": type(error).__name__},
    )
    envelope = envelope_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        api_failure_message(error, settings),
        payload=api_failure_payload(error, settings),
    )
    return api_envelope_response(envelope)


def api_request_path_with_query(request: Request) -> str:
    """Return the request path as sent, followed by its query string when present.

    Percent-encoding is preserved, so `/no%20pe?q=a%20b` is echoed unchanged.

    Args:
        request: Incoming request.

    Returns:
        str: Path such as `/nope?x=1`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    raw_path = request.scope.get("raw_path")
    request_path = raw_path.partition(b"?")[0].decode("latin-1") if raw_path else request.url.path
    if request.url.query:
        return f"{request_path}?{request.url.query}"
    return request_path


def api_failure_message(error: BaseException, settings: AppSettings) -> str:
    """Resolve the envelope message for one unhandled failure."""

    if settings.is_production:
        return PRODUCTION_FAILURE_MESSAGE
    return str(error) or type(error).__name__


def api_failure_payload(error: BaseException, settings: AppSettings) -> FailurePayload:
    """Build the failure payload, hiding kind and stack in production.

    Args:
        error: Uncaught exception.
        settings: Runtime settings.

    Returns:
        FailurePayload: Failure kind and, outside production, the formatted traceback.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if settings.is_production:
        return FailurePayload(error=PRODUCTION_FAILURE_KIND)
    return FailurePayload(
        error=type(error).__name__,
        stack="".join(traceback.format_exception(error)),
    )
