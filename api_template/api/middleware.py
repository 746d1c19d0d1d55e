"""HTTP middleware for failure envelopes, security headers, CORS, body size limits and access logs."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Final

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware

from api_template.config import AppSettings

from .envelope import api_envelope_response, envelope_error
from .error_handlers import api_request_path_with_query, api_unhandled_failure_response
from .schemas import RequestPathPayload

access_logger = logging.getLogger("api_template.access")

SECURITY_HEADERS: Final = {
    "Content-Security-Policy": "default-src 'self'; img-src 'self' data:; style-src 'self' 'unsafe-inline'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
}

# Interactive docs pull their assets from a CDN.
_DOCS_PATH_PREFIXES: Final = ("/api/docs", "/api/redoc")


def register_middleware(application: FastAPI, settings: AppSettings) -> None:
    """Register runtime middleware on the FastAPI application.

    Registration order matters: the last registered middleware runs first, so
    access logging wraps everything, CORS answers preflights before the inner
    layers and security headers also cover body limit rejections. Uncaught
    route failures are turned into 500 envelopes innermost, so the outer layers
    still add their headers and log line.

    Args:
        application: Application receiving the middleware.
        settings: Runtime settings for CORS origins and body limits.

    Returns:
        None: Middleware is registered as side effect.

    Raises:
        ValueError: Raised when settings is invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    @application.middleware("http")
    async def unhandled_failure(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as error:
            return api_unhandled_failure_response(request, error, settings)

    @application.middleware("http")
    async def request_body_limit(request: Request, call_next):
        declared_length = request.headers.get("content-length")
        if declared_length is None:
            return await call_next(request)

        request_path = RequestPathPayload(path=api_request_path_with_query(request))
        if not (declared_length.isascii() and declared_length.isdigit()):
            envelope = envelope_error(status.HTTP_400_BAD_REQUEST, "Invalid Content-Length header", payload=request_path)
            return api_envelope_response(envelope)
        if int(declared_length) > settings.request_body_max_bytes:
            envelope = envelope_error(
                413,
                f"Request body exceeds the {settings.request_body_max_bytes} byte limit",
                payload=request_path,
            )
            return api_envelope_response(envelope)
        return await call_next(request)

    @application.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for header_name, header_value in SECURITY_HEADERS.items():
            if header_name == "Content-Security-Policy" and request.url.path.startswith(_DOCS_PATH_PREFIXES):
                continue
            response.headers.setdefault(header_name, header_value)
        return response

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def access_log(request: Request, call_next):
        response = await call_next(request)
        access_logger.info(
            api_format_access_log_line(request, response.status_code, response.headers.get("content-length")),
            extra={"method": request.method, "path": request.url.path, "status_code": response.status_code},
        )
        return response


def api_format_access_log_line(request: Request, status_code: int, content_length: str | None) -> str:
    """Render one request in Apache combined log format.

    Args:
        request: Served request.
        status_code: Response status code.
        content_length: Response Content-Length header value, if any.

    Returns:
        str: Combined log format line.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    remote_address = request.client.host if request.client else "-"
    requested_at = datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S +0000")
    http_version = request.scope.get("http_version", "1.1")
    referrer = request.headers.get("referer", "-")
    user_agent = request.headers.get("user-agent", "-")
    return (
        f'{remote_address} - - [{requested_at}] "{request.method} {api_request_path_with_query(request)} '
        f'HTTP/{http_version}" {status_code} {content_length or "-"} "{referrer}" "{user_agent}"'
    )
