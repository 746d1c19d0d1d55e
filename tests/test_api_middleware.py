"""Tests for security header, CORS, body limit and access log middleware."""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from api_template.api import create_api_application
from api_template.api.middleware import SECURITY_HEADERS
from api_template.config import AppSettings


def _build_client(**settings_overrides: object) -> TestClient:
    """Create a test client with optional settings overrides.

    Args:
        settings_overrides: AppSettings field overrides.

    Returns:
        TestClient: Client bound to a fresh application.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    settings = AppSettings(_env_file=None, environment_name="test", **settings_overrides)
    return TestClient(create_api_application(settings))


@pytest.mark.parametrize("path", ["/", "/api/v1", "/nope"])
def test_api_middleware_applies_security_headers(path: str) -> None:
    """Attach security headers to routed and not-found responses.

    Args:
        path: Requested path.

    Returns:
        None: Assertions validate header presence.

    Raises:
        AssertionError: Raised when a security header is missing.
    """

    response = _build_client().get(path)

    for header_name, header_value in SECURITY_HEADERS.items():
        assert response.headers[header_name] == header_value


def test_api_middleware_skips_content_security_policy_for_interactive_docs() -> None:
    """Leave CSP off the interactive docs page so its assets can load.

    Returns:
        None: Assertions validate docs headers.

    Raises:
        AssertionError: Raised when CSP is applied to docs.
    """

    response = _build_client().get("/api/docs")

    assert response.status_code == 200
    assert "content-security-policy" not in response.headers
    assert response.headers["x-content-type-options"] == "nosniff"


def test_api_middleware_allows_configured_cors_origins() -> None:
    """Answer simple and preflight CORS requests for allowed origins.

    Returns:
        None: Assertions validate CORS headers.

    Raises:
        AssertionError: Raised when CORS headers are missing.
    """

    client = _build_client(cors_origins=["https://example.test"])

    simple_response = client.get("/health", headers={"Origin": "https://example.test"})
    preflight_response = client.options(
        "/api",
        headers={"Origin": "https://example.test", "Access-Control-Request-Method": "GET"},
    )
    rejected_response = client.get("/health", headers={"Origin": "https://other.test"})

    assert simple_response.headers["access-control-allow-origin"] == "https://example.test"
    assert preflight_response.status_code == 200
    assert preflight_response.headers["access-control-allow-origin"] == "https://example.test"
    assert "access-control-allow-origin" not in rejected_response.headers


def test_api_middleware_rejects_oversized_declared_body() -> None:
    """Return HTTP 413 error envelope when Content-Length exceeds the limit.

    Returns:
        None: Assertions validate body limit envelope.

    Raises:
        AssertionError: Raised when oversized bodies are accepted.
    """

    response = _build_client(request_body_max_bytes=16).post("/health?source=test", content=b"x" * 32)
    body = response.json()

    assert response.status_code == 413
    assert body["status"] == "error"
    assert body["statusCode"] == 413
    assert body["payload"] == {"path": "/health?source=test"}
    assert response.headers["x-content-type-options"] == "nosniff"


def test_api_middleware_passes_body_within_limit_to_routing() -> None:
    """Pass requests within the limit through to normal routing.

    Returns:
        None: Assertions validate pass-through behavior.

    Raises:
        AssertionError: Raised when small bodies are rejected by the limit.
    """

    response = _build_client(request_body_max_bytes=16).post("/health", content=b"x" * 8)

    assert response.status_code == 405


def test_api_middleware_writes_combined_access_log_line(caplog: pytest.LogCaptureFixture) -> None:
    """Log one combined-format line per request.

    Args:
        caplog: Pytest log capture fixture.

    Returns:
        None: Assertions validate access log content.

    Raises:
        AssertionError: Raised when the access line is missing or malformed.
    """

    client = _build_client()

    with caplog.at_level(logging.INFO, logger="api_template.access"):
        client.get("/api?verbose=1", headers={"User-Agent": "pytest-agent", "Referer": "https://ref.test"})

    access_lines = [record.getMessage() for record in caplog.records if record.name == "api_template.access"]

    assert len(access_lines) == 1
    assert '"GET /api?verbose=1 HTTP/1.1" 200' in access_lines[0]
    assert access_lines[0].endswith('"https://ref.test" "pytest-agent"')


@pytest.mark.parametrize("declared_length", [b"12a", "²".encode("latin-1")])
def test_api_middleware_rejects_non_ascii_digit_content_length(declared_length: bytes) -> None:
    """Return HTTP 400 error envelope for Content-Length values that are not plain ASCII digits.

    Args:
        declared_length: Raw Content-Length header value.

    Returns:
        None: Assertions validate invalid header envelope.

    Raises:
        AssertionError: Raised when the header is accepted or crashes the request.
    """

    response = _build_client().get("/health", headers={"Content-Length": declared_length})
    body = response.json()

    assert response.status_code == 400
    assert body["status"] == "error"
    assert body["message"] == "Invalid Content-Length header"
    assert body["payload"] == {"path": "/health"}
