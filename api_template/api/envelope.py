"""Standardized response envelope shared by every endpoint.

Each variant constructor fixes `status`, stamps `timestamp` and checks that the
supplied status code falls in the range allowed for that variant.
"""

from __future__ import annotations

from typing import Any, Final, Generic, Literal, Mapping, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api_template.domain import Timestamp, timestamp_now

PayloadT = TypeVar("PayloadT")

EnvelopeStatus = Literal["ok", "error", "warning", "healthy", "unhealthy"]

_ENVELOPE_SUCCESS_RANGE: Final = range(200, 300)
_ENVELOPE_FAILURE_RANGE: Final = range(400, 600)

ENVELOPE_STATUS_CODE_RANGES: Final[Mapping[str, range]] = {
    "ok": _ENVELOPE_SUCCESS_RANGE,
    "healthy": _ENVELOPE_SUCCESS_RANGE,
    "warning": _ENVELOPE_SUCCESS_RANGE,
    "error": _ENVELOPE_FAILURE_RANGE,
    "unhealthy": _ENVELOPE_FAILURE_RANGE,
}


class EnvelopeStatusCodeError(ValueError):
    """Raised when a status code does not fit the envelope variant."""


class EnvelopeModel(BaseModel):
    """Base model for envelope bodies and payloads serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ResponseEnvelope(EnvelopeModel, Generic[PayloadT]):
    """Standard JSON wrapper returned by every endpoint.

    Attributes:
        status: Envelope variant.
        status_code: HTTP status code mirrored in the body.
        message: Human-readable summary.
        payload: Endpoint-specific body.
        timestamp: ISO 8601 UTC construction instant.
        metadata: Free-form extension fields.
    """

    status: EnvelopeStatus
    status_code: int
    message: str
    payload: PayloadT | None = None
    timestamp: Timestamp = Field(default_factory=timestamp_now)
    metadata: dict[str, Any] | None = None


def envelope_build(
    status: EnvelopeStatus,
    status_code: int,
    message: str,
    payload: PayloadT | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> ResponseEnvelope[PayloadT]:
    """Build one envelope after checking status and status code agree.

    Args:
        status: Envelope variant.
        status_code: HTTP status code for the response.
        message: Human-readable summary.
        payload: Optional endpoint-specific body.
        metadata: Optional extension fields.

    Returns:
        ResponseEnvelope[PayloadT]: Immutable envelope stamped with the current instant.

    Raises:
        EnvelopeStatusCodeError: Raised when the status code is outside the variant range.
    """

    allowed_range = ENVELOPE_STATUS_CODE_RANGES[status]
    if status_code not in allowed_range:
        raise EnvelopeStatusCodeError(
            f"status_code={status_code} is not allowed for status={status}; "
            f"expected {allowed_range.start}-{allowed_range.stop - 1}"
        )
    return ResponseEnvelope(
        status=status,
        status_code=status_code,
        message=message,
        payload=payload,
        metadata=None if metadata is None else dict(metadata),
    )


def envelope_success(
    status_code: int,
    message: str,
    payload: PayloadT | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> ResponseEnvelope[PayloadT]:
    """Build an `ok` envelope for a 2xx response."""

    return envelope_build("ok", status_code, message, payload, metadata)


def envelope_error(
    status_code: int,
    message: str,
    payload: PayloadT | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> ResponseEnvelope[PayloadT]:
    """Build an `error` envelope for a 4xx or 5xx response."""

    return envelope_build("error", status_code, message, payload, metadata)


def envelope_warning(
    status_code: int,
    message: str,
    payload: PayloadT | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> ResponseEnvelope[PayloadT]:
    """Build a `warning` envelope for a successful response that carries a notice."""

    return envelope_build("warning", status_code, message, payload, metadata)


def envelope_healthy(
    status_code: int,
    message: str,
    payload: PayloadT | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> ResponseEnvelope[PayloadT]:
    """Build a `healthy` envelope for a passing health check."""

    return envelope_build("healthy", status_code, message, payload, metadata)


def envelope_unhealthy(
    status_code: int,
    message: str,
    payload: PayloadT | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> ResponseEnvelope[PayloadT]:
    """Build an `unhealthy` envelope for a failing health check."""

    return envelope_build("unhealthy", status_code, message, payload, metadata)


def envelope_serialize(envelope: ResponseEnvelope[Any]) -> dict[str, Any]:
    """Serialize one envelope to its JSON-ready camelCase mapping.

    Args:
        envelope: Envelope to serialize.

    Returns:
        dict[str, Any]: JSON-ready body with absent optional fields omitted.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return envelope.model_dump(mode="json", by_alias=True, exclude_none=True)


def api_envelope_response(
    envelope: ResponseEnvelope[Any],
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Adapt one envelope to a JSON response with matching HTTP status.

    Args:
        envelope: Envelope to send.
        headers: Optional extra response headers.

    Returns:
        JSONResponse: Response whose status equals `envelope.status_code`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return JSONResponse(
        content=envelope_serialize(envelope),
        status_code=envelope.status_code,
        headers=None if headers is None else dict(headers),
    )
