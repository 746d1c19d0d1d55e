"""Version 1 API router composition."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from api_template.domain import ApiVersionInfo

from ..envelope import ResponseEnvelope, api_envelope_response, envelope_healthy, envelope_success
from ..schemas import ApiVersionInfoPayload, ApiVersionPayload


def api_create_v1_router(version_info: ApiVersionInfo) -> APIRouter:
    """Create version 1 router mounted at the version root endpoint.

    Args:
        version_info: Static version 1 registry.

    Returns:
        APIRouter: Router exposing version root, health and info endpoints.

    Raises:
        ValueError: Raised when version_info is invalid.
    """

    if version_info is None:
        raise ValueError("version_info must not be None")

    router = APIRouter(prefix=version_info.root_endpoint, tags=["v1"])

    @router.get("", response_model=ResponseEnvelope[ApiVersionPayload], operation_id="api_v1_index")
    def api_v1_index() -> JSONResponse:
        """Return version 1 name and version.

        Returns:
            JSONResponse: `ok` envelope with version payload.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        envelope = envelope_success(
            status.HTTP_200_OK,
            version_info.name,
            payload=ApiVersionPayload(version=version_info.version),
        )
        return api_envelope_response(envelope)

    @router.get("/health", response_model=ResponseEnvelope[ApiVersionPayload], operation_id="api_v1_health")
    def api_v1_health() -> JSONResponse:
        """Return version 1 liveness state."""

        envelope = envelope_healthy(
            status.HTTP_200_OK,
            version_info.name,
            payload=ApiVersionPayload(version=version_info.version),
        )
        return api_envelope_response(envelope)

    @router.get("/info", response_model=ResponseEnvelope[ApiVersionInfoPayload], operation_id="api_v1_info")
    def api_v1_info() -> JSONResponse:
        """Return version 1 release metadata and advertised endpoints."""

        envelope = envelope_success(
            status.HTTP_200_OK,
            version_info.name,
            payload=ApiVersionInfoPayload.from_registry(version_info),
        )
        return api_envelope_response(envelope)

    return router
