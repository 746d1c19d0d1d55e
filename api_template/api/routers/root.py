"""Root router composition for application index and health endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from api_template.domain import AppInfo

from ..envelope import ResponseEnvelope, api_envelope_response, envelope_healthy, envelope_success
from ..schemas import AppPayload


def api_create_root_router(app_info: AppInfo) -> APIRouter:
    """Create root router exposing the application index and health check.

    Args:
        app_info: Static application registry.

    Returns:
        APIRouter: Router exposing `/` and `/health` endpoints.

    Raises:
        ValueError: Raised when app_info is invalid.
    """

    if app_info is None:
        raise ValueError("app_info must not be None")

    router = APIRouter(tags=["root"])

    @router.get("/", response_model=ResponseEnvelope[AppPayload], operation_id="api_root_index")
    def api_root_index() -> JSONResponse:
        """Return application name, version and top-level endpoints.

        Returns:
            JSONResponse: `ok` envelope with application payload.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        envelope = envelope_success(
            status.HTTP_200_OK,
            app_info.name,
            payload=AppPayload.from_registry(app_info),
        )
        return api_envelope_response(envelope)

    @router.get("/health", response_model=ResponseEnvelope[AppPayload], operation_id="api_root_health")
    def api_root_health() -> JSONResponse:
        """Return application liveness state.

        Returns:
            JSONResponse: `healthy` envelope with application payload.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        envelope = envelope_healthy(
            status.HTTP_200_OK,
            app_info.name,
            payload=AppPayload.from_registry(app_info),
        )
        return api_envelope_response(envelope)

    return router
