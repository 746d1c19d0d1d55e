"""API group router composition for the versioned API entry point."""

from collections.abc import Sequence

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from api_template.domain import ApiInfo

from ..envelope import ResponseEnvelope, api_envelope_response, envelope_success
from ..schemas import ApiPayload


def api_create_api_router(api_info: ApiInfo, version_routers: Sequence[APIRouter] = ()) -> APIRouter:
    """Create API group router mounted at the API base path.

    Args:
        api_info: Static API registry.
        version_routers: Routers of concrete API versions to nest under the base path.

    Returns:
        APIRouter: Router exposing the API root and every nested version.

    Raises:
        ValueError: Raised when api_info is invalid.
    """

    if api_info is None:
        raise ValueError("api_info must not be None")

    router = APIRouter(prefix=api_info.base_path, tags=["api"])

    @router.get("", response_model=ResponseEnvelope[ApiPayload], operation_id="api_root_info")
    def api_root_info() -> JSONResponse:
        """Return API versioning and documentation metadata.

        Returns:
            JSONResponse: `ok` envelope with API payload.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        envelope = envelope_success(
            status.HTTP_200_OK,
            api_info.name,
            payload=ApiPayload.from_registry(api_info),
        )
        return api_envelope_response(envelope)

    for version_router in version_routers:
        router.include_router(version_router)

    return router
