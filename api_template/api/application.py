"""FastAPI application factory and route table composition.

The route tree is assembled once: the root group serves `/` and `/health`,
the API group is mounted at the API base path and nests every version group.
"""

from __future__ import annotations

from fastapi import FastAPI

from api_template.config import AppSettings
from api_template.domain import API_INFO, API_V1_INFO, APP_INFO, ApiInfo, ApiVersionInfo, AppInfo

from .error_handlers import register_error_handlers
from .middleware import register_middleware
from .routers import api_create_api_router, api_create_root_router, api_create_v1_router

_API_ROUTE_TABLE_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE"})


def create_api_application(
    settings: AppSettings,
    app_info: AppInfo = APP_INFO,
    api_info: ApiInfo = API_INFO,
    v1_info: ApiVersionInfo = API_V1_INFO,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings.
        app_info: Application registry served by root endpoints.
        api_info: API registry served by the API root endpoint.
        v1_info: Version 1 registry served by version endpoints.

    Returns:
        FastAPI: Application with routes, middleware and error handlers wired.

    Raises:
        ValueError: Raised when settings is invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    swagger_path = api_info.documentation["swagger"]
    application = FastAPI(
        title=app_info.name,
        version=app_info.version,
        description=app_info.description,
        license_info={"name": app_info.license},
        docs_url=swagger_path,
        redoc_url=api_info.documentation.get("redoc"),
        openapi_url=api_info.documentation.get("openapi"),
        swagger_ui_oauth2_redirect_url=f"{swagger_path}/oauth2-redirect",
    )
    application.include_router(api_create_root_router(app_info=app_info))
    application.include_router(
        api_create_api_router(
            api_info=api_info,
            version_routers=[api_create_v1_router(version_info=v1_info)],
        )
    )

    register_error_handlers(application, settings)
    register_middleware(application, settings)

    return application


def api_list_route_table(application: FastAPI) -> list[tuple[str, str, str]]:
    """List every API route as `(method, path, name)` sorted by path.

    The table is read from the generated OpenAPI document so it reflects the
    composed route tree regardless of how routers are stored internally.

    Args:
        application: Application whose routes are listed.

    Returns:
        list[tuple[str, str, str]]: One row per method and path; documentation routes excluded.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    openapi_paths = application.openapi().get("paths", {})
    route_table = [
        (method.upper(), path, str(operation.get("operationId") or operation.get("summary", "")))
        for path, path_item in openapi_paths.items()
        for method, operation in path_item.items()
        if method.upper() in _API_ROUTE_TABLE_METHODS
    ]
    return sorted(route_table, key=lambda row: (row[1], row[0]))
