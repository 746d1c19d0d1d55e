"""Static application and API metadata registries.

These records are built once at import time and are read-only for the process
lifetime. Mappings are exposed as read-only proxies and sequences as tuples so
no request can alter what later requests observe.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping


@dataclass(frozen=True)
class EndpointDescriptor:
    """One advertised endpoint of a versioned API.

    Attributes:
        path: Path relative to the version root.
        method: HTTP method name.
        description: Human-readable endpoint summary.
    """

    path: str
    method: str
    description: str


@dataclass(frozen=True)
class AppInfo:
    """Application-level metadata served by root and health endpoints.

    Attributes:
        name: Human-readable application name.
        version: Application version string.
        description: Short application summary.
        author: Application author or organisation.
        license: License identifier.
        repository: Source repository URL.
        keywords: Descriptive keywords.
        endpoints: Logical endpoint name to absolute path mapping.
    """

    name: str
    version: str
    description: str
    author: str
    license: str
    repository: str
    keywords: tuple[str, ...]
    endpoints: Mapping[str, str]


@dataclass(frozen=True)
class ApiInfo:
    """API-level metadata served by the API root endpoint.

    Attributes:
        name: Human-readable API name.
        version: API version string.
        description: Short API summary.
        base_path: Mount path of the API group.
        version_endpoints: Version name to mount path relative to `base_path`.
        supported_versions: Versions currently served.
        deprecated_versions: Versions still served but scheduled for removal.
        versioning_strategy: Human-readable description of the versioning scheme.
        documentation: Documentation resource name to absolute path.
    """

    name: str
    version: str
    description: str
    base_path: str
    version_endpoints: Mapping[str, str]
    supported_versions: tuple[str, ...]
    deprecated_versions: tuple[str, ...]
    versioning_strategy: str
    documentation: Mapping[str, str]


@dataclass(frozen=True)
class ApiVersionInfo:
    """Metadata for one concrete API version.

    Attributes:
        name: Human-readable version name.
        version: Version string.
        root_endpoint: Mount path relative to the API base path.
        description: Short version summary.
        release_date: Release date in ISO format.
        status: Stability label.
        endpoints: Ordered endpoint descriptors.
    """

    name: str
    version: str
    root_endpoint: str
    description: str
    release_date: str
    status: str
    endpoints: tuple[EndpointDescriptor, ...]


APP_INFO: Final = AppInfo(
    name="API Template",
    version="1.0.0",
    description="A FastAPI service template with a standardized JSON response envelope",
    author="API Template maintainers",
    license="MIT",
    repository="https://github.com/api-template/api-template",
    keywords=("fastapi", "python", "api", "template", "envelope"),
    endpoints=MappingProxyType({"health": "/health", "api": "/api"}),
)

API_INFO: Final = ApiInfo(
    name="API Template",
    version="1.0.0",
    description="RESTful API with versioning support",
    base_path="/api",
    version_endpoints=MappingProxyType({"v1": "/v1"}),
    supported_versions=("v1",),
    deprecated_versions=(),
    versioning_strategy="URL path versioning",
    documentation=MappingProxyType(
        {
            "swagger": "/api/docs",
            "redoc": "/api/redoc",
            "openapi": "/api/openapi.json",
        }
    ),
)

API_V1_INFO: Final = ApiVersionInfo(
    name="API Template - API V1",
    version="1.0.0",
    root_endpoint="/v1",
    description="First version of the API Template",
    release_date="2024-01-01",
    status="stable",
    endpoints=(
        EndpointDescriptor(path="/", method="GET", description="Root endpoint for API V1"),
        EndpointDescriptor(path="/health", method="GET", description="Health check endpoint"),
        EndpointDescriptor(path="/info", method="GET", description="API information endpoint"),
    ),
)
