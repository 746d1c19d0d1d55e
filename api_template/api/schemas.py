"""Concrete payload models, one per endpoint family."""

from __future__ import annotations

from api_template.domain import ApiInfo, ApiVersionInfo, AppInfo, EndpointDescriptor

from .envelope import EnvelopeModel


class AppPayload(EnvelopeModel):
    """Payload of the root and health endpoints."""

    version: str
    endpoints: dict[str, str]

    @classmethod
    def from_registry(cls, app_info: AppInfo) -> AppPayload:
        return cls(version=app_info.version, endpoints=dict(app_info.endpoints))


class ApiPayload(EnvelopeModel):
    """Payload of the API root endpoint."""

    version: str
    endpoints: dict[str, str]
    supported_versions: list[str]
    deprecated_versions: list[str]
    versioning_strategy: str
    documentation: dict[str, str]

    @classmethod
    def from_registry(cls, api_info: ApiInfo) -> ApiPayload:
        return cls(
            version=api_info.version,
            endpoints=dict(api_info.version_endpoints),
            supported_versions=list(api_info.supported_versions),
            deprecated_versions=list(api_info.deprecated_versions),
            versioning_strategy=api_info.versioning_strategy,
            documentation=dict(api_info.documentation),
        )


class ApiVersionPayload(EnvelopeModel):
    """Payload of the version root and version health endpoints."""

    version: str


class EndpointPayload(EnvelopeModel):
    """One advertised endpoint inside a version info payload."""

    path: str
    method: str
    description: str

    @classmethod
    def from_descriptor(cls, descriptor: EndpointDescriptor) -> EndpointPayload:
        return cls(path=descriptor.path, method=descriptor.method, description=descriptor.description)


class ApiVersionInfoPayload(EnvelopeModel):
    """Payload of the version info endpoint."""

    version: str
    root_endpoint: str
    description: str
    release_date: str
    status: str
    endpoints: list[EndpointPayload]

    @classmethod
    def from_registry(cls, version_info: ApiVersionInfo) -> ApiVersionInfoPayload:
        return cls(
            version=version_info.version,
            root_endpoint=version_info.root_endpoint,
            description=version_info.description,
            release_date=version_info.release_date,
            status=version_info.status,
            endpoints=[EndpointPayload.from_descriptor(descriptor) for descriptor in version_info.endpoints],
        )


class RequestPathPayload(EnvelopeModel):
    """Payload echoing the request path of a failed lookup."""

    path: str


class FailurePayload(EnvelopeModel):
    """Payload describing an unhandled failure.

    `stack` is only set outside production.
    """

    error: str
    stack: str | None = None
