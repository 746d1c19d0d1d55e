"""Domain models and helpers used across application layer boundaries."""

from .registries import API_INFO, API_V1_INFO, APP_INFO, ApiInfo, ApiVersionInfo, AppInfo, EndpointDescriptor
from .timestamps import (
    InvalidTimestampError,
    Timestamp,
    timestamp_format_human,
    timestamp_format_relative,
    timestamp_from_datetime,
    timestamp_now,
    timestamp_parse,
    timestamp_require,
    timestamp_validate,
)

__all__ = [
    "API_INFO",
    "API_V1_INFO",
    "APP_INFO",
    "ApiInfo",
    "ApiVersionInfo",
    "AppInfo",
    "EndpointDescriptor",
    "InvalidTimestampError",
    "Timestamp",
    "timestamp_format_human",
    "timestamp_format_relative",
    "timestamp_from_datetime",
    "timestamp_now",
    "timestamp_parse",
    "timestamp_require",
    "timestamp_validate",
]
