"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from api_template.api import create_api_application
from api_template.config import AppSettings, config_load_settings
from api_template.observability import observability_setup_logging


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings. Loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings if settings is not None else config_load_settings()
    observability_setup_logging(level=resolved_settings.log_level, log_format=resolved_settings.log_format)
    return create_api_application(settings=resolved_settings)
