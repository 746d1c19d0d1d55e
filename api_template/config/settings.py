"""Typed runtime settings with dotenv support and startup validation."""

from typing import Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime configuration.

    Environment variable names map directly to field names in uppercase.
    Example: `application_port` reads from `APPLICATION_PORT`. Short aliases
    (`PORT`, `HOST`, `ENVIRONMENT`) are accepted as well.

    Attributes:
        environment_name: Runtime environment label; `production` hides failure detail.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Root logging level name.
        log_format: Log line format, `text` or `json`.
        cors_origins: Origins allowed by the CORS middleware.
        request_body_max_bytes: Largest accepted declared request body size.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    environment_name: str = Field(
        default="development",
        validation_alias=AliasChoices("environment_name", "environment"),
    )
    application_host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("application_host", "host"),
    )
    application_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("application_port", "port"),
    )
    log_level: str = Field(default="INFO")
    log_format: Literal["text", "json"] = Field(default="text")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    request_body_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)

    @field_validator("environment_name", "application_host")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value

    @property
    def is_production(self) -> bool:
        """Return whether the runtime runs in production mode.

        Returns:
            bool: True when `environment_name` is `production` in any letter case.

        Raises:
            RuntimeError: This property does not raise runtime errors.
        """

        return self.environment_name.lower() == "production"


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
