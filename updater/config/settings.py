"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class UpdaterSettings(BaseSettings):
    """Settings for reporting one update job to the orchestration service.

    Environment variable names map directly to field names in uppercase.
    Example: `job_token` reads from `JOB_TOKEN`.

    Attributes:
        api_url: Orchestration-service base URL.
        job_id: Job identifier assigned by the service.
        job_token: Per-job token sent with every request.
        api_retry_attempts: Additional attempts after a transient failure.
        api_retry_min_wait_seconds: Lower bound of randomized retry wait.
        api_retry_max_wait_seconds: Upper bound of randomized retry wait.
        pr_message_max_length: Body length cap forwarded to the message builder.
        pr_message_encoding: Optional body encoding forwarded to the message builder.
        log_level: Root logging level name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    api_url: str = Field(min_length=1)
    job_id: str = Field(min_length=1)
    job_token: str = Field(min_length=1)
    api_retry_attempts: int = Field(default=3, ge=0)
    api_retry_min_wait_seconds: float = Field(default=3.0, ge=0)
    api_retry_max_wait_seconds: float = Field(default=10.0, ge=0)
    pr_message_max_length: int = Field(default=65_535, ge=1)
    pr_message_encoding: str | None = Field(default=None)
    log_level: str = Field(default="INFO")

    @field_validator("api_url", "job_id", "job_token")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("api_retry_max_wait_seconds")
    @classmethod
    def _validate_retry_wait_bounds(cls, value: float, info) -> float:
        min_wait_seconds = float(info.data.get("api_retry_min_wait_seconds", 3.0))
        if value < min_wait_seconds:
            raise ValueError("api_retry_max_wait_seconds must be greater than or equal to api_retry_min_wait_seconds")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("log_level must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG")
        return normalized_value


def config_load_settings() -> UpdaterSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        UpdaterSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return UpdaterSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
