"""Bootstrap wiring for startup validation and dependency assembly."""

from updater.adapters import ErrorEventSinkPort, TracerPort, UpdateApiClient
from updater.config import UpdaterSettings, config_load_settings
from updater.jobs import UpdateJobReporter


def bootstrap_create_api_client(
    settings: UpdaterSettings | None = None,
    tracer: TracerPort | None = None,
    error_sink: ErrorEventSinkPort | None = None,
) -> UpdateApiClient:
    """Build the update API client from validated settings.

    Args:
        settings: Optional preloaded settings, loaded from environment when omitted.
        tracer: Optional tracing port.
        error_sink: Optional observability sink for job errors.

    Returns:
        UpdateApiClient: Configured client for the current job.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    return UpdateApiClient(
        base_url=resolved_settings.api_url,
        job_id=resolved_settings.job_id,
        job_token=resolved_settings.job_token,
        tracer=tracer,
        error_sink=error_sink,
        retry_attempts=resolved_settings.api_retry_attempts,
        retry_min_wait_seconds=resolved_settings.api_retry_min_wait_seconds,
        retry_max_wait_seconds=resolved_settings.api_retry_max_wait_seconds,
    )


def bootstrap_create_job_reporter(settings: UpdaterSettings | None = None) -> UpdateJobReporter:
    """Build the job reporter for non-library trigger surfaces.

    Args:
        settings: Optional preloaded settings, loaded from environment when omitted.

    Returns:
        UpdateJobReporter: Reporter wired to a configured API client.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    return UpdateJobReporter(api_client=bootstrap_create_api_client(settings=settings))
