"""Tracing attribute names and default observability adapters."""

from __future__ import annotations

from enum import Enum
import logging

from .interfaces import ErrorEventSinkPort, ObservabilityEvent, SpanPort, TracerPort

logger = logging.getLogger(__name__)


class TelemetryAttribute(str, Enum):
    """Span attribute keys attached by the update API client."""

    JOB_ID = "updater.job.id"
    BASE_COMMIT_SHA = "updater.job.base_commit_sha"
    DEPENDENCY_NAMES = "updater.job.dependency_names"
    PR_CLOSE_REASON = "updater.job.pr_close_reason"
    ERROR_TYPE = "updater.job.error_type"
    METRIC = "updater.metric"


class NoOpSpan(SpanPort):
    """Span that discards attributes."""

    def set_attribute(self, key: str, value: object) -> None:
        _ = (key, value)

    def finish(self) -> None:
        return None


class NoOpTracer(TracerPort):
    """Tracer used when no tracing backend is configured."""

    def start_span(self, name: str) -> SpanPort:
        _ = name
        return NoOpSpan()


class LoggingErrorEventSink(ErrorEventSinkPort):
    """Error sink that writes job error events to the module logger."""

    def sink_record_job_error(self, event: ObservabilityEvent) -> None:
        """Log one job error event at WARNING level.

        Args:
            event: Error event to record.
        """

        logger.warning(
            "Update job error recorded: job_id=%s error_type=%s error_details=%s",
            event.job_id,
            event.error_type,
            event.error_details,
        )
