"""Typed interfaces for adapter-layer responsibilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from updater.domain import DependencyChange


@dataclass(frozen=True)
class ObservabilityEvent:
    """Job error mirrored to observability before network dispatch.

    Attributes:
        job_id: Job identifier.
        error_type: Effective error type.
        error_details: Structured error details.
    """

    job_id: str | int
    error_type: str
    error_details: Mapping[str, Any] | None


class SpanPort(Protocol):
    """Port definition for one tracing span."""

    def set_attribute(self, key: str, value: object) -> None:
        """Attach one attribute to the span.

        Args:
            key: Attribute name.
            value: Attribute value.
        """

    def finish(self) -> None:
        """Close the span."""


class TracerPort(Protocol):
    """Port definition for opening tracing spans."""

    def start_span(self, name: str) -> SpanPort:
        """Open a span for one unit of work.

        Args:
            name: Span name.

        Returns:
            SpanPort: Open span handle.
        """


class ErrorEventSinkPort(Protocol):
    """Port definition for mirroring job errors to observability."""

    def sink_record_job_error(self, event: ObservabilityEvent) -> None:
        """Record one job error event.

        Args:
            event: Error event to record.

        Raises:
            RuntimeError: Raised when the sink cannot record the event.
        """


class UpdateApiPort(Protocol):
    """Port definition for reporting job lifecycle events to the service."""

    def api_create_pull_request(self, dependency_change: DependencyChange, base_commit_sha: str) -> None:
        """Report a newly proposed change."""

    def api_update_pull_request(self, dependency_change: DependencyChange, base_commit_sha: str) -> None:
        """Report a refreshed change for an open proposal."""

    def api_close_pull_request(self, dependency_names: str | Sequence[str], reason: str) -> None:
        """Report that an open proposal should be closed."""

    def api_record_update_job_error(self, error_type: str, error_details: Mapping[str, Any] | None) -> None:
        """Report a known job error."""

    def api_record_update_job_unknown_error(
        self,
        error_type: str | None,
        error_details: Mapping[str, Any] | None,
    ) -> None:
        """Report an unclassified job error."""

    def api_mark_job_as_processed(self, base_commit_sha: str) -> None:
        """Report job completion."""

    def api_update_dependency_list(
        self,
        dependencies: Sequence[Mapping[str, Any]],
        dependency_files: Sequence[str],
    ) -> None:
        """Replace the service's dependency list."""

    def api_record_ecosystem_versions(self, ecosystem_versions: Mapping[str, Any]) -> None:
        """Report ecosystem tool versions."""

    def api_increment_metric(self, metric: str, tags: Mapping[str, str]) -> None:
        """Report one metric increment, best effort."""
