"""Normalize job error types and mirror errors to observability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .interfaces import ErrorEventSinkPort, ObservabilityEvent
from .operations import operation_effective_error_type


@dataclass(frozen=True)
class ErrorClassification:
    """Result of classifying one job error.

    Attributes:
        effective_error_type: Concrete error type sent to the service.
        event: Observability event recorded for the error.
    """

    effective_error_type: str
    event: ObservabilityEvent


def error_effective_type(error_type: str | None) -> str:
    """Return concrete error type, defaulting absent values.

    Args:
        error_type: Optional caller-supplied error type.

    Returns:
        str: `error_type`, or `unknown_error` when absent.
    """

    return operation_effective_error_type(error_type)


def error_classify(
    job_id: str | int,
    error_type: str | None,
    error_details: Mapping[str, Any] | None,
    sink: ErrorEventSinkPort,
) -> ErrorClassification:
    """Classify one job error and record it on the observability sink.

    The sink is written before any dispatch so the error stays visible when
    the service cannot be reached.

    Args:
        job_id: Job identifier.
        error_type: Optional caller-supplied error type.
        error_details: Structured error details.
        sink: Observability sink receiving the event.

    Returns:
        ErrorClassification: Effective type and recorded event.

    Raises:
        RuntimeError: Propagated when the sink fails.
    """

    effective_error_type = error_effective_type(error_type)
    event = ObservabilityEvent(job_id=job_id, error_type=effective_error_type, error_details=error_details)
    sink.sink_record_job_error(event)
    return ErrorClassification(effective_error_type=effective_error_type, event=event)
