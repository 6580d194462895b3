"""Adapter layer package for orchestration-service integration boundaries."""

from .api_errors import ApiApplicationError, ApiTransientError, UpdateApiError
from .error_classifier import ErrorClassification, error_classify, error_effective_type
from .interfaces import ErrorEventSinkPort, ObservabilityEvent, SpanPort, TracerPort, UpdateApiPort
from .operations import (
    UNKNOWN_ERROR_TYPE,
    ApiOperation,
    ClosePullRequestOperation,
    CreatePullRequestOperation,
    IncrementMetricOperation,
    MarkAsProcessedOperation,
    OperationName,
    RecordEcosystemVersionsOperation,
    RecordUpdateJobErrorOperation,
    RecordUpdateJobUnknownErrorOperation,
    UpdateDependencyListOperation,
    UpdatePullRequestOperation,
    operation_effective_error_type,
    operation_encode_dependency,
    operation_encode_payload,
    operation_span_attributes,
)
from .telemetry import LoggingErrorEventSink, NoOpSpan, NoOpTracer, TelemetryAttribute
from .update_api_client import JobIdentity, UpdateApiClient

__all__ = [
    "UNKNOWN_ERROR_TYPE",
    "ApiApplicationError",
    "ApiOperation",
    "ApiTransientError",
    "ClosePullRequestOperation",
    "CreatePullRequestOperation",
    "ErrorClassification",
    "ErrorEventSinkPort",
    "IncrementMetricOperation",
    "JobIdentity",
    "LoggingErrorEventSink",
    "MarkAsProcessedOperation",
    "NoOpSpan",
    "NoOpTracer",
    "ObservabilityEvent",
    "OperationName",
    "RecordEcosystemVersionsOperation",
    "RecordUpdateJobErrorOperation",
    "RecordUpdateJobUnknownErrorOperation",
    "SpanPort",
    "TelemetryAttribute",
    "TracerPort",
    "UpdateApiClient",
    "UpdateApiError",
    "UpdateApiPort",
    "UpdateDependencyListOperation",
    "UpdatePullRequestOperation",
    "error_classify",
    "error_effective_type",
    "operation_effective_error_type",
    "operation_encode_dependency",
    "operation_encode_payload",
    "operation_span_attributes",
]
