"""Typed orchestration-service operations and their JSON payload encoding.

Every operation is a frozen record carrying only the fields its endpoint
needs. `operation_encode_payload` is the single encoder keyed on the record
type and always returns the `{"data": {...}}` envelope the service expects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Final, Mapping, Sequence

from updater.domain import Dependency, DependencyChange

from .telemetry import TelemetryAttribute

UNKNOWN_ERROR_TYPE: Final[str] = "unknown_error"


class OperationName(str, Enum):
    """Endpoint names under `/update_jobs/{job_id}/`."""

    CREATE_PULL_REQUEST = "create_pull_request"
    UPDATE_PULL_REQUEST = "update_pull_request"
    CLOSE_PULL_REQUEST = "close_pull_request"
    RECORD_UPDATE_JOB_ERROR = "record_update_job_error"
    RECORD_UPDATE_JOB_UNKNOWN_ERROR = "record_update_job_unknown_error"
    MARK_AS_PROCESSED = "mark_as_processed"
    UPDATE_DEPENDENCY_LIST = "update_dependency_list"
    RECORD_ECOSYSTEM_VERSIONS = "record_ecosystem_versions"
    INCREMENT_METRIC = "increment_metric"


class ApiOperation:
    """Base class for operation records."""

    operation_name: ClassVar[OperationName]
    http_method: ClassVar[str] = "POST"


@dataclass(frozen=True)
class CreatePullRequestOperation(ApiOperation):
    """Open a new proposal for a change."""

    operation_name: ClassVar[OperationName] = OperationName.CREATE_PULL_REQUEST

    dependency_change: DependencyChange
    base_commit_sha: str


@dataclass(frozen=True)
class UpdatePullRequestOperation(ApiOperation):
    """Refresh the open proposal with a recomputed change."""

    operation_name: ClassVar[OperationName] = OperationName.UPDATE_PULL_REQUEST

    dependency_change: DependencyChange
    base_commit_sha: str


@dataclass(frozen=True)
class ClosePullRequestOperation(ApiOperation):
    """Close the proposal tracking the named dependencies."""

    operation_name: ClassVar[OperationName] = OperationName.CLOSE_PULL_REQUEST

    dependency_names: str | tuple[str, ...]
    reason: str


@dataclass(frozen=True)
class RecordUpdateJobErrorOperation(ApiOperation):
    """Record a known job error."""

    operation_name: ClassVar[OperationName] = OperationName.RECORD_UPDATE_JOB_ERROR

    error_type: str
    error_details: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class RecordUpdateJobUnknownErrorOperation(ApiOperation):
    """Record an unclassified job error."""

    operation_name: ClassVar[OperationName] = OperationName.RECORD_UPDATE_JOB_UNKNOWN_ERROR

    error_type: str | None
    error_details: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class MarkAsProcessedOperation(ApiOperation):
    """Mark the job finished against a base commit."""

    operation_name: ClassVar[OperationName] = OperationName.MARK_AS_PROCESSED
    http_method: ClassVar[str] = "PATCH"

    base_commit_sha: str


@dataclass(frozen=True)
class UpdateDependencyListOperation(ApiOperation):
    """Replace the service's view of the repository dependency list."""

    operation_name: ClassVar[OperationName] = OperationName.UPDATE_DEPENDENCY_LIST

    dependencies: tuple[Mapping[str, Any], ...]
    dependency_files: tuple[str, ...]


@dataclass(frozen=True)
class RecordEcosystemVersionsOperation(ApiOperation):
    """Record tool and language versions used by the job."""

    operation_name: ClassVar[OperationName] = OperationName.RECORD_ECOSYSTEM_VERSIONS

    ecosystem_versions: Mapping[str, Any]


@dataclass(frozen=True)
class IncrementMetricOperation(ApiOperation):
    """Increment one service-side counter."""

    operation_name: ClassVar[OperationName] = OperationName.INCREMENT_METRIC

    metric: str
    tags: Mapping[str, str] = field(default_factory=dict)


def operation_effective_error_type(error_type: str | None) -> str:
    """Return the error type sent on the wire, defaulting only `None`.

    Args:
        error_type: Optional caller-supplied error type.

    Returns:
        str: `error_type` as given, or `unknown_error` when `None`.
    """

    if error_type is None:
        return UNKNOWN_ERROR_TYPE
    return str(error_type)


def operation_encode_dependency(dependency: Dependency) -> dict[str, object]:
    """Encode one dependency for proposal creation.

    `version` is present only when known and `removed` only when true.

    Args:
        dependency: Dependency to encode.

    Returns:
        dict[str, object]: Compact dependency payload.
    """

    payload: dict[str, object] = {
        "name": dependency.name,
        "previous-version": dependency.previous_version,
        "requirements": [dict(requirement) for requirement in dependency.requirements],
        "previous-requirements": [dict(requirement) for requirement in dependency.previous_requirements],
    }
    if dependency.version is not None:
        payload["version"] = dependency.version
    if dependency.removed:
        payload["removed"] = True
    return payload


def _encode_create_pull_request(operation: CreatePullRequestOperation) -> dict[str, object]:
    dependency_change = operation.dependency_change
    data: dict[str, object] = {
        "dependencies": [
            operation_encode_dependency(dependency) for dependency in dependency_change.updated_dependencies
        ],
        "updated-dependency-files": dependency_change.change_updated_dependency_files_payload(),
        "base-commit-sha": operation.base_commit_sha,
    }
    if dependency_change.dependency_group is not None:
        data["dependency-group"] = dependency_change.dependency_group.group_payload()

    pr_message = dependency_change.change_pr_message
    if pr_message is None:
        return data

    message_fields = {
        "commit-message": pr_message.commit_message,
        "pr-title": pr_message.pr_name,
        "pr-body": pr_message.pr_message,
    }
    data.update({key: value for key, value in message_fields.items() if value is not None})
    return data


def _encode_update_pull_request(operation: UpdatePullRequestOperation) -> dict[str, object]:
    return {
        "dependency-names": operation.dependency_change.change_dependency_names(),
        "updated-dependency-files": operation.dependency_change.change_updated_dependency_files_payload(),
        "base-commit-sha": operation.base_commit_sha,
    }


def _encode_close_pull_request(operation: ClosePullRequestOperation) -> dict[str, object]:
    dependency_names: str | list[str]
    if isinstance(operation.dependency_names, str):
        dependency_names = operation.dependency_names
    else:
        dependency_names = list(operation.dependency_names)
    return {"dependency-names": dependency_names, "reason": operation.reason}


def _encode_record_update_job_error(operation: RecordUpdateJobErrorOperation) -> dict[str, object]:
    return {"error-type": operation.error_type, "error-details": _plain_mapping(operation.error_details)}


def _encode_record_update_job_unknown_error(
    operation: RecordUpdateJobUnknownErrorOperation,
) -> dict[str, object]:
    return {
        "error-type": operation_effective_error_type(operation.error_type),
        "error-details": _plain_mapping(operation.error_details),
    }


def _encode_mark_as_processed(operation: MarkAsProcessedOperation) -> dict[str, object]:
    return {"base-commit-sha": operation.base_commit_sha}


def _encode_update_dependency_list(operation: UpdateDependencyListOperation) -> dict[str, object]:
    return {
        "dependencies": [dict(dependency) for dependency in operation.dependencies],
        "dependency_files": list(operation.dependency_files),
    }


def _encode_record_ecosystem_versions(operation: RecordEcosystemVersionsOperation) -> dict[str, object]:
    return {"ecosystem_versions": dict(operation.ecosystem_versions)}


def _encode_increment_metric(operation: IncrementMetricOperation) -> dict[str, object]:
    return {"metric": operation.metric, "tags": dict(operation.tags)}


def _plain_mapping(value: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if value is None:
        return None
    return dict(value)


_OPERATION_ENCODERS: Final[dict[type[ApiOperation], Callable[[Any], dict[str, object]]]] = {
    CreatePullRequestOperation: _encode_create_pull_request,
    UpdatePullRequestOperation: _encode_update_pull_request,
    ClosePullRequestOperation: _encode_close_pull_request,
    RecordUpdateJobErrorOperation: _encode_record_update_job_error,
    RecordUpdateJobUnknownErrorOperation: _encode_record_update_job_unknown_error,
    MarkAsProcessedOperation: _encode_mark_as_processed,
    UpdateDependencyListOperation: _encode_update_dependency_list,
    RecordEcosystemVersionsOperation: _encode_record_ecosystem_versions,
    IncrementMetricOperation: _encode_increment_metric,
}


def operation_encode_payload(operation: ApiOperation) -> dict[str, object]:
    """Encode one operation into the service request envelope.

    Args:
        operation: Operation record.

    Returns:
        dict[str, object]: JSON-serializable `{"data": {...}}` body.

    Raises:
        TypeError: Raised for unsupported operation records.
    """

    encoder = _OPERATION_ENCODERS.get(type(operation))
    if encoder is None:
        raise TypeError(f"Unsupported operation type: {type(operation).__name__}")
    return {"data": encoder(operation)}


def operation_span_attributes(operation: ApiOperation) -> dict[str, object]:
    """Return operation-specific tracing attributes.

    Args:
        operation: Operation record.

    Returns:
        dict[str, object]: Attribute map without the job id.
    """

    if isinstance(operation, (CreatePullRequestOperation, UpdatePullRequestOperation)):
        return {
            TelemetryAttribute.BASE_COMMIT_SHA.value: operation.base_commit_sha,
            TelemetryAttribute.DEPENDENCY_NAMES.value: operation.dependency_change.change_humanized(),
        }
    if isinstance(operation, ClosePullRequestOperation):
        return {TelemetryAttribute.PR_CLOSE_REASON.value: operation.reason}
    if isinstance(operation, MarkAsProcessedOperation):
        return {TelemetryAttribute.BASE_COMMIT_SHA.value: operation.base_commit_sha}
    if isinstance(operation, (RecordUpdateJobErrorOperation, RecordUpdateJobUnknownErrorOperation)):
        return {TelemetryAttribute.ERROR_TYPE.value: operation_effective_error_type(operation.error_type)}
    if isinstance(operation, IncrementMetricOperation):
        attributes: dict[str, object] = {TelemetryAttribute.METRIC.value: operation.metric}
        attributes.update(operation.tags)
        return attributes
    return {}


def operation_normalize_dependency_names(dependency_names: str | Sequence[str]) -> str | tuple[str, ...]:
    """Normalize close-request names to a hashable value.

    Args:
        dependency_names: One name or a sequence of names.

    Returns:
        str | tuple[str, ...]: Single name unchanged, sequences as tuples.
    """

    if isinstance(dependency_names, str):
        return dependency_names
    return tuple(dependency_names)
