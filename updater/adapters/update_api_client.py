"""Orchestration-service API client for reporting update job lifecycle events."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
import logging
import os
import random
import ssl
import time
from typing import Any, Callable, Final, Iterator, Mapping, Sequence
from urllib.parse import urlsplit
import urllib.request

import httpx

from updater.domain import DependencyChange

from .api_errors import ApiApplicationError, ApiTransientError
from .error_classifier import error_classify
from .interfaces import ErrorEventSinkPort, SpanPort, TracerPort, UpdateApiPort
from .operations import (
    ApiOperation,
    ClosePullRequestOperation,
    CreatePullRequestOperation,
    IncrementMetricOperation,
    MarkAsProcessedOperation,
    RecordEcosystemVersionsOperation,
    RecordUpdateJobErrorOperation,
    RecordUpdateJobUnknownErrorOperation,
    UpdateDependencyListOperation,
    UpdatePullRequestOperation,
    operation_encode_payload,
    operation_normalize_dependency_names,
    operation_span_attributes,
)
from .telemetry import LoggingErrorEventSink, NoOpTracer, TelemetryAttribute

logger = logging.getLogger(__name__)

_TRANSIENT_TRANSPORT_ERRORS: Final[tuple[type[BaseException], ...]] = (httpx.ConnectError, ssl.SSLError)


@dataclass(frozen=True)
class JobIdentity:
    """Immutable identity of the job being reported.

    Attributes:
        base_url: Orchestration-service base URL without trailing slash.
        job_id: Job identifier.
        auth_token: Per-job token sent verbatim as the `Authorization` value.
    """

    base_url: str
    job_id: str | int
    auth_token: str

    def identity_operation_url(self, operation_name: str) -> str:
        """Return endpoint URL for one operation.

        Args:
            operation_name: Operation endpoint name.

        Returns:
            str: `{base_url}/update_jobs/{job_id}/{operation_name}`.
        """

        return f"{self.base_url}/update_jobs/{self.job_id}/{operation_name}"


@dataclass(frozen=True)
class _ApiRetryStrategy:
    """Immutable retry strategy config and wait calculation.

    Attributes:
        retry_attempts: Additional attempts after the first transient failure.
        min_wait_seconds: Lower bound of the randomized wait.
        max_wait_seconds: Upper bound of the randomized wait.
        random_unit_interval_provider: Provider returning value in [0.0, 1.0].
    """

    retry_attempts: int
    min_wait_seconds: float
    max_wait_seconds: float
    random_unit_interval_provider: Callable[[], float]

    def strategy_calculate_retry_wait_seconds(self) -> float:
        """Return a uniformly distributed wait between configured bounds.

        Returns:
            float: Wait seconds before the next attempt.

        Raises:
            RuntimeError: Raised when random source returns value outside [0.0, 1.0].
        """

        random_ratio = float(self.random_unit_interval_provider())
        if random_ratio < 0.0 or random_ratio > 1.0:
            raise RuntimeError("random_unit_interval_provider must return a value in [0.0, 1.0]")

        wait_span = self.max_wait_seconds - self.min_wait_seconds
        return self.min_wait_seconds + (random_ratio * wait_span)


class UpdateApiClient(UpdateApiPort):
    """Client reporting job lifecycle events to the orchestration service."""

    def __init__(
        self,
        base_url: str,
        job_id: str | int,
        job_token: str,
        tracer: TracerPort | None = None,
        error_sink: ErrorEventSinkPort | None = None,
        retry_attempts: int = 3,
        retry_min_wait_seconds: float = 3.0,
        retry_max_wait_seconds: float = 10.0,
        random_unit_interval_provider: Callable[[], float] | None = None,
    ):
        """Initialize update API client.

        Args:
            base_url: Orchestration-service base URL.
            job_id: Job identifier.
            job_token: Per-job token.
            tracer: Tracing port, no-op when omitted.
            error_sink: Observability sink for job errors, logging when omitted.
            retry_attempts: Additional attempts after a transient failure.
            retry_min_wait_seconds: Lower bound of randomized retry wait.
            retry_max_wait_seconds: Upper bound of randomized retry wait.
            random_unit_interval_provider: Optional provider returning random values in [0.0, 1.0).

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_base_url = base_url.strip()
        normalized_job_id = job_id.strip() if isinstance(job_id, str) else job_id
        normalized_token = job_token.strip()

        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if normalized_job_id == "":
            raise ValueError("job_id must not be blank")
        if not normalized_token:
            raise ValueError("job_token must not be blank")
        if retry_attempts < 0:
            raise ValueError("retry_attempts must be >= 0")
        if retry_min_wait_seconds < 0:
            raise ValueError("retry_min_wait_seconds must be >= 0")
        if retry_max_wait_seconds < retry_min_wait_seconds:
            raise ValueError("retry_max_wait_seconds must be >= retry_min_wait_seconds")

        self._identity = JobIdentity(
            base_url=normalized_base_url.rstrip("/"),
            job_id=normalized_job_id,
            auth_token=normalized_token,
        )
        self._tracer = tracer or NoOpTracer()
        self._error_sink = error_sink or LoggingErrorEventSink()
        self._retry_strategy = _ApiRetryStrategy(
            retry_attempts=retry_attempts,
            min_wait_seconds=retry_min_wait_seconds,
            max_wait_seconds=retry_max_wait_seconds,
            random_unit_interval_provider=random_unit_interval_provider or random.random,
        )

    @property
    def identity(self) -> JobIdentity:
        """Return immutable job identity."""

        return self._identity

    def api_create_pull_request(self, dependency_change: DependencyChange, base_commit_sha: str) -> None:
        """Report a newly proposed change.

        Args:
            dependency_change: Change to propose.
            base_commit_sha: Commit the change was computed against.

        Raises:
            ApiApplicationError: Raised when the service rejects the request.
            ApiTransientError: Raised when transport failures exhaust retries.
        """

        self.api_send(CreatePullRequestOperation(dependency_change=dependency_change, base_commit_sha=base_commit_sha))

    def api_update_pull_request(self, dependency_change: DependencyChange, base_commit_sha: str) -> None:
        """Report a recomputed change for the open proposal.

        Args:
            dependency_change: Recomputed change.
            base_commit_sha: Commit the change was computed against.

        Raises:
            ApiApplicationError: Raised when the service rejects the request.
            ApiTransientError: Raised when transport failures exhaust retries.
        """

        self.api_send(UpdatePullRequestOperation(dependency_change=dependency_change, base_commit_sha=base_commit_sha))

    def api_close_pull_request(self, dependency_names: str | Sequence[str], reason: str) -> None:
        """Report that the proposal for the named dependencies should close.

        Args:
            dependency_names: One name or a list of names.
            reason: Close reason label.

        Raises:
            ApiApplicationError: Raised when the service rejects the request.
            ApiTransientError: Raised when transport failures exhaust retries.
        """

        self.api_send(
            ClosePullRequestOperation(
                dependency_names=operation_normalize_dependency_names(dependency_names),
                reason=str(reason),
            )
        )

    def api_record_update_job_error(self, error_type: str, error_details: Mapping[str, Any] | None) -> None:
        """Record a known job error after mirroring it to observability.

        Args:
            error_type: Known error type.
            error_details: Structured error details.

        Raises:
            ApiApplicationError: Raised when the service rejects the request.
            ApiTransientError: Raised when transport failures exhaust retries.
        """

        classification = error_classify(
            job_id=self._identity.job_id,
            error_type=error_type,
            error_details=error_details,
            sink=self._error_sink,
        )
        self.api_send(
            RecordUpdateJobErrorOperation(
                error_type=classification.effective_error_type,
                error_details=error_details,
            )
        )

    def api_record_update_job_unknown_error(
        self,
        error_type: str | None,
        error_details: Mapping[str, Any] | None,
    ) -> None:
        """Record an unclassified job error after mirroring it to observability.

        Args:
            error_type: Optional error type, `unknown_error` when absent.
            error_details: Structured error details.

        Raises:
            ApiApplicationError: Raised when the service rejects the request.
            ApiTransientError: Raised when transport failures exhaust retries.
        """

        classification = error_classify(
            job_id=self._identity.job_id,
            error_type=error_type,
            error_details=error_details,
            sink=self._error_sink,
        )
        self.api_send(
            RecordUpdateJobUnknownErrorOperation(
                error_type=classification.effective_error_type,
                error_details=error_details,
            )
        )

    def api_mark_job_as_processed(self, base_commit_sha: str) -> None:
        """Mark the job processed against a base commit.

        Args:
            base_commit_sha: Commit the job ran against.

        Raises:
            ApiApplicationError: Raised when the service rejects the request.
            ApiTransientError: Raised when transport failures exhaust retries.
        """

        self.api_send(MarkAsProcessedOperation(base_commit_sha=base_commit_sha))

    def api_update_dependency_list(
        self,
        dependencies: Sequence[Mapping[str, Any]],
        dependency_files: Sequence[str],
    ) -> None:
        """Replace the service's dependency list for the repository.

        Args:
            dependencies: Serialized dependencies.
            dependency_files: Manifest paths the dependencies came from.

        Raises:
            ApiApplicationError: Raised when the service rejects the request.
            ApiTransientError: Raised when transport failures exhaust retries.
        """

        self.api_send(
            UpdateDependencyListOperation(
                dependencies=tuple(dependencies),
                dependency_files=tuple(dependency_files),
            )
        )

    def api_record_ecosystem_versions(self, ecosystem_versions: Mapping[str, Any]) -> None:
        """Record ecosystem tool versions used by the job.

        Args:
            ecosystem_versions: Version map keyed by tool or language.

        Raises:
            ApiApplicationError: Raised when the service rejects the request.
            ApiTransientError: Raised when transport failures exhaust retries.
        """

        self.api_send(RecordEcosystemVersionsOperation(ecosystem_versions=ecosystem_versions))

    def api_increment_metric(self, metric: str, tags: Mapping[str, str]) -> None:
        """Report one metric increment without failing the caller.

        Args:
            metric: Metric name.
            tags: Metric tags.
        """

        self.api_send(IncrementMetricOperation(metric=metric, tags=dict(tags)))

    def api_send(self, operation: ApiOperation) -> None:
        """Dispatch one operation with bounded retry on transient failures.

        Metric increments are sent once and their failures are only logged.

        Args:
            operation: Operation record to send.

        Raises:
            ApiApplicationError: Raised when the service responds with status `>= 400`.
            ApiTransientError: Raised when connection or TLS failures exhaust retries.
        """

        with self._api_span(operation):
            if isinstance(operation, IncrementMetricOperation):
                try:
                    self._api_send_once(operation)
                except (ApiApplicationError, *_TRANSIENT_TRANSPORT_ERRORS):
                    logger.debug("Unable to report metric '%s'.", operation.metric)
                return

            self._api_send_with_retry(operation)

    def _api_send_with_retry(self, operation: ApiOperation) -> None:
        """Send operation, retrying connection and TLS failures.

        Args:
            operation: Operation record to send.

        Raises:
            ApiApplicationError: Raised on status `>= 400` without retry.
            ApiTransientError: Raised after the final failed attempt.
        """

        max_attempts = self._retry_strategy.retry_attempts + 1
        for attempt_number in range(1, max_attempts + 1):
            try:
                self._api_send_once(operation)
                return
            except _TRANSIENT_TRANSPORT_ERRORS as error:
                if attempt_number >= max_attempts:
                    raise ApiTransientError(
                        f"{operation.operation_name.value} failed after {attempt_number} attempts: {error}",
                        cause=error,
                        attempts=attempt_number,
                        operation_name=operation.operation_name.value,
                    ) from error

                wait_seconds = self._retry_strategy.strategy_calculate_retry_wait_seconds()
                logger.warning(
                    "Transport failure on %s (attempt %s of %s), retrying in %.1fs: %s",
                    operation.operation_name.value,
                    attempt_number,
                    max_attempts,
                    wait_seconds,
                    error,
                )
                time.sleep(wait_seconds)

    def _api_send_once(self, operation: ApiOperation) -> None:
        """Execute one HTTP request for an operation.

        Args:
            operation: Operation record to send.

        Raises:
            ApiApplicationError: Raised on status `>= 400`.
            httpx.ConnectError: Raised when the connection cannot be established.
            ssl.SSLError: Raised when the TLS handshake fails.
        """

        operation_name = operation.operation_name.value
        url = self._identity.identity_operation_url(operation_name)
        payload = operation_encode_payload(operation)
        # The service expects the raw job token as the header value, no `Bearer` scheme.
        with httpx.Client(proxy=self._api_resolve_proxy(), trust_env=False) as client:
            response = client.request(
                operation.http_method,
                url,
                json=payload,
                headers={"Authorization": self._identity.auth_token},
            )

        if response.status_code >= 400:
            raise ApiApplicationError(response.text, status_code=response.status_code, operation_name=operation_name)

    def _api_resolve_proxy(self) -> str | None:
        """Resolve proxy URL for the next request.

        Returns:
            str | None: `HTTPS_PROXY` when set, else the environment proxy for the base URL.
        """

        explicit_proxy = os.environ.get("HTTPS_PROXY")
        if explicit_proxy:
            return explicit_proxy

        parsed_url = urlsplit(self._identity.base_url)
        if parsed_url.hostname and urllib.request.proxy_bypass(parsed_url.hostname):
            return None
        return urllib.request.getproxies().get(parsed_url.scheme) or None

    @contextmanager
    def _api_span(self, operation: ApiOperation) -> Iterator[SpanPort]:
        """Open a tracing span for one operation and always finish it.

        Args:
            operation: Operation being dispatched.

        Yields:
            SpanPort: Open span tagged with job and operation attributes.
        """

        span = self._tracer.start_span(operation.operation_name.value)
        try:
            span.set_attribute(TelemetryAttribute.JOB_ID.value, self._identity.job_id)
            for key, value in operation_span_attributes(operation).items():
                span.set_attribute(key, value)
            yield span
        finally:
            span.finish()
