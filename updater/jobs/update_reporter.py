"""Job-layer routing of change and error reports to the update API."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from updater.adapters import OperationName, UpdateApiPort
from updater.domain import DependencyChange

logger = logging.getLogger(__name__)


class UpdateJobReporter:
    """Choose which service operation reports each job outcome."""

    def __init__(self, api_client: UpdateApiPort):
        """Initialize reporter dependencies.

        Args:
            api_client: Update API client.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when api_client is missing.
        """

        if api_client is None:
            raise ValueError("api_client must not be None")
        self._api_client = api_client

    def job_report_dependency_change(self, dependency_change: DependencyChange, base_commit_sha: str) -> OperationName:
        """Create or refresh a proposal for the computed change.

        A new proposal is created unless the job refreshes an open proposal
        that tracks the same dependency set.

        Args:
            dependency_change: Computed change.
            base_commit_sha: Commit the change was computed against.

        Returns:
            OperationName: Operation that was dispatched.

        Raises:
            ValueError: Raised when base_commit_sha is blank.
            ApiApplicationError: Propagated from the API client.
            ApiTransientError: Propagated from the API client.
        """

        if not base_commit_sha.strip():
            raise ValueError("base_commit_sha must not be blank")

        job = dependency_change.job
        if job.updating_a_pull_request and not dependency_change.change_should_replace_existing_pr():
            self._api_client.api_update_pull_request(dependency_change, base_commit_sha)
            return OperationName.UPDATE_PULL_REQUEST

        if job.updating_a_pull_request:
            logger.info(
                "Dependency set changed for job %s, superseding open proposal: %s",
                job.id,
                dependency_change.change_humanized(),
            )
        self._api_client.api_create_pull_request(dependency_change, base_commit_sha)
        return OperationName.CREATE_PULL_REQUEST

    def job_report_error(
        self,
        error_type: str | None,
        error_details: Mapping[str, Any] | None,
        known: bool,
    ) -> OperationName:
        """Record a job error through the known or unknown error endpoint.

        Args:
            error_type: Error type, optional for unknown errors.
            error_details: Structured error details.
            known: Whether the caller recognized the error.

        Returns:
            OperationName: Operation that was dispatched.

        Raises:
            ApiApplicationError: Propagated from the API client.
            ApiTransientError: Propagated from the API client.
        """

        if known and error_type is not None:
            self._api_client.api_record_update_job_error(error_type=error_type, error_details=error_details)
            return OperationName.RECORD_UPDATE_JOB_ERROR

        self._api_client.api_record_update_job_unknown_error(error_type=error_type, error_details=error_details)
        return OperationName.RECORD_UPDATE_JOB_UNKNOWN_ERROR

    def job_report_completion(
        self,
        base_commit_sha: str,
        ecosystem_versions: Mapping[str, Any] | None = None,
    ) -> None:
        """Record ecosystem versions when known, then mark the job processed.

        Args:
            base_commit_sha: Commit the job ran against.
            ecosystem_versions: Optional tool version map.

        Raises:
            ApiApplicationError: Propagated from the API client.
            ApiTransientError: Propagated from the API client.
        """

        if ecosystem_versions:
            self._api_client.api_record_ecosystem_versions(ecosystem_versions)
        self._api_client.api_mark_job_as_processed(base_commit_sha)
