"""Update job metadata consumed by change descriptors and reporting workflows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class ExistingProposalState:
    """Snapshot of the open proposal a job may refresh or replace.

    Attributes:
        tracked_dependency_names: Dependency names tracked by the open proposal.
        is_update_in_progress: Whether the job is refreshing an open proposal.
    """

    tracked_dependency_names: tuple[str, ...]
    is_update_in_progress: bool


@dataclass(frozen=True)
class UpdateJob:
    """Job-level metadata for one execution of the update workflow.

    Attributes:
        id: Orchestration-service job identifier.
        source: Opaque source-repository descriptor.
        credentials: Credential entries handed to collaborators.
        commit_message_options: Commit message configuration.
        ignore_conditions: Ignore rules configured for the job.
        existing_pull_request_dependency_names: Names tracked by the open proposal.
        updating_a_pull_request: Whether the job refreshes an open proposal.
    """

    id: str | int
    source: Mapping[str, Any]
    credentials: tuple[Mapping[str, Any], ...] = ()
    commit_message_options: Mapping[str, Any] | None = None
    ignore_conditions: tuple[Mapping[str, Any], ...] = ()
    existing_pull_request_dependency_names: tuple[str, ...] = ()
    updating_a_pull_request: bool = False

    def job_existing_proposal_state(self) -> ExistingProposalState:
        """Return the open-proposal snapshot for replacement decisions.

        Returns:
            ExistingProposalState: Tracked names and refresh flag.
        """

        return ExistingProposalState(
            tracked_dependency_names=tuple(self.existing_pull_request_dependency_names),
            is_update_in_progress=self.updating_a_pull_request,
        )
