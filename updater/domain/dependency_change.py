"""In-memory description of what one update attempt changed."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Final, Sequence

from .interfaces import PullRequestMessageBuilderPort, PullRequestMessageRequest
from .job import UpdateJob
from .models import Dependency, DependencyFile, DependencyGroup, PullRequestMessage
from .replacement import domain_should_replace_existing_proposal

DEFAULT_PR_MESSAGE_MAX_LENGTH: Final[int] = 65_535


@dataclass(frozen=True)
class DependencyChange:
    """Immutable change descriptor consumed by payload encoders.

    Attributes:
        job: Job metadata the change belongs to.
        updated_dependencies: Changed dependencies in resolver order.
        updated_dependency_files: Changed files in resolver order.
        message_builder: Collaborator generating proposal prose.
        dependency_group: Group for grouped updates, None otherwise.
        pr_message_encoding: Optional body encoding override.
        pr_message_max_length: Body length cap forwarded to the builder.
    """

    job: UpdateJob
    updated_dependencies: Sequence[Dependency]
    updated_dependency_files: Sequence[DependencyFile]
    message_builder: PullRequestMessageBuilderPort | None = None
    dependency_group: DependencyGroup | None = None
    pr_message_encoding: str | None = None
    pr_message_max_length: int | None = DEFAULT_PR_MESSAGE_MAX_LENGTH

    def __post_init__(self) -> None:
        if self.job is None:
            raise ValueError("job must not be None")
        object.__setattr__(self, "updated_dependencies", tuple(self.updated_dependencies))
        object.__setattr__(self, "updated_dependency_files", tuple(self.updated_dependency_files))

    @cached_property
    def change_pr_message(self) -> PullRequestMessage | None:
        """Return generated proposal prose, computed once per change.

        Returns:
            PullRequestMessage | None: Builder output, or None without a builder.

        Raises:
            RuntimeError: Propagated from the message builder.
        """

        if self.message_builder is None:
            return None

        return self.message_builder.message_build(
            PullRequestMessageRequest(
                source=self.job.source,
                files=self.updated_dependency_files,
                dependencies=self.updated_dependencies,
                credentials=self.job.credentials,
                commit_message_options=self.job.commit_message_options,
                dependency_group=self.dependency_group,
                pr_message_encoding=self.pr_message_encoding,
                pr_message_max_length=self.pr_message_max_length,
                ignore_conditions=self.job.ignore_conditions,
            )
        )

    def change_dependency_names(self) -> list[str]:
        """Return changed dependency names in resolver order."""

        return [dependency.name for dependency in self.updated_dependencies]

    def change_humanized(self) -> str:
        """Return one-line summary of version movements for diagnostics.

        Returns:
            str: Comma-separated `name ( from old to new )` entries.
        """

        return ", ".join(
            f"{dependency.name} ( from {dependency.previous_version or 'unknown'} "
            f"to {dependency.dependency_humanized_version()} )"
            for dependency in self.updated_dependencies
        )

    def change_updated_dependency_files_payload(self) -> list[dict[str, object]]:
        """Serialize updated files in resolver order."""

        return [dependency_file.file_payload() for dependency_file in self.updated_dependency_files]

    def change_grouped_update(self) -> bool:
        """Return whether the change belongs to a dependency group."""

        return self.dependency_group is not None

    def change_should_replace_existing_pr(self) -> bool:
        """Return whether this change supersedes the job's open proposal.

        Returns:
            bool: Replacement decision for the job's existing proposal state.
        """

        return domain_should_replace_existing_proposal(
            existing=self.job.job_existing_proposal_state(),
            change=self,
        )
