"""Typed interfaces for domain-layer collaborators."""

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from .models import Dependency, DependencyFile, DependencyGroup, PullRequestMessage


@dataclass(frozen=True)
class PullRequestMessageRequest:
    """Argument set forwarded to the external message builder.

    Attributes:
        source: Job source descriptor.
        files: Updated dependency files.
        dependencies: Updated dependencies.
        credentials: Job credentials.
        commit_message_options: Job commit-message configuration.
        dependency_group: Group for grouped updates.
        pr_message_encoding: Optional body encoding override.
        pr_message_max_length: Optional body length cap.
        ignore_conditions: Job ignore conditions.
    """

    source: Mapping[str, Any]
    files: tuple[DependencyFile, ...]
    dependencies: tuple[Dependency, ...]
    credentials: tuple[Mapping[str, Any], ...]
    commit_message_options: Mapping[str, Any] | None
    dependency_group: DependencyGroup | None
    pr_message_encoding: str | None
    pr_message_max_length: int | None
    ignore_conditions: tuple[Mapping[str, Any], ...]


class PullRequestMessageBuilderPort(Protocol):
    """Port definition for generating proposal prose."""

    def message_build(self, request: PullRequestMessageRequest) -> PullRequestMessage | None:
        """Build commit message, title and body for one change.

        Args:
            request: Complete message-builder argument set.

        Returns:
            PullRequestMessage | None: Generated message, or None when unavailable.

        Raises:
            RuntimeError: Raised when message generation fails.
        """
