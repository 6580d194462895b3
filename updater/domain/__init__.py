"""Domain models used across updater layer boundaries."""

from .dependency_change import DEFAULT_PR_MESSAGE_MAX_LENGTH, DependencyChange
from .interfaces import PullRequestMessageBuilderPort, PullRequestMessageRequest
from .job import ExistingProposalState, UpdateJob
from .models import Dependency, DependencyFile, DependencyGroup, PullRequestMessage
from .replacement import domain_normalize_dependency_names, domain_should_replace_existing_proposal

__all__ = [
    "DEFAULT_PR_MESSAGE_MAX_LENGTH",
    "Dependency",
    "DependencyChange",
    "DependencyFile",
    "DependencyGroup",
    "ExistingProposalState",
    "PullRequestMessage",
    "PullRequestMessageBuilderPort",
    "PullRequestMessageRequest",
    "UpdateJob",
    "domain_normalize_dependency_names",
    "domain_should_replace_existing_proposal",
]
