"""Decide whether a computed change supersedes an already-open proposal."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from .job import ExistingProposalState

if TYPE_CHECKING:
    from .dependency_change import DependencyChange


def domain_normalize_dependency_names(names: Iterable[str]) -> frozenset[str]:
    """Collapse dependency names into a case-insensitive set.

    Args:
        names: Dependency names in any order, possibly repeated.

    Returns:
        frozenset[str]: Casefolded unique names.
    """

    return frozenset(name.casefold() for name in names)


def domain_should_replace_existing_proposal(
    existing: ExistingProposalState,
    change: DependencyChange,
) -> bool:
    """Return whether the change must replace the open proposal.

    An update touching the same dependency set as the open proposal, ignoring
    order, repetition and case, refreshes that proposal instead.

    Args:
        existing: Open-proposal snapshot supplied by the caller.
        change: Newly computed dependency change.

    Returns:
        bool: True when an in-progress proposal tracks a different dependency set.
    """

    if not existing.is_update_in_progress:
        return False

    tracked_names = domain_normalize_dependency_names(existing.tracked_dependency_names)
    changed_names = domain_normalize_dependency_names(
        dependency.name for dependency in change.updated_dependencies
    )
    return tracked_names != changed_names
