"""Typed domain models shared across updater layers.

This module provides the immutable records describing what an update job
changed. Requirement entries are opaque mappings owned by the dependency
resolver and are only forwarded, never interpreted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class Dependency:
    """One dependency touched by an update attempt.

    Attributes:
        name: Package name as reported by the ecosystem.
        version: New version, absent for removed dependencies.
        previous_version: Version before the update.
        requirements: Updated requirement entries in manifest order.
        previous_requirements: Requirement entries before the update.
        removed: Whether the update removes the dependency.
        package_manager: Optional ecosystem label.
    """

    name: str
    version: str | None = None
    previous_version: str | None = None
    requirements: tuple[Mapping[str, Any], ...] = ()
    previous_requirements: tuple[Mapping[str, Any], ...] = ()
    removed: bool = False
    package_manager: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must not be blank")
        if self.removed and self.version is not None:
            raise ValueError("removed dependency must not carry a version")
        object.__setattr__(self, "requirements", tuple(self.requirements))
        object.__setattr__(self, "previous_requirements", tuple(self.previous_requirements))

    def dependency_humanized_version(self) -> str:
        """Return display label for the new version.

        Returns:
            str: `removed` for removed dependencies, else version or `unknown`.
        """

        if self.removed:
            return "removed"
        return self.version or "unknown"


@dataclass(frozen=True)
class DependencyFile:
    """One manifest or lockfile produced by an update attempt.

    Attributes:
        name: File name relative to directory.
        directory: Repository directory holding the file.
        content: Updated file content.
        type: File kind marker.
        support_file: Whether the file only supports resolution.
        content_encoding: Encoding of `content`.
        deleted: Whether the update deletes the file.
        operation: File operation marker (`update`, `create`, `delete`).
    """

    name: str
    directory: str
    content: str | None
    type: str = "file"
    support_file: bool = False
    content_encoding: str = "utf-8"
    deleted: bool = False
    operation: str = "update"

    def file_payload(self) -> dict[str, object]:
        """Serialize the file for orchestration-service payloads.

        Returns:
            dict[str, object]: Stable key set describing the file.
        """

        return {
            "name": self.name,
            "content": self.content,
            "directory": self.directory,
            "type": self.type,
            "support_file": self.support_file,
            "content_encoding": self.content_encoding,
            "deleted": self.deleted,
            "operation": self.operation,
        }


@dataclass(frozen=True)
class DependencyGroup:
    """Named batch of dependencies updated together.

    Attributes:
        name: Group name configured by the repository owner.
        rules: Opaque matching rules.
    """

    name: str
    rules: Mapping[str, Any] = field(default_factory=dict)

    def group_payload(self) -> dict[str, object]:
        """Serialize the group for orchestration-service payloads."""

        return {"name": self.name}


@dataclass(frozen=True)
class PullRequestMessage:
    """Generated proposal prose returned by the message builder.

    Attributes:
        commit_message: Commit message text.
        pr_name: Proposal title.
        pr_message: Proposal body.
    """

    commit_message: str | None = None
    pr_name: str | None = None
    pr_message: str | None = None
