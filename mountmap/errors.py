"""
Error Types

Exceptions raised by MountMap during setup and by its outer surfaces.

Traversal failures are not errors: a path that does not resolve yields
``NOT_FOUND`` and a write that cannot be applied returns ``False``. The
exceptions here cover construction-time problems that should abort startup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mountmap.types.schema import ReferenceIssue


class MountMapError(Exception):
    """Base class for all MountMap errors."""


class DuplicateMount(MountMapError):
    """A mount with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Mount already registered: {name!r}")
        self.name = name


class EmptyPath(MountMapError):
    """A path string contained no segments after normalization."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path has no segments: {path!r}")
        self.path = path


class InvalidReference(MountMapError):
    """One or more map leaves reference a mount that was never loaded."""

    def __init__(self, issues: list["ReferenceIssue"]) -> None:
        listed = ", ".join(f"{i.map_path} -> {i.reference}" for i in issues)
        super().__init__(f"Map references unknown mounts: {listed}")
        self.issues = issues


class MalformedTemplate(MountMapError):
    """The map template cannot be turned into a schema."""


class ManifestError(MountMapError):
    """The manifest or one of its document sources could not be loaded."""
