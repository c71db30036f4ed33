"""
Result Types

Summaries returned by the Overlay facade and the HTTP listener.
"""

from pydantic import BaseModel

from mountmap.types.schema import ReferenceIssue


class MountInfo(BaseModel):
    """
    Description of one loaded mount.

    Attributes:
        name: Mount name
        source: Document source id it was loaded from (if known)
        kind: Root container kind: "Object", "Array" or "Scalar"
        size: Number of top-level keys or items (0 for scalars)
    """

    name: str
    source: str | None = None
    kind: str
    size: int = 0


class OverlayInfo(BaseModel):
    """
    Overview of an overlay: mounts, references and their health.

    Attributes:
        mounts: Loaded mounts
        references: Number of reference leaves in the map schema
        invalid_references: Leaves naming mounts that are not loaded
    """

    mounts: list[MountInfo] = []
    references: int = 0
    invalid_references: list[ReferenceIssue] = []


class FlatUpdateResult(BaseModel):
    """
    Outcome of applying a flat map beneath a base path.

    Attributes:
        applied: Paths that were written
        rejected: Paths whose write did not resolve
    """

    applied: list[str] = []
    rejected: list[str] = []

    @property
    def ok(self) -> bool:
        """True when every entry was applied."""
        return not self.rejected
