"""
In-Memory Source

Serves documents held in a dict, for embedding MountMap in a host
application and for tests.
"""

import copy
from typing import Any

from mountmap.errors import ManifestError
from mountmap.storage.base import DocumentSource


class DictSource(DocumentSource):
    """
    Document source backed by a mapping of source id -> document.

    Each load() returns a deep copy, so overlays built from the same
    DictSource never share mutable state.
    """

    def __init__(self, documents: dict[str, Any]) -> None:
        self._documents = dict(documents)

    def load(self, source_id: str) -> Any:
        if source_id not in self._documents:
            raise ManifestError(f"Unknown document source: {source_id!r}")
        return copy.deepcopy(self._documents[source_id])

    def describe(self, source_id: str) -> str:
        return f"memory:{source_id}"
