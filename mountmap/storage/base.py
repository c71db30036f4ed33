"""
Abstract Document Source Interface

Defines the contract for anything that turns a manifest's source ids into
JSON documents.
"""

from abc import ABC, abstractmethod
from typing import Any


class DocumentSource(ABC):
    """
    Abstract interface for document sources.

    Sources are consulted once per mount while an Overlay is constructed.
    Writes made afterwards live only in memory; sources are never written
    back to.
    """

    @abstractmethod
    def load(self, source_id: str) -> Any:
        """
        Load one JSON document.

        Raises:
            ManifestError: If the document is missing or not valid JSON
        """
        ...

    def describe(self, source_id: str) -> str:
        """Human readable location for a source id (used in logs)."""
        return source_id
