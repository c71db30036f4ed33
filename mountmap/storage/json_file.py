"""
JSON File Source

Loads mount documents and map templates from JSON files on disk.
"""

import json
import logging
from pathlib import Path
from typing import Any

from mountmap.errors import ManifestError
from mountmap.storage.base import DocumentSource

logger = logging.getLogger(__name__)


class JsonFileSource(DocumentSource):
    """
    Reads UTF-8 JSON files.

    Args:
        base_dir: Directory relative source ids are resolved against
            (normally the manifest's directory). Defaults to the CWD.
    """

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, source_id: str) -> Path:
        """Filesystem path a source id refers to."""
        path = Path(source_id).expanduser()
        if not path.is_absolute():
            path = self._base_dir / path
        return path

    def describe(self, source_id: str) -> str:
        return str(self.path_for(source_id))

    def load(self, source_id: str) -> Any:
        path = self.path_for(source_id)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ManifestError(f"Cannot read document {path}: {e}") from e
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in {path}: {e}") from e
        logger.debug(f"Loaded {path} ({len(text)} bytes)")
        return document
