"""
Manifest Loading

Reads a manifest file and resolves the map template it points at.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mountmap.errors import ManifestError
from mountmap.storage.base import DocumentSource
from mountmap.types.manifest import Manifest

logger = logging.getLogger(__name__)


def parse_manifest(data: Any) -> Manifest:
    """
    Validate raw manifest data.

    Raises:
        ManifestError: If the data does not match the manifest shape
    """
    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest: {e}") from e


def load_manifest(path: str | Path) -> Manifest:
    """
    Load a JSON manifest file.

    Raises:
        ManifestError: If the file is unreadable, not JSON or malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in manifest {path}: {e}") from e
    manifest = parse_manifest(data)
    logger.debug(f"Manifest {path}: {len(manifest.mounts)} mounts")
    return manifest


def resolve_template(manifest: Manifest, source: DocumentSource) -> Any:
    """Return the map template, loading it from the source if given as an id."""
    if isinstance(manifest.map, str):
        logger.debug(f"Loading map template from {source.describe(manifest.map)}")
        return source.load(manifest.map)
    return manifest.map
