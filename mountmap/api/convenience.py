"""
Convenience Functions

Top-level functions for common operations without explicit Overlay
instantiation. These are designed for quick scripts and REPL usage.

Example:
    >>> from mountmap import read
    >>> read("./manifest.json", "network", depth=-1)
    {'host': 'db.internal', 'port': 5432}
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mountmap.api.overlay import Overlay
    from mountmap.config.settings import MapConfig


def open_overlay(
    manifest: str | Path,
    *,
    config: "MapConfig | None" = None,
) -> "Overlay":
    """
    Build an overlay from a manifest file.

    Args:
        manifest: Path to the manifest JSON file
        config: Optional configuration
    """
    from mountmap.api.overlay import Overlay
    return Overlay.from_file(manifest, config=config)


def read(
    manifest: str | Path,
    path: str = "",
    *,
    depth: int | None = None,
    **kwargs: Any,
) -> Any:
    """
    Render one map path of a manifest's overlay as plain JSON.

    Args:
        manifest: Path to the manifest JSON file
        path: Map path to read ("" for the whole map)
        depth: Render depth (default: config.default_depth)
        **kwargs: Passed to open_overlay()
    """
    return open_overlay(manifest, **kwargs).render(path, depth=depth)
