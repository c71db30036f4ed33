"""
Overlay - Primary Entry Point

The Overlay class loads a manifest's mounts, binds them through the map
template and exposes the unified tree.

An overlay is assembled from:
    - MountStore: the mounted documents, instrumented for writes
    - ChangeBus: where every write is published
    - MapSchema: the map template reduced to its reference leaves
    - BindingTree: the navigable view over all of the above

Example:
    >>> overlay = Overlay.from_file("./manifest.json")
    >>> overlay.get("network/host")
    'db.internal'
    >>> stop = overlay.on_change("settings", lambda key, value: print(key, value))
    >>> overlay.set("network.port", 5433)
    port 5433
    True
    >>> overlay.render("network", depth=-1)
    {'host': 'db.internal', 'port': 5433, 'tags': ['a', 'b']}
    >>> stop()

Writes are in memory only; subscribe to persist them elsewhere.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from mountmap.core.binding import BindingTree
from mountmap.core.events import ALL_MOUNTS, ChangeBus, EventHandler, KeyValueHandler, Unsubscribe
from mountmap.core.flatten import apply_flat, flatten
from mountmap.core.mounts import MountStore
from mountmap.core.paths import PathLike
from mountmap.core.render import render
from mountmap.core.schema import MapSchema, build_schema, find_invalid_references, iter_references
from mountmap.errors import InvalidReference
from mountmap.types.events import ChangeEvent
from mountmap.types.json import NOT_FOUND, FlatMap
from mountmap.types.manifest import Manifest
from mountmap.types.results import FlatUpdateResult, OverlayInfo

if TYPE_CHECKING:
    from mountmap.config.settings import MapConfig
    from mountmap.storage.base import DocumentSource

logger = logging.getLogger(__name__)


class Overlay:
    """
    A set of mounted JSON documents presented as one tree.

    Args:
        manifest: Mount table and map template
        source: Where to load documents from. Defaults to JSON files
            relative to the current directory.
        config: Optional configuration. Uses defaults if not provided.

    Raises:
        DuplicateMount, ManifestError, MalformedTemplate: on bad input
        InvalidReference: if strict_references is set and the map names
            unknown mounts
    """

    def __init__(
        self,
        manifest: Manifest,
        source: "DocumentSource | None" = None,
        config: "MapConfig | None" = None,
    ) -> None:
        # Lazy imports to keep the core importable on its own
        if config is None:
            from mountmap.config import MapConfig
            config = MapConfig()
        if source is None:
            from mountmap.storage.json_file import JsonFileSource
            source = JsonFileSource()
        self._config = config
        self._manifest = manifest

        self._bus = ChangeBus()
        self._store = MountStore(self._bus)
        for name, source_id in manifest.mounts.items():
            self._store.load(name, source.load(source_id), source=source.describe(source_id))

        from mountmap.storage.manifest import resolve_template
        self._schema = build_schema(resolve_template(manifest, source))
        self._tree = BindingTree(self._schema, self._store)

        issues = find_invalid_references(self._schema, self._store)
        if issues and config.strict_references:
            raise InvalidReference(issues)
        for issue in issues:
            logger.warning(
                f"Map entry {issue.map_path!r} references unknown mount {issue.mount!r}"
            )

        if config.log_changes:
            self._bus.subscribe(ALL_MOUNTS, self._log_change)

        logger.info(
            f"Overlay ready: {len(self._store)} mounts, "
            f"{sum(1 for _ in iter_references(self._schema))} references"
        )

    @classmethod
    def from_file(
        cls,
        manifest_path: str | Path,
        config: "MapConfig | None" = None,
    ) -> "Overlay":
        """Build an overlay from a manifest file; documents resolve relative to it."""
        from mountmap.storage.json_file import JsonFileSource
        from mountmap.storage.manifest import load_manifest

        manifest_path = Path(manifest_path)
        manifest = load_manifest(manifest_path)
        return cls(manifest, JsonFileSource(manifest_path.resolve().parent), config)

    @classmethod
    def from_documents(
        cls,
        mounts: Mapping[str, Any],
        map_template: dict[str, Any],
        config: "MapConfig | None" = None,
    ) -> "Overlay":
        """Build an overlay from in-memory documents keyed by mount name."""
        from mountmap.storage.memory import DictSource

        manifest = Manifest(mounts={name: name for name in mounts}, map=map_template)
        return cls(manifest, DictSource(dict(mounts)), config)

    @staticmethod
    def _log_change(event: ChangeEvent) -> None:
        logger.info(f"Changed {event.mount}:{event.path} = {event.value!r}")

    # === Properties ===

    @property
    def config(self) -> "MapConfig":
        """Current configuration."""
        return self._config

    @property
    def manifest(self) -> Manifest:
        return self._manifest

    @property
    def store(self) -> MountStore:
        return self._store

    @property
    def bus(self) -> ChangeBus:
        return self._bus

    @property
    def schema(self) -> MapSchema:
        return self._schema

    @property
    def tree(self) -> BindingTree:
        """Root of the unified tree."""
        return self._tree

    # === Read / Write ===

    def get(self, path: PathLike = "") -> Any:
        """Read a map path (see BindingTree.get)."""
        return self._tree.get(path)

    def set(self, path: PathLike, value: Any) -> bool:
        """Write through a map leaf. Returns True if applied."""
        return self._tree.set(path, value)

    def node(self, path: PathLike) -> Any:
        """Sub-tree at a map path, or NOT_FOUND."""
        return self._tree.node(path)

    def render(self, path: PathLike = "", depth: int | None = None) -> Any:
        """Plain snapshot of a map path; depth defaults to config.default_depth."""
        value = self._tree.get(path)
        if value is NOT_FOUND:
            return NOT_FOUND
        return render(value, self._config.default_depth if depth is None else depth)

    def flatten(self, path: PathLike = "") -> FlatMap | Any:
        """Flat encoding of the full value at a map path, or NOT_FOUND."""
        value = self.render(path, depth=-1)
        if value is NOT_FOUND:
            return NOT_FOUND
        return flatten(value)

    def apply_flat(self, path: str, flat: Mapping[str, Any]) -> FlatUpdateResult:
        """Write a flat map beneath a map path."""
        return apply_flat(self._tree, path, flat)

    # === Subscriptions ===

    def subscribe(self, mount: str, handler: EventHandler) -> Unsubscribe:
        """Register handler(event) for a mount, or "*" for all."""
        return self._bus.subscribe(mount, handler)

    def on_change(self, mount: str, handler: KeyValueHandler) -> Unsubscribe:
        """Register handler(key, value) for a mount, or "*" for all."""
        return self._bus.on_change(mount, handler)

    # === Introspection ===

    def info(self) -> OverlayInfo:
        """Mounts, reference count and invalid references."""
        return OverlayInfo(
            mounts=self._store.info(),
            references=sum(1 for _ in iter_references(self._schema)),
            invalid_references=find_invalid_references(self._schema, self._store),
        )
