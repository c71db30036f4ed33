"""
Binding Tree

A virtual tree shaped like a MapSchema whose leaves read and write
through to mounted documents.

Reading a leaf resolves its reference path against the MountStore (first
segment names the mount). Reading a nested schema node returns another
BindingTree over the same store, so ``tree.network.host`` and
``tree.get("network/host")`` are equivalent and nothing is copied on the
way down. Paths that run past a leaf continue into the mount data:

    schema  {"net": "settings.network"}
    tree.get("net.port")  ->  store.resolve("settings.network.port")

Writing a leaf delegates to MountStore.set and so raises a ChangeEvent.
Writing a whole nested schema node is not supported and returns False.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from mountmap.core.mounts import MountStore
from mountmap.core.paths import PathLike, split_path
from mountmap.core.schema import MapSchema, iter_references
from mountmap.types.json import NOT_FOUND

logger = logging.getLogger(__name__)


class BindingTree:
    """
    Navigable view binding a MapSchema to a MountStore.

    Attribute access reaches map keys that do not clash with this class's
    own members; a key such as "keys", "get" or "path" is read with
    tree["keys"] or tree.get("keys") instead.

    Args:
        schema: Schema from build_schema()
        store: Store holding the mounts the schema references
    """

    __slots__ = ("_schema", "_store", "_prefix")

    def __init__(
        self,
        schema: MapSchema,
        store: MountStore,
        *,
        _prefix: tuple[str, ...] = (),
    ) -> None:
        self._schema = schema
        self._store = store
        self._prefix = _prefix

    @property
    def path(self) -> str:
        """Dotted map path of this node ("" for the root)."""
        return ".".join(self._prefix)

    @property
    def store(self) -> MountStore:
        return self._store

    def _locate(self, segments: tuple[str, ...]) -> tuple[Any, tuple[str, ...], tuple[str, ...]]:
        """
        Walk the schema along segments.

        Returns:
            (schema node or leaf reference or NOT_FOUND, segments consumed,
            segments left over past a leaf)
        """
        node: Any = self._schema
        for index, segment in enumerate(segments):
            if isinstance(node, str):
                return node, segments[:index], segments[index:]
            if segment not in node:
                return NOT_FOUND, segments[:index], segments[index:]
            node = node[segment]
        return node, segments, ()

    # === Read ===

    def get(self, path: PathLike = "") -> Any:
        """
        Read a map path.

        Returns:
            A BindingTree for nested schema nodes, the resolved mount value
            for leaves (MountedValue for containers), or NOT_FOUND. An
            empty path returns self.
        """
        segments = split_path(path)
        if not segments:
            return self
        node, consumed, rest = self._locate(segments)
        if node is NOT_FOUND:
            return NOT_FOUND
        if isinstance(node, dict):
            return BindingTree(node, self._store, _prefix=(*self._prefix, *consumed))
        return self._store.resolve((*split_path(node), *rest))

    def node(self, path: PathLike) -> BindingTree | Any:
        """Return the sub-tree at a map path, or NOT_FOUND if it is not a schema node."""
        found = self.get(path)
        return found if isinstance(found, BindingTree) else NOT_FOUND

    def reference(self, path: PathLike) -> str | Any:
        """Return the full reference path a map path resolves through, or NOT_FOUND."""
        node, _, rest = self._locate(split_path(path))
        if not isinstance(node, str):
            return NOT_FOUND
        return ".".join((*split_path(node), *rest))

    def references(self) -> dict[str, str]:
        """Map path -> reference path for every leaf below this node."""
        return dict(iter_references(self._schema))

    def keys(self) -> list[str]:
        return list(self._schema)

    # === Write ===

    def set(self, path: PathLike, value: Any) -> bool:
        """
        Write value through the leaf at a map path.

        Returns:
            True if the mount accepted the write. False for nested schema
            nodes, unknown map paths, unknown mounts and unresolvable
            in-mount parents.
        """
        node, _, rest = self._locate(split_path(path))
        if not isinstance(node, str):
            logger.debug(f"Rejected write to non-leaf map path {path!r}")
            return False
        if isinstance(value, BindingTree):
            value = value.snapshot()
        return self._store.set((*split_path(node), *rest), value)

    # === Snapshots ===

    def snapshot(self, depth: int = -1) -> dict[str, Any]:
        """Plain JSON copy of this sub-tree, see mountmap.core.render."""
        from mountmap.core.render import render

        return render(self, depth)

    # === Container protocol ===

    def __getitem__(self, key: str) -> Any:
        found = self.get(key)
        if found is NOT_FOUND:
            raise KeyError(key)
        return found

    def __setitem__(self, key: str, value: Any) -> None:
        if not self.set(key, value):
            raise KeyError(key)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name not in self._schema:
            raise AttributeError(f"Map node {self.path or '/'!r} has no entry {name!r}")
        return self.get(name)

    def __contains__(self, key: object) -> bool:
        return key in self._schema

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._schema))

    def __len__(self) -> int:
        return len(self._schema)

    def __repr__(self) -> str:
        return f"BindingTree({self.path or '/'}: {sorted(self._schema)})"
