"""
Mount Store

Owns the mounted documents and instruments every write into them.

Each mount's root container is wrapped in a MountedValue. Navigating a
MountedValue hands out further MountedValues for nested containers,
created on first access and cached, so any object reached by navigation
is instrumented without wrapping the whole document up front. Every
successful write publishes exactly one ChangeEvent on the store's bus.

Example:
    >>> store = MountStore()
    >>> store.load("settings", {"net": {"port": 80}})
    >>> store.bus.on_change("settings", lambda key, value: print(key, value))
    >>> store.set("settings.net.port", 8080)
    port 8080
    True
    >>> store.resolve("settings/net/port")
    8080

Thread safety:
    Writes walk to their target and assign under one per-mount lock, so
    the HTTP listener's worker threads cannot interleave partial updates.
    A wrapper whose container was overwritten is detached: its writes are
    rejected and publish nothing. Events are published after the lock is
    released.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from mountmap.core.events import ChangeBus
from mountmap.core.paths import PathLike, assign, list_index, split_path, step, walk
from mountmap.errors import DuplicateMount
from mountmap.types.events import ChangeEvent
from mountmap.types.json import NOT_FOUND, is_container
from mountmap.types.results import MountInfo

logger = logging.getLogger(__name__)


def _canonical_key(container: Any, segment: str) -> str:
    """Array segments are cached under their plain index ("01" -> "1")."""
    if isinstance(container, list):
        index = list_index(segment)
        if index is not None:
            return str(index)
    return segment


class MountedValue:
    """
    Instrumented view of one container inside a mounted document.

    Reads return nested MountedValues for containers and plain values for
    scalars. Writes go straight into the underlying document and publish a
    ChangeEvent carrying the mount name, the written key and its full path.
    """

    __slots__ = ("_mount", "_data", "_bus", "_prefix", "_lock", "_root", "_children")

    def __init__(
        self,
        mount: str,
        data: dict[str, Any] | list[Any],
        bus: ChangeBus,
        prefix: tuple[str, ...] = (),
        lock: threading.RLock | None = None,
        root: dict[str, Any] | list[Any] | None = None,
    ) -> None:
        self._mount = mount
        self._data = data
        self._bus = bus
        self._prefix = prefix
        self._lock = lock or threading.RLock()
        self._root = data if root is None else root
        self._children: dict[str, MountedValue] = {}

    # === Properties ===

    @property
    def mount(self) -> str:
        """Name of the mount this value belongs to."""
        return self._mount

    @property
    def path(self) -> str:
        """Dotted in-mount path of this container ("" for the root)."""
        return ".".join(self._prefix)

    @property
    def value(self) -> dict[str, Any] | list[Any]:
        """The live underlying container (not a copy)."""
        return self._data

    @property
    def kind(self) -> str:
        """ "Object" or "Array"."""
        return "Array" if isinstance(self._data, list) else "Object"

    # === Navigation ===

    def _child(self, segment: str) -> Any:
        raw = step(self._data, segment)
        if raw is NOT_FOUND or not is_container(raw):
            return raw
        key = _canonical_key(self._data, segment)
        cached = self._children.get(key)
        if cached is not None and cached._data is raw:
            return cached
        child = MountedValue(
            self._mount, raw, self._bus, (*self._prefix, key), self._lock, self._root
        )
        self._children[key] = child
        return child

    def get(self, path: PathLike = "") -> Any:
        """
        Resolve a path below this container.

        Returns:
            A MountedValue for containers, the plain value for scalars,
            or NOT_FOUND if any step fails. An empty path returns self.
        """
        node: Any = self
        for segment in split_path(path):
            if not isinstance(node, MountedValue):
                return NOT_FOUND
            node = node._child(segment)
            if node is NOT_FOUND:
                return NOT_FOUND
        return node

    # === Mutation ===

    def set(self, path: PathLike, value: Any) -> bool:
        """
        Write value at a path below this container.

        Returns:
            True if applied. False for an empty path, when the parent does
            not resolve, or when this container has been detached from its
            mount by an overwrite. Nothing is modified and no event is
            published then.
        """
        segments = split_path(path)
        if not segments:
            return False
        return self._write(segments[:-1], segments[-1], value)

    def _attached(self) -> bool:
        """True while the mount root still reaches this exact container."""
        return walk(self._root, self._prefix) is self._data

    def _write(self, parents: tuple[str, ...], segment: str, value: Any) -> bool:
        if isinstance(value, MountedValue):
            value = value.snapshot()
        with self._lock:
            if not self._attached():
                logger.debug(f"Rejected write through detached {self._mount}:{self.path}")
                return False
            parent = self.get(parents)
            if not isinstance(parent, MountedValue):
                return False
            key = _canonical_key(parent._data, segment)
            if not assign(parent._data, segment, value):
                return False
            parent._children.pop(key, None)
            event = ChangeEvent(
                mount=self._mount,
                key=key,
                value=value,
                path=".".join((*parent._prefix, key)),
            )
        logger.debug(f"Write {self._mount}:{event.path}")
        self._bus.publish(event)
        return True

    def snapshot(self) -> dict[str, Any] | list[Any]:
        """Deep copy of the underlying container."""
        with self._lock:
            return copy.deepcopy(self._data)

    # === Container protocol ===

    def keys(self) -> list[str]:
        """Object keys, or array indices as strings."""
        if isinstance(self._data, list):
            return [str(index) for index in range(len(self._data))]
        return list(self._data.keys())

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield (key, child) pairs, children wrapped like get() does."""
        for key in self.keys():
            yield key, self._child(key)

    def __getitem__(self, key: str | int) -> Any:
        child = self._child(str(key))
        if child is NOT_FOUND:
            raise KeyError(key)
        return child

    def __setitem__(self, key: str | int, value: Any) -> None:
        if not self._write((), str(key), value):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return step(self._data, str(key)) is not NOT_FOUND

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MountedValue):
            return self._data == other._data
        return self._data == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MountedValue({self._mount}:{self.path or '/'} {self._data!r})"


@dataclass
class _Mount:
    name: str
    root: Any
    source: str | None = None
    wrapper: MountedValue | None = None


class MountStore:
    """
    Registry of named mounted documents.

    Args:
        bus: ChangeBus to publish writes on. A private one is created if
            not given; either way it is reachable as ``store.bus``.
    """

    def __init__(self, bus: ChangeBus | None = None) -> None:
        self._bus = bus or ChangeBus()
        self._mounts: dict[str, _Mount] = {}

    @property
    def bus(self) -> ChangeBus:
        """The ChangeBus writes are published on."""
        return self._bus

    # === Registration ===

    def load(self, name: str, document: Any, *, source: str | None = None) -> None:
        """
        Register a document under a mount name.

        The store takes ownership of ``document``: writes mutate it in place.

        Raises:
            DuplicateMount: If the name is already registered
            ValueError: If the name is not a single path segment
        """
        if name in self._mounts:
            raise DuplicateMount(name)
        if split_path(name) != (name,):
            raise ValueError(
                f"Invalid mount name: {name!r}. "
                "Must be a single path segment without '.', '/' or whitespace."
            )
        wrapper = MountedValue(name, document, self._bus) if is_container(document) else None
        self._mounts[name] = _Mount(name=name, root=document, source=source, wrapper=wrapper)
        logger.info(f"Mounted {name!r}" + (f" from {source}" if source else ""))

    def unload(self, name: str) -> bool:
        """Remove a mount. Returns False if it was not loaded."""
        removed = self._mounts.pop(name, None)
        if removed is not None:
            logger.info(f"Unmounted {name!r}")
        return removed is not None

    # === Access ===

    def get(self, name: str) -> Any:
        """
        Return a mount's root.

        Returns:
            MountedValue for container roots, the plain value for scalar
            roots, NOT_FOUND for unknown names
        """
        mount = self._mounts.get(name)
        if mount is None:
            return NOT_FOUND
        if mount.wrapper is None:
            return mount.root
        return mount.wrapper

    def names(self) -> list[str]:
        """Mount names in load order."""
        return list(self._mounts)

    def source(self, name: str) -> str | None:
        """Document source id a mount was loaded from, if recorded."""
        mount = self._mounts.get(name)
        return mount.source if mount else None

    def __contains__(self, name: object) -> bool:
        return name in self._mounts

    def __len__(self) -> int:
        return len(self._mounts)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._mounts))

    # === Reference paths ===

    def resolve(self, reference: PathLike) -> Any:
        """
        Resolve a reference path whose first segment names the mount.

        Unknown mounts and unresolvable paths give NOT_FOUND.
        """
        segments = split_path(reference)
        if not segments:
            return NOT_FOUND
        root = self.get(segments[0])
        if root is NOT_FOUND or len(segments) == 1:
            return root
        if not isinstance(root, MountedValue):
            return NOT_FOUND
        return root.get(segments[1:])

    def set(self, reference: PathLike, value: Any) -> bool:
        """Write through a reference path. Returns True if applied."""
        segments = split_path(reference)
        if len(segments) < 2:
            return False
        root = self.get(segments[0])
        if not isinstance(root, MountedValue):
            return False
        return root.set(segments[1:], value)

    def info(self) -> list[MountInfo]:
        """Describe every loaded mount."""
        infos = []
        for mount in self._mounts.values():
            if isinstance(mount.root, dict):
                kind = "Object"
            elif isinstance(mount.root, list):
                kind = "Array"
            else:
                kind = "Scalar"
            size = len(mount.root) if is_container(mount.root) else 0
            infos.append(MountInfo(name=mount.name, source=mount.source, kind=kind, size=size))
        return infos
