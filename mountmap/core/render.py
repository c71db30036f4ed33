"""
Depth-Limited Rendering

Turns resolved values into plain JSON snapshots, bounding how deep
containers are expanded. Used to keep responses small.

Depth semantics:
    - depth 0: scalars as-is, containers as an empty container of the
      same kind
    - depth N: the container and N levels beneath it; anything deeper is
      replaced by an empty container of the same kind
    - any negative depth (conventionally -1): unlimited

    >>> render({"a": {"b": {"c": 1}}}, 1)
    {'a': {}}
    >>> render(5, 1)
    5

BindingTree leaves that do not resolve are left out of the snapshot.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from mountmap.core.binding import BindingTree
from mountmap.core.mounts import MountedValue
from mountmap.types.json import NOT_FOUND

DEFAULT_DEPTH = 1
UNLIMITED = -1


def _entries(value: Any) -> tuple[bool, Iterable[tuple[str, Any]]] | None:
    """(is_array, (key, child) pairs) for anything container-like, else None."""
    if isinstance(value, BindingTree):
        return False, ((key, value.get(key)) for key in value.keys())
    if isinstance(value, MountedValue):
        return isinstance(value.value, list), value.items()
    if isinstance(value, dict):
        return False, value.items()
    if isinstance(value, list):
        return True, ((str(i), item) for i, item in enumerate(value))
    return None


def render(value: Any, max_depth: int = DEFAULT_DEPTH) -> Any:
    """
    Plain JSON snapshot of value, expanded at most max_depth levels.

    Accepts plain JSON, MountedValue and BindingTree input. Never mutates
    its input; scalars are returned as-is.
    """
    entries = _entries(value)
    if entries is None:
        return copy.copy(value)
    is_array, children = entries
    if max_depth == 0:
        return [] if is_array else {}

    next_depth = max_depth - 1 if max_depth > 0 else max_depth
    if is_array:
        return [render(child, next_depth) for _, child in children]
    return {
        key: render(child, next_depth)
        for key, child in children
        if child is not NOT_FOUND
    }
