"""
Flatten Codec

Encodes nested JSON values as flat path-keyed maps and decodes them back.

Encoding rules:
    - A scalar at the root flattens to {"": value}
    - Every container gets a "<path>.$type" entry ("Object" or "Array");
      the root container's marker is the bare "$type" key
    - Object keys and array indices become dotted path segments
    - An empty-string key at the root is the bare "" key; expand() reads
      "" as that member when a root marker is present, else as a scalar root

Example:
    >>> flatten({"a": [1, {"b": None}], "c": {}})
    {'$type': 'Object', 'a.$type': 'Array', 'a.0': 1, 'a.1.$type': 'Object',
     'a.1.b': None, 'c.$type': 'Object'}

Type markers let expand() rebuild empty containers and tell array indices
from numeric object keys. expand() applies all markers (shallowest first)
before any data entry, so the result does not depend on map order.
Markers with an unknown kind are ignored.

Round trip: expand(flatten(v)) == v for any v whose keys contain neither
"." nor the "$type" marker name.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mountmap.core.paths import list_index
from mountmap.types.json import NOT_FOUND, FlatMap
from mountmap.types.results import FlatUpdateResult

TYPE_KEY = "$type"
OBJECT = "Object"
ARRAY = "Array"

_ROOT = ""


def _child_path(prefix: str | None, key: str | int) -> str:
    return str(key) if prefix is None else f"{prefix}.{key}"


def flatten(value: Any, prefix: str = "") -> FlatMap:
    """
    Flatten a JSON value into a path -> scalar map with container markers.

    Args:
        value: Any JSON value
        prefix: Path to prepend to every key
    """
    flat: FlatMap = {}
    _flatten_into(flat, value, prefix or None)
    return flat


def _flatten_into(flat: FlatMap, value: Any, prefix: str | None) -> None:
    if isinstance(value, dict):
        flat[_child_path(prefix, TYPE_KEY)] = OBJECT
        for key, child in value.items():
            _flatten_into(flat, child, _child_path(prefix, key))
    elif isinstance(value, list):
        flat[_child_path(prefix, TYPE_KEY)] = ARRAY
        for index, child in enumerate(value):
            _flatten_into(flat, child, _child_path(prefix, index))
    else:
        flat[prefix or ""] = value


def _split_key(key: str) -> tuple[str, ...]:
    return tuple(key.split(".")) if key else ()


def _get_child(container: Any, segment: str) -> Any:
    if isinstance(container, dict):
        return container.get(segment, NOT_FOUND)
    index = list_index(segment)
    if index is None or index >= len(container):
        return NOT_FOUND
    return container[index]


def _put_child(container: Any, segment: str, value: Any) -> bool:
    if isinstance(container, dict):
        container[segment] = value
        return True
    index = list_index(segment)
    if index is None:
        return False
    if index >= len(container):
        container.extend([None] * (index + 1 - len(container)))
    container[index] = value
    return True


def _place(holder: dict[str, Any], segments: tuple[str, ...], value: Any) -> bool:
    """Store value at segments below holder, creating missing parents as objects."""
    path = (_ROOT, *segments)
    container: Any = holder
    for segment in path[:-1]:
        child = _get_child(container, segment)
        if not isinstance(child, (dict, list)):
            child = {}
            if not _put_child(container, segment, child):
                return False
        container = child
    return _put_child(container, path[-1], value)


def _new_container(kind: Any) -> dict[str, Any] | list[Any] | None:
    if kind == OBJECT:
        return {}
    if kind == ARRAY:
        return []
    return None


def expand(flat: Mapping[str, Any]) -> Any:
    """
    Rebuild a nested JSON value from a flat map.

    An empty map expands to an empty object. Entries that cannot be placed
    (for example a non-numeric key under an Array marker) are skipped.
    """
    markers: dict[tuple[str, ...], Any] = {}
    data: dict[tuple[str, ...], Any] = {}
    for key, value in flat.items():
        segments = _split_key(key)
        if segments and segments[-1] == TYPE_KEY:
            markers[segments[:-1]] = value
        else:
            data[segments] = value

    # With a root marker present the bare "" key is an empty-string member
    if () in markers and () in data:
        data[("",)] = data.pop(())

    holder: dict[str, Any] = {}
    for segments in sorted(markers, key=len):
        container = _new_container(markers[segments])
        if container is None:
            continue
        existing = _get_child_at(holder, segments)
        if type(existing) is type(container):
            continue
        _place(holder, segments, container)

    for segments, value in data.items():
        _place(holder, segments, value)

    return holder.get(_ROOT, {})


def _get_child_at(holder: dict[str, Any], segments: tuple[str, ...]) -> Any:
    node: Any = holder
    for segment in (_ROOT, *segments):
        if not isinstance(node, (dict, list)):
            return NOT_FOUND
        node = _get_child(node, segment)
        if node is NOT_FOUND:
            return NOT_FOUND
    return node


def is_marker(key: str) -> bool:
    """True for "$type" container-marker keys."""
    return key == TYPE_KEY or key.endswith(f".{TYPE_KEY}")


def data_entries(flat: Mapping[str, Any]) -> dict[str, Any]:
    """Return the flat map without its container markers."""
    return {key: value for key, value in flat.items() if not is_marker(key)}


def _sort_key(key: str) -> tuple[tuple[int, int | str], ...]:
    """Order paths so array items are written in index order."""
    parts: list[tuple[int, int | str]] = []
    for segment in _split_key(key):
        index = list_index(segment)
        parts.append((0, index) if index is not None else (1, segment))
    return tuple(parts)


def apply_flat(target: Any, base_path: str, flat: Mapping[str, Any]) -> FlatUpdateResult:
    """
    Write a flat map beneath base_path of a BindingTree or MountedValue.

    Container markers create containers that do not exist yet (existing
    ones are never replaced); every data entry is then written with
    target.set(). Entries whose write is rejected are reported, not raised.

    Paths cannot address empty-string keys, so entries naming one are
    rejected rather than written to the collapsed path.
    """
    result = FlatUpdateResult()

    markers = [key for key in flat if is_marker(key)]
    for key in sorted(markers, key=lambda k: len(_split_key(k))):
        container = _new_container(flat[key])
        if container is None:
            continue
        path = _join(base_path, key[: -len(TYPE_KEY)].rstrip("."))
        if "" in _split_key(key)[:-1]:
            result.rejected.append(path)
            continue
        if target.get(path) is NOT_FOUND and not target.set(path, container):
            result.rejected.append(path)

    for key in sorted(data_entries(flat), key=_sort_key):
        path = _join(base_path, key)
        segments = _split_key(key)
        if "" in segments or (not segments and TYPE_KEY in flat):
            result.rejected.append(path)
            continue
        if target.set(path, flat[key]):
            result.applied.append(path)
        else:
            result.rejected.append(path)
    return result


def _join(base: str, key: str) -> str:
    if base and key:
        return f"{base}.{key}"
    return base or key
