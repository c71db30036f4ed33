"""
Path Codec

Parses dot- or slash-separated path strings into segments and walks JSON
values with them.

Path grammar:
    - All whitespace is removed before splitting: " a . b " == "a.b"
    - "." and "/" are interchangeable separators: "a/b.c" == "a.b.c"
    - Leading, trailing and repeated separators collapse: "//a//b/" == "a/b"
    - A segment addresses an array element only when it is a non-negative
      decimal integer ("0", "12"); anything else is an object key

Traversal never raises for a JSON root. A step that cannot be taken
(missing key, index out of range, key on a scalar or null) makes the whole
lookup NOT_FOUND, and a write whose parent does not resolve leaves the root
untouched.

Example:
    >>> doc = {"net": {"hosts": ["a", "b"]}}
    >>> resolve_path(doc, "net/hosts/1")
    'b'
    >>> set_path(doc, "net.port", 80)
    True
    >>> set_path(doc, "net.missing.port", 80)
    False
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, Union

from mountmap.errors import EmptyPath
from mountmap.types.json import NOT_FOUND

PathLike = Union[str, Sequence[Union[str, int]]]

_WHITESPACE = re.compile(r"\s+")
_SEPARATORS = re.compile(r"[./]+")


def split_path(path: PathLike) -> tuple[str, ...]:
    """
    Normalize a path into its segments.

    Pre-split sequences are accepted and stringified, so callers can pass
    segments they already hold. An empty result is allowed here.
    """
    if not isinstance(path, str):
        return tuple(str(segment) for segment in path)
    cleaned = _WHITESPACE.sub("", path)
    return tuple(segment for segment in _SEPARATORS.split(cleaned) if segment)


def parse_path(path: PathLike) -> tuple[str, ...]:
    """
    Parse a path into segments.

    Raises:
        EmptyPath: If no segments remain after normalization
    """
    segments = split_path(path)
    if not segments:
        raise EmptyPath(path if isinstance(path, str) else "")
    return segments


def join_path(*parts: PathLike) -> str:
    """Join paths and segments into one normalized dotted path."""
    segments: list[str] = []
    for part in parts:
        segments.extend(split_path(part))
    return ".".join(segments)


def list_index(segment: str) -> int | None:
    """Return the array index a segment denotes, or None if it is not one."""
    if segment.isascii() and segment.isdecimal():
        return int(segment)
    return None


def step(node: Any, segment: str) -> Any:
    """Take one traversal step from node, returning NOT_FOUND if impossible."""
    if isinstance(node, dict):
        return node[segment] if segment in node else NOT_FOUND
    if isinstance(node, list):
        index = list_index(segment)
        if index is None or index >= len(node):
            return NOT_FOUND
        return node[index]
    return NOT_FOUND


def walk(root: Any, segments: Sequence[str]) -> Any:
    """Follow segments from root; NOT_FOUND as soon as a step fails."""
    node = root
    for segment in segments:
        node = step(node, segment)
        if node is NOT_FOUND:
            return NOT_FOUND
    return node


def resolve_path(root: Any, path: PathLike) -> Any:
    """
    Resolve a path against a JSON value.

    An empty path resolves to root itself. JSON null stored at the final
    segment resolves to None; only absence yields NOT_FOUND.
    """
    return walk(root, split_path(path))


def assign(container: Any, segment: str, value: Any) -> bool:
    """
    Write value under segment in container.

    Objects accept any key. Arrays accept an existing index, or exactly
    len(array) to append. Anything else is rejected.
    """
    if isinstance(container, dict):
        container[segment] = value
        return True
    if isinstance(container, list):
        index = list_index(segment)
        if index is None or index > len(container):
            return False
        if index == len(container):
            container.append(value)
        else:
            container[index] = value
        return True
    return False


def set_path(root: Any, path: PathLike, value: Any) -> bool:
    """
    Assign value at path inside root.

    Returns:
        True if the value was written. False if the path is empty or any
        parent segment does not resolve, in which case root is unchanged.
    """
    segments = split_path(path)
    if not segments:
        return False
    parent = walk(root, segments[:-1])
    if parent is NOT_FOUND:
        return False
    return assign(parent, segments[-1], value)
