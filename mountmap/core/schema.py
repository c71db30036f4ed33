"""
Schema Builder

Derives a MapSchema from a map template.

A map template is a JSON object describing the shape of the unified tree.
Its string leaves are reference paths ("mount.in.mount.path") telling the
binding layer where each value lives; nested objects are kept as nested
schema nodes. Numbers, booleans, null and arrays describe data rather than
locations, so they are dropped. Keys containing ".", "/" or whitespace
are dropped too, since no path can address them:

    >>> build_schema({"a": "m.x", "b": 5, "c": {"d": "m.y"}})
    {'a': 'm.x', 'c': {'d': 'm.y'}}

The schema's shape is fixed once built; only mount data changes beneath it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from mountmap.core.paths import join_path, split_path
from mountmap.errors import MalformedTemplate
from mountmap.types.schema import ReferenceIssue

if TYPE_CHECKING:
    from mountmap.core.mounts import MountStore

logger = logging.getLogger(__name__)

MapSchema = dict[str, Any]


def build_schema(template: Any) -> MapSchema:
    """
    Build a MapSchema from a template object.

    Raises:
        MalformedTemplate: If the template root is not a JSON object
    """
    if not isinstance(template, dict):
        raise MalformedTemplate(
            f"Map template must be an object, got {type(template).__name__}"
        )
    return _build_node(template, "")


def _build_node(node: dict[str, Any], prefix: str) -> MapSchema:
    schema: MapSchema = {}
    for key, value in node.items():
        if split_path(key) != (key,):
            logger.debug(f"Dropping unreachable map key {join_path(prefix) or '/'}: {key!r}")
            continue
        if isinstance(value, str):
            schema[key] = value
        elif isinstance(value, dict):
            schema[key] = _build_node(value, join_path(prefix, key))
        else:
            logger.debug(f"Dropping non-reference map entry {join_path(prefix, key)!r}")
    return schema


def reference_mount(reference: str) -> str:
    """Return the mount name a reference path starts with ("" if none)."""
    segments = split_path(reference)
    return segments[0] if segments else ""


def iter_references(schema: MapSchema, prefix: str = "") -> Iterator[tuple[str, str]]:
    """Yield (map_path, reference) for every leaf, depth first in key order."""
    for key, value in schema.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from iter_references(value, path)
        else:
            yield path, value


def find_invalid_references(schema: MapSchema, store: "MountStore") -> list[ReferenceIssue]:
    """List the leaves whose reference names a mount that is not loaded."""
    issues = []
    for map_path, reference in iter_references(schema):
        mount = reference_mount(reference)
        if mount not in store:
            issues.append(ReferenceIssue(map_path=map_path, reference=reference, mount=mount))
    return issues
