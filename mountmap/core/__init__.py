"""
Binding Engine

The core of MountMap: path handling, mount instrumentation, schema
derivation, binding and the flat encoding.

Modules:
    paths: Path parsing and JSON traversal (resolve/set)
    flatten: Flat path-keyed encoding with $type markers, and its inverse
    schema: MapSchema derivation from a map template
    events: ChangeBus publish/subscribe
    mounts: MountStore and the MountedValue write interceptor
    binding: BindingTree, the unified virtual tree
    render: Depth-limited plain snapshots

Data Flow:
    documents -> MountStore.load -> (template -> build_schema) ->
    BindingTree(schema, store) -> get/set -> MountedValue -> ChangeBus
"""

from mountmap.core.binding import BindingTree
from mountmap.core.events import ALL_MOUNTS, ChangeBus
from mountmap.core.flatten import TYPE_KEY, apply_flat, expand, flatten
from mountmap.core.mounts import MountedValue, MountStore
from mountmap.core.paths import join_path, parse_path, resolve_path, set_path, split_path
from mountmap.core.render import render
from mountmap.core.schema import build_schema, find_invalid_references, iter_references

__all__ = [
    "parse_path",
    "split_path",
    "join_path",
    "resolve_path",
    "set_path",
    "flatten",
    "expand",
    "apply_flat",
    "TYPE_KEY",
    "build_schema",
    "iter_references",
    "find_invalid_references",
    "ChangeBus",
    "ALL_MOUNTS",
    "MountStore",
    "MountedValue",
    "BindingTree",
    "render",
]
