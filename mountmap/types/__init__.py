"""
Core Data Types

Pydantic models and typing aliases shared across MountMap.

Modules:
    json: JSONValue aliases and the NOT_FOUND sentinel
    events: ChangeEvent
    manifest: Manifest (mount table + map template)
    schema: ReferenceIssue
    results: MountInfo, OverlayInfo, FlatUpdateResult
"""

from mountmap.types.events import ChangeEvent
from mountmap.types.json import NOT_FOUND, FlatMap, JSONObject, JSONScalar, JSONValue, is_container
from mountmap.types.manifest import Manifest
from mountmap.types.results import FlatUpdateResult, MountInfo, OverlayInfo
from mountmap.types.schema import ReferenceIssue

__all__ = [
    "NOT_FOUND",
    "JSONValue",
    "JSONScalar",
    "JSONObject",
    "FlatMap",
    "is_container",
    "ChangeEvent",
    "Manifest",
    "ReferenceIssue",
    "MountInfo",
    "OverlayInfo",
    "FlatUpdateResult",
]
