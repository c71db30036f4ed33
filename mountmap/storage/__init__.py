"""
Document Sources

Loading of mount documents and manifests. Sources are read once while an
overlay is built; MountMap never writes documents back.

Modules:
    base: Abstract DocumentSource interface
    json_file: JSON files on disk (relative to the manifest)
    memory: In-memory documents
    manifest: Manifest parsing and map template resolution

Manifest Layout:
    project/
    ├── manifest.json       # {"mounts": {...}, "map": {...} or "map.json"}
    ├── map.json            # optional external map template
    └── data/
        ├── settings.json   # mounted documents
        └── state.json
"""

from mountmap.storage.base import DocumentSource
from mountmap.storage.json_file import JsonFileSource
from mountmap.storage.manifest import load_manifest, parse_manifest, resolve_template
from mountmap.storage.memory import DictSource

__all__ = [
    "DocumentSource",
    "JsonFileSource",
    "DictSource",
    "load_manifest",
    "parse_manifest",
    "resolve_template",
]
