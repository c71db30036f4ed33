"""
MountMap - Unified Tree over Mounted JSON Documents

Mounts several independently stored JSON documents and presents them as
one navigable tree whose leaves are references into those documents, with
read/write forwarding and change notification.

Example:
    >>> from mountmap import Overlay
    >>> overlay = Overlay.from_file("./manifest.json")
    >>> overlay.get("network.host")
    'db.internal'
    >>> overlay.set("network.port", 5433)
    True

Main Classes:
    Overlay: Primary entry point (mounts + map + change bus)
    BindingTree: Navigable view over the map
    MountStore: Mounted documents with instrumented writes
    MapConfig: Configuration management

Codec Functions:
    flatten / expand: Flat path-keyed encoding with $type markers
    render: Depth-limited plain snapshots
"""

__version__ = "0.1.0"

# Public API - lazy imports keep "import mountmap" free of the server stack
def __getattr__(name: str):
    """Lazy import public API components."""

    if name == "Overlay":
        from mountmap.api.overlay import Overlay
        return Overlay

    if name == "MapConfig":
        from mountmap.config.settings import MapConfig
        return MapConfig

    # Convenience functions
    if name in ("open_overlay", "read"):
        from mountmap.api import convenience
        return getattr(convenience, name)

    # Core engine
    if name in (
        "BindingTree",
        "MountStore",
        "MountedValue",
        "ChangeBus",
        "build_schema",
        "flatten",
        "expand",
        "apply_flat",
        "render",
        "parse_path",
        "resolve_path",
        "set_path",
    ):
        from mountmap import core
        return getattr(core, name)

    # Types
    if name in ("NOT_FOUND", "ChangeEvent", "Manifest", "FlatUpdateResult"):
        from mountmap import types
        return getattr(types, name)

    raise AttributeError(f"module 'mountmap' has no attribute {name!r}")


__all__ = [
    # Main classes
    "Overlay",
    "MapConfig",
    "BindingTree",
    "MountStore",
    "MountedValue",
    "ChangeBus",

    # Convenience functions
    "open_overlay",
    "read",

    # Codec and path functions
    "build_schema",
    "flatten",
    "expand",
    "apply_flat",
    "render",
    "parse_path",
    "resolve_path",
    "set_path",

    # Types
    "NOT_FOUND",
    "ChangeEvent",
    "Manifest",
    "FlatUpdateResult",

    # Version
    "__version__",
]
