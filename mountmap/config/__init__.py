"""
Configuration System

Manages configuration for MountMap with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to MapConfig() or with_overrides())
    2. Config file (MapConfig.from_file, or --config on the CLI)
    3. Environment variables (MOUNTMAP_* prefix)
    4. Built-in defaults

Modules:
    settings: MapConfig class
"""

from mountmap.config.settings import MapConfig

__all__ = ["MapConfig"]
