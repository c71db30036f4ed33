"""
MapConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> overlay = Overlay.from_file("./manifest.json")

    >>> # Explicit configuration
    >>> config = MapConfig(port=9000, strict_references=True)
    >>> overlay = Overlay.from_file("./manifest.json", config=config)

    >>> # From config file
    >>> config = MapConfig.from_file("./mountmap.toml")

Environment Variables:
    MOUNTMAP_HOST - HTTP listener bind address
    MOUNTMAP_PORT - HTTP listener port
    MOUNTMAP_DEFAULT_DEPTH - Render depth when a request gives none (-1 = unlimited)
    MOUNTMAP_STRICT_REFERENCES - "true" to fail startup on map references to unknown mounts
    MOUNTMAP_LOG_LEVEL - Logging level for the CLI and server
    MOUNTMAP_LOG_CHANGES - "false" to stop logging every change event
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, cast

# TOML support: tomllib is built-in for Python 3.11+, use tomli for 3.10
try:
    import tomllib

    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return cast(dict[str, Any], tomllib.load(f))

except ImportError:
    import tomli

    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return cast(dict[str, Any], tomli.load(f))


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")


class MapConfig:
    """Configuration for MountMap."""

    # === Server Configuration ===

    host: str = "127.0.0.1"
    """Bind address for the HTTP listener"""

    port: int = 8080
    """Port for the HTTP listener"""

    # === Render Configuration ===

    default_depth: int = 1
    """Depth used when rendering without an explicit depth (-1 = unlimited)"""

    # === Reference Configuration ===

    strict_references: bool = False
    """Fail construction when a map leaf names a mount that is not loaded"""

    # === Logging Configuration ===

    log_level: str = "INFO"
    """Logging level applied by the CLI and server entry points"""

    log_changes: bool = True
    """Log every change event at INFO"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if hasattr(self, key) and not key.startswith("_"):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

    def _load_from_env(self) -> None:
        """Load configuration from MOUNTMAP_* environment variables."""
        if host := os.getenv("MOUNTMAP_HOST"):
            self.host = host
        if port := os.getenv("MOUNTMAP_PORT"):
            self.port = int(port)
        if depth := os.getenv("MOUNTMAP_DEFAULT_DEPTH"):
            self.default_depth = int(depth)
        if strict := os.getenv("MOUNTMAP_STRICT_REFERENCES"):
            self.strict_references = _parse_bool("MOUNTMAP_STRICT_REFERENCES", strict)
        if level := os.getenv("MOUNTMAP_LOG_LEVEL"):
            self.log_level = level.upper()
        if log_changes := os.getenv("MOUNTMAP_LOG_CHANGES"):
            self.log_changes = _parse_bool("MOUNTMAP_LOG_CHANGES", log_changes)

    @classmethod
    def from_file(cls, path: str | Path) -> "MapConfig":
        """
        Load configuration from TOML file.

        Nested sections map onto configuration keys; flat top-level keys
        are accepted too.

        Example TOML:
            [server]
            host = "0.0.0.0"
            port = 9000

            [render]
            default_depth = 2

            [references]
            strict = true

            [logging]
            level = "DEBUG"
            changes = false

        Args:
            path: Path to TOML configuration file

        Returns:
            MapConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = _load_toml(path)

        # Map (section, key) pairs onto config attribute names
        section_mapping = {
            "server": {"host": "host", "port": "port"},
            "render": {"default_depth": "default_depth"},
            "references": {"strict": "strict_references"},
            "logging": {"level": "log_level", "changes": "log_changes"},
        }

        flat_config: dict[str, Any] = {}
        for section, keys in section_mapping.items():
            for key, value in data.get(section, {}).items():
                if key not in keys:
                    raise ValueError(f"Unknown configuration option: {section}.{key}")
                flat_config[keys[key]] = value

        # Also support flat top-level keys
        for key, value in data.items():
            if key not in section_mapping and not isinstance(value, dict):
                flat_config[key] = value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "MapConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_file(self, path: str | Path) -> None:
        """
        Save configuration to TOML file.

        Args:
            path: Path to write TOML configuration file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str | int | bool]] = {
            "server": {
                "host": self.host,
                "port": self.port,
            },
            "render": {
                "default_depth": self.default_depth,
            },
            "references": {
                "strict": self.strict_references,
            },
            "logging": {
                "level": self.log_level,
                "changes": self.log_changes,
            },
        }

        # Build TOML string manually (avoids extra dependency)
        lines = ["# MountMap Configuration", ""]

        for section_name, section_values in sections.items():
            lines.append(f"[{section_name}]")
            for key, value in section_values.items():
                if isinstance(value, str):
                    lines.append(f'{key} = "{value}"')
                elif isinstance(value, bool):
                    lines.append(f"{key} = {str(value).lower()}")
                elif isinstance(value, int):
                    lines.append(f"{key} = {value}")
            lines.append("")

        path.write_text("\n".join(lines))

    def with_overrides(self, **kwargs: Any) -> "MapConfig":
        """Return new config with specified overrides."""
        new_config = MapConfig.__new__(MapConfig)
        for key in dir(self):
            if not key.startswith("_") and not callable(getattr(self, key)):
                setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if not hasattr(new_config, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        return new_config
