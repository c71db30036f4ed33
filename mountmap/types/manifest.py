"""
Manifest Types

The manifest is the inbound construction contract: which documents to
mount under which names, and the map template that binds them together.

Example manifest.json:
    {
        "mounts": {
            "settings": "settings.json",
            "state": "runtime/state.json"
        },
        "map": {
            "title": "settings.ui.title",
            "network": {
                "host": "settings/net/host",
                "online": "state.online"
            }
        }
    }

A string ``map`` value names a document source holding the template.
"""

from typing import Any

from pydantic import BaseModel, Field


class Manifest(BaseModel):
    """
    Mount table plus map template.

    Attributes:
        mounts: Mount name -> document source id (e.g. a file path)
        map: Map template object, or a source id for one
    """

    mounts: dict[str, str] = Field(default_factory=dict)
    map: dict[str, Any] | str = Field(default_factory=dict)
