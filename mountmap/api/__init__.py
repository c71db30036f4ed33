"""
Public API

Modules:
    overlay: Overlay facade
    convenience: open_overlay() and read() helpers
"""

from mountmap.api.convenience import open_overlay, read
from mountmap.api.overlay import Overlay

__all__ = ["Overlay", "open_overlay", "read"]
