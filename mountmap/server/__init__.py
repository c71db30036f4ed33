"""
MountMap HTTP Listener

Serves an Overlay over HTTP with FastAPI + uvicorn.

Usage:
    # From the command line
    mountmap serve ./manifest.json --host 0.0.0.0 --port 8080

    # Embedded
    >>> from mountmap.server import create_app
    >>> app = create_app(Overlay.from_file("./manifest.json"))
"""

from mountmap.server.app import create_app, run_server

__all__ = ["create_app", "run_server"]
