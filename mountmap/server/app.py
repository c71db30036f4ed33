"""
HTTP Listener

FastAPI application exposing an Overlay over HTTP.

Routes:
    GET    /health                    Liveness + mount names
    GET    /map/{path}?depth=N        Rendered map value
    PUT    /map/{path}                Write {"value": ...} through a map leaf
    POST   /map/{path}?value=...      Write a query-string value (coerced)
    PATCH  /map/{path}                Apply a flat map beneath a map path
    GET    /flat/{path}               Flat encoding of a map value
    GET    /mounts                    Loaded mounts
    GET    /mounts/{name}/{path}      Rendered raw mount value
    PUT    /mounts/{name}/{path}      Write {"value": ...} into a mount

Paths use "/" or "." separators interchangeably. Unresolvable reads and
rejected writes answer 404.

Usage:
    mountmap serve ./manifest.json --port 8080
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Query
from pydantic import BaseModel

from mountmap.api.overlay import Overlay
from mountmap.core.flatten import apply_flat, flatten
from mountmap.core.mounts import MountedValue
from mountmap.core.paths import join_path
from mountmap.core.render import render
from mountmap.types.json import NOT_FOUND
from mountmap.types.results import FlatUpdateResult, MountInfo
from mountmap.utils.coercion import coerce_scalar

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request/response models
# ---------------------------------------------------------------------------


class WriteRequest(BaseModel):
    value: Any


class WriteResponse(BaseModel):
    path: str
    applied: bool = True


class HealthResponse(BaseModel):
    status: str = "ok"
    mounts: list[str] = []


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(overlay: Overlay) -> FastAPI:
    """Build the FastAPI app serving one overlay."""
    app = FastAPI(
        title="MountMap",
        description="Unified read/write view over mounted JSON documents.",
    )
    default_depth = overlay.config.default_depth

    def _not_found(path: str) -> HTTPException:
        return HTTPException(status_code=404, detail=f"Not found: {path or '/'}")

    def _mount_value(name: str, path: str) -> Any:
        root = overlay.store.get(name)
        if root is NOT_FOUND:
            return NOT_FOUND
        if isinstance(root, MountedValue):
            return root.get(path)
        return root if not join_path(path) else NOT_FOUND

    @app.get("/health", response_model=HealthResponse)
    def health():
        """Liveness check."""
        return HealthResponse(mounts=overlay.store.names())

    @app.get("/map")
    @app.get("/map/{path:path}")
    def read_map(path: str = "", depth: int | None = None):
        """Render the value at a map path."""
        value = overlay.get(path)
        if value is NOT_FOUND:
            raise _not_found(path)
        return render(value, default_depth if depth is None else depth)

    @app.put("/map/{path:path}", response_model=WriteResponse)
    def write_map(path: str, req: WriteRequest):
        """Write a JSON value through the leaf at a map path."""
        if not overlay.set(path, req.value):
            raise _not_found(path)
        return WriteResponse(path=join_path(path))

    @app.post("/map/{path:path}", response_model=WriteResponse)
    def write_map_query(path: str, value: str = Query(...)):
        """Write a query-string value, coerced to bool/null/number where it looks like one."""
        if not overlay.set(path, coerce_scalar(value)):
            raise _not_found(path)
        return WriteResponse(path=join_path(path))

    @app.patch("/map", response_model=FlatUpdateResult)
    @app.patch("/map/{path:path}", response_model=FlatUpdateResult)
    def patch_map(path: str = "", flat: dict[str, Any] = Body(...)):
        """Apply a flat map (as produced by /flat) beneath a map path."""
        result = overlay.apply_flat(join_path(path), flat)
        if result.rejected:
            logger.warning(f"PATCH {path or '/'}: rejected {result.rejected}")
        return result

    @app.get("/flat")
    @app.get("/flat/{path:path}")
    def read_flat(path: str = ""):
        """Flat encoding of the full value at a map path."""
        value = overlay.get(path)
        if value is NOT_FOUND:
            raise _not_found(path)
        return flatten(render(value, -1))

    @app.get("/mounts", response_model=list[MountInfo])
    def list_mounts():
        """Loaded mounts."""
        return overlay.store.info()

    @app.get("/mounts/{name}")
    @app.get("/mounts/{name}/{path:path}")
    def read_mount(name: str, path: str = "", depth: int | None = None):
        """Render a value straight from a mount, bypassing the map."""
        value = _mount_value(name, path)
        if value is NOT_FOUND:
            raise _not_found(join_path(name, path))
        return render(value, default_depth if depth is None else depth)

    @app.put("/mounts/{name}/{path:path}", response_model=WriteResponse)
    def write_mount(name: str, path: str, req: WriteRequest):
        """Write a JSON value straight into a mount."""
        reference = join_path(name, path)
        if not overlay.store.set(reference, req.value):
            raise _not_found(reference)
        return WriteResponse(path=reference)

    @app.patch("/mounts/{name}/{path:path}", response_model=FlatUpdateResult)
    def patch_mount(name: str, path: str, flat: dict[str, Any] = Body(...)):
        """Apply a flat map beneath a mount path."""
        root = overlay.store.get(name)
        if not isinstance(root, MountedValue):
            raise _not_found(name)
        return apply_flat(root, join_path(path), flat)

    return app


def run_server(
    overlay: Overlay,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Serve an overlay with uvicorn until interrupted."""
    import uvicorn

    host = host or overlay.config.host
    port = port or overlay.config.port
    logger.info(f"Serving {len(overlay.store)} mounts on http://{host}:{port}")
    uvicorn.run(
        create_app(overlay),
        host=host,
        port=port,
        log_level=overlay.config.log_level.lower(),
    )
