"""Shared fixtures: sample documents and an on-disk manifest."""

import copy
import json
import os
from pathlib import Path

import pytest

SETTINGS = {
    "ui": {"title": "Demo", "theme": "dark"},
    "network": {"host": "db.internal", "port": 5432, "tags": ["a", "b"]},
}
STATE = {"online": True, "sessions": 3}
MAP_TEMPLATE = {
    "title": "settings.ui.title",
    "network": {
        "host": "settings/network/host",
        "port": "settings.network.port",
        "tags": "settings.network.tags",
    },
    "status": {
        "online": "state.online",
        "sessions": "state.sessions",
    },
    "version": 3,
}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep MOUNTMAP_* variables from the host out of every test."""
    for name in list(os.environ):
        if name.startswith("MOUNTMAP_"):
            monkeypatch.delenv(name)


@pytest.fixture
def documents() -> dict:
    return {"settings": copy.deepcopy(SETTINGS), "state": copy.deepcopy(STATE)}


@pytest.fixture
def map_template() -> dict:
    return copy.deepcopy(MAP_TEMPLATE)


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    """A manifest.json with two mounted files under data/."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "settings.json").write_text(json.dumps(SETTINGS))
    (data_dir / "state.json").write_text(json.dumps(STATE))
    manifest = {
        "mounts": {"settings": "data/settings.json", "state": "data/state.json"},
        "map": MAP_TEMPLATE,
    }
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(manifest))
    return path
