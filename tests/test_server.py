"""Tests for the HTTP listener."""

import pytest
from fastapi.testclient import TestClient

from mountmap.api import Overlay
from mountmap.server import create_app


@pytest.fixture
def overlay(manifest_path) -> Overlay:
    return Overlay.from_file(manifest_path)


@pytest.fixture
def client(overlay) -> TestClient:
    return TestClient(create_app(overlay))


class TestRead:
    """Tests for GET routes."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "mounts": ["settings", "state"]}

    def test_root_default_depth(self, client):
        assert client.get("/map").json() == {"title": "Demo", "network": {}, "status": {}}

    def test_path_with_depth(self, client):
        response = client.get("/map/network", params={"depth": -1})
        assert response.json() == {"host": "db.internal", "port": 5432, "tags": ["a", "b"]}

    def test_dot_and_slash_paths(self, client):
        assert client.get("/map/network/port").json() == 5432
        assert client.get("/map/network.port").json() == 5432

    def test_not_found(self, client):
        response = client.get("/map/network/nope")
        assert response.status_code == 404
        assert response.json()["detail"] == "Not found: network/nope"

    def test_flat(self, client):
        assert client.get("/flat/status").json() == {
            "$type": "Object",
            "online": True,
            "sessions": 3,
        }

    def test_mounts(self, client):
        mounts = client.get("/mounts").json()
        assert [mount["name"] for mount in mounts] == ["settings", "state"]
        assert mounts[0]["kind"] == "Object"

    def test_mount_value(self, client):
        assert client.get("/mounts/settings/network/port").json() == 5432
        assert client.get("/mounts/settings").json() == {"ui": {}, "network": {}}

    def test_unknown_mount(self, client):
        assert client.get("/mounts/ghost").status_code == 404
        assert client.get("/mounts/settings/nope").status_code == 404


class TestWrite:
    """Tests for PUT/POST/PATCH routes."""

    def test_put(self, client, overlay):
        response = client.put("/map/network/port", json={"value": 5433})
        assert response.status_code == 200
        assert response.json() == {"path": "network.port", "applied": True}
        assert overlay.get("network.port") == 5433

    def test_put_rejected(self, client):
        assert client.put("/map/network", json={"value": {}}).status_code == 404

    def test_post_coerces_query_value(self, client, overlay):
        assert client.post("/map/network/port", params={"value": "5433"}).status_code == 200
        assert overlay.get("network.port") == 5433
        client.post("/map/status/online", params={"value": "false"})
        assert overlay.get("status.online") is False
        client.post("/map/title", params={"value": "New title"})
        assert overlay.get("title") == "New title"

    def test_write_publishes_event(self, client, overlay):
        received = []
        overlay.on_change("settings", lambda key, value: received.append((key, value)))
        client.put("/map/network/host", json={"value": "db2"})
        assert received == [("host", "db2")]

    def test_patch(self, client, overlay):
        response = client.patch("/map/network", json={"port": 1, "tags.2": "c"})
        assert response.json() == {"applied": ["network.port", "network.tags.2"], "rejected": []}
        assert overlay.get("network.tags") == ["a", "b", "c"]

    def test_patch_reports_rejected(self, client):
        response = client.patch("/map", json={"network": 5})
        assert response.status_code == 200
        assert response.json()["rejected"] == ["network"]

    def test_put_mount(self, client, overlay):
        response = client.put("/mounts/state/extra", json={"value": [1]})
        assert response.json()["path"] == "state.extra"
        assert overlay.store.resolve("state.extra") == [1]

    def test_patch_mount(self, client, overlay):
        response = client.patch("/mounts/settings/ui", json={"theme": "light"})
        assert response.json()["applied"] == ["ui.theme"]
        assert overlay.get("title") == "Demo"
        assert overlay.store.resolve("settings.ui.theme") == "light"
