"""Tests for the Overlay facade and convenience functions."""

import json
import logging

import pytest

import mountmap
from mountmap.api import Overlay, open_overlay, read
from mountmap.config import MapConfig
from mountmap.errors import InvalidReference, MalformedTemplate, ManifestError
from mountmap.types.json import NOT_FOUND


@pytest.fixture
def overlay(manifest_path) -> Overlay:
    return Overlay.from_file(manifest_path)


class TestConstruction:
    """Tests for building overlays."""

    def test_from_file(self, overlay):
        assert overlay.store.names() == ["settings", "state"]
        assert overlay.get("title") == "Demo"
        assert overlay.store.source("settings").endswith("settings.json")

    def test_from_documents_copies_input(self, documents, map_template):
        overlay = Overlay.from_documents(documents, map_template)
        assert overlay.set("network.port", 1) is True
        assert documents["settings"]["network"]["port"] == 5432

    def test_external_map_template(self, manifest_path, map_template):
        (manifest_path.parent / "map.json").write_text(json.dumps(map_template))
        manifest = json.loads(manifest_path.read_text())
        manifest["map"] = "map.json"
        manifest_path.write_text(json.dumps(manifest))
        assert Overlay.from_file(manifest_path).get("network.host") == "db.internal"

    def test_non_object_template(self, manifest_path):
        (manifest_path.parent / "map.json").write_text(json.dumps(["settings.ui"]))
        manifest = json.loads(manifest_path.read_text())
        manifest["map"] = "map.json"
        manifest_path.write_text(json.dumps(manifest))
        with pytest.raises(MalformedTemplate):
            Overlay.from_file(manifest_path)

    def test_missing_document(self, manifest_path):
        (manifest_path.parent / "data" / "state.json").unlink()
        with pytest.raises(ManifestError):
            Overlay.from_file(manifest_path)

    def test_strict_references(self, documents):
        config = MapConfig(strict_references=True)
        with pytest.raises(InvalidReference) as exc_info:
            Overlay.from_documents(documents, {"a": "ghost.x"}, config=config)
        assert exc_info.value.issues[0].mount == "ghost"

    def test_lenient_references_warn(self, documents, caplog):
        with caplog.at_level(logging.WARNING, logger="mountmap.api.overlay"):
            overlay = Overlay.from_documents(documents, {"a": "ghost.x", "b": "state.online"})
        assert "ghost" in caplog.text
        assert overlay.get("a") is NOT_FOUND
        assert overlay.get("b") is True


class TestReadWrite:
    """Tests for reads, writes and rendering."""

    def test_set_then_get(self, overlay):
        assert overlay.set("network/port", 5433) is True
        assert overlay.get("network.port") == 5433

    def test_writes_stay_in_memory(self, overlay, manifest_path):
        path = manifest_path.parent / "data" / "settings.json"
        before = path.read_text()
        overlay.set("network.port", 5433)
        assert path.read_text() == before

    def test_rejected_write(self, overlay):
        assert overlay.set("network", {}) is False
        assert overlay.set("nope", 1) is False

    def test_node(self, overlay):
        assert overlay.node("status").keys() == ["online", "sessions"]
        assert overlay.node("title") is NOT_FOUND

    def test_render_default_depth(self, overlay):
        assert overlay.render() == {"title": "Demo", "network": {}, "status": {}}

    def test_render_configured_depth(self, manifest_path):
        overlay = Overlay.from_file(manifest_path, config=MapConfig(default_depth=-1))
        assert overlay.render("network") == {
            "host": "db.internal",
            "port": 5432,
            "tags": ["a", "b"],
        }

    def test_render_explicit_depth(self, overlay):
        assert overlay.render("network", depth=1) == {
            "host": "db.internal",
            "port": 5432,
            "tags": [],
        }

    def test_render_missing(self, overlay):
        assert overlay.render("nope") is NOT_FOUND

    def test_flatten(self, overlay):
        assert overlay.flatten("status") == {"$type": "Object", "online": True, "sessions": 3}
        assert overlay.flatten("nope") is NOT_FOUND

    def test_apply_flat(self, overlay):
        result = overlay.apply_flat("network", {"port": 1, "tags.2": "c"})
        assert result.ok
        assert overlay.render("network", depth=-1) == {
            "host": "db.internal",
            "port": 1,
            "tags": ["a", "b", "c"],
        }

    def test_apply_flat_non_leaf_rejected(self, overlay):
        result = overlay.apply_flat("", {"network": 5, "title": "New"})
        assert result.rejected == ["network"]
        assert result.applied == ["title"]


class TestSubscriptions:
    """Tests for change notifications through the overlay."""

    def test_on_change(self, overlay):
        received = []
        stop = overlay.on_change("settings", lambda key, value: received.append((key, value)))
        overlay.set("network.port", 5433)
        stop()
        overlay.set("network.port", 5434)
        assert received == [("port", 5433)]

    def test_subscribe_wildcard(self, overlay):
        received = []
        overlay.subscribe("*", received.append)
        overlay.set("status.sessions", 4)
        assert received[0].mount == "state"
        assert received[0].path == "sessions"

    def test_changes_logged(self, overlay, caplog):
        with caplog.at_level(logging.INFO, logger="mountmap.api.overlay"):
            overlay.set("network.port", 5433)
        assert "Changed settings:network.port = 5433" in caplog.text

    def test_change_logging_disabled(self, manifest_path):
        overlay = Overlay.from_file(manifest_path, config=MapConfig(log_changes=False))
        assert overlay.bus.handler_count() == 0


class TestInfo:
    """Tests for overlay introspection."""

    def test_info(self, overlay):
        details = overlay.info()
        assert [mount.name for mount in details.mounts] == ["settings", "state"]
        assert details.references == 6
        assert details.invalid_references == []


class TestConvenience:
    """Tests for module-level helpers."""

    def test_open_overlay(self, manifest_path):
        assert open_overlay(manifest_path).get("status.sessions") == 3

    def test_read(self, manifest_path):
        assert read(manifest_path, "network", depth=-1)["tags"] == ["a", "b"]
        assert read(manifest_path, "title") == "Demo"

    def test_lazy_package_exports(self):
        assert mountmap.Overlay is Overlay
        assert mountmap.NOT_FOUND is NOT_FOUND
        with pytest.raises(AttributeError):
            mountmap.nope
