"""Tests for document sources and manifest loading."""

import json

import pytest

from mountmap.errors import ManifestError
from mountmap.storage import (
    DictSource,
    JsonFileSource,
    load_manifest,
    parse_manifest,
    resolve_template,
)


class TestJsonFileSource:
    """Tests for JsonFileSource."""

    def test_relative_to_base_dir(self, tmp_path):
        (tmp_path / "doc.json").write_text('{"a": 1}')
        source = JsonFileSource(tmp_path)
        assert source.load("doc.json") == {"a": 1}
        assert source.describe("doc.json") == str(tmp_path / "doc.json")

    def test_absolute_path(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text("[1, 2]")
        assert JsonFileSource("/elsewhere").load(str(path)) == [1, 2]

    def test_scalar_document(self, tmp_path):
        (tmp_path / "n.json").write_text("42")
        assert JsonFileSource(tmp_path).load("n.json") == 42

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="Cannot read"):
            JsonFileSource(tmp_path).load("missing.json")

    def test_invalid_json(self, tmp_path):
        (tmp_path / "bad.json").write_text("{nope")
        with pytest.raises(ManifestError, match="Invalid JSON"):
            JsonFileSource(tmp_path).load("bad.json")


class TestDictSource:
    """Tests for DictSource."""

    def test_loads_copies(self):
        documents = {"doc": {"a": [1]}}
        source = DictSource(documents)
        loaded = source.load("doc")
        loaded["a"].append(2)
        assert documents["doc"] == {"a": [1]}
        assert source.load("doc") == {"a": [1]}

    def test_unknown_id(self):
        with pytest.raises(ManifestError):
            DictSource({}).load("doc")

    def test_describe(self):
        assert DictSource({}).describe("doc") == "memory:doc"


class TestManifest:
    """Tests for manifest parsing."""

    def test_load_manifest(self, manifest_path):
        manifest = load_manifest(manifest_path)
        assert manifest.mounts == {
            "settings": "data/settings.json",
            "state": "data/state.json",
        }
        assert manifest.map["title"] == "settings.ui.title"

    def test_defaults(self):
        manifest = parse_manifest({})
        assert manifest.mounts == {}
        assert manifest.map == {}

    @pytest.mark.parametrize("data", [{"mounts": ["a"]}, {"map": 5}, []])
    def test_invalid_shape(self, data):
        with pytest.raises(ManifestError, match="Invalid manifest"):
            parse_manifest(data)

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(ManifestError):
            load_manifest(tmp_path / "manifest.json")

    def test_invalid_manifest_json(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text("not json")
        with pytest.raises(ManifestError, match="Invalid JSON"):
            load_manifest(path)

    def test_external_template(self, tmp_path):
        (tmp_path / "map.json").write_text(json.dumps({"a": "m.x"}))
        manifest = parse_manifest({"mounts": {"m": "m.json"}, "map": "map.json"})
        assert resolve_template(manifest, JsonFileSource(tmp_path)) == {"a": "m.x"}

    def test_inline_template(self):
        manifest = parse_manifest({"map": {"a": "m.x"}})
        assert resolve_template(manifest, DictSource({})) == {"a": "m.x"}
