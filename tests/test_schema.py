"""Tests for map schema building and reference checks."""

import pytest

from mountmap.core.mounts import MountStore
from mountmap.core.schema import (
    build_schema,
    find_invalid_references,
    iter_references,
    reference_mount,
)
from mountmap.errors import MalformedTemplate


class TestBuildSchema:
    """Tests for build_schema()."""

    def test_drops_non_reference_leaves(self):
        assert build_schema({"a": "m.x", "b": 5, "c": {"d": "m.y"}}) == {
            "a": "m.x",
            "c": {"d": "m.y"},
        }

    def test_drops_arrays_bools_and_null(self):
        schema = build_schema({"l": ["m.x"], "t": True, "n": None, "s": "m.s"})
        assert schema == {"s": "m.s"}

    def test_keeps_empty_objects(self):
        assert build_schema({"empty": {}, "nested": {"gone": 1}}) == {"empty": {}, "nested": {}}

    def test_does_not_share_structure_with_template(self):
        template = {"a": {"b": "m.x"}}
        schema = build_schema(template)
        schema["a"]["b"] = "other"
        assert template["a"]["b"] == "m.x"

    def test_drops_unreachable_keys(self):
        schema = build_schema({"a.b": "m.x", "c/d": "m.y", "e f": "m.z", "ok": {"x y": "m.w"}})
        assert schema == {"ok": {}}

    @pytest.mark.parametrize("template", [[], "m.x", 5, None])
    def test_non_object_template_raises(self, template):
        with pytest.raises(MalformedTemplate):
            build_schema(template)


class TestReferences:
    """Tests for reference helpers."""

    def test_reference_mount(self):
        assert reference_mount("settings/network.port") == "settings"
        assert reference_mount(" . ") == ""

    def test_iter_references(self):
        schema = build_schema({"a": "m.x", "c": {"d": "n.y", "e": {"f": "m.z"}}})
        assert list(iter_references(schema)) == [
            ("a", "m.x"),
            ("c.d", "n.y"),
            ("c.e.f", "m.z"),
        ]

    def test_find_invalid_references(self):
        store = MountStore()
        store.load("m", {"x": 1})
        schema = build_schema({"ok": "m.x", "bad": {"ref": "missing.value"}})
        issues = find_invalid_references(schema, store)
        assert len(issues) == 1
        assert issues[0].map_path == "bad.ref"
        assert issues[0].reference == "missing.value"
        assert issues[0].mount == "missing"

    def test_unresolvable_path_in_known_mount_is_not_invalid(self):
        """Only the mount is checked; data may appear later."""
        store = MountStore()
        store.load("m", {})
        assert find_invalid_references(build_schema({"a": "m.later"}), store) == []
