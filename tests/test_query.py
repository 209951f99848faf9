"""
End-to-end tests for hwinfo.get.
"""

import json

import pytest

from hwinfo import get, lookup
from hwinfo.errors import (
    DatabaseInconsistent,
    DatabaseMalformed,
    DatabaseUnreadable,
    SchemaMalformed,
    SchemaUnreadable,
    SchemaViolation,
    StructuralError,
)
from hwinfo.models import Device
from hwinfo.revision import Revision

from conftest import write_text_file


def hwdb_with(revisions, hw_type="test-board"):
    """Build a hwdb with one pin named after each revision."""
    return json.dumps({
        hw_type: {
            rev: {"pins": {f"PIN_{rev.replace('.', '_')}": {"description": rev, "value": i}}}
            for i, rev in enumerate(revisions)
        }
    })


class TestGetErrors:
    """Structural errors are fatal even when a device is present"""

    def test_none_when_device_tree_missing(self, tmp_path, schema_file, hwdb_file):
        assert get(tmp_path / "nonexistent", hwdb_file(), schema_file) is None

    def test_no_database_access_without_device(self, tmp_path):
        # Missing hwdb files do not matter when there is no device
        assert get(tmp_path, tmp_path / "missing.json", tmp_path / "missing-schema.json") is None

    def test_schema_missing(self, tmp_path, device_tree, hwdb_file):
        base = device_tree()
        with pytest.raises(SchemaUnreadable):
            get(base, hwdb_file(), tmp_path / "nonexistent.json")

    def test_schema_invalid_json(self, tmp_path, device_tree, hwdb_file):
        base = device_tree()
        schema = write_text_file(tmp_path / "schema.json", "{ invalid json }")
        with pytest.raises(SchemaMalformed):
            get(base, hwdb_file(), schema)

    def test_schema_with_unresolvable_ref(self, tmp_path, device_tree, hwdb_file):
        base = device_tree()
        schema = write_text_file(tmp_path / "schema.json", '{"$ref": "#/$defs/missing"}')
        with pytest.raises(SchemaMalformed):
            get(base, hwdb_file(), schema)

    def test_hwdb_missing(self, tmp_path, device_tree, schema_file):
        base = device_tree()
        with pytest.raises(DatabaseUnreadable):
            get(base, tmp_path / "nonexistent.json", schema_file)

    def test_hwdb_invalid_json(self, device_tree, schema_file, hwdb_file):
        base = device_tree()
        with pytest.raises(DatabaseMalformed):
            get(base, hwdb_file("{ not valid json }"), schema_file)

    def test_hwdb_violates_schema(self, device_tree, schema_file, hwdb_file):
        base = device_tree()
        with pytest.raises(SchemaViolation):
            get(base, hwdb_file('{ "test-board": { "1.0.0": {} } }'), schema_file)

    def test_malformed_revision_key_with_permissive_schema(self, tmp_path, device_tree, hwdb_file):
        base = device_tree()
        schema = write_text_file(tmp_path / "loose.json", '{"type": "object"}')
        with pytest.raises(DatabaseInconsistent):
            get(base, hwdb_file(hwdb_with(["1.2.3", "one.two"])), schema)

    def test_non_object_database_with_permissive_schema(self, tmp_path, device_tree, hwdb_file):
        base = device_tree()
        schema = write_text_file(tmp_path / "loose.json", "{}")
        with pytest.raises(DatabaseInconsistent):
            get(base, hwdb_file("[]"), schema)

    def test_non_object_type_entry_with_permissive_schema(self, tmp_path, device_tree, hwdb_file):
        base = device_tree()
        schema = write_text_file(tmp_path / "loose.json", '{"type": "object"}')
        with pytest.raises(StructuralError):
            get(base, hwdb_file('{"test-board": 5}'), schema)


class TestGetPins:
    """Tests for pin lookup through get"""

    def test_empty_pins_when_type_not_in_hwdb(self, device_tree, schema_file, hwdb_file):
        base = device_tree("unknown-board", 1, 0, 0)

        info = get(base, hwdb_file(), schema_file)

        assert info is not None
        assert info.dev.hw_type == "unknown-board"
        assert len(info.pins) == 0

    def test_pins_for_known_type(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 1, 2, 3)

        info = get(base, hwdb_file(), schema_file)

        assert info.dev.hw_type == "test-board"
        assert info.dev.hw_revision == Revision(1, 2, 3)
        assert len(info.pins) == 1
        pin = info.pins["LED"]
        assert pin.number == 17
        assert pin.description == "Status LED"

    def test_multiple_pins_sorted(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 1, 0, 0)
        path = hwdb_file("""{
          "test-board": {
            "1.0.0": {
              "pins": {
                "LED": { "description": "Status LED", "value": 17 },
                "BUTTON": { "description": "User button", "value": 27 },
                "RELAY": { "description": "Power relay", "value": 22 }
              }
            }
          }
        }""")

        info = get(base, path, schema_file)

        assert info.pins.names() == ["BUTTON", "LED", "RELAY"]
        assert info.pins["BUTTON"].number == 27

    def test_forward_match(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 1, 5, 0)
        info = get(base, hwdb_file(hwdb_with(["1.2.0", "1.8.0"])), schema_file)
        assert info.pins.names() == ["PIN_1_8_0"]

    def test_exact_match(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 1, 2, 3)
        info = get(base, hwdb_file(hwdb_with(["1.0.0", "1.2.3", "1.5.0"])), schema_file)
        assert info.pins.names() == ["PIN_1_2_3"]

    def test_backward_when_lower_bound_other_major(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 1, 9, 0)
        info = get(base, hwdb_file(hwdb_with(["1.5.0", "2.0.0"])), schema_file)
        assert info.pins.names() == ["PIN_1_5_0"]

    def test_backward_when_lower_bound_past_end(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 1, 9, 0)
        info = get(base, hwdb_file(hwdb_with(["1.5.0"])), schema_file)
        assert info.pins.names() == ["PIN_1_5_0"]

    def test_empty_pins_when_major_differs(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 2, 0, 0)
        info = get(base, hwdb_file(), schema_file)
        assert info is not None
        assert not info.pins

    def test_empty_pins_when_no_match(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 3, 0, 0)
        info = get(base, hwdb_file(hwdb_with(["1.5.0", "2.5.0"])), schema_file)
        assert len(info.pins) == 0

    def test_empty_pins_when_type_has_no_revisions(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 1, 0, 0)
        info = get(base, hwdb_file('{"test-board": {}}'), schema_file)
        assert len(info.pins) == 0

    def test_reads_files_fresh_on_every_call(self, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 1, 2, 3)
        path = hwdb_file()
        assert get(base, path, schema_file).pins.names() == ["LED"]

        hwdb_file(hwdb_with(["1.2.3"]))
        assert get(base, path, schema_file).pins.names() == ["PIN_1_2_3"]


class TestGetDefaults:
    """Tests for paths taken from configuration"""

    def test_paths_from_environment(self, monkeypatch, device_tree, schema_file, hwdb_file):
        base = device_tree("test-board", 1, 2, 3)
        monkeypatch.setenv("ER_HWINFO_DEVICE_TREE", str(base))
        monkeypatch.setenv("ER_HWINFO_HWDB", str(hwdb_file()))
        monkeypatch.setenv("ER_HWINFO_HWDB_SCHEMA", str(schema_file))

        info = get()

        assert info is not None
        assert info.pins.names() == ["LED"]

    def test_explicit_argument_overrides_config(self, monkeypatch, tmp_path, device_tree,
                                                 schema_file, hwdb_file):
        base = device_tree("test-board", 1, 2, 3)
        monkeypatch.setenv("ER_HWINFO_DEVICE_TREE", str(tmp_path / "elsewhere"))
        monkeypatch.setenv("ER_HWINFO_HWDB", str(hwdb_file()))
        monkeypatch.setenv("ER_HWINFO_HWDB_SCHEMA", str(schema_file))

        assert get() is None
        assert get(base) is not None


class TestLookup:
    """Tests for lookup with an already identified device"""

    def test_does_not_read_device_tree(self, monkeypatch, schema_file, hwdb_file):
        def fail(*args):
            raise AssertionError("device tree read")
        monkeypatch.setattr("hwinfo.query.read_device", fail)

        device = Device("test-board", Revision(1, 2, 3))
        info = lookup(device, hwdb_file(), schema_file)

        assert info.dev is device
        assert info.pins.names() == ["LED"]

    def test_unknown_type_has_no_pins(self, schema_file, hwdb_file):
        info = lookup(Device("other-board", Revision(1, 0, 0)), hwdb_file(), schema_file)
        assert not info.pins
