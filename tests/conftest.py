"""
Shared fixtures for hwinfo tests.

Builds device tree directories and hardware database files under tmp_path.
"""

import struct
from pathlib import Path

import pytest

from hwinfo.detector import HARDWARE_NODE, REVISION_PROPERTIES, TYPE_PROPERTY


VALID_SCHEMA = """{
  "$schema": "https://json-schema.org/draft/2020-12/schema",
  "type": "object",
  "additionalProperties": {
    "type": "object",
    "additionalProperties": {
      "type": "object",
      "properties": {
        "pins": {
          "type": "object",
          "additionalProperties": {
            "type": "object",
            "properties": {
              "description": { "type": "string" },
              "value": { "type": "integer", "minimum": 0 }
            },
            "required": ["description", "value"]
          }
        }
      },
      "required": ["pins"]
    }
  }
}"""

VALID_HWDB = """{
  "test-board": {
    "1.2.3": {
      "pins": {
        "LED": { "description": "Status LED", "value": 17 }
      }
    }
  }
}"""


def write_text_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode('utf-8'))
    return path


def write_u32_file(path: Path, value: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(struct.pack('!I', value))
    return path


def create_device_tree(base: Path, hw_type: str, major: int, minor: int, patch: int) -> Path:
    """Create the effective-range,hardware node with all four properties."""
    node = base / HARDWARE_NODE
    write_text_file(node / TYPE_PROPERTY, hw_type)
    for name, value in zip(REVISION_PROPERTIES, (major, minor, patch)):
        write_u32_file(node / name, value)
    return node


@pytest.fixture
def device_tree(tmp_path):
    """Factory creating a device tree under tmp_path; returns the base path."""
    def _create(hw_type="test-board", major=1, minor=2, patch=3):
        create_device_tree(tmp_path, hw_type, major, minor, patch)
        return tmp_path
    return _create


@pytest.fixture
def schema_file(tmp_path):
    return write_text_file(tmp_path / "schema.json", VALID_SCHEMA)


@pytest.fixture
def hwdb_file(tmp_path):
    """Factory writing hwdb.json under tmp_path (default: VALID_HWDB)."""
    def _write(content=VALID_HWDB):
        return write_text_file(tmp_path / "hwdb.json", content)
    return _write


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files and environment overrides out of tests."""
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / 'xdg-config'))
    for var in ('ER_HWINFO_DEVICE_TREE', 'ER_HWINFO_HWDB', 'ER_HWINFO_HWDB_SCHEMA'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr('hwinfo.config.SYSTEM_CONFIG_DIR', tmp_path / 'etc-er-hwinfo')
