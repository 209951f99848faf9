"""
Device Tree Identity Reader

Reads the Effective Range hardware identity exported through the Linux
device tree:

    <dt_base>/effective-range,hardware/
    ├── effective-range,type             text, usually NUL-terminated
    ├── effective-range,revision-major   4 bytes, big-endian u32
    ├── effective-range,revision-minor   4 bytes, big-endian u32
    └── effective-range,revision-patch   4 bytes, big-endian u32

A missing or unreadable identity is an expected outcome (e.g. running on
unrelated hardware), so the reader never raises; it returns None instead.
"""

import string
import struct
from pathlib import Path
from typing import Optional, Union

from .logging import get_logger
from .models import Device
from .revision import Revision


DEFAULT_DEVICE_TREE_PATH = Path('/proc/device-tree')

HARDWARE_NODE = 'effective-range,hardware'
TYPE_PROPERTY = 'effective-range,type'
REVISION_PROPERTIES = (
    'effective-range,revision-major',
    'effective-range,revision-minor',
    'effective-range,revision-patch',
)

_U32 = struct.Struct('!I')
_TYPE_STRIP = string.whitespace + '\x00'


class DeviceTreeReader:
    """
    Reads the hardware identity properties below a device tree base path.
    """

    def __init__(self, dt_base_path: Union[str, Path] = DEFAULT_DEVICE_TREE_PATH):
        self.dt_base_path = Path(dt_base_path)
        self.node_path = self.dt_base_path / HARDWARE_NODE

    def _property_path(self, name: str) -> Path:
        return self.node_path / name

    def _read_bytes(self, name: str) -> Optional[bytes]:
        path = self._property_path(name)
        try:
            return path.read_bytes()
        except OSError as e:
            # Missing, permission denied and directories all count as absent
            get_logger().debug(f"Cannot read {path}: {e}")
            return None

    def read_type(self) -> Optional[str]:
        """
        Read the hardware type string.

        Returns:
            The type with trailing whitespace and NUL bytes removed, or
            None if the property is missing, undecodable or empty.
        """
        content = self._read_bytes(TYPE_PROPERTY)
        if content is None:
            return None

        try:
            hw_type = content.decode('utf-8').rstrip(_TYPE_STRIP)
        except UnicodeDecodeError:
            get_logger().debug(f"{self._property_path(TYPE_PROPERTY)} is not valid UTF-8")
            return None

        if not hw_type:
            get_logger().debug(f"{self._property_path(TYPE_PROPERTY)} is empty")
            return None
        return hw_type

    def read_revision_component(self, name: str) -> Optional[int]:
        """
        Read one revision property as a big-endian unsigned 32-bit integer.

        Args:
            name: Property file name (e.g., 'effective-range,revision-major')

        Returns:
            The value, or None unless the property holds exactly 4 bytes
        """
        content = self._read_bytes(name)
        if content is None:
            return None
        if len(content) != _U32.size:
            get_logger().debug(
                f"{self._property_path(name)} holds {len(content)} bytes, expected {_U32.size}"
            )
            return None
        return _U32.unpack(content)[0]

    def read_device(self) -> Optional[Device]:
        """
        Read the complete device identity.

        Returns:
            Device, or None if any of the four properties is unusable
        """
        hw_type = self.read_type()
        if hw_type is None:
            return None

        components = [self.read_revision_component(name) for name in REVISION_PROPERTIES]
        if any(value is None for value in components):
            return None

        return Device(hw_type=hw_type, hw_revision=Revision(*components))


def read_device(dt_base_path: Union[str, Path] = DEFAULT_DEVICE_TREE_PATH) -> Optional[Device]:
    """
    Read the device identity below a device tree base path.

    Args:
        dt_base_path: Device tree root (default: /proc/device-tree)

    Returns:
        Device, or None if no Effective Range device identity is present
    """
    device = DeviceTreeReader(dt_base_path).read_device()
    if device is None:
        get_logger().debug(f"No hardware identity found under {dt_base_path}")
    return device
