"""
Hardware Info Query

Top-level entry point combining the device tree identity, the hardware
database and revision resolution.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

from .config import get_config
from .database import load_database
from .detector import read_device
from .errors import DatabaseInconsistent
from .logging import get_logger
from .models import Device, Info, PinSet
from .resolver import extract_pins, select_revision_entry


PathLike = Union[str, Path]


def get(
    dt_base_path: Optional[PathLike] = None,
    hwdb_path: Optional[PathLike] = None,
    hwdb_schema_path: Optional[PathLike] = None,
) -> Optional[Info]:
    """
    Query hardware information for the current device.

    Reads the device type and revision from the device tree, then looks up
    the GPIO pin definitions for the best matching revision in the hardware
    database. Every call reads all files afresh.

    Args:
        dt_base_path: Device tree base directory (default from config)
        hwdb_path: Hardware database JSON file (default from config)
        hwdb_schema_path: JSON Schema for the database (default from config)

    Returns:
        Info, or None if no device identity is present. Info.pins is empty
        when the device type is not in the database or no revision with the
        same major version exists.

    Raises:
        StructuralError: if the schema or database cannot be read, parsed or
            validated, or the database is internally inconsistent

    Example:
        >>> info = get()
        >>> if info:
        ...     for pin in info.pins:
        ...         print(pin.name, pin.number)
    """
    if dt_base_path is None or hwdb_path is None or hwdb_schema_path is None:
        config = get_config()
        dt_base_path = config.device_tree_path if dt_base_path is None else dt_base_path
        hwdb_path = config.hwdb_path if hwdb_path is None else hwdb_path
        hwdb_schema_path = config.hwdb_schema_path if hwdb_schema_path is None else hwdb_schema_path

    device = read_device(dt_base_path)
    if device is None:
        return None

    return lookup(device, hwdb_path, hwdb_schema_path)


def lookup(device: Device, hwdb_path: PathLike, hwdb_schema_path: PathLike) -> Info:
    """
    Look up the pin definitions for an already identified device.

    Args:
        device: Device identity, e.g. from read_device
        hwdb_path: Hardware database JSON file
        hwdb_schema_path: JSON Schema for the database

    Returns:
        Info for the device; pins are empty when nothing matches

    Raises:
        StructuralError: as for get
    """
    hwdb = load_database(hwdb_path, hwdb_schema_path)
    if not hwdb.is_mapping:
        raise DatabaseInconsistent(
            f"Inconsistent hardware database: top level of {hwdb_path} is not an object",
            hwdb_path,
        )

    type_entry = hwdb.revisions(device.hw_type)
    if type_entry is None:
        get_logger().debug(f"Device type {device.hw_type!r} not in hardware database")
        return Info(dev=device, pins=PinSet())
    if not isinstance(type_entry, Mapping):
        raise DatabaseInconsistent(
            f"Inconsistent hardware database: entry for {device.hw_type!r} is not an object",
            hwdb_path,
        )

    selected = select_revision_entry(device.hw_revision, type_entry)
    if selected is None:
        return Info(dev=device, pins=PinSet())

    _, entry = selected
    return Info(dev=device, pins=extract_pins(entry))
