"""
Effective Range Hardware Info

Queries GPIO pin information for Effective Range devices by reading the
hardware identity from the Linux device tree and looking up the pin
definitions in a JSON hardware database.

Usage:
    import hwinfo

    info = hwinfo.get()
    if info:
        print(info.dev.hw_type, info.dev.hw_revision)
        for pin in info.pins:
            print(pin.name, pin.number, pin.description)
"""

from .revision import Revision, parse_revision, format_revision
from .models import Pin, PinSet, Device, Info
from .errors import (
    HwinfoError,
    MalformedRevision,
    StructuralError,
    SchemaUnreadable,
    SchemaMalformed,
    DatabaseUnreadable,
    DatabaseMalformed,
    SchemaViolation,
    Violation,
    DatabaseInconsistent,
)
from .detector import DeviceTreeReader, read_device
from .database import HardwareDatabase, load_database
from .resolver import resolve_revision, select_revision_entry, extract_pins
from .config import HwinfoConfig, get_config, bundled_schema_path
from .query import get, lookup

__version__ = '0.1.0'

__all__ = [
    # Core types
    'Revision',
    'Pin',
    'PinSet',
    'Device',
    'Info',
    # Revision codec
    'parse_revision',
    'format_revision',
    # Errors
    'HwinfoError',
    'MalformedRevision',
    'StructuralError',
    'SchemaUnreadable',
    'SchemaMalformed',
    'DatabaseUnreadable',
    'DatabaseMalformed',
    'SchemaViolation',
    'Violation',
    'DatabaseInconsistent',
    # Device tree
    'DeviceTreeReader',
    'read_device',
    # Database and resolution
    'HardwareDatabase',
    'load_database',
    'resolve_revision',
    'select_revision_entry',
    'extract_pins',
    # Configuration
    'HwinfoConfig',
    'get_config',
    'bundled_schema_path',
    # Query
    'get',
    'lookup',
]
