"""
Revision Resolver

Selects which revision entry of a device type governs a requested hardware
revision, and extracts the pin definitions from that entry.

Matching policy (all revisions sharing a major version are assumed to be
pin-compatible):

1. Exact match: the requested revision is in the table
2. Forward match: the lowest recorded revision above the request, if it has
   the same major version
3. Backward search: the highest recorded revision below the request with the
   same major version
4. No match: no recorded revision shares the major version
"""

from bisect import bisect_left
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Tuple

from .errors import DatabaseInconsistent, MalformedRevision
from .logging import get_logger
from .models import Pin, PinSet
from .revision import Revision, parse_revision


def _parse_key(key: str) -> Revision:
    try:
        return parse_revision(key)
    except MalformedRevision as e:
        raise DatabaseInconsistent(
            f"Inconsistent hardware database: revision key {key!r} is malformed"
        ) from e


def resolve_revision(requested: Revision, available: Iterable[str]) -> Optional[Revision]:
    """
    Select the revision governing a requested revision.

    Args:
        requested: Revision read from the device
        available: Revision strings recorded for the device type

    Returns:
        Selected Revision, or None if no recorded revision has the same
        major version

    Raises:
        DatabaseInconsistent: if a recorded revision string does not parse
    """
    revisions = sorted({_parse_key(key) for key in available})
    index = bisect_left(revisions, requested)

    if index < len(revisions):
        candidate = revisions[index]
        if candidate == requested or candidate.major == requested.major:
            return candidate

    # Lower bound is past the end or belongs to another major version
    for candidate in reversed(revisions[:index]):
        if candidate.major == requested.major:
            return candidate

    return None


def select_revision_entry(requested: Revision, type_entry: Mapping) -> Optional[Tuple[str, Any]]:
    """
    Find the revision entry of a device type that applies to a revision.

    Args:
        requested: Revision read from the device
        type_entry: Revision string -> revision entry mapping

    Returns:
        (revision key, entry) tuple, or None if nothing is compatible

    Raises:
        DatabaseInconsistent: if a key is malformed, or the selected revision
            has no entry under its canonical key (e.g. only "1.02.0" exists)
    """
    selected = resolve_revision(requested, type_entry.keys())
    if selected is None:
        get_logger().debug(f"No revision compatible with {requested} in {sorted(type_entry)}")
        return None

    key = selected.as_string()
    if key not in type_entry:
        raise DatabaseInconsistent(
            f"Inconsistent hardware database: computed revision {key} not found"
        )

    get_logger().debug(f"Revision {requested} resolved to {key}")
    return key, type_entry[key]


def _pin_number(name: str, value: Any) -> int:
    # Integral floats such as 17.0 satisfy JSON Schema "integer"
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DatabaseInconsistent(
            f"Inconsistent hardware database: pin {name!r} value {value!r} is not an integer"
        )
    if isinstance(value, float):
        if not value.is_integer():
            raise DatabaseInconsistent(
                f"Inconsistent hardware database: pin {name!r} value {value!r} is not an integer"
            )
        value = int(value)
    if value < 0:
        raise DatabaseInconsistent(
            f"Inconsistent hardware database: pin {name!r} value {value} is negative"
        )
    return value


def extract_pins(entry: Any) -> PinSet:
    """
    Extract pin definitions from a revision entry.

    Args:
        entry: Revision entry, {"pins": {name: {"value": int, "description": str}}}

    Returns:
        PinSet ordered by pin name

    Raises:
        DatabaseInconsistent: if the entry lacks required fields
    """
    pins = entry.get('pins') if isinstance(entry, Mapping) else None
    if not isinstance(pins, Mapping):
        raise DatabaseInconsistent("Inconsistent hardware database: revision entry has no pins object")

    result = []
    for name, record in pins.items():
        if not isinstance(record, Mapping) or 'value' not in record or 'description' not in record:
            raise DatabaseInconsistent(
                f"Inconsistent hardware database: pin {name!r} needs 'value' and 'description'"
            )
        description = record['description']
        if not isinstance(description, str):
            raise DatabaseInconsistent(
                f"Inconsistent hardware database: pin {name!r} description is not a string"
            )
        result.append(Pin(name=name, number=_pin_number(name, record['value']), description=description))

    return PinSet(result)
