"""
Hardware Info Models

Value types produced by a hardware info query: the device identity read from
the device tree, and the GPIO pin definitions resolved from the hardware
database.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from .revision import Revision


@dataclass(frozen=True)
class Pin:
    """GPIO pin definition"""
    name: str          # Pin identifier (e.g., "LED", "BUTTON")
    number: int        # GPIO number
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'number': self.number, 'description': self.description}


class PinSet:
    """
    Immutable set of pins ordered by name.

    Iterating yields Pin objects in ascending name order. Pins can be looked
    up by name without building a Pin:

        pins.find("LED")     # Pin or None
        pins["LED"]          # Pin, KeyError if missing
        "LED" in pins        # True/False

    Pin names are unique; a later pin with the same name replaces an
    earlier one.
    """

    __slots__ = ('_by_name',)

    def __init__(self, pins: Iterable[Pin] = ()):
        by_name = {}
        for pin in pins:
            by_name[pin.name] = pin
        self._by_name = {name: by_name[name] for name in sorted(by_name)}

    def find(self, name: str) -> Optional[Pin]:
        """Return the pin with the given name, or None."""
        return self._by_name.get(name)

    def names(self) -> List[str]:
        """Pin names in ascending order."""
        return list(self._by_name)

    def __getitem__(self, name: str) -> Pin:
        return self._by_name[name]

    def __contains__(self, item: Union[str, Pin]) -> bool:
        if isinstance(item, Pin):
            return self._by_name.get(item.name) == item
        return item in self._by_name

    def __iter__(self) -> Iterator[Pin]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def __bool__(self) -> bool:
        return bool(self._by_name)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PinSet):
            return NotImplemented
        return list(self) == list(other)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"PinSet({list(self)!r})"


@dataclass(frozen=True)
class Device:
    """Device identification as read from the device tree"""
    hw_type: str            # Hardware type identifier (e.g., "mrhat")
    hw_revision: Revision

    def to_dict(self) -> Dict[str, Any]:
        return {'hw_type': self.hw_type, 'hw_revision': self.hw_revision.as_string()}


@dataclass(frozen=True)
class Info:
    """
    Complete hardware information result.

    pins is empty when the device type is not in the database or no
    revision with the same major version exists.
    """
    dev: Device
    pins: PinSet = field(default_factory=PinSet)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'device': self.dev.to_dict(),
            'pins': [pin.to_dict() for pin in self.pins],
        }
