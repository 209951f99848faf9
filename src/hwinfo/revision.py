"""
Revision Codec

Semantic hardware revision (major.minor.patch) and its canonical
dotted-decimal string form. The string form is also the key format used for
revisions inside the hardware database.
"""

import re
from dataclasses import dataclass

from .errors import MalformedRevision


# ASCII digits only; str.isdigit() and \d also accept other Unicode digits
_COMPONENT_RE = re.compile(r'[0-9]+')


@dataclass(frozen=True, order=True)
class Revision:
    """
    Hardware revision, ordered by (major, minor, patch).

    Example:
        >>> Revision.parse("1.2.3") < Revision(1, 10, 0)
        True
    """
    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self):
        for name in ('major', 'minor', 'patch'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Revision {name} must be an int, got {value!r}")
            if value < 0:
                raise ValueError(f"Revision {name} must be non-negative, got {value}")

    def as_string(self) -> str:
        """Canonical "major.minor.patch" form."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.as_string()

    @classmethod
    def parse(cls, text: str) -> 'Revision':
        """Parse a "major.minor.patch" string. See parse_revision()."""
        return parse_revision(text)


def parse_revision(text: str) -> Revision:
    """
    Parse a revision string.

    The grammar is exactly three runs of decimal digits separated by two
    literal '.' characters, with nothing before or after.

    Args:
        text: Revision string (e.g., "1.2.3")

    Returns:
        Parsed Revision

    Raises:
        MalformedRevision: carrying the offending substring
    """
    if not isinstance(text, str):
        raise MalformedRevision(repr(text))

    components = text.split('.')
    if len(components) != 3:
        raise MalformedRevision(text)

    values = []
    for component in components:
        if not _COMPONENT_RE.fullmatch(component):
            raise MalformedRevision(text, component)
        try:
            values.append(int(component))
        except ValueError as e:
            # Beyond the interpreter's integer string conversion limit
            raise MalformedRevision(text, component) from e

    return Revision(*values)


def format_revision(revision: Revision) -> str:
    """Format a Revision as "major.minor.patch"."""
    return revision.as_string()
