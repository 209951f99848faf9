"""
Hardware Info Errors

Two disjoint classes of outcome exist when querying hardware info:

- Expected absence (no device, unknown type, no compatible revision) is
  returned as data and never raised.
- Structural failures (unreadable/malformed schema or database, schema
  violations, inconsistent revision keys) abort the query and are raised
  as subclasses of StructuralError.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union


PathLike = Union[str, Path]


class HwinfoError(Exception):
    """Base class for all hwinfo errors."""


class MalformedRevision(HwinfoError, ValueError):
    """
    A revision string does not follow the major.minor.patch grammar.

    Attributes:
        text: The full string that failed to parse
        component: The offending substring
    """

    def __init__(self, text: str, component: Optional[str] = None):
        self.text = text
        self.component = text if component is None else component
        super().__init__(f"Invalid revision string component: {self.component!r} (in {text!r})")


class StructuralError(HwinfoError):
    """
    Hard error that aborts a query.

    Attributes:
        path: File the error relates to, if any
    """

    def __init__(self, message: str, path: Optional[PathLike] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class SchemaUnreadable(StructuralError):
    """The schema file could not be opened or read."""


class SchemaMalformed(StructuralError):
    """The schema file is not valid JSON, or not a valid JSON Schema."""


class DatabaseUnreadable(StructuralError):
    """The hardware database file could not be opened or read."""


class DatabaseMalformed(StructuralError):
    """The hardware database file is not valid JSON."""


@dataclass(frozen=True)
class Violation:
    """A single schema violation."""
    pointer: str          # JSON pointer into the database document
    schema_pointer: str   # JSON pointer into the schema document
    message: str

    def __str__(self) -> str:
        return f"{self.pointer or '/'}: {self.message} (schema {self.schema_pointer or '/'})"


class SchemaViolation(StructuralError):
    """
    The hardware database does not conform to the schema.

    Attributes:
        violations: All violations, ordered by location in the document
    """

    def __init__(self, violations: List[Violation], path: Optional[PathLike] = None):
        self.violations = list(violations)
        first = self.violations[0] if self.violations else None
        message = "JSON does not conform to schema"
        if first is not None:
            message += f": {first}"
            if len(self.violations) > 1:
                message += f" (+{len(self.violations) - 1} more)"
        super().__init__(message, path)


class DatabaseInconsistent(StructuralError):
    """The database passed validation but cannot be interpreted."""
