"""
Hardware Database Loader

Reads the hardware database and its JSON Schema, validates one against the
other and returns a read-only view of the database.

The database is a single JSON document (comments and trailing commas are
tolerated) organized by device type and revision:

    {
      "mrhat": {                       // device type
        "1.0.0": {                     // revision, "major.minor.patch"
          "pins": {
            "LED": { "value": 17, "description": "Status LED" },
          },
        },
      },
    }
"""

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, List, Optional, Type, Union

import json5
import jsonschema
from jsonschema.exceptions import SchemaError
from referencing.exceptions import Unresolvable

from .errors import (
    DatabaseMalformed,
    DatabaseUnreadable,
    SchemaMalformed,
    SchemaUnreadable,
    SchemaViolation,
    StructuralError,
    Violation,
)
from .logging import get_logger


PathLike = Union[str, Path]


# =============================================================================
# Reading
# =============================================================================

def read_json_document(
    path: PathLike,
    unreadable: Type[StructuralError],
    malformed: Type[StructuralError],
) -> Any:
    """
    Read and parse a JSON document, tolerating comments and trailing commas.

    Duplicate keys within an object are rejected.

    Args:
        path: File to read
        unreadable: Error raised when the file cannot be read
        malformed: Error raised when the content cannot be parsed

    Returns:
        Parsed document
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise malformed(f"Failed to parse JSON file: {path} (not UTF-8: {e})", path) from e
    except OSError as e:
        raise unreadable(f"Failed to open json file: {path} ({e.strerror or e})", path) from e

    try:
        return json5.loads(text, allow_duplicate_keys=False)
    except ValueError as e:
        raise malformed(f"Failed to parse JSON file: {path} ({e})", path) from e


# =============================================================================
# Validation
# =============================================================================

def _json_pointer(parts) -> str:
    """Build an RFC 6901 JSON pointer from path components."""
    return ''.join(
        '/' + str(part).replace('~', '~0').replace('/', '~1') for part in parts
    )


def validate_document(document: Any, schema: Any, schema_path: Optional[PathLike] = None,
                      path: Optional[PathLike] = None):
    """
    Validate a parsed document against a parsed JSON Schema.

    The validator class is chosen from the schema's "$schema" keyword.

    Args:
        document: Parsed database document
        schema: Parsed schema document
        schema_path: Schema file, for error reporting
        path: Database file, for error reporting

    Raises:
        SchemaMalformed: if the schema itself is not a valid JSON Schema or
            holds a $ref that does not resolve
        SchemaViolation: listing every violation, ordered by location
    """
    if not isinstance(schema, (Mapping, bool)):
        raise SchemaMalformed(
            f"Invalid JSON Schema: {schema_path} (expected an object, got {type(schema).__name__})",
            schema_path,
        )

    validator_cls = jsonschema.validators.validator_for(schema)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        raise SchemaMalformed(
            f"Invalid JSON Schema: {schema_path} ({e.message} at "
            f"{_json_pointer(e.path) or '/'})",
            schema_path,
        ) from e

    validator = validator_cls(schema)
    try:
        errors = sorted(
            validator.iter_errors(document),
            key=lambda e: [str(part) for part in e.absolute_path],
        )
    except Unresolvable as e:
        # check_schema does not follow $ref; dangling ones surface here
        raise SchemaMalformed(
            f"Invalid JSON Schema: {schema_path} (unresolvable reference: {e})",
            schema_path,
        ) from e
    if errors:
        violations = [
            Violation(
                pointer=_json_pointer(error.absolute_path),
                schema_pointer=_json_pointer(error.absolute_schema_path),
                message=error.message,
            )
            for error in errors
        ]
        raise SchemaViolation(violations, path)


# =============================================================================
# Database view
# =============================================================================

def _freeze(value: Any) -> Any:
    """Recursively convert dicts to read-only mappings and lists to tuples."""
    if isinstance(value, dict):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


class HardwareDatabase(Mapping):
    """
    Read-only view of a validated hardware database.

    Maps device type -> revision string -> revision entry. Whether the
    top-level document is an object at all is decided by the schema; a
    non-object document behaves as an empty database here and is reported
    by the query layer.
    """

    def __init__(self, document: Any, path: Optional[PathLike] = None):
        self.document = _freeze(document)
        self.path = Path(path) if path is not None else None

    @property
    def is_mapping(self) -> bool:
        """True if the top-level document is a JSON object."""
        return isinstance(self.document, Mapping)

    def _entries(self) -> Mapping:
        return self.document if self.is_mapping else MappingProxyType({})

    def device_types(self) -> List[str]:
        """All device types in document order."""
        return list(self._entries())

    def revisions(self, hw_type: str) -> Optional[Any]:
        """
        Revision table for a device type.

        Returns:
            The revision mapping, or None if the type is not in the database
        """
        return self._entries().get(hw_type)

    def __getitem__(self, hw_type: str) -> Any:
        return self._entries()[hw_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries())

    def __len__(self) -> int:
        return len(self._entries())

    def __repr__(self) -> str:
        return f"HardwareDatabase(path={self.path!r}, types={self.device_types()!r})"


def load_database(hwdb_path: PathLike, schema_path: PathLike) -> HardwareDatabase:
    """
    Load and validate the hardware database.

    Steps (each fails with its own error):
    1. Read and parse the schema
    2. Read and parse the database
    3. Validate the database against the schema

    Args:
        hwdb_path: Hardware database JSON file
        schema_path: JSON Schema file

    Returns:
        Read-only HardwareDatabase

    Raises:
        SchemaUnreadable, SchemaMalformed, DatabaseUnreadable,
        DatabaseMalformed, SchemaViolation
    """
    schema = read_json_document(schema_path, SchemaUnreadable, SchemaMalformed)
    document = read_json_document(hwdb_path, DatabaseUnreadable, DatabaseMalformed)
    validate_document(document, schema, schema_path=schema_path, path=hwdb_path)

    database = HardwareDatabase(document, hwdb_path)
    get_logger().debug(f"Loaded {len(database)} device types from {hwdb_path}")
    return database
