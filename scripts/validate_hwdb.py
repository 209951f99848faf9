#!/usr/bin/env python3
"""
Validate Hardware Database

Validate a hardware database against its schema and check that every
revision key resolves, then summarize the device types and revisions.

Usage:
    python scripts/validate_hwdb.py hwdb.json
    python scripts/validate_hwdb.py hwdb.json --schema hwdb-schema.json
    python scripts/validate_hwdb.py hwdb.json --resolve 1.4.0
"""

import sys
import argparse
from collections.abc import Mapping
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hwinfo import (
    DatabaseInconsistent,
    SchemaViolation,
    StructuralError,
    bundled_schema_path,
    extract_pins,
    load_database,
    parse_revision,
    select_revision_entry,
)


def check_revision_keys(db):
    """
    Check that every revision key is canonical and every entry has pins.

    Args:
        db: HardwareDatabase instance

    Returns:
        List of issue strings
    """
    issues = []
    for hw_type in db.device_types():
        type_entry = db[hw_type]
        if not isinstance(type_entry, Mapping):
            issues.append(f"{hw_type}: entry is not an object")
            continue
        for key, entry in type_entry.items():
            try:
                rev = parse_revision(key)
            except ValueError as e:
                issues.append(f"{hw_type}/{key}: {e}")
                continue
            if rev.as_string() != key:
                issues.append(f"{hw_type}/{key}: not canonical, use {rev.as_string()}")
            try:
                extract_pins(entry)
            except DatabaseInconsistent as e:
                issues.append(f"{hw_type}/{key}: {e}")
    return issues


def main():
    parser = argparse.ArgumentParser(
        description="Validate a hardware database against its schema"
    )
    parser.add_argument(
        "hwdb",
        type=Path,
        help="Hardware database JSON file"
    )
    parser.add_argument(
        "--schema",
        type=Path,
        default=bundled_schema_path(),
        help="JSON Schema (default: schema bundled with hwinfo)"
    )
    parser.add_argument(
        "--resolve",
        metavar="REVISION",
        help="Show which revision each device type resolves to for REVISION"
    )

    args = parser.parse_args()

    requested = None
    if args.resolve:
        try:
            requested = parse_revision(args.resolve)
        except ValueError as e:
            print(f"✗ {e}")
            return 2

    try:
        db = load_database(args.hwdb, args.schema)
    except SchemaViolation as e:
        print(f"✗ {args.hwdb} does not conform to {args.schema}:")
        for violation in e.violations:
            print(f"  - {violation}")
        return 1
    except StructuralError as e:
        print(f"✗ {e}")
        return 1

    issues = check_revision_keys(db)
    if issues:
        print(f"✗ {len(issues)} issue(s) in {args.hwdb}:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"✓ {args.hwdb} is valid ({len(db)} device types)")
    for hw_type in db.device_types():
        revisions = sorted(db[hw_type], key=parse_revision)
        print(f"  {hw_type}: {', '.join(revisions) or '(no revisions)'}")
        if requested is not None:
            selected = select_revision_entry(requested, db[hw_type])
            target = selected[0] if selected else "no match"
            print(f"    {requested} -> {target}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
