#!/usr/bin/env python3
"""
Effective Range Hardware Info

Print the hardware identity of this device and its GPIO pin assignments.

Usage:
    er-hwinfo
    er-hwinfo /path/to/device-tree
    er-hwinfo --hwdb hwdb.json --schema hwdb-schema.json --json
    er-hwinfo --verbose --log-file /tmp/er-hwinfo.log

Exit status is 1 when no Effective Range device is found, 0 otherwise.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import get_config
from .detector import read_device
from .errors import StructuralError
from .logging import HwinfoLogger, LogConfig
from .models import Info, PinSet
from .query import lookup


def format_pin_table(pins: PinSet) -> List[str]:
    """
    Format pins as a table with Name, GPIO# and Description columns.

    Column widths adjust to the longest name and description.
    """
    name_width = max([4] + [len(pin.name) for pin in pins])
    desc_width = max([11] + [len(pin.description) for pin in pins])

    lines = [
        f"{'Name':<{name_width}}  {'GPIO#':>5}  {'Description':<{desc_width}}",
        f"{'':-<{name_width}}  {'':->5}  {'':-<{desc_width}}",
    ]
    for pin in pins:
        lines.append(f"{pin.name:<{name_width}}  {pin.number:>5}  {pin.description:<{desc_width}}")
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="er-hwinfo",
        description="Show Effective Range hardware identity and GPIO pin assignments"
    )
    parser.add_argument(
        "device_tree",
        nargs="?",
        type=Path,
        help="Device tree base path (default: /proc/device-tree)"
    )
    parser.add_argument(
        "--hwdb",
        type=Path,
        help="Hardware database JSON file (default: /etc/er-hwinfo/hwdb.json)"
    )
    parser.add_argument(
        "--schema",
        type=Path,
        help="Hardware database JSON Schema (default: /etc/er-hwinfo/hwdb-schema.json)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug output"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log output to this file"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_config = LogConfig(
        console_level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )
    with HwinfoLogger(log_config) as log:
        config = get_config()
        dt_path = args.device_tree or config.device_tree_path
        hwdb_path = args.hwdb or config.hwdb_path
        schema_path = args.schema or config.hwdb_schema_path

        device = read_device(dt_path)
        if device is None:
            if args.json:
                log.info(json.dumps({'device': None}))
            else:
                log.info("No Effective Range device found.")
            return 1

        # Missing or broken hwdb files leave the device without pin info
        try:
            info = lookup(device, hwdb_path, schema_path)
        except StructuralError as e:
            log.warning(str(e))
            info = Info(dev=device)

        if args.json:
            log.info(json.dumps(info.to_dict(), indent=2))
            return 0

        log.info(f"Device type: {info.dev.hw_type}")
        log.info(f"Device revision: {info.dev.hw_revision.as_string()}")

        if not info.pins:
            log.blank()
            log.info("No pin information available for this device.")
            return 0

        log.blank()
        for line in format_pin_table(info.pins):
            log.info(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
