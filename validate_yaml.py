#!/usr/bin/env python3
"""
Check fleet data files before the web app or CLI reads them.

Each file is checked against schema.yaml, then for problems the schema
cannot express: duplicate ids and maintenance records whose truck is missing.

Usage:
  validate_yaml.py                     # every file in $FLEETMAINT_DATA_DIR or fleets/
  validate_yaml.py fleets/acme.yaml    # specific files
"""
import argparse
import json
import os
import sys
from collections import Counter
from pathlib import Path
from typing import List

import yaml
from jsonschema import Draft7Validator

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"


def load_schema(path: Path = SCHEMA_PATH) -> dict:
    """Load the fleet file JSON schema."""
    with open(path) as f:
        return yaml.safe_load(f)


def _as_json(data):
    # Unquoted timestamps load as datetimes; the schema sees them as text
    return json.loads(json.dumps(data, default=str))


def _error_path(error) -> str:
    return ".".join(str(p) for p in error.absolute_path) or "(root)"


def schema_errors(data, schema: dict) -> List[str]:
    validator = Draft7Validator(schema)
    return [
        f"Schema validation error at {_error_path(e)}: {e.message}"
        for e in sorted(
            validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]
        )
    ]


def duplicate_ids(items: list, label: str) -> List[str]:
    counts = Counter(item.get("id") for item in items)
    return [f"Duplicate {label} id {id}" for id, n in counts.items() if n > 1]


def check_references(data: dict) -> List[str]:
    """Check that every maintenance record points at a known truck."""
    truck_ids = {t.get("id") for t in data.get("trucks") or []}
    errors = []
    for index, record in enumerate(data.get("maintenanceRecords") or []):
        if record.get("truckId") not in truck_ids:
            errors.append(
                f"Record {index} refers to unknown truck {record.get('truckId')}"
            )
    return errors


def validate_fleet_file(filepath: Path, schema: dict) -> List[str]:
    """Validate a single fleet file. Returns a list of errors."""
    try:
        with open(filepath) as f:
            data = _as_json(yaml.safe_load(f))
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]

    errors = schema_errors(data, schema)
    if errors:
        return errors
    errors.extend(duplicate_ids(data.get("trucks") or [], "truck"))
    errors.extend(duplicate_ids(data.get("maintenanceRecords") or [], "record"))
    errors.extend(check_references(data))
    return errors


def find_fleet_files(fleets_dir: Path) -> List[Path]:
    return sorted(list(fleets_dir.glob("*.yaml")) + list(fleets_dir.glob("*.yml")))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Validate fleet data files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("files", nargs="*", type=Path, help="Files to check")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path(os.environ.get("FLEETMAINT_DATA_DIR", Path(__file__).parent / "fleets")),
        help="Directory scanned when no files are given",
    )
    args = parser.parse_args(argv)

    if args.files:
        fleet_files = args.files
    elif not args.data_dir.exists():
        print(f"Error: fleets directory not found: {args.data_dir}")
        return 1
    else:
        fleet_files = find_fleet_files(args.data_dir)

    if not fleet_files:
        print(f"Warning: No YAML files found in {args.data_dir}")
        return 0

    schema = load_schema()
    failed = 0
    for filepath in fleet_files:
        errors = validate_fleet_file(filepath, schema)
        if errors:
            failed += 1
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
        else:
            print(f"OK: {filepath.name}")

    print(f"\n{len(fleet_files) - failed} of {len(fleet_files)} files valid")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
