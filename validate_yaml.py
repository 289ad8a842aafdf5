#!/usr/bin/env python3
"""Validate journal YAML files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from carjournal import parse_iso_date


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def check_dates(data: dict) -> list[str]:
    """Report record dates that match YYYY-MM-DD but are not real dates."""
    errors = []
    for index, record in enumerate(data.get("records") or []):
        value = record.get("date")
        if not value:
            continue
        try:
            parse_iso_date(str(value))
        except ValueError:
            errors.append(f"Invalid date '{value}' at path: records.{index}.date")
    return errors


def validate_journal_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single journal YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        validate(instance=data, schema=schema)
        errors.extend(check_dates(data))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main():
    """Validate all journal YAML files in the journals/ directory."""
    schema = load_schema()
    journals_dir = Path(__file__).parent / "journals"

    if not journals_dir.exists():
        print(f"Error: journals directory not found: {journals_dir}")
        return 1

    yaml_files = list(journals_dir.glob("*.yaml")) + list(journals_dir.glob("*.yml"))

    if not yaml_files:
        print(f"Warning: No YAML files found in {journals_dir}")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_journal_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
