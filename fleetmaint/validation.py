"""
Input validation for trucks, maintenance records and company profiles.

Payloads are plain dicts (form posts, CSV rows). Each validator returns a
list of human-readable error messages; an empty list means the payload is
valid. Structural checks are expressed as JSON schemas and evaluated with
jsonschema; the raw jsonschema errors are translated into messages suitable
for showing next to a form.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator, FormatChecker

from .maintenance_type import MaintenanceType

MIN_YEAR = 1900
VIN_LENGTH = 17

TRUCK_FIELDS = ["vin", "year", "make", "model", "current_mileage", "license_plate"]

FIELD_LABELS = {
    "vin": "VIN",
    "year": "Year",
    "make": "Make",
    "model": "Model",
    "current_mileage": "Current mileage",
    "license_plate": "License plate",
    "maintenance_type": "Maintenance type",
    "mileage": "Current mileage",
    "name": "Company name",
    "address": "Address",
    "phone": "Phone number",
    "email": "Email",
}


def max_truck_year() -> int:
    """Latest model year accepted (next year's models go on sale early)."""
    return date.today().year + 1


def truck_schema(max_year: Optional[int] = None) -> Dict[str, Any]:
    max_year = max_year or max_truck_year()
    return {
        "type": "object",
        "required": TRUCK_FIELDS,
        "properties": {
            "vin": {"type": "string", "minLength": VIN_LENGTH, "maxLength": VIN_LENGTH},
            "year": {"type": "integer", "minimum": MIN_YEAR, "maximum": max_year},
            "make": {"type": "string"},
            "model": {"type": "string"},
            "current_mileage": {"type": "integer", "minimum": 0},
            "license_plate": {"type": "string"},
            "notes": {"type": ["string", "null"]},
        },
    }


MAINTENANCE_SCHEMA = {
    "type": "object",
    "required": ["maintenance_type", "mileage"],
    "properties": {
        "maintenance_type": {"enum": [t.value for t in MaintenanceType]},
        "mileage": {"type": "integer", "minimum": 0},
        "next_due_mileage": {"type": ["integer", "null"], "minimum": 0},
        "part_make_model": {"type": ["string", "null"]},
        "description": {"type": ["string", "null"]},
    },
}

COMPANY_SCHEMA = {
    "type": "object",
    "required": ["name", "address", "phone", "email"],
    "properties": {
        "name": {"type": "string"},
        "address": {"type": "string"},
        "phone": {"type": "string"},
        "email": {"type": "string", "format": "email"},
        "website": {"type": ["string", "null"], "pattern": "^https?://[^\\s]+$"},
        "description": {"type": ["string", "null"]},
    },
}


def coerce_number(value: Any) -> Any:
    """
    Convert numeric text to an int.

    Blank text becomes None. Text that is not a number is returned
    unchanged so schema validation reports it.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, str):
        return value
    text = value.strip().replace(",", "")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return value
    return int(number) if number.is_integer() else number


def clean_payload(data: Dict[str, Any], numeric_fields=()) -> Dict[str, Any]:
    """Strip strings, drop blank values and coerce numeric fields."""
    cleaned = {}
    for key, value in data.items():
        if key is None:
            continue
        if isinstance(value, str):
            value = value.strip()
        if key in numeric_fields:
            value = coerce_number(value)
        if value is None or value == "":
            continue
        cleaned[key] = value
    return cleaned


def _unique(messages: List[str]) -> List[str]:
    seen = []
    for message in messages:
        if message not in seen:
            seen.append(message)
    return seen


def _missing_fields(error) -> List[str]:
    return [name for name in error.validator_value if name not in error.instance]


def _field(error) -> Optional[str]:
    return error.path[0] if error.path else None


def validate_truck(data: Dict[str, Any], max_year: Optional[int] = None) -> List[str]:
    """Validate a cleaned truck payload."""
    max_year = max_year or max_truck_year()
    validator = Draft7Validator(truck_schema(max_year))
    messages = []
    for error in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
        field = _field(error)
        if error.validator == "required":
            messages.extend(f"{FIELD_LABELS[f]} is required" for f in _missing_fields(error))
        elif field == "vin":
            messages.append(f"VIN must be {VIN_LENGTH} characters")
        elif field == "year":
            messages.append(f"Year must be between {MIN_YEAR} and {max_year}")
        elif field == "current_mileage":
            if error.validator == "minimum":
                messages.append("Mileage cannot be negative")
            else:
                messages.append("Mileage must be a whole number")
        else:
            messages.append(f"{FIELD_LABELS.get(field, field)}: {error.message}")
    return _unique(messages)


def validate_maintenance(data: Dict[str, Any]) -> List[str]:
    """Validate a cleaned maintenance payload."""
    validator = Draft7Validator(MAINTENANCE_SCHEMA)
    messages = []
    for error in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
        field = _field(error)
        if error.validator == "required":
            messages.extend(f"{FIELD_LABELS[f]} is required" for f in _missing_fields(error))
        elif field == "maintenance_type":
            messages.append("Unknown maintenance type")
        elif error.validator == "minimum":
            messages.append("Mileage cannot be negative")
        elif field in ("mileage", "next_due_mileage"):
            messages.append("Mileage must be a whole number")
        else:
            messages.append(f"{FIELD_LABELS.get(field, field)}: {error.message}")
    return _unique(messages)


def validate_company(data: Dict[str, Any]) -> List[str]:
    """Validate a cleaned company profile payload."""
    validator = Draft7Validator(COMPANY_SCHEMA, format_checker=FormatChecker())
    messages = []
    for error in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
        field = _field(error)
        if error.validator == "required":
            messages.extend(f"{FIELD_LABELS[f]} is required" for f in _missing_fields(error))
        elif field == "email":
            messages.append("Invalid email address")
        elif field == "website":
            messages.append("Invalid URL format")
        else:
            messages.append(f"{FIELD_LABELS.get(field, field)}: {error.message}")
    return _unique(messages)
