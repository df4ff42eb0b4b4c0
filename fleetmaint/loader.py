"""YAML loading and saving utilities for fleet data."""

import json
import logging
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .company import Company
from .fleet import Fleet
from .maintenance_record import MaintenanceRecord
from .truck import Truck
from .calculations import default_next_due, parse_threshold

logger = logging.getLogger(__name__)


def _parse_object(
    dct: Dict[str, Any]
) -> Union[Company, Truck, MaintenanceRecord, Fleet, dict]:
    """Parse dictionary into appropriate object type."""
    # Top-level fleet object
    if "company" in dct:
        account = dct.get("account") or {}
        return Fleet(
            dct["company"],
            dct.get("trucks"),
            dct.get("maintenanceRecords"),
            account.get("email"),
        )
    # Truck
    elif "vin" in dct:
        return Truck(
            dct["id"],
            dct["vin"],
            dct["year"],
            dct["make"],
            dct["model"],
            dct.get("currentMileage"),
            dct.get("licensePlate"),
            dct.get("notes"),
        )
    # Maintenance record
    elif "maintenanceType" in dct:
        return MaintenanceRecord(
            id=dct["id"],
            truck_id=dct["truckId"],
            maintenance_type=dct["maintenanceType"],
            mileage=dct.get("mileage") or 0,
            performed_at=dct["performedAt"],
            next_due_mileage=dct.get("nextDueMileage"),
            part_make_model=dct.get("partMakeModel"),
            description=dct.get("description"),
        )
    # Company (inside 'company' key)
    elif "id" in dct and "name" in dct:
        return Company(
            dct["id"],
            dct["name"],
            dct.get("address"),
            dct.get("phone"),
            dct.get("email"),
            dct.get("website"),
            dct.get("description"),
        )
    else:
        # Return dict as-is for unknown structures (like 'account')
        return dct


def _json_default(value: Any) -> str:
    # Unquoted timestamps in hand-edited files load as datetimes
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def _load_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def load_fleet(filename: Union[str, Path]) -> Fleet:
    """Load a fleet from a YAML file."""
    with open(filename, "rb") as fp:
        json_data = json.dumps(
            yaml.load(fp, Loader=yaml.SafeLoader), indent=4, default=_json_default
        )
        return json.loads(json_data, object_hook=_parse_object)


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


# =============================================================================
# Serialization
# =============================================================================


def _company_to_dict(company: Company) -> Dict[str, Any]:
    """Serialize a Company to the YAML dict format, omitting None values."""
    d: Dict[str, Any] = {"id": company.id, "name": company.name}
    for key in ("address", "phone", "email", "website", "description"):
        value = getattr(company, key)
        if value is not None:
            d[key] = value
    return d


def _truck_to_dict(truck: Truck) -> Dict[str, Any]:
    """Serialize a Truck to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": truck.id,
        "vin": truck.vin,
        "year": truck.year,
        "make": truck.make,
        "model": truck.model,
        "currentMileage": truck.current_mileage,
    }
    if truck.license_plate is not None:
        d["licensePlate"] = truck.license_plate
    if truck.notes is not None:
        d["notes"] = truck.notes
    return d


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    """Serialize a MaintenanceRecord to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": record.id,
        "truckId": record.truck_id,
        "maintenanceType": record.maintenance_type,
        "mileage": record.mileage,
        "performedAt": record.performed_at,
    }
    if record.next_due_mileage is not None:
        d["nextDueMileage"] = record.next_due_mileage
    if record.part_make_model is not None:
        d["partMakeModel"] = record.part_make_model
    if record.description is not None:
        d["description"] = record.description
    return d


# =============================================================================
# Builders
# =============================================================================


def truck_from_payload(data: Dict[str, Any]) -> Truck:
    """Build a new Truck (with a fresh id) from a validated payload."""
    return Truck(
        id=new_id(),
        vin=str(data["vin"]).upper(),
        year=int(data["year"]),
        make=data["make"],
        model=data["model"],
        current_mileage=int(data.get("current_mileage") or 0),
        license_plate=data.get("license_plate"),
        notes=data.get("notes"),
    )


def record_from_payload(
    truck_id: str, data: Dict[str, Any], performed_at: Optional[str] = None
) -> MaintenanceRecord:
    """
    Build a new MaintenanceRecord from a validated payload.

    A blank or zero next-due mileage falls back to the type's default
    interval (if it has one).
    """
    mileage = int(data["mileage"])
    next_due = parse_threshold(data.get("next_due_mileage"))
    if next_due is None:
        next_due = default_next_due(data["maintenance_type"], mileage)
    return MaintenanceRecord(
        id=new_id(),
        truck_id=truck_id,
        maintenance_type=data["maintenance_type"],
        mileage=mileage,
        performed_at=performed_at or utc_now(),
        next_due_mileage=int(next_due) if next_due is not None else None,
        part_make_model=data.get("part_make_model") or None,
        description=data.get("description") or None,
    )


# =============================================================================
# Fleet files
# =============================================================================


def fleet_path(data_dir: Union[str, Path], company_id: str) -> Path:
    """Get full path for a company's fleet file."""
    return Path(data_dir) / f"{company_id}.yaml"


def list_fleet_files(data_dir: Union[str, Path]) -> List[Path]:
    """Get all fleet YAML files in a directory."""
    data_dir = Path(data_dir)
    if not data_dir.exists():
        return []
    return sorted(data_dir.glob("*.yaml"))


def find_account(
    data_dir: Union[str, Path], email: str
) -> Optional[Tuple[Path, str]]:
    """
    Find the fleet file registered to an email address.

    Returns (path, password hash), or None if no account matches.
    """
    wanted = email.strip().lower()
    for path in list_fleet_files(data_dir):
        account = _load_raw(path).get("account") or {}
        if (account.get("email") or "").lower() == wanted:
            return path, account.get("passwordHash") or ""
    return None


def create_fleet(
    data_dir: Union[str, Path],
    company: Company,
    email: str,
    password_hash: str,
) -> Path:
    """
    Create a new fleet YAML file for a company.

    Initializes with no trucks and no maintenance records.
    """
    if find_account(data_dir, email) is not None:
        raise ValueError(f"An account already exists for {email}")

    Path(data_dir).mkdir(parents=True, exist_ok=True)
    path = fleet_path(data_dir, company.id)
    data: Dict[str, Any] = {
        "company": _company_to_dict(company),
        "account": {"email": email.strip().lower(), "passwordHash": password_hash},
        "trucks": [],
        "maintenanceRecords": [],
    }
    _write_raw(path, data)
    logger.info("Created fleet %s for %s", company.id, company.name)
    return path


def update_company(filename: Union[str, Path], company: Company) -> None:
    """
    Replace the company profile in a fleet file.

    The sign-in email follows the profile email. Raises ValueError if another
    fleet in the same directory already signs in with that address.
    """
    data = _load_raw(filename)
    if company.email:
        email = company.email.strip().lower()
        owner = find_account(Path(filename).parent, email)
        if owner is not None and owner[0].resolve() != Path(filename).resolve():
            raise ValueError(f"An account already exists for {email}")
        account = data.get("account") or {}
        account["email"] = email
        data["account"] = account
    data["company"] = _company_to_dict(company)
    _write_raw(filename, data)
    logger.info("Updated company profile %s", company.id)


def add_truck(filename: Union[str, Path], truck: Truck) -> None:
    """Append a truck to a fleet file."""
    import_trucks(filename, [truck])


def import_trucks(filename: Union[str, Path], trucks: List[Truck]) -> int:
    """
    Append several trucks to a fleet file in one write.

    Returns the number of trucks added.
    """
    data = _load_raw(filename)
    if data.get("trucks") is None:
        data["trucks"] = []
    data["trucks"].extend(_truck_to_dict(t) for t in trucks)
    _write_raw(filename, data)
    logger.info("Added %d truck(s) to %s", len(trucks), Path(filename).name)
    return len(trucks)


def delete_truck(filename: Union[str, Path], truck_id: str) -> None:
    """Remove a truck and all of its maintenance records from a fleet file."""
    data = _load_raw(filename)
    trucks = data.get("trucks") or []
    remaining = [t for t in trucks if t.get("id") != truck_id]
    if len(remaining) == len(trucks):
        raise LookupError(f"Truck {truck_id} not found")

    data["trucks"] = remaining
    data["maintenanceRecords"] = [
        r for r in data.get("maintenanceRecords") or [] if r.get("truckId") != truck_id
    ]
    _write_raw(filename, data)
    logger.info("Deleted truck %s from %s", truck_id, Path(filename).name)


def add_maintenance_record(
    filename: Union[str, Path], record: MaintenanceRecord
) -> bool:
    """
    Append a maintenance record to a fleet file.

    The truck's current mileage is raised to the record's mileage when the
    record reports a higher reading; it is never lowered.
    Returns True if the truck mileage changed.
    """
    data = _load_raw(filename)
    truck_dict = next(
        (t for t in data.get("trucks") or [] if t.get("id") == record.truck_id), None
    )
    if truck_dict is None:
        raise LookupError(f"Truck {record.truck_id} not found")

    if data.get("maintenanceRecords") is None:
        data["maintenanceRecords"] = []
    data["maintenanceRecords"].append(_record_to_dict(record))

    truck = _parse_object(truck_dict)
    raised = truck.record_mileage(record.mileage)
    truck_dict["currentMileage"] = truck.current_mileage

    _write_raw(filename, data)
    logger.info(
        "Logged %s for truck %s at %s mi", record.maintenance_type, record.truck_id, record.mileage
    )
    return raised
