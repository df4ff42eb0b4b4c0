"""Helper functions for maintenance status calculations."""

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Union

from .maintenance_record import MaintenanceRecord
from .maintenance_type import MaintenanceType
from .status import Status
from .truck import Truck
from .upcoming import TypeStatus, UpcomingMaintenance

SOON_THRESHOLD_MILES = 1000
UPCOMING_LIMIT = 5


def parse_threshold(value: Any) -> Optional[float]:
    """
    Interpret a stored next-due mileage.

    Returns None ("not scheduled") for missing, zero, negative or
    non-numeric values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if value != value or value <= 0:  # NaN or unset
        return None
    return value


def check_status(
    current: float, next_due: float, soon_threshold: float = SOON_THRESHOLD_MILES
) -> Status:
    """Determine status by comparing current mileage to the due threshold."""
    if current >= next_due:
        return Status.DUE
    if next_due - current < soon_threshold:
        return Status.SOON
    return Status.GOOD


def default_next_due(
    maintenance_type: Union[MaintenanceType, str], mileage: float
) -> Optional[float]:
    """Next-due mileage from the type's recommended interval, if it has one."""
    if isinstance(maintenance_type, str):
        try:
            maintenance_type = MaintenanceType.parse(maintenance_type)
        except ValueError:
            return None
    interval = maintenance_type.default_interval
    if interval is None:
        return None
    return mileage + interval


def _type_name(maintenance_type: Union[MaintenanceType, str]) -> str:
    if isinstance(maintenance_type, MaintenanceType):
        return maintenance_type.value
    return maintenance_type


def maintenance_status(
    current_mileage: float,
    records: Iterable[MaintenanceRecord],
    maintenance_type: Union[MaintenanceType, str],
    soon_threshold: float = SOON_THRESHOLD_MILES,
) -> TypeStatus:
    """
    Status of one maintenance type for a truck.

    Uses the first record of the type in the order given, so records
    should be passed newest first.
    """
    type_name = _type_name(maintenance_type)
    record = next((r for r in records if r.maintenance_type == type_name), None)
    if record is None:
        return TypeStatus(maintenance_type=type_name, status=Status.UNKNOWN)

    next_due = parse_threshold(record.next_due_mileage)
    if next_due is None:
        return TypeStatus(maintenance_type=type_name, status=Status.GOOD, record=record)

    return TypeStatus(
        maintenance_type=type_name,
        status=check_status(current_mileage, next_due, soon_threshold),
        record=record,
        next_due_mileage=next_due,
        miles_remaining=next_due - current_mileage,
    )


def needs_maintenance(
    current_mileage: float, records: Iterable[MaintenanceRecord]
) -> bool:
    """True if any scheduled service is at or past its next-due mileage."""
    for record in records:
        next_due = parse_threshold(record.next_due_mileage)
        if next_due is not None and current_mileage >= next_due:
            return True
    return False


def group_by_truck(
    records: Iterable[MaintenanceRecord],
) -> Dict[str, List[MaintenanceRecord]]:
    """Bucket records by truck id, preserving order within each truck."""
    grouped: Dict[str, List[MaintenanceRecord]] = {}
    for record in records:
        grouped.setdefault(record.truck_id, []).append(record)
    return grouped


def upcoming_maintenance(
    trucks: Iterable[Truck],
    records: Iterable[MaintenanceRecord],
    limit: int = UPCOMING_LIMIT,
) -> List[UpcomingMaintenance]:
    """Scheduled services not yet due across all trucks, soonest first."""
    by_truck = group_by_truck(records)
    upcoming = []
    for truck in trucks:
        for record in by_truck.get(truck.id, []):
            next_due = parse_threshold(record.next_due_mileage)
            if next_due is None or next_due <= truck.current_mileage:
                continue
            upcoming.append(
                UpcomingMaintenance(
                    truck=truck,
                    record=record,
                    miles_remaining=next_due - truck.current_mileage,
                )
            )
    upcoming.sort(key=lambda u: u.miles_remaining)
    return upcoming[:limit]


def recent_maintenance(
    records: Iterable[MaintenanceRecord],
    as_of: datetime,
    days: int = 7,
    limit: int = UPCOMING_LIMIT,
) -> List[MaintenanceRecord]:
    """Records performed within the last `days` days, newest first."""
    cutoff = as_of - timedelta(days=days)
    recent = [r for r in records if r.performed_at_datetime >= cutoff]
    recent.sort(key=lambda r: r.performed_at_datetime, reverse=True)
    return recent[:limit]
