"""
Fleet maintenance tracking models.

This package provides data models for tracking truck maintenance:
- Status: Urgency levels (DUE, SOON, GOOD, UNKNOWN)
- MaintenanceType: The kinds of service and their default intervals
- Company / Truck: Fleet ownership and vehicle identification
- MaintenanceRecord: Service records
- TypeStatus / UpcomingMaintenance: Calculated service status
- Fleet: Main aggregate combining all data for one company
"""

from .status import Status
from .maintenance_type import MaintenanceType, TRACKED_TYPES
from .company import Company
from .truck import Truck
from .maintenance_record import MaintenanceRecord
from .upcoming import TypeStatus, UpcomingMaintenance
from .fleet import Fleet
from .calculations import (
    check_status,
    default_next_due,
    maintenance_status,
    needs_maintenance,
    parse_threshold,
    recent_maintenance,
    upcoming_maintenance,
)
from .loader import load_fleet, add_maintenance_record, add_truck

__all__ = [
    "Status",
    "MaintenanceType",
    "TRACKED_TYPES",
    "Company",
    "Truck",
    "MaintenanceRecord",
    "TypeStatus",
    "UpcomingMaintenance",
    "Fleet",
    "check_status",
    "default_next_due",
    "maintenance_status",
    "needs_maintenance",
    "parse_threshold",
    "recent_maintenance",
    "upcoming_maintenance",
    "load_fleet",
    "add_maintenance_record",
    "add_truck",
]
