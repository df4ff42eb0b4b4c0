"""Maintenance types and their default service intervals."""

from enum import Enum
from typing import Optional


class MaintenanceType(Enum):
    """The kinds of maintenance a truck can receive."""

    OIL_CHANGE = "Oil Change"
    AIR_FILTER_CHANGE = "Air Filter Change"
    FUEL_FILTER_CHANGE = "Fuel Filter Change"
    TIRE_ROTATION = "Tire Rotation"
    BRAKE_SERVICE = "Brake Service"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str) -> "MaintenanceType":
        """Look up a type by display name, case-insensitively."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(f"Unknown maintenance type '{value}'")

    @property
    def default_interval(self) -> Optional[int]:
        """Recommended miles between services, if any."""
        return DEFAULT_INTERVALS.get(self)


DEFAULT_INTERVALS = {
    MaintenanceType.OIL_CHANGE: 15000,
    MaintenanceType.AIR_FILTER_CHANGE: 30000,
    MaintenanceType.FUEL_FILTER_CHANGE: 30000,
}

# Types with a status card on the truck detail page
TRACKED_TYPES = [
    MaintenanceType.OIL_CHANGE,
    MaintenanceType.AIR_FILTER_CHANGE,
    MaintenanceType.FUEL_FILTER_CHANGE,
]
