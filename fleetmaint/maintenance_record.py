"""MaintenanceRecord dataclass for performed services."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from dateutil.parser import isoparse


@dataclass(frozen=True)
class MaintenanceRecord:
    """A record of maintenance performed on a truck. Never modified once saved."""

    id: str
    truck_id: str
    maintenance_type: str
    mileage: int
    performed_at: str
    next_due_mileage: Optional[Any] = None
    part_make_model: Optional[str] = None
    description: Optional[str] = None

    @property
    def performed_at_datetime(self) -> datetime:
        """Timestamp as an aware datetime (naive values are taken as UTC)."""
        performed = isoparse(self.performed_at)
        if performed.tzinfo is None:
            performed = performed.replace(tzinfo=timezone.utc)
        return performed
