"""Result dataclasses produced by the status evaluator."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .status import Status

if TYPE_CHECKING:
    from .maintenance_record import MaintenanceRecord
    from .truck import Truck


@dataclass
class TypeStatus:
    """Status of one maintenance type for one truck."""

    maintenance_type: str
    status: Status
    record: Optional["MaintenanceRecord"] = None
    next_due_mileage: Optional[float] = None
    miles_remaining: Optional[float] = None

    @property
    def needs_attention(self) -> bool:
        return self.status in (Status.DUE, Status.SOON)


@dataclass
class UpcomingMaintenance:
    """A scheduled service that has not yet come due."""

    truck: "Truck"
    record: "MaintenanceRecord"
    miles_remaining: float
