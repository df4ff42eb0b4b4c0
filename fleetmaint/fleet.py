"""Fleet class - the main aggregate for a company's trucks and maintenance."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from .calculations import (
    SOON_THRESHOLD_MILES,
    UPCOMING_LIMIT,
    maintenance_status,
    needs_maintenance,
    recent_maintenance,
    upcoming_maintenance,
)
from .company import Company
from .maintenance_record import MaintenanceRecord
from .maintenance_type import TRACKED_TYPES
from .truck import Truck
from .upcoming import TypeStatus, UpcomingMaintenance


class Fleet:
    """Complete company record with trucks and maintenance history."""

    def __init__(
        self,
        company: Company,
        trucks: Optional[List[Truck]] = None,
        records: Optional[List[MaintenanceRecord]] = None,
        account_email: Optional[str] = None,
    ):
        self.company = company
        self.trucks = trucks or []
        self.records = records or []
        self.account_email = account_email

    def get_truck(self, truck_id: str) -> Optional[Truck]:
        """Find a truck by id."""
        for truck in self.trucks:
            if truck.id == truck_id:
                return truck
        return None

    def search_trucks(self, term: Optional[str] = None) -> List[Truck]:
        """Trucks whose VIN, make, model or year contains the term."""
        if not term:
            return list(self.trucks)
        term = term.strip().lower()
        return [
            t
            for t in self.trucks
            if term in t.vin.lower()
            or term in t.make.lower()
            or term in t.model.lower()
            or term in str(t.year)
        ]

    def records_for_truck(self, truck_id: str) -> List[MaintenanceRecord]:
        """All records for a truck, newest first."""
        records = [r for r in self.records if r.truck_id == truck_id]
        return sorted(records, key=lambda r: r.performed_at_datetime, reverse=True)

    def records_newest_first(self) -> List[MaintenanceRecord]:
        return sorted(
            self.records, key=lambda r: r.performed_at_datetime, reverse=True
        )

    def truck_status(
        self, truck: Truck, soon_threshold: float = SOON_THRESHOLD_MILES
    ) -> List[TypeStatus]:
        """Status for each tracked maintenance type on a truck."""
        records = self.records_for_truck(truck.id)
        return [
            maintenance_status(truck.current_mileage, records, t, soon_threshold)
            for t in TRACKED_TYPES
        ]

    def needs_maintenance(self, truck: Truck) -> bool:
        return needs_maintenance(truck.current_mileage, self.records_for_truck(truck.id))

    def maintenance_flags(self) -> Dict[str, bool]:
        """Map of truck id to needs-maintenance, for list badges."""
        return {truck.id: self.needs_maintenance(truck) for truck in self.trucks}

    def trucks_needing_maintenance(self) -> List[Truck]:
        return [truck for truck in self.trucks if self.needs_maintenance(truck)]

    def upcoming_maintenance(
        self, limit: int = UPCOMING_LIMIT
    ) -> List[UpcomingMaintenance]:
        return upcoming_maintenance(self.trucks, self.records_newest_first(), limit)

    def recent_maintenance(
        self,
        as_of: Optional[datetime] = None,
        days: int = 7,
        limit: int = UPCOMING_LIMIT,
    ) -> List[MaintenanceRecord]:
        as_of = as_of or datetime.now(timezone.utc)
        return recent_maintenance(self.records, as_of, days, limit)

    def dashboard_stats(self, as_of: Optional[datetime] = None) -> Dict[str, int]:
        """
        Counts shown on the dashboard cards.

        The recent count is capped at the same limit as the recent list.
        """
        return {
            "total_trucks": len(self.trucks),
            "trucks_needing_maintenance": len(self.trucks_needing_maintenance()),
            "recent_maintenance_count": len(self.recent_maintenance(as_of)),
        }
