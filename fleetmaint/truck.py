"""Truck class for fleet vehicles."""

from typing import Optional


class Truck:
    """A truck owned by a company."""

    def __init__(
        self,
        id: str,
        vin: str,
        year: int,
        make: str,
        model: str,
        current_mileage: int = 0,
        license_plate: Optional[str] = None,
        notes: Optional[str] = None,
    ):
        self.id = id
        self.vin = vin
        self.year = year
        self.make = make
        self.model = model
        self.current_mileage = current_mileage or 0
        self.license_plate = license_plate
        self.notes = notes

    @property
    def name(self) -> str:
        """Human-readable truck name."""
        return f"{self.year} {self.make} {self.model}"

    def record_mileage(self, mileage: int) -> bool:
        """
        Raise current mileage to a newly reported odometer reading.

        Lower readings are ignored so mileage never goes backwards.
        Returns True if the mileage changed.
        """
        if mileage > self.current_mileage:
            self.current_mileage = mileage
            return True
        return False
