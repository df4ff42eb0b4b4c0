"""Status enum for maintenance urgency levels."""

from enum import Enum


class Status(Enum):
    """Maintenance status categories. Lower value = more urgent."""

    DUE = 1
    SOON = 2
    GOOD = 3
    UNKNOWN = 4  # No record of this maintenance type

    @property
    def label(self) -> str:
        """Short human-readable label for badges."""
        return {
            Status.DUE: "Maintenance Due",
            Status.SOON: "Due Soon",
            Status.GOOD: "Good",
            Status.UNKNOWN: "No records",
        }[self]

    @property
    def key(self) -> str:
        """Lowercase name used in templates and query strings."""
        return self.name.lower()
