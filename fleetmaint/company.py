"""Company class for fleet owners."""

from typing import Optional


class Company:
    """A company that owns a fleet of trucks."""

    def __init__(
        self,
        id: str,
        name: str,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        website: Optional[str] = None,
        description: Optional[str] = None,
    ):
        self.id = id
        self.name = name
        self.address = address
        self.phone = phone
        self.email = email
        self.website = website
        self.description = description
