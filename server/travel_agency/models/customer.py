"""Customer model definition."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    """Customer entity; referenced by bookings through its id."""

    id: int
    name: str
    email: str
    phone: str

    def __str__(self) -> str:
        return f"{self.id}: {self.name} ({self.email},{self.phone})"
