"""Tour package and itinerary model definitions."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class ItineraryItem:
    """A single day entry in a package itinerary."""

    id: int
    package_id: int
    day: int
    title: str
    details: str

    def __str__(self) -> str:
        return f"Day {self.day}: {self.title} - {self.details}"


@dataclass(eq=False)
class TourPackage:
    """
    Tour package entity with a fixed seat capacity and date range.

    `available_seats` is owned by the package and is only changed through
    `decrease_seats` / `increase_seats`; neither clamps, callers check bounds.
    """

    id: int
    name: str
    description: str
    start_date: date
    end_date: date
    price: Decimal
    total_seats: int
    available_seats: int = field(init=False)
    _itinerary: list[ItineraryItem] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.available_seats = self.total_seats

    @property
    def itinerary(self) -> tuple[ItineraryItem, ...]:
        return tuple(self._itinerary)

    def add_itinerary_item(self, item: ItineraryItem) -> None:
        self._itinerary.append(item)

    def decrease_seats(self, n: int) -> None:
        self.available_seats -= n

    def increase_seats(self, n: int) -> None:
        self.available_seats += n

    def __str__(self) -> str:
        return (
            f"ID:{self.id} | {self.name} | {self.start_date.isoformat()} to {self.end_date.isoformat()} | "
            f"Price: {self.price:.2f} | Seats: {self.available_seats}/{self.total_seats}"
        )

    def __repr__(self) -> str:
        return (
            f"<TourPackage(id={self.id}, name='{self.name}', "
            f"start_date={self.start_date}, seats={self.available_seats}/{self.total_seats})>"
        )
