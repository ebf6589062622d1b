"""Models module exporting all domain entities."""

from .booking import (
    Booking,
    BookingStatus,
    Cancellation,
    InvalidStatusTransition,
    Payment,
    PaymentOutcome,
    Traveler,
)
from .customer import Customer
from .money import to_money
from .tour_package import ItineraryItem, TourPackage

__all__ = [
    # Package entities
    "TourPackage",
    "ItineraryItem",

    # Customer entity
    "Customer",

    # Booking entities
    "Booking",
    "BookingStatus",
    "InvalidStatusTransition",
    "PaymentOutcome",
    "Traveler",
    "Payment",
    "Cancellation",

    # Helpers
    "to_money",
]
