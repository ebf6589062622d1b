"""Booking, payment and cancellation model definitions."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from .money import ZERO


class BookingStatus(str, Enum):
    """Booking status enumeration."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


# Allowed status transitions; CANCELLED is terminal
_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
}


class PaymentOutcome(str, Enum):
    """Effect of a recorded payment on its booking."""
    PARTIAL = "PARTIAL"
    CONFIRMED = "CONFIRMED"
    OVERSOLD = "OVERSOLD"
    ALREADY_CONFIRMED = "ALREADY_CONFIRMED"


class InvalidStatusTransition(Exception):
    """Raised when a booking is moved along a transition the lifecycle does not allow."""

    def __init__(self, booking_id: int, current: BookingStatus, target: BookingStatus):
        super().__init__(f"Booking {booking_id} cannot move from {current.value} to {target.value}")
        self.booking_id = booking_id
        self.current = current
        self.target = target


@dataclass(frozen=True)
class Traveler:
    """Traveler value object embedded in a booking."""

    name: str
    age: int
    passport: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.age})"


@dataclass(frozen=True)
class Payment:
    """Payment record linked to a booking."""

    id: int
    booking_id: int
    amount: Decimal
    payment_date: date
    method: str

    def __str__(self) -> str:
        return (
            f"Payment {self.id}: Booking {self.booking_id} Amount {self.amount:.2f} "
            f"on {self.payment_date.isoformat()} via {self.method}"
        )


@dataclass(frozen=True)
class Cancellation:
    """Record of a booking cancellation and its fee split."""

    id: int
    booking_id: int
    cancel_date: date
    days_before: int
    fee_percent: int
    fee: Decimal
    refund: Decimal


@dataclass(eq=False)
class Booking:
    """
    Booking entity tracking a customer's seats on a package.

    `amount_due` is fixed at creation. `paid_amount` only grows, through
    `apply_payment`, and always equals the sum of the linked payments.
    """

    id: int
    package_id: int
    customer_id: int
    travelers: tuple[Traveler, ...]
    amount_due: Decimal
    booking_date: date
    status: BookingStatus = BookingStatus.PENDING
    paid_amount: Decimal = ZERO
    payment_ids: list[int] = field(default_factory=list)

    @property
    def num_seats(self) -> int:
        return len(self.travelers)

    @property
    def remaining_due(self) -> Decimal:
        return max(self.amount_due - self.paid_amount, ZERO)

    @property
    def is_fully_paid(self) -> bool:
        return self.paid_amount >= self.amount_due

    def apply_payment(self, payment: Payment) -> None:
        self.paid_amount += payment.amount
        self.payment_ids.append(payment.id)

    def confirm(self) -> None:
        self._transition(BookingStatus.CONFIRMED)

    def cancel(self) -> None:
        self._transition(BookingStatus.CANCELLED)

    def _transition(self, target: BookingStatus) -> None:
        if target not in _TRANSITIONS[self.status]:
            raise InvalidStatusTransition(self.id, self.status, target)
        self.status = target

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, package_id={self.package_id}, seats={self.num_seats}, "
            f"status={self.status.value}, paid={self.paid_amount}/{self.amount_due})>"
        )
