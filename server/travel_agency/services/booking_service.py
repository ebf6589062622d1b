"""Booking service implementing the booking lifecycle: create, pay, cancel."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Sequence

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..core.store import InMemoryStore
from ..models import Booking, BookingStatus, Cancellation, Payment, PaymentOutcome, Traveler, to_money
from .customer_service import CustomerService
from .fee_schedule import days_between, fee_percent, split_refund
from .inventory_service import InventoryService
from .package_service import PackageService

logger = logging.getLogger(__name__)


class BookingNotFoundError(NotFoundError):
    """Exception when a booking does not exist."""

    def __init__(self, booking_id: int):
        super().__init__(resource_type="booking", resource_id=str(booking_id))
        self.problem_details.update({
            "code": "BOOKING_NOT_FOUND",
            "retryable": False
        })


class InvalidSeatCountError(ValidationError):
    """Exception when a booking asks for no travelers."""

    def __init__(self, requested_seats: int):
        super().__init__(
            detail=f"A booking needs at least one traveler, got {requested_seats}",
            errors={"travelers": "At least one traveler is required"}
        )
        self.problem_details.update({
            "code": "INVALID_SEAT_COUNT",
            "retryable": False
        })


class InvalidAmountError(ValidationError):
    """Exception when a payment amount is not positive."""

    def __init__(self, amount: Decimal):
        super().__init__(
            detail=f"Payment amount must be positive, got {amount}",
            errors={"amount": "Amount must be greater than zero"}
        )
        self.problem_details.update({
            "code": "INVALID_AMOUNT",
            "retryable": False
        })


class InsufficientSeatsError(ConflictError):
    """Exception when a package has fewer available seats than requested."""

    def __init__(self, package_id: int, requested_seats: int, available_seats: int):
        super().__init__(
            detail=f"Not enough seats available on package {package_id}. "
                   f"Requested: {requested_seats}, Available: {available_seats}",
            conflicting_resource={
                "package_id": package_id,
                "requested_seats": requested_seats,
                "available_seats": available_seats
            }
        )
        self.problem_details.update({
            "code": "INSUFFICIENT_SEATS",
            "retryable": False
        })
        self.available_seats = available_seats


class AlreadyCancelledError(ConflictError):
    """Exception when cancelling a booking that is already cancelled."""

    def __init__(self, booking_id: int):
        super().__init__(detail=f"Booking {booking_id} is already cancelled")
        self.problem_details.update({
            "code": "ALREADY_CANCELLED",
            "retryable": False,
            "booking_id": booking_id
        })


class BookingCancelledError(ConflictError):
    """Exception when paying against a cancelled booking."""

    def __init__(self, booking_id: int):
        super().__init__(detail=f"Booking {booking_id} is cancelled and cannot take payments")
        self.problem_details.update({
            "code": "BOOKING_CANCELLED",
            "retryable": False,
            "booking_id": booking_id
        })


@dataclass(frozen=True)
class PaymentResult:
    """Outcome of RecordPayment: the payment plus the booking state it produced."""

    payment: Payment
    booking: Booking
    outcome: PaymentOutcome
    status: BookingStatus
    remaining_due: Decimal
    message: str

    @property
    def is_advisory(self) -> bool:
        return self.outcome == PaymentOutcome.OVERSOLD


class BookingService:
    """
    Service for the booking lifecycle.

    Seats are committed exactly once, when a booking first becomes fully paid
    and the package still has room; creating a booking never touches seats.
    """

    def __init__(self, store: InMemoryStore, clock: Callable[[], date] = date.today):
        self.store = store
        self.clock = clock
        self.customer_service = CustomerService(store)
        self.package_service = PackageService(store)
        self.inventory = InventoryService(store)

    def create_booking(self, customer_id: int, package_id: int, travelers: Sequence[Traveler]) -> Booking:
        """
        Create a PENDING booking for the given travelers.

        Args:
            customer_id: Booking customer
            package_id: Package to book seats on
            travelers: One traveler per requested seat

        Returns:
            Created booking entity

        Raises:
            CustomerNotFoundError: If customer not found
            PackageNotFoundError: If package not found
            InvalidSeatCountError: If no travelers were given
            InsufficientSeatsError: If the package has fewer seats available than travelers
        """
        self.customer_service.get_customer_or_raise(customer_id)
        package = self.package_service.get_package_or_raise(package_id)

        seats = len(travelers)
        if seats <= 0:
            logger.warning(
                "Booking creation failed - no travelers",
                extra={"customer_id": customer_id, "package_id": package_id}
            )
            raise InvalidSeatCountError(seats)

        if package.available_seats < seats:
            logger.warning(
                "Booking creation failed - insufficient seats",
                extra={
                    "customer_id": customer_id,
                    "package_id": package_id,
                    "requested_seats": seats,
                    "available_seats": package.available_seats
                }
            )
            raise InsufficientSeatsError(package_id, seats, package.available_seats)

        booking = Booking(
            id=self.store.bookings.next_id(),
            package_id=package_id,
            customer_id=customer_id,
            travelers=tuple(travelers),
            amount_due=package.price * seats,
            booking_date=self.clock(),
        )
        self.store.bookings.add(booking.id, booking)
        metrics_collector.record_booking_created(package_id)

        logger.info(
            "Booking created successfully",
            extra={
                "booking_id": booking.id,
                "customer_id": customer_id,
                "package_id": package_id,
                "seats": seats,
                "amount_due": str(booking.amount_due)
            }
        )

        return booking

    def record_payment(self, booking_id: int, amount: Decimal, method: str) -> PaymentResult:
        """
        Record a payment and confirm the booking once it is fully paid.

        A payment that completes the booking when the package has run out of
        seats is still recorded; the booking stays PENDING and the result
        carries the OVERSOLD advisory instead of an error.

        Args:
            booking_id: Booking to pay against
            amount: Payment amount
            method: Free-form payment method label

        Returns:
            Payment result with the resulting booking status and message

        Raises:
            BookingNotFoundError: If booking not found
            InvalidAmountError: If amount is not positive
            BookingCancelledError: If the booking is already cancelled
        """
        booking = self.get_booking_or_raise(booking_id)
        amount = to_money(amount)

        if amount <= 0:
            logger.warning(
                "Payment rejected - non-positive amount",
                extra={"booking_id": booking_id, "amount": str(amount)}
            )
            raise InvalidAmountError(amount)

        with self.inventory.locked_package(booking.package_id) as package:
            if booking.status == BookingStatus.CANCELLED:
                logger.warning(
                    "Payment rejected - booking cancelled",
                    extra={"booking_id": booking_id, "amount": str(amount)}
                )
                raise BookingCancelledError(booking_id)

            payment = Payment(
                id=self.store.payments.next_id(),
                booking_id=booking_id,
                amount=amount,
                payment_date=self.clock(),
                method=method,
            )
            self.store.payments.add(payment.id, payment)
            booking.apply_payment(payment)
            metrics_collector.record_payment(method, payment.amount)

            if booking.status == BookingStatus.CONFIRMED:
                outcome = PaymentOutcome.ALREADY_CONFIRMED
                message = f"Booking {booking.id} is already CONFIRMED. Payment added to paid amount."
            elif not booking.is_fully_paid:
                outcome = PaymentOutcome.PARTIAL
                message = f"Booking still PENDING. Remaining due: {booking.remaining_due:.2f}"
            elif package.available_seats >= booking.num_seats:
                self.inventory.decrease_seats(package.id, booking.num_seats)
                booking.confirm()
                metrics_collector.record_booking_confirmed(package.id)
                outcome = PaymentOutcome.CONFIRMED
                message = f"Booking {booking.id} is CONFIRMED. Seats reserved: {booking.num_seats}"
            else:
                metrics_collector.record_oversold(package.id)
                outcome = PaymentOutcome.OVERSOLD
                message = "Payment complete but seats are no longer available. Contact support."

            status = booking.status
            remaining_due = booking.remaining_due

        log_extra = {
            "booking_id": booking_id,
            "payment_id": payment.id,
            "amount": str(payment.amount),
            "method": method,
            "paid_amount": str(booking.paid_amount),
            "amount_due": str(booking.amount_due),
            "outcome": outcome.value
        }
        if outcome == PaymentOutcome.OVERSOLD:
            log_extra.update({
                "package_id": package.id,
                "requested_seats": booking.num_seats,
                "available_seats": package.available_seats
            })
            logger.warning("Payment complete but no seats available to commit", extra=log_extra)
        else:
            logger.info("Payment recorded successfully", extra=log_extra)

        return PaymentResult(
            payment=payment,
            booking=booking,
            outcome=outcome,
            status=status,
            remaining_due=remaining_due,
            message=message,
        )

    def cancel_booking(self, booking_id: int, now: date) -> Cancellation:
        """
        Cancel a booking, charging the fee for how close departure is.

        Fee and refund are computed from the amount actually paid. Seats are
        returned to the package only when the booking had committed them.

        Args:
            booking_id: Booking to cancel
            now: Cancellation date

        Returns:
            Cancellation record with fee and refund

        Raises:
            BookingNotFoundError: If booking not found
            AlreadyCancelledError: If booking is already cancelled
        """
        booking = self.get_booking_or_raise(booking_id)

        with self.inventory.locked_package(booking.package_id) as package:
            if booking.status == BookingStatus.CANCELLED:
                logger.warning(
                    "Cancellation rejected - booking already cancelled",
                    extra={"booking_id": booking_id}
                )
                raise AlreadyCancelledError(booking_id)

            previous_status = booking.status
            days_before = days_between(now, package.start_date)
            percent = fee_percent(days_before)
            fee, refund = split_refund(booking.paid_amount, percent)

            cancellation = Cancellation(
                id=self.store.cancellations.next_id(),
                booking_id=booking_id,
                cancel_date=now,
                days_before=days_before,
                fee_percent=percent,
                fee=fee,
                refund=refund,
            )
            self.store.cancellations.add(cancellation.id, cancellation)

            # PENDING bookings never held seats
            if previous_status == BookingStatus.CONFIRMED:
                self.inventory.increase_seats(package.id, booking.num_seats)

            booking.cancel()

        metrics_collector.record_booking_cancelled(previous_status.value, fee)

        logger.info(
            "Booking cancelled successfully",
            extra={
                "booking_id": booking_id,
                "cancellation_id": cancellation.id,
                "previous_status": previous_status.value,
                "days_before": days_before,
                "fee_percent": percent,
                "fee": str(fee),
                "refund": str(refund),
                "seats_restored": booking.num_seats if previous_status == BookingStatus.CONFIRMED else 0
            }
        )

        return cancellation

    def get_booking(self, booking_id: int) -> Booking | None:
        """Get booking by ID."""
        return self.store.bookings.get(booking_id)

    def get_booking_or_raise(self, booking_id: int) -> Booking:
        """Get booking by ID or raise BookingNotFoundError."""
        booking = self.get_booking(booking_id)
        if not booking:
            logger.warning(
                "Booking not found",
                extra={"booking_id": booking_id}
            )
            raise BookingNotFoundError(booking_id)
        return booking

    def get_payments(self, booking_id: int) -> list[Payment]:
        """Payments recorded against a booking, oldest first."""
        booking = self.get_booking_or_raise(booking_id)
        return [self.store.payments.get(payment_id) for payment_id in booking.payment_ids]

    def get_cancellation(self, booking_id: int) -> Cancellation | None:
        """Cancellation record of a booking, if it was cancelled."""
        self.get_booking_or_raise(booking_id)
        matches = self.store.cancellations.filter(lambda c: c.booking_id == booking_id)
        return matches[0] if matches else None
