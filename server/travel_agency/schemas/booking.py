"""Booking-related Pydantic schemas."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.booking import BookingStatus, PaymentOutcome

__all__ = [
    "BookingStatus",
    "PaymentOutcome",
    "TravelerIn",
    "CreateBookingRequest",
    "RecordPaymentRequest",
    "CancelBookingRequest",
    "GetBookingRequest",
    "Traveler",
    "Booking",
    "Payment",
    "PaymentReceipt",
    "Cancellation",
    "BookingDetails",
]


class TravelerIn(BaseModel):
    """Traveler details supplied when booking."""

    name: str = Field(..., min_length=1, max_length=255, description="Traveler name")
    age: int = Field(..., ge=0, le=150, description="Traveler age")
    passport: Optional[str] = Field(None, max_length=64, description="Passport number, if any")


class CreateBookingRequest(BaseModel):
    """Request schema for creating a booking."""

    customer_id: int = Field(..., description="Booking customer")
    package_id: int = Field(..., description="Package to book")
    travelers: list[TravelerIn] = Field(..., description="One traveler per seat")


class RecordPaymentRequest(BaseModel):
    """Request schema for recording a payment."""

    booking_id: int = Field(..., description="Booking to pay against")
    amount: Decimal = Field(..., max_digits=12, decimal_places=2, description="Payment amount")
    method: str = Field(..., min_length=1, max_length=64, description="Payment method, e.g. Cash/Card/UPI")


class CancelBookingRequest(BaseModel):
    """Request schema for cancelling a booking."""

    booking_id: int = Field(..., description="Booking to cancel")
    cancel_date: Optional[date] = Field(None, description="Cancellation date; defaults to today")


class GetBookingRequest(BaseModel):
    """Request schema for getting a booking."""

    booking_id: int = Field(..., description="Booking to retrieve")


class Traveler(BaseModel):
    """Traveler response schema."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    age: int
    passport: Optional[str] = None


class Booking(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique booking ID")
    package_id: int = Field(..., description="Booked package ID")
    customer_id: int = Field(..., description="Booking customer ID")
    travelers: list[Traveler] = Field(..., description="Travelers in seat order")
    num_seats: int = Field(..., ge=1, description="Number of seats")
    status: BookingStatus = Field(..., description="Booking status")
    amount_due: Decimal = Field(..., description="Total price fixed at booking time")
    paid_amount: Decimal = Field(..., description="Sum of recorded payments")
    remaining_due: Decimal = Field(..., description="Amount still to pay")
    booking_date: date = Field(..., description="Booking creation date")
    payment_ids: list[int] = Field(default_factory=list, description="Linked payment IDs")


class Payment(BaseModel):
    """Payment response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique payment ID")
    booking_id: int = Field(..., description="Paid booking ID")
    amount: Decimal = Field(..., description="Payment amount")
    payment_date: date = Field(..., description="Payment date")
    method: str = Field(..., description="Payment method")


class PaymentReceipt(BaseModel):
    """Response schema for a recorded payment."""

    payment: Payment = Field(..., description="Recorded payment")
    booking_status: BookingStatus = Field(..., description="Booking status after the payment")
    outcome: PaymentOutcome = Field(..., description="Effect of the payment")
    advisory: bool = Field(..., description="True when paid in full but no seats could be committed")
    remaining_due: Decimal = Field(..., description="Amount still to pay")
    message: str = Field(..., description="Human-readable outcome")


class Cancellation(BaseModel):
    """Cancellation response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique cancellation ID")
    booking_id: int = Field(..., description="Cancelled booking ID")
    cancel_date: date = Field(..., description="Cancellation date")
    days_before: int = Field(..., description="Days between cancellation and departure")
    fee_percent: int = Field(..., description="Fee percentage applied")
    fee: Decimal = Field(..., description="Fee retained")
    refund: Decimal = Field(..., description="Amount refunded")


class BookingDetails(BaseModel):
    """Booking with its payments and cancellation record."""

    booking: Booking
    payments: list[Payment] = Field(default_factory=list)
    cancellation: Optional[Cancellation] = None
