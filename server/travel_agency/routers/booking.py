"""Booking router for booking lifecycle operations."""

import logging
from datetime import date

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.dependencies import StoreDependency
from ..core.store import InMemoryStore
from ..models import Traveler
from ..schemas.booking import (
    Booking,
    BookingDetails,
    CancelBookingRequest,
    Cancellation,
    CreateBookingRequest,
    GetBookingRequest,
    Payment,
    PaymentReceipt,
    RecordPaymentRequest,
)
from ..schemas.common import Problem
from ..services.booking_service import BookingService, PaymentResult

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/v1/booking",
    tags=["booking"],
    responses={
        400: {"model": Problem},
        404: {"model": Problem},
        409: {"model": Problem},
        422: {"model": Problem},
    },
)


def _convert_payment_result_to_schema(result: PaymentResult) -> PaymentReceipt:
    """Convert payment result to receipt schema."""
    return PaymentReceipt(
        payment=Payment.model_validate(result.payment),
        booking_status=result.status,
        outcome=result.outcome,
        advisory=result.is_advisory,
        remaining_due=result.remaining_due,
        message=result.message,
    )


@router.post("/create", response_model=Booking)
async def create_booking(
    request: CreateBookingRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """
    Create a PENDING booking.

    Seats are checked but not committed until the booking is fully paid.
    """
    travelers = [
        Traveler(name=traveler.name, age=traveler.age, passport=traveler.passport or None)
        for traveler in request.travelers
    ]
    booking = BookingService(store).create_booking(
        customer_id=request.customer_id,
        package_id=request.package_id,
        travelers=travelers,
    )

    return JSONResponse(
        status_code=200,
        content=Booking.model_validate(booking).model_dump(mode="json")
    )


@router.post("/pay", response_model=PaymentReceipt)
async def record_payment(
    request: RecordPaymentRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """
    Record a payment against a booking.

    A payment that completes the booking is always accepted. When no seats
    remain, the receipt is flagged as an advisory and the booking stays PENDING.
    """
    result = BookingService(store).record_payment(
        booking_id=request.booking_id,
        amount=request.amount,
        method=request.method,
    )

    if result.is_advisory:
        logger.warning(
            "Payment accepted with oversold advisory",
            extra={"booking_id": request.booking_id, "payment_id": result.payment.id}
        )

    return JSONResponse(
        status_code=200,
        content=_convert_payment_result_to_schema(result).model_dump(mode="json")
    )


@router.post("/cancel", response_model=Cancellation)
async def cancel_booking(
    request: CancelBookingRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """Cancel a booking; the fee depends on days left before departure."""
    cancellation = BookingService(store).cancel_booking(
        booking_id=request.booking_id,
        now=request.cancel_date or date.today(),
    )

    return JSONResponse(
        status_code=200,
        content=Cancellation.model_validate(cancellation).model_dump(mode="json")
    )


@router.post("/get", response_model=BookingDetails)
async def get_booking(
    request: GetBookingRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """Get booking details with payments and cancellation record."""
    booking_service = BookingService(store)
    booking = booking_service.get_booking_or_raise(request.booking_id)
    cancellation = booking_service.get_cancellation(request.booking_id)

    response_data = BookingDetails(
        booking=Booking.model_validate(booking),
        payments=[Payment.model_validate(p) for p in booking_service.get_payments(request.booking_id)],
        cancellation=Cancellation.model_validate(cancellation) if cancellation else None,
    )

    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
