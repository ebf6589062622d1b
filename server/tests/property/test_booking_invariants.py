"""Property-based tests for booking system invariants."""

from datetime import date, timedelta
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from travel_agency.core.exceptions import ProblemDetailsException
from travel_agency.core.store import InMemoryStore
from travel_agency.models import BookingStatus, Traveler
from travel_agency.services.booking_service import BookingService
from travel_agency.services.customer_service import CustomerService
from travel_agency.services.fee_schedule import fee_percent, split_refund
from travel_agency.services.package_service import PackageService

TODAY = date(2025, 6, 1)

# Strategies for generating test data
capacity_values = st.integers(min_value=1, max_value=8)
seat_counts = st.integers(min_value=1, max_value=4)
cent_amounts = st.integers(min_value=1, max_value=50000).map(lambda cents: Decimal(cents) / 100)
day_offsets = st.integers(min_value=-10, max_value=60)

operations = st.lists(
    st.one_of(
        st.tuples(st.just("book"), seat_counts),
        st.tuples(st.just("pay"), st.integers(min_value=0, max_value=30), cent_amounts),
        st.tuples(st.just("cancel"), st.integers(min_value=0, max_value=30), day_offsets),
    ),
    max_size=40,
)


def _build_world(capacity: int):
    store = InMemoryStore()
    package = PackageService(store).create_package(
        name="Property Tour",
        description="Generated",
        start_date=TODAY + timedelta(days=20),
        end_date=TODAY + timedelta(days=25),
        price=Decimal("100.00"),
        total_seats=capacity,
    )
    customer = CustomerService(store).create_customer("Prop", "prop@example.com", "000")
    return store, package, customer, BookingService(store, clock=lambda: TODAY)


@settings(max_examples=200, deadline=None)
@given(capacity=capacity_values, ops=operations)
def test_lifecycle_invariants(capacity, ops):
    """Seats, payments and statuses stay consistent under any operation sequence."""
    store, package, customer, service = _build_world(capacity)
    bookings = []

    for op in ops:
        before = {b.id: (b.status, b.paid_amount) for b in bookings}
        try:
            if op[0] == "book":
                travelers = [Traveler(f"T{i}", 20 + i) for i in range(op[1])]
                bookings.append(service.create_booking(customer.id, package.id, travelers))
            elif bookings and op[0] == "pay":
                service.record_payment(bookings[op[1] % len(bookings)].id, op[2], "Card")
            elif bookings and op[0] == "cancel":
                service.cancel_booking(bookings[op[1] % len(bookings)].id, TODAY + timedelta(days=op[2]))
        except ProblemDetailsException:
            pass

        committed = sum(b.num_seats for b in bookings if b.status == BookingStatus.CONFIRMED)
        assert 0 <= package.available_seats <= package.total_seats
        assert package.available_seats == package.total_seats - committed

        for booking in bookings:
            payments = service.get_payments(booking.id)
            assert booking.paid_amount == sum((p.amount for p in payments), Decimal("0.00"))
            if booking.status == BookingStatus.CONFIRMED:
                assert booking.is_fully_paid
            if booking.id in before:
                old_status, old_paid = before[booking.id]
                assert booking.paid_amount >= old_paid
                if old_status == BookingStatus.CANCELLED:
                    assert booking.status == BookingStatus.CANCELLED
                if old_status == BookingStatus.CONFIRMED:
                    assert booking.status != BookingStatus.PENDING

    for cancellation in store.cancellations:
        booking = store.bookings.get(cancellation.booking_id)
        assert booking.status == BookingStatus.CANCELLED
        assert cancellation.fee + cancellation.refund == booking.paid_amount


@given(days_before=st.integers(min_value=-1000, max_value=1000))
def test_fee_percent_is_monotonic(days_before):
    """Cancelling earlier never costs a higher percentage."""
    assert fee_percent(days_before + 1) <= fee_percent(days_before)
    assert fee_percent(days_before) in (10, 25, 50, 75)


@given(paid=cent_amounts, percent=st.sampled_from([10, 25, 50, 75]))
def test_fee_and_refund_add_up(paid, percent):
    """Fee plus refund is always the full paid amount."""
    fee, refund = split_refund(paid, percent)

    assert fee + refund == paid
    assert Decimal("0") <= fee <= paid
    assert fee == fee.quantize(Decimal("0.01"))
