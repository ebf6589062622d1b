"""Cancellation fee schedule keyed on days remaining before departure."""

from datetime import date
from decimal import Decimal

from ..models.money import to_money

# (minimum days before departure, fee percent), checked top-down
FEE_TIERS: tuple[tuple[int, int], ...] = (
    (30, 10),
    (15, 25),
    (7, 50),
)
LATE_CANCELLATION_FEE_PERCENT = 75


def days_between(start: date, end: date) -> int:
    """Whole days from `start` to `end`; negative when `end` is earlier."""
    return (end - start).days


def fee_percent(days_before: int) -> int:
    """Return the cancellation fee percentage for the given days before departure."""
    for minimum_days, percent in FEE_TIERS:
        if days_before >= minimum_days:
            return percent
    return LATE_CANCELLATION_FEE_PERCENT


def split_refund(paid_amount: Decimal, percent: int) -> tuple[Decimal, Decimal]:
    """
    Split a paid amount into (fee, refund).

    The fee is rounded to cents and the refund is the exact remainder, so the
    two always add back up to `paid_amount`.
    """
    fee = to_money(paid_amount * percent / 100)
    return fee, paid_amount - fee
