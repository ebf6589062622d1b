"""Service layer package."""

from .booking_service import BookingService, PaymentOutcome, PaymentResult
from .customer_service import CustomerService
from .fee_schedule import fee_percent
from .inventory_service import InventoryService
from .package_service import PackageService

__all__ = [
    "BookingService",
    "CustomerService",
    "InventoryService",
    "PackageService",
    "PaymentOutcome",
    "PaymentResult",
    "fee_percent",
]
