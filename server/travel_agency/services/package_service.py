"""Tour package service for catalogue operations."""

import logging
from datetime import date
from decimal import Decimal

from ..core.exceptions import NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..core.store import InMemoryStore
from ..models import ItineraryItem, TourPackage, to_money

logger = logging.getLogger(__name__)


class PackageNotFoundError(NotFoundError):
    """Exception when a tour package does not exist."""

    def __init__(self, package_id: int):
        super().__init__(resource_type="package", resource_id=str(package_id))
        self.problem_details.update({
            "code": "PACKAGE_NOT_FOUND",
            "retryable": False
        })


class PackageService:
    """Service for tour package operations."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def create_package(
        self,
        name: str,
        description: str,
        start_date: date,
        end_date: date,
        price: Decimal,
        total_seats: int,
    ) -> TourPackage:
        """
        Create a new tour package with all seats available.

        Raises:
            ValidationError: If dates are out of order, or price or seats are not positive
        """
        price = to_money(price)

        errors = {}
        if end_date < start_date:
            errors["end_date"] = "End date must be on or after start date"
        if price <= 0:
            errors["price"] = "Price per seat must be positive"
        if total_seats <= 0:
            errors["total_seats"] = "Total seats must be positive"

        if errors:
            logger.warning(
                "Package creation failed - invalid input",
                extra={"package_name": name, "errors": errors}
            )
            raise ValidationError(detail="Invalid tour package", errors=errors)

        package = TourPackage(
            id=self.store.packages.next_id(),
            name=name,
            description=description,
            start_date=start_date,
            end_date=end_date,
            price=price,
            total_seats=total_seats,
        )
        self.store.packages.add(package.id, package)
        metrics_collector.set_seats_available(package.id, package.available_seats)

        logger.info(
            "Package created successfully",
            extra={
                "package_id": package.id,
                "package_name": package.name,
                "start_date": package.start_date.isoformat(),
                "total_seats": package.total_seats
            }
        )

        return package

    def add_itinerary_item(self, package_id: int, day: int, title: str, details: str) -> ItineraryItem:
        """
        Append an itinerary item to a package.

        Day numbers are free-form: duplicates and out-of-order days are kept as given.

        Raises:
            PackageNotFoundError: If package not found
        """
        package = self.get_package_or_raise(package_id)

        item = ItineraryItem(
            id=self.store.itinerary_items.next_id(),
            package_id=package_id,
            day=day,
            title=title,
            details=details,
        )
        self.store.itinerary_items.add(item.id, item)
        package.add_itinerary_item(item)

        logger.info(
            "Itinerary item added",
            extra={"package_id": package_id, "item_id": item.id, "day": day}
        )

        return item

    def get_package(self, package_id: int) -> TourPackage | None:
        """Get package by ID."""
        return self.store.packages.get(package_id)

    def get_package_or_raise(self, package_id: int) -> TourPackage:
        """Get package by ID or raise PackageNotFoundError."""
        package = self.get_package(package_id)
        if not package:
            logger.warning(
                "Package not found",
                extra={"package_id": package_id}
            )
            raise PackageNotFoundError(package_id)
        return package

    def list_packages(self) -> list[TourPackage]:
        """All packages in creation order."""
        return self.store.packages.list_all()
