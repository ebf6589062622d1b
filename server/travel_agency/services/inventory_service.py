"""Inventory service for package seat counts."""

import logging
from contextlib import contextmanager
from typing import Iterator

from ..core.observability import metrics_collector
from ..core.store import InMemoryStore
from ..models import TourPackage
from .package_service import PackageService

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Service for reading and mutating available seat counts.

    No bounds are enforced here: callers check availability first, inside
    `locked_package`, and only then call `decrease_seats` / `increase_seats`.
    """

    def __init__(self, store: InMemoryStore):
        self.store = store
        self.package_service = PackageService(store)

    def available_seats(self, package_id: int) -> int:
        """Return the currently available seats of a package."""
        return self.package_service.get_package_or_raise(package_id).available_seats

    def decrease_seats(self, package_id: int, n: int) -> int:
        """Take `n` seats out of availability and return the new count."""
        package = self.package_service.get_package_or_raise(package_id)
        package.decrease_seats(n)
        self._log_change(package, -n)
        return package.available_seats

    def increase_seats(self, package_id: int, n: int) -> int:
        """Return `n` seats to availability and return the new count."""
        package = self.package_service.get_package_or_raise(package_id)
        package.increase_seats(n)
        self._log_change(package, n)
        return package.available_seats

    @contextmanager
    def locked_package(self, package_id: int) -> Iterator[TourPackage]:
        """
        Get a package with its seat lock held.

        Check-then-mutate sequences on a package's seats must run inside this
        block so concurrent callers cannot interleave between check and write.

        Raises:
            PackageNotFoundError: If package not found
        """
        package = self.package_service.get_package_or_raise(package_id)
        with self.store.package_lock(package_id):
            logger.debug(
                "Acquired seat lock for package",
                extra={"package_id": package_id}
            )
            yield package

    def _log_change(self, package: TourPackage, delta: int) -> None:
        metrics_collector.set_seats_available(package.id, package.available_seats)
        logger.info(
            "Package availability changed",
            extra={
                "package_id": package.id,
                "delta": delta,
                "capacity": f"{package.available_seats}/{package.total_seats}"
            }
        )
