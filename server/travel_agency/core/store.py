"""In-memory repositories and the per-application store that owns them."""

import itertools
import threading
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, Optional, TypeVar

from ..models import Booking, Cancellation, Customer, ItineraryItem, Payment, TourPackage

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    """
    Id-keyed entity map with its own monotonic id sequence.

    Ids start at 1 and are never reused; iteration follows insertion order.
    """

    def __init__(self, entity_name: str):
        self.entity_name = entity_name
        self._items: dict[int, T] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """Reserve the next id in the sequence."""
        with self._lock:
            return next(self._ids)

    def add(self, entity_id: int, entity: T) -> T:
        with self._lock:
            if entity_id in self._items:
                raise KeyError(f"{self.entity_name} {entity_id} already stored")
            self._items[entity_id] = entity
        return entity

    def get(self, entity_id: int) -> Optional[T]:
        return self._items.get(entity_id)

    def list_all(self) -> list[T]:
        return list(self._items.values())

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [item for item in self._items.values() if predicate(item)]

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.list_all())


class InMemoryStore:
    """
    Process-local state for one application instance.

    Holds one repository per entity kind plus the per-package locks that
    serialize seat-count mutations.
    """

    def __init__(self):
        self.packages: InMemoryRepository[TourPackage] = InMemoryRepository("package")
        self.itinerary_items: InMemoryRepository[ItineraryItem] = InMemoryRepository("itinerary item")
        self.customers: InMemoryRepository[Customer] = InMemoryRepository("customer")
        self.bookings: InMemoryRepository[Booking] = InMemoryRepository("booking")
        self.payments: InMemoryRepository[Payment] = InMemoryRepository("payment")
        self.cancellations: InMemoryRepository[Cancellation] = InMemoryRepository("cancellation")

        self._package_locks: dict[int, threading.Lock] = {}
        self._package_locks_guard = threading.Lock()

    @contextmanager
    def package_lock(self, package_id: int) -> Iterator[None]:
        """Hold the exclusive seat-mutation lock for a package."""
        with self._package_locks_guard:
            lock = self._package_locks.setdefault(package_id, threading.Lock())
        with lock:
            yield
