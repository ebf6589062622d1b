"""Customer service for the customer directory."""

import logging

from ..core.exceptions import NotFoundError
from ..core.store import InMemoryStore
from ..models import Customer

logger = logging.getLogger(__name__)


class CustomerNotFoundError(NotFoundError):
    """Exception when a customer does not exist."""

    def __init__(self, customer_id: int):
        super().__init__(resource_type="customer", resource_id=str(customer_id))
        self.problem_details.update({
            "code": "CUSTOMER_NOT_FOUND",
            "retryable": False
        })


class CustomerService:
    """Service for customer operations."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def create_customer(self, name: str, email: str, phone: str) -> Customer:
        """Register a new customer."""
        customer = Customer(
            id=self.store.customers.next_id(),
            name=name,
            email=email,
            phone=phone,
        )
        self.store.customers.add(customer.id, customer)

        logger.info(
            "Customer created successfully",
            extra={"customer_id": customer.id}
        )

        return customer

    def get_customer(self, customer_id: int) -> Customer | None:
        """Get customer by ID."""
        return self.store.customers.get(customer_id)

    def get_customer_or_raise(self, customer_id: int) -> Customer:
        """Get customer by ID or raise CustomerNotFoundError."""
        customer = self.get_customer(customer_id)
        if not customer:
            logger.warning(
                "Customer not found",
                extra={"customer_id": customer_id}
            )
            raise CustomerNotFoundError(customer_id)
        return customer

    def list_customers(self) -> list[Customer]:
        """All customers in registration order."""
        return self.store.customers.list_all()
