"""Customer router for the customer directory."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.dependencies import StoreDependency
from ..core.store import InMemoryStore
from ..schemas.common import Problem
from ..schemas.customer import CreateCustomerRequest, Customer, GetCustomerRequest
from ..services.customer_service import CustomerService

router = APIRouter(
    prefix="/v1/customer",
    tags=["customer"],
    responses={404: {"model": Problem}, 422: {"model": Problem}},
)


@router.post("/create", response_model=Customer)
async def create_customer(
    request: CreateCustomerRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """Register a new customer."""
    customer = CustomerService(store).create_customer(
        name=request.name,
        email=request.email,
        phone=request.phone,
    )

    return JSONResponse(
        status_code=200,
        content=Customer.model_validate(customer).model_dump(mode="json")
    )


@router.post("/get", response_model=Customer)
async def get_customer(
    request: GetCustomerRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """Get customer details."""
    customer = CustomerService(store).get_customer_or_raise(request.customer_id)

    return JSONResponse(
        status_code=200,
        content=Customer.model_validate(customer).model_dump(mode="json")
    )
