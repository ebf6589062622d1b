"""Customer-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["CreateCustomerRequest", "GetCustomerRequest", "Customer"]


class CreateCustomerRequest(BaseModel):
    """Request schema for registering a customer."""

    name: str = Field(..., min_length=1, max_length=255, description="Customer name")
    email: str = Field(..., min_length=1, max_length=255, description="Contact email")
    phone: str = Field(..., min_length=1, max_length=64, description="Contact phone number")


class GetCustomerRequest(BaseModel):
    """Request schema for reading a customer."""

    customer_id: int = Field(..., ge=1, description="Customer to retrieve")


class Customer(BaseModel):
    """Customer response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique customer ID")
    name: str = Field(..., description="Customer name")
    email: str = Field(..., description="Contact email")
    phone: str = Field(..., description="Contact phone number")
