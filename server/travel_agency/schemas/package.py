"""Tour package Pydantic schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "CreatePackageRequest",
    "AddItineraryItemRequest",
    "GetPackageRequest",
    "ListPackagesRequest",
    "ItineraryItem",
    "Package",
    "ListPackagesResponse",
]


class CreatePackageRequest(BaseModel):
    """Request schema for creating a tour package."""

    name: str = Field(..., min_length=1, max_length=255, description="Package name")
    description: str = Field(..., min_length=1, max_length=2000, description="Package description")
    start_date: date = Field(..., description="First day of the tour (ISO 8601)")
    end_date: date = Field(..., description="Last day of the tour (ISO 8601)")
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Price per seat")
    total_seats: int = Field(..., ge=1, le=10000, description="Seat capacity")


class AddItineraryItemRequest(BaseModel):
    """Request schema for appending an itinerary item."""

    package_id: int = Field(..., ge=1, description="Package to extend")
    day: int = Field(..., description="Day number within the tour")
    title: str = Field(..., min_length=1, max_length=255, description="Item title")
    details: str = Field(..., min_length=1, max_length=2000, description="Item details")


class GetPackageRequest(BaseModel):
    """Request schema for reading a package."""

    package_id: int = Field(..., ge=1, description="Package to retrieve")


class ListPackagesRequest(BaseModel):
    """Request schema for listing packages."""

    available_only: bool = Field(False, description="Only show packages with free seats")


class ItineraryItem(BaseModel):
    """Itinerary item response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique itinerary item ID")
    package_id: int = Field(..., description="Owning package ID")
    day: int = Field(..., description="Day number within the tour")
    title: str = Field(..., description="Item title")
    details: str = Field(..., description="Item details")


class Package(BaseModel):
    """Tour package response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique package ID")
    name: str = Field(..., description="Package name")
    description: str = Field(..., description="Package description")
    start_date: date = Field(..., description="First day of the tour")
    end_date: date = Field(..., description="Last day of the tour")
    price: Decimal = Field(..., description="Price per seat")
    total_seats: int = Field(..., ge=1, description="Seat capacity")
    available_seats: int = Field(..., ge=0, description="Seats not yet committed to confirmed bookings")
    itinerary: list[ItineraryItem] = Field(default_factory=list, description="Itinerary in insertion order")
    summary: str = Field(..., description="One-line availability summary")


class ListPackagesResponse(BaseModel):
    """Response schema for listing packages."""

    items: list[Package] = Field(..., description="Packages in creation order")
