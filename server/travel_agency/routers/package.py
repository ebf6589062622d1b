"""Package router for tour catalogue operations."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.dependencies import StoreDependency
from ..core.store import InMemoryStore
from ..models import TourPackage
from ..schemas.common import Problem
from ..schemas.package import (
    AddItineraryItemRequest,
    CreatePackageRequest,
    GetPackageRequest,
    ItineraryItem,
    ListPackagesRequest,
    ListPackagesResponse,
    Package,
)
from ..services.package_service import PackageService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/v1/package",
    tags=["package"],
    responses={400: {"model": Problem}, 404: {"model": Problem}, 422: {"model": Problem}},
)


def _convert_package_to_schema(package: TourPackage) -> Package:
    """Convert package entity to schema."""
    return Package(
        id=package.id,
        name=package.name,
        description=package.description,
        start_date=package.start_date,
        end_date=package.end_date,
        price=package.price,
        total_seats=package.total_seats,
        available_seats=package.available_seats,
        itinerary=[ItineraryItem.model_validate(item) for item in package.itinerary],
        summary=str(package),
    )


@router.post("/create", response_model=Package)
async def create_package(
    request: CreatePackageRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """Create a new tour package with all seats available."""
    package = PackageService(store).create_package(
        name=request.name,
        description=request.description,
        start_date=request.start_date,
        end_date=request.end_date,
        price=request.price,
        total_seats=request.total_seats,
    )

    return JSONResponse(
        status_code=200,
        content=_convert_package_to_schema(package).model_dump(mode="json")
    )


@router.post("/itinerary/add", response_model=ItineraryItem)
async def add_itinerary_item(
    request: AddItineraryItemRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """Append an itinerary item to a package."""
    item = PackageService(store).add_itinerary_item(
        package_id=request.package_id,
        day=request.day,
        title=request.title,
        details=request.details,
    )

    return JSONResponse(
        status_code=200,
        content=ItineraryItem.model_validate(item).model_dump(mode="json")
    )


@router.post("/get", response_model=Package)
async def get_package(
    request: GetPackageRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """Get package details, itinerary and availability."""
    package = PackageService(store).get_package_or_raise(request.package_id)

    return JSONResponse(
        status_code=200,
        content=_convert_package_to_schema(package).model_dump(mode="json")
    )


@router.post("/list", response_model=ListPackagesResponse)
async def list_packages(
    request: ListPackagesRequest,
    store: InMemoryStore = StoreDependency
) -> JSONResponse:
    """List all packages with their current availability."""
    packages = PackageService(store).list_packages()
    if request.available_only:
        packages = [package for package in packages if package.available_seats > 0]

    logger.debug(
        "Package listing requested",
        extra={"count": len(packages), "available_only": request.available_only}
    )

    response_data = ListPackagesResponse(
        items=[_convert_package_to_schema(package) for package in packages]
    )
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
