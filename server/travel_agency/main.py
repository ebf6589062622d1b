"""FastAPI application initialization and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.exceptions import (
    ProblemDetailsException,
    generic_exception_handler,
    problem_details_handler,
    request_validation_handler,
)
from .core.middleware import setup_middleware
from .core.observability import instrument_fastapi, setup_structured_logging, setup_tracing
from .core.store import InMemoryStore
from .routers import booking, customer, health, metrics, package

# Configure structured logging
setup_structured_logging()

# Configure traditional logging for compatibility
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown events for the FastAPI application.
    """
    logger.info("Starting travel agency booking service")
    logger.info(f"Environment: {settings.environment}")

    setup_tracing(settings.service_name)
    logger.info("Tracing setup completed")

    yield

    logger.info(
        "Shutting down travel agency booking service",
        extra={
            "packages": len(app.state.store.packages),
            "bookings": len(app.state.store.bookings),
        }
    )


def create_app(store: Optional[InMemoryStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: State container to serve; a fresh empty store when omitted

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Travel Agency Booking API",
        description="RPC-over-HTTP API for tour packages, bookings, payments and cancellations",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.store = store if store is not None else InMemoryStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_middleware(app, enable_logging=True)

    instrument_fastapi(app)

    # Register exception handlers
    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get(
        "/health",
        status_code=status.HTTP_200_OK,
        tags=["Health"],
        summary="Health Check",
        description="Check if the service is healthy and responsive",
        response_model=dict,
    )
    async def health_check():
        """Health check endpoint that returns service status."""
        return {
            "status": "healthy",
            "service": settings.service_name,
            "version": "1.0.0",
            "environment": settings.environment,
            "debug": settings.debug,
        }

    @app.get(
        "/ready",
        status_code=status.HTTP_200_OK,
        tags=["Health"],
        summary="Readiness Check",
        description="Check if the service is ready to accept requests",
        response_model=dict,
    )
    async def readiness_check(request: Request):
        """Readiness check endpoint reporting the in-memory store."""
        store: InMemoryStore = request.app.state.store
        return {
            "status": "ready",
            "service": settings.service_name,
            "checks": {
                "store": "ok",
            },
            "counts": {
                "packages": len(store.packages),
                "customers": len(store.customers),
                "bookings": len(store.bookings),
            },
        }

    @app.get(
        "/info",
        status_code=status.HTTP_200_OK,
        tags=["Info"],
        summary="Service Information",
        description="Get detailed information about the service",
        response_model=dict,
    )
    async def service_info():
        """Service information endpoint."""
        return {
            "service": settings.service_name,
            "version": "1.0.0",
            "description": "Tour package inventory and booking lifecycle service",
            "environment": settings.environment,
            "debug": settings.debug,
            "features": {
                "tracing": bool(settings.otlp_endpoint),
                "metrics": True,
                "problem_details": True,
            },
            "endpoints": {
                "health": "/health",
                "readiness": "/ready",
                "info": "/info",
                "metrics": "/metrics",
                "docs": "/docs" if settings.debug else None,
            },
        }

    # Register API routers
    app.include_router(health.router)
    app.include_router(package.router)
    app.include_router(customer.router)
    app.include_router(booking.router)
    app.include_router(metrics.router)

    logger.info("FastAPI application created and configured")

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "travel_agency.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
