"""Observability setup for OpenTelemetry, Prometheus metrics, and structured logging."""

import logging
from decimal import Decimal

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

from .config import settings

# Prometheus metrics
REGISTRY = CollectorRegistry()

# Request metrics
REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status_code'],
    registry=REGISTRY
)

# Business metrics
BOOKINGS_CREATED = Counter(
    'bookings_created_total',
    'Total bookings created in PENDING state',
    ['package_id'],
    registry=REGISTRY
)

PAYMENTS_RECORDED = Counter(
    'payments_recorded_total',
    'Total payments recorded against bookings',
    ['method'],
    registry=REGISTRY
)

PAYMENT_AMOUNT = Counter(
    'payments_amount_total',
    'Sum of all recorded payment amounts',
    registry=REGISTRY
)

BOOKINGS_CONFIRMED = Counter(
    'bookings_confirmed_total',
    'Total bookings confirmed on full payment',
    ['package_id'],
    registry=REGISTRY
)

OVERSOLD_ADVISORIES = Counter(
    'bookings_oversold_advisories_total',
    'Fully paid bookings that found no seats left to commit',
    ['package_id'],
    registry=REGISTRY
)

BOOKINGS_CANCELLED = Counter(
    'bookings_cancelled_total',
    'Total bookings cancelled',
    ['previous_status'],
    registry=REGISTRY
)

CANCELLATION_FEES = Counter(
    'cancellation_fees_total',
    'Sum of cancellation fees retained',
    registry=REGISTRY
)

SEATS_AVAILABLE = Gauge(
    'package_seats_available',
    'Currently available seats per tour package',
    ['package_id'],
    registry=REGISTRY
)


def setup_structured_logging():
    """Configure structured logging with structlog."""

    def add_trace_context(logger, method_name, event_dict):
        """Add trace context to log events."""
        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            event_dict['trace_id'] = format(ctx.trace_id, '032x')
            event_dict['span_id'] = format(ctx.span_id, '016x')
        return event_dict

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_tracing(app_name: str = settings.service_name):
    """Setup OpenTelemetry tracing."""
    resource = Resource.create({
        "service.name": app_name,
        "service.version": "1.0.0",
        "environment": settings.environment,
    })

    provider = TracerProvider(resource=resource)

    if settings.otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)

    return trace.get_tracer(__name__)


def instrument_fastapi(app):
    """Instrument FastAPI with OpenTelemetry."""
    FastAPIInstrumentor.instrument_app(app)


class MetricsCollector:
    """Collector for booking lifecycle metrics."""

    @staticmethod
    def record_request(method: str, path: str, status_code: int):
        """Record a completed HTTP request."""
        REQUEST_COUNT.labels(method=method, path=path, status_code=str(status_code)).inc()

    @staticmethod
    def record_booking_created(package_id: int):
        """Record a booking creation."""
        BOOKINGS_CREATED.labels(package_id=str(package_id)).inc()

    @staticmethod
    def record_payment(method: str, amount: Decimal):
        """Record a payment and its amount."""
        PAYMENTS_RECORDED.labels(method=method).inc()
        PAYMENT_AMOUNT.inc(float(amount))

    @staticmethod
    def record_booking_confirmed(package_id: int):
        """Record a booking confirmation."""
        BOOKINGS_CONFIRMED.labels(package_id=str(package_id)).inc()

    @staticmethod
    def record_oversold(package_id: int):
        """Record a fully paid booking that could not be confirmed."""
        OVERSOLD_ADVISORIES.labels(package_id=str(package_id)).inc()

    @staticmethod
    def record_booking_cancelled(previous_status: str, fee: Decimal):
        """Record a booking cancellation and the fee retained."""
        BOOKINGS_CANCELLED.labels(previous_status=previous_status).inc()
        CANCELLATION_FEES.inc(float(fee))

    @staticmethod
    def set_seats_available(package_id: int, seats: int):
        """Set the available seat count for a package."""
        SEATS_AVAILABLE.labels(package_id=str(package_id)).set(seats)


def get_prometheus_metrics():
    """Get Prometheus metrics for the /metrics endpoint."""
    return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()


def get_logger(name: str):
    """Get a lazily configured structlog logger carrying the given name."""
    return structlog.get_logger(name)
