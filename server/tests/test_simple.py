"""Smoke tests for application wiring."""

from travel_agency.core.observability import get_logger


def test_get_logger_returns_usable_logger():
    """Loggers are handed out at import time and must log without error."""
    logger = get_logger("travel_agency.smoke")
    logger.info("smoke_event", component="tests")


def test_import_app():
    """Test that we can import the app module and build an app."""
    from travel_agency.main import create_app
    app = create_app()
    assert app is not None
    assert len(app.state.store.packages) == 0
    assert {"/v1/booking/pay", "/v1/package/create", "/metrics"} <= {route.path for route in app.routes}
