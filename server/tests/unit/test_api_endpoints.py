"""Integration tests for API endpoints."""

import pytest


async def _create_package(client, payload):
    response = await client.post("/v1/package/create", json=payload)
    assert response.status_code == 200
    return response.json()


async def _create_customer(client, payload):
    response = await client.post("/v1/customer/create", json=payload)
    assert response.status_code == 200
    return response.json()


async def _create_booking(client, customer_id, package_id, seats=2):
    travelers = [{"name": f"Traveler {i}", "age": 30 + i} for i in range(seats)]
    return await client.post(
        "/v1/booking/create",
        json={"customer_id": customer_id, "package_id": package_id, "travelers": travelers}
    )


@pytest.mark.asyncio
async def test_create_package_endpoint(test_client, sample_package_payload):
    """Test the package creation endpoint."""
    data = await _create_package(test_client, sample_package_payload)

    assert data["id"] == 1
    assert data["name"] == sample_package_payload["name"]
    assert data["price"] == "100.00"
    assert data["available_seats"] == 10
    assert data["summary"] == "ID:1 | Kerala Backwaters | 2099-01-10 to 2099-01-15 | Price: 100.00 | Seats: 10/10"


@pytest.mark.asyncio
async def test_create_package_invalid_data(test_client, sample_package_payload):
    """Test schema-level validation failures."""
    response = await test_client.post(
        "/v1/package/create",
        json={**sample_package_payload, "name": "", "total_seats": 0}
    )

    assert response.status_code == 422
    assert response.headers["content-type"].startswith("application/problem+json")
    data = response.json()
    assert data["status"] == 422
    assert {v["path"] for v in data["violations"]} == {"name", "total_seats"}


@pytest.mark.asyncio
async def test_create_package_end_before_start(test_client, sample_package_payload):
    """Test the business-rule date check."""
    response = await test_client.post(
        "/v1/package/create",
        json={**sample_package_payload, "end_date": "2099-01-01"}
    )

    assert response.status_code == 400
    data = response.json()
    assert "end_date" in data["errors"]
    assert data["instance"] == "/v1/package/create"


@pytest.mark.asyncio
async def test_itinerary_and_package_listing(test_client, sample_package_payload):
    """Test itinerary items show up in package reads and listings."""
    package = await _create_package(test_client, sample_package_payload)

    response = await test_client.post(
        "/v1/package/itinerary/add",
        json={"package_id": package["id"], "day": 1, "title": "Alleppey", "details": "Board the houseboat"}
    )
    assert response.status_code == 200

    response = await test_client.post("/v1/package/get", json={"package_id": package["id"]})
    assert response.status_code == 200
    assert response.json()["itinerary"][0]["title"] == "Alleppey"

    response = await test_client.post("/v1/package/list", json={})
    assert response.status_code == 200
    assert [p["id"] for p in response.json()["items"]] == [package["id"]]


@pytest.mark.asyncio
async def test_get_unknown_package(test_client):
    response = await test_client.post("/v1/package/get", json={"package_id": 404})

    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "PACKAGE_NOT_FOUND"
    assert data["resource_type"] == "package"


@pytest.mark.asyncio
async def test_customer_endpoints(test_client, sample_customer_payload):
    customer = await _create_customer(test_client, sample_customer_payload)

    response = await test_client.post("/v1/customer/get", json={"customer_id": customer["id"]})

    assert response.status_code == 200
    assert response.json() == customer


@pytest.mark.asyncio
async def test_booking_lifecycle(test_client, sample_package_payload, sample_customer_payload):
    """Test create, partial pay, full pay, read back and cancel over HTTP."""
    package = await _create_package(test_client, sample_package_payload)
    customer = await _create_customer(test_client, sample_customer_payload)

    response = await _create_booking(test_client, customer["id"], package["id"])
    assert response.status_code == 200
    booking = response.json()
    assert booking["status"] == "PENDING"
    assert booking["amount_due"] == "200.00"
    assert booking["num_seats"] == 2

    response = await test_client.post(
        "/v1/booking/pay", json={"booking_id": booking["id"], "amount": "50.00", "method": "UPI"}
    )
    assert response.status_code == 200
    receipt = response.json()
    assert receipt["outcome"] == "PARTIAL"
    assert receipt["remaining_due"] == "150.00"
    assert receipt["advisory"] is False

    response = await test_client.post(
        "/v1/booking/pay", json={"booking_id": booking["id"], "amount": 150, "method": "Card"}
    )
    receipt = response.json()
    assert receipt["outcome"] == "CONFIRMED"
    assert receipt["booking_status"] == "CONFIRMED"
    assert receipt["message"] == f"Booking {booking['id']} is CONFIRMED. Seats reserved: 2"

    response = await test_client.post("/v1/package/get", json={"package_id": package["id"]})
    assert response.json()["available_seats"] == 8

    response = await test_client.post(
        "/v1/booking/cancel", json={"booking_id": booking["id"], "cancel_date": "2099-01-05"}
    )
    assert response.status_code == 200
    cancellation = response.json()
    assert cancellation["days_before"] == 5
    assert cancellation["fee_percent"] == 75
    assert cancellation["fee"] == "150.00"
    assert cancellation["refund"] == "50.00"

    response = await test_client.post("/v1/booking/get", json={"booking_id": booking["id"]})
    details = response.json()
    assert details["booking"]["status"] == "CANCELLED"
    assert [p["amount"] for p in details["payments"]] == ["50.00", "150.00"]
    assert details["cancellation"]["id"] == cancellation["id"]

    response = await test_client.post("/v1/package/get", json={"package_id": package["id"]})
    assert response.json()["available_seats"] == 10


@pytest.mark.asyncio
async def test_oversold_payment_is_advisory(test_client, sample_package_payload, sample_customer_payload):
    package = await _create_package(test_client, {**sample_package_payload, "total_seats": 1})
    customer = await _create_customer(test_client, sample_customer_payload)
    first = (await _create_booking(test_client, customer["id"], package["id"], seats=1)).json()
    second = (await _create_booking(test_client, customer["id"], package["id"], seats=1)).json()

    await test_client.post("/v1/booking/pay", json={"booking_id": first["id"], "amount": 100, "method": "Card"})
    response = await test_client.post(
        "/v1/booking/pay", json={"booking_id": second["id"], "amount": 100, "method": "Card"}
    )

    assert response.status_code == 200
    receipt = response.json()
    assert receipt["outcome"] == "OVERSOLD"
    assert receipt["advisory"] is True
    assert receipt["booking_status"] == "PENDING"


@pytest.mark.asyncio
async def test_booking_insufficient_seats(test_client, sample_package_payload, sample_customer_payload):
    package = await _create_package(test_client, {**sample_package_payload, "total_seats": 1})
    customer = await _create_customer(test_client, sample_customer_payload)

    response = await _create_booking(test_client, customer["id"], package["id"], seats=2)

    assert response.status_code == 409
    data = response.json()
    assert data["code"] == "INSUFFICIENT_SEATS"
    assert data["conflicting_resource"]["available_seats"] == 1


@pytest.mark.asyncio
async def test_booking_without_travelers(test_client, sample_package_payload, sample_customer_payload):
    package = await _create_package(test_client, sample_package_payload)
    customer = await _create_customer(test_client, sample_customer_payload)

    response = await _create_booking(test_client, customer["id"], package["id"], seats=0)

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_SEAT_COUNT"


@pytest.mark.asyncio
async def test_booking_unknown_customer(test_client, sample_package_payload):
    package = await _create_package(test_client, sample_package_payload)

    response = await _create_booking(test_client, 77, package["id"])

    assert response.status_code == 404
    assert response.json()["code"] == "CUSTOMER_NOT_FOUND"


@pytest.mark.asyncio
async def test_payment_invalid_amount(test_client, sample_package_payload, sample_customer_payload):
    package = await _create_package(test_client, sample_package_payload)
    customer = await _create_customer(test_client, sample_customer_payload)
    booking = (await _create_booking(test_client, customer["id"], package["id"])).json()

    response = await test_client.post(
        "/v1/booking/pay", json={"booking_id": booking["id"], "amount": "-10.00", "method": "Cash"}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_AMOUNT"


@pytest.mark.asyncio
async def test_cancel_twice_conflicts(test_client, sample_package_payload, sample_customer_payload):
    package = await _create_package(test_client, sample_package_payload)
    customer = await _create_customer(test_client, sample_customer_payload)
    booking = (await _create_booking(test_client, customer["id"], package["id"])).json()

    first = await test_client.post("/v1/booking/cancel", json={"booking_id": booking["id"]})
    second = await test_client.post("/v1/booking/cancel", json={"booking_id": booking["id"]})

    assert first.status_code == 200
    assert first.json()["fee"] == "0.00"
    assert second.status_code == 409
    assert second.json()["code"] == "ALREADY_CANCELLED"


@pytest.mark.asyncio
async def test_get_unknown_booking(test_client):
    response = await test_client.post("/v1/booking/get", json={"booking_id": 9})

    assert response.status_code == 404
    assert response.json()["code"] == "BOOKING_NOT_FOUND"


@pytest.mark.asyncio
async def test_request_id_is_echoed(test_client):
    response = await test_client.post("/v1/health/ping", json={}, headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_metrics_endpoint(test_client):
    """Test the Prometheus metrics endpoint."""
    response = await test_client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text
