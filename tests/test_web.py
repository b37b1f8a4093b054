from typing import AsyncGenerator, Dict

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from carbooking.settings import StorageBackend, settings
from carbooking.storage import InMemoryStore, Storage
from carbooking.web.application import get_app
from carbooking.web.lifespan import _setup_storage

BOOKING = {
    "pickup_location": "Downtown",
    "dropoff_location": "Airport",
    "pickup_datetime": "2024-03-01T10:00:00",
    "return_datetime": "2024-03-04T10:00:00",
    "terms_accepted": True,
}


@pytest.fixture
def app() -> FastAPI:
    application = get_app()
    # lifespan does not run under ASGITransport
    application.state.storage = Storage(InMemoryStore())
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def _login(client: AsyncClient, email: str, password: str) -> Dict[str, str]:
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    response = await client.get("/api/health")
    assert response.status_code == 200


@pytest.mark.anyio
async def test_login_and_me(client: AsyncClient):
    headers = await _login(client, "admin@example.com", "admin123")

    response = await client.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "admin"
    assert "password" not in body


@pytest.mark.anyio
async def test_bad_credentials_are_401(client: AsyncClient):
    response = await client.post(
        "/api/auth/login", json={"email": "john@example.com", "password": "nope"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


@pytest.mark.anyio
async def test_anonymous_is_sent_to_login(client: AsyncClient):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.headers["location"] == "/login"


@pytest.mark.anyio
async def test_older_token_stops_working(client: AsyncClient):
    john = await _login(client, "john@example.com", "user123")
    await _login(client, "jane@example.com", "user123")

    response = await client.get("/api/auth/me", headers=john)

    assert response.status_code == 401


@pytest.mark.anyio
async def test_role_gates_redirect(client: AsyncClient):
    user = await _login(client, "john@example.com", "user123")
    on_admin_route = await client.get("/api/bookings", headers=user)
    assert on_admin_route.status_code == 403
    assert on_admin_route.headers["location"] == "/"

    admin = await _login(client, "admin@example.com", "admin123")
    on_user_route = await client.post(
        "/api/bookings", params={"car_id": "car-001"}, json=BOOKING, headers=admin
    )
    assert on_user_route.status_code == 403
    assert on_user_route.headers["location"] == "/admin"


@pytest.mark.anyio
async def test_car_search_and_lookup(client: AsyncClient):
    manual = await client.get("/api/cars", params={"transmission": "manual"})
    assert {c["id"] for c in manual.json()} == {"car-005", "car-006"}

    cheapest = await client.get("/api/cars", params={"sort": "price-asc"})
    assert cheapest.json()[0]["id"] == "car-005"

    missing = await client.get("/api/cars/car-missing")
    assert missing.status_code == 404


@pytest.mark.anyio
async def test_booking_flow(client: AsyncClient):
    user = await _login(client, "john@example.com", "user123")

    created = await client.post(
        "/api/bookings", params={"car_id": "car-001"}, json=BOOKING, headers=user
    )
    assert created.status_code == 201, created.text
    booking = created.json()
    assert booking["status"] == "pending"
    assert booking["number_of_days"] == 3
    assert booking["total_cost"] == 165

    mine = await client.get("/api/bookings/mine", headers=user)
    assert booking["id"] in {b["id"] for b in mine.json()}

    admin = await _login(client, "admin@example.com", "admin123")
    approved = await client.post(f"/api/bookings/{booking['id']}/approve", headers=admin)
    assert approved.status_code == 200
    assert approved.json()["approved_by"] == "user-admin-001"

    again = await client.post(f"/api/bookings/{booking['id']}/reject", json={}, headers=admin)
    assert again.status_code == 400


@pytest.mark.anyio
async def test_booking_errors_map_to_status_codes(client: AsyncClient):
    user = await _login(client, "john@example.com", "user123")

    unavailable = await client.post(
        "/api/bookings", params={"car_id": "car-004"}, json=BOOKING, headers=user
    )
    missing = await client.post(
        "/api/bookings", params={"car_id": "car-missing"}, json=BOOKING, headers=user
    )
    backwards = await client.post(
        "/api/bookings",
        params={"car_id": "car-001"},
        json={**BOOKING, "return_datetime": "2024-02-28T10:00:00"},
        headers=user,
    )
    no_terms = await client.post(
        "/api/bookings",
        params={"car_id": "car-001"},
        json={**BOOKING, "terms_accepted": False},
        headers=user,
    )

    assert unavailable.status_code == 409
    assert missing.status_code == 404
    assert backwards.status_code == 400
    assert backwards.json()["detail"] == "Return date must be after pickup date"
    assert no_terms.status_code == 422


@pytest.mark.anyio
async def test_admin_stats(client: AsyncClient):
    admin = await _login(client, "admin@example.com", "admin123")

    response = await client.get("/api/admin/stats", headers=admin)

    assert response.status_code == 200
    body = response.json()
    assert body["total_cars"] == 6
    assert body["pending_approvals"] == 1


@pytest.mark.anyio
async def test_null_for_required_car_field_is_400(client: AsyncClient):
    admin = await _login(client, "admin@example.com", "admin123")

    response = await client.patch(
        "/api/cars/car-001", json={"price_per_day": None}, headers=admin
    )

    assert response.status_code == 400
    assert "price_per_day" in response.json()["detail"]
    car = await client.get("/api/cars/car-001")
    assert car.json()["price_per_day"] == 55


@pytest.mark.anyio
async def test_reset_storage_clears_keys_on_startup(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "storage_backend", StorageBackend.SQL)
    monkeypatch.setattr(settings, "db_url", f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
    monkeypatch.setattr(settings, "reset_storage", False)
    app = FastAPI()

    await _setup_storage(app)
    key = app.state.storage.keys.auth_token
    await app.state.storage.set(key, "token_x")
    await app.state.db_engine.dispose()

    await _setup_storage(app)
    assert await app.state.storage.get(key, str) == "token_x"
    await app.state.db_engine.dispose()

    monkeypatch.setattr(settings, "reset_storage", True)
    await _setup_storage(app)
    try:
        assert await app.state.storage.get(key, str) is None
    finally:
        await app.state.db_engine.dispose()
