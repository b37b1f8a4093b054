from datetime import datetime, timezone

import pytest

from carbooking.bookings.repository import BookingRepository
from carbooking.dashboard import dashboard_stats
from carbooking.fixtures import load_seed
from carbooking.inventory.repository import InventoryRepository
from carbooking.storage import Storage
from tests.factories import make_car, make_form


@pytest.mark.anyio
async def test_stats_for_seed_data(storage: Storage):
    seed = load_seed()
    inventory = InventoryRepository(storage, seed)
    bookings = BookingRepository(storage, inventory, seed)

    stats = await dashboard_stats(
        inventory, bookings, now=datetime(2024, 2, 25, tzinfo=timezone.utc)
    )

    assert stats.total_cars == 6
    assert stats.total_bookings == 3
    assert stats.pending_approvals == 1
    assert stats.total_revenue == 165 + 360
    assert stats.this_month_bookings == 2
    assert [p.car.id for p in stats.popular_cars] == ["car-001", "car-003", "car-006"]


@pytest.mark.anyio
async def test_popular_cars_ranked_by_booking_count(
    inventory: InventoryRepository,
    bookings: BookingRepository,
):
    quiet = await inventory.create(make_car(name="Quiet"))
    busy = await inventory.create(make_car(name="Busy"))
    gone = await inventory.create(make_car(name="Gone"))
    for car in (quiet, busy, busy, gone, gone, gone):
        await bookings.create(car.id, "user-1", "Test Person", "t@example.com", "", make_form())
    await inventory.delete(gone.id)

    stats = await dashboard_stats(inventory, bookings, top=1)

    assert stats.total_bookings == 6
    assert [(p.car.id, p.booking_count) for p in stats.popular_cars] == [(busy.id, 2)]


@pytest.mark.anyio
async def test_empty_dashboard(inventory: InventoryRepository, bookings: BookingRepository):
    stats = await dashboard_stats(inventory, bookings)

    assert stats.total_cars == 0
    assert stats.total_revenue == 0
    assert stats.popular_cars == []
