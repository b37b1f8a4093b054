from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from carbooking.bookings.repository import BookingRepository
from carbooking.inventory.models import Car
from carbooking.inventory.repository import InventoryRepository
from carbooking.utils import as_utc, utcnow


class PopularCar(BaseModel):
    car: Car
    booking_count: int


class DashboardStats(BaseModel):
    total_cars: int
    total_bookings: int
    pending_approvals: int
    total_revenue: float
    this_month_bookings: int
    popular_cars: List[PopularCar]


async def dashboard_stats(
    inventory: InventoryRepository,
    bookings: BookingRepository,
    now: Optional[datetime] = None,
    top: int = 5,
) -> DashboardStats:
    """Numbers for the admin overview page."""
    now = as_utc(now) if now is not None else utcnow()
    cars = await inventory.list()
    all_bookings = await bookings.list()

    this_month = [
        b for b in all_bookings
        if (b.created_at.year, b.created_at.month) == (now.year, now.month)
    ]

    # deleted cars drop out of the ranking
    by_id = {car.id: car for car in cars}
    counts = Counter(b.car_id for b in all_bookings if b.car_id in by_id)
    popular = [
        PopularCar(car=by_id[car_id], booking_count=count)
        for car_id, count in counts.most_common(top)
    ]

    return DashboardStats(
        total_cars=len(cars),
        total_bookings=len(all_bookings),
        pending_approvals=await bookings.pending_count(),
        total_revenue=await bookings.total_revenue(),
        this_month_bookings=len(this_month),
        popular_cars=popular,
    )
