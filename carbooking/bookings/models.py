from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from carbooking.bookings.enums import BookingStatus
from carbooking.inventory.enums import ALL


class CarSnapshot(BaseModel):
    """Car display fields copied at booking time."""

    name: str
    model: str
    image: Optional[str] = None
    price_per_day: float


class Booking(BaseModel):
    id: str
    user_id: str
    user_name: str
    user_email: str
    user_phone: str = ""
    car_id: str
    car_details: CarSnapshot
    pickup_location: str
    dropoff_location: str
    pickup_datetime: datetime
    return_datetime: datetime
    number_of_days: int
    total_cost: float
    status: BookingStatus = BookingStatus.PENDING
    special_requests: Optional[str] = None
    rejection_reason: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class BookingFilters(BaseModel):
    status: Union[BookingStatus, str] = ALL
    # Plain dates cover the whole day
    date_from: Optional[Union[datetime, date]] = None
    date_to: Optional[Union[datetime, date]] = None

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def parse_plain_date(cls, value):
        if isinstance(value, str) and len(value) == 10:
            return date.fromisoformat(value)
        return value
