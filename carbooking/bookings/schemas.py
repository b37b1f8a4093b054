from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class BookingForm(BaseModel):
    pickup_location: str = Field(..., min_length=3)
    dropoff_location: str = Field(..., min_length=3)
    pickup_datetime: datetime
    return_datetime: datetime
    special_requests: Optional[str] = None
    terms_accepted: bool

    @field_validator("terms_accepted")
    @classmethod
    def must_accept_terms(cls, value: bool) -> bool:
        if not value:
            raise ValueError("You must accept the terms and conditions")
        return value


class RejectPayload(BaseModel):
    reason: str = ""
