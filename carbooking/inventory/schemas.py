from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from carbooking.inventory.enums import CarCategory, FuelType, Transmission


def _check_year(value: Optional[int]) -> Optional[int]:
    if value is not None and not 1900 <= value <= date.today().year + 2:
        raise ValueError(f"Year must be between 1900 and {date.today().year + 2}")
    return value


class CarCreate(BaseModel):
    name: str = Field(..., min_length=3)
    brand: str = Field(..., min_length=2)
    model: str = Field(..., min_length=1)
    year: int
    category: CarCategory
    transmission: Transmission
    fuel_type: FuelType
    seating_capacity: int = Field(..., ge=2, le=9)
    color: str = Field(..., min_length=2)
    mileage: str = Field(..., min_length=1)
    price_per_day: float = Field(..., ge=1)
    weekend_price: Optional[float] = Field(None, ge=0)
    weekly_discount: Optional[float] = Field(None, ge=0, le=100)
    images: List[str] = Field(..., min_length=1)
    features: List[str] = Field(default_factory=list)
    description: str = Field(..., min_length=10)
    location: str = Field(..., min_length=3)
    is_available: bool = True
    rating: Optional[float] = Field(None, ge=0, le=5)
    total_reviews: Optional[int] = Field(None, ge=0)

    @field_validator("year")
    @classmethod
    def year_in_range(cls, value: Optional[int]) -> Optional[int]:
        return _check_year(value)


class CarUpdate(BaseModel):
    """Partial update; only the fields that were sent are merged."""

    name: Optional[str] = Field(None, min_length=3)
    brand: Optional[str] = Field(None, min_length=2)
    model: Optional[str] = Field(None, min_length=1)
    year: Optional[int] = None
    category: Optional[CarCategory] = None
    transmission: Optional[Transmission] = None
    fuel_type: Optional[FuelType] = None
    seating_capacity: Optional[int] = Field(None, ge=2, le=9)
    color: Optional[str] = Field(None, min_length=2)
    mileage: Optional[str] = Field(None, min_length=1)
    price_per_day: Optional[float] = Field(None, ge=1)
    weekend_price: Optional[float] = Field(None, ge=0)
    weekly_discount: Optional[float] = Field(None, ge=0, le=100)
    images: Optional[List[str]] = None
    features: Optional[List[str]] = None
    description: Optional[str] = Field(None, min_length=10)
    location: Optional[str] = Field(None, min_length=3)
    is_available: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    total_reviews: Optional[int] = Field(None, ge=0)

    @field_validator("year")
    @classmethod
    def year_in_range(cls, value: Optional[int]) -> Optional[int]:
        return _check_year(value)
