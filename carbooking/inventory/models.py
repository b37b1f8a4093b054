from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from carbooking.inventory.enums import ALL, CarCategory, FuelType, Transmission


class Car(BaseModel):
    id: str
    name: str
    brand: str
    model: str
    year: int
    category: CarCategory
    transmission: Transmission
    fuel_type: FuelType
    seating_capacity: int
    color: str
    mileage: str
    price_per_day: float
    weekend_price: Optional[float] = None
    weekly_discount: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    description: str = ""
    location: str = ""
    is_available: bool = True
    rating: Optional[float] = None
    total_reviews: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @property
    def popularity(self) -> float:
        return (self.rating or 0) * (self.total_reviews or 0)


class CarFilters(BaseModel):
    search: str = ""
    category: str = ALL
    brand: str = ALL
    transmission: str = ALL
    fuel_type: str = ALL
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    seating_capacity: Optional[int] = None
