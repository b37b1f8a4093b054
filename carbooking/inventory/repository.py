from __future__ import annotations

from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from carbooking.fixtures import SeedData, default_seed
from carbooking.inventory.enums import ALL, SortOption
from carbooking.inventory.models import Car, CarFilters
from carbooking.inventory.schemas import CarCreate, CarUpdate
from carbooking.storage.adapter import Storage
from carbooking.storage.repository import CollectionRepository
from carbooking.utils import (
    InvalidCarData,
    NotFound,
    _find_or_404,
    _index_of,
    generate_id,
    utcnow,
)


def _matches(car: Car, filters: CarFilters) -> bool:
    if filters.search:
        needle = filters.search.lower()
        if not (
            needle in car.name.lower()
            or needle in car.brand.lower()
            or needle in car.model.lower()
        ):
            return False
    if filters.category and filters.category != ALL and car.category != filters.category:
        return False
    if filters.brand and filters.brand != ALL and car.brand != filters.brand:
        return False
    if (
        filters.transmission
        and filters.transmission != ALL
        and car.transmission != filters.transmission
    ):
        return False
    if filters.fuel_type and filters.fuel_type != ALL and car.fuel_type != filters.fuel_type:
        return False
    if filters.min_price is not None and car.price_per_day < filters.min_price:
        return False
    if filters.max_price is not None and car.price_per_day > filters.max_price:
        return False
    if filters.seating_capacity and car.seating_capacity < filters.seating_capacity:
        return False
    return True


def sort_cars(cars: List[Car], sort: Optional[SortOption]) -> List[Car]:
    if sort is None:
        return cars
    if sort == SortOption.PRICE_ASC:
        return sorted(cars, key=lambda c: c.price_per_day)
    if sort == SortOption.PRICE_DESC:
        return sorted(cars, key=lambda c: c.price_per_day, reverse=True)
    if sort == SortOption.RATING:
        return sorted(cars, key=lambda c: c.rating or 0, reverse=True)
    if sort == SortOption.NEWEST:
        return sorted(cars, key=lambda c: c.created_at, reverse=True)
    raise ValueError(f"Unknown sort option {sort!r}")


class InventoryRepository(CollectionRepository[Car]):
    model = Car

    def __init__(self, storage: Storage, seed: Optional[SeedData] = None) -> None:
        super().__init__(
            storage,
            storage.keys.cars,
            lambda: (seed if seed is not None else default_seed()).cars,
        )

    async def list(self) -> List[Car]:
        """All cars, in insertion order."""
        return await self._load()

    async def list_available(self) -> List[Car]:
        return [car for car in await self._load() if car.is_available]

    async def get_by_id(self, car_id: str) -> Optional[Car]:
        cars = await self._load()
        return next((car for car in cars if car.id == car_id), None)

    async def search(
        self,
        filters: CarFilters,
        sort: Optional[SortOption] = None,
    ) -> List[Car]:
        """
        Filter, then optionally sort.

        Sorting is stable, so cars that compare equal keep their stored order.
        """
        cars = [car for car in await self._load() if _matches(car, filters)]
        return sort_cars(cars, sort)

    async def brands(self) -> List[str]:
        return sorted({car.brand for car in await self._load()})

    async def popular(self, limit: int = 6) -> List[Car]:
        """Available cars ranked by rating x review count."""
        cars = await self.list_available()
        return sorted(cars, key=lambda c: c.popularity, reverse=True)[:limit]

    async def create(self, data: CarCreate) -> Car:
        cars = await self._load()
        now = utcnow()
        car = Car(
            **data.model_dump(),
            id=generate_id("car"),
            created_at=now,
            updated_at=now,
        )
        cars.append(car)
        await self._save(cars)
        logger.info("Added car {}", car.id)
        return car

    async def update(self, car_id: str, data: CarUpdate) -> Car:
        cars = await self._load()
        index = _index_of(cars, car_id)
        if index is None:
            raise NotFound("Car not found")

        patch = data.model_dump(exclude_unset=True)
        try:
            merged = Car.model_validate(
                {**cars[index].model_dump(), **patch, "updated_at": utcnow()}
            )
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
            raise InvalidCarData(f"Invalid value for: {', '.join(fields)}") from exc
        cars[index] = merged
        await self._save(cars)
        logger.info("Updated car {} fields={}", car_id, sorted(patch))
        return merged

    async def delete(self, car_id: str) -> None:
        """Remove the car. Bookings that reference it are left alone."""
        cars = await self._load()
        _find_or_404(cars, car_id, "Car not found")
        await self._save([car for car in cars if car.id != car_id])
        logger.info("Deleted car {}", car_id)
