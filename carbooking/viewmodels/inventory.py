from __future__ import annotations

from typing import List, Optional

from carbooking.inventory.enums import SortOption
from carbooking.inventory.models import Car, CarFilters
from carbooking.inventory.repository import InventoryRepository
from carbooking.inventory.schemas import CarCreate, CarUpdate
from carbooking.viewmodels.base import ViewModel, tracks_state


class InventoryViewModel(ViewModel):
    def __init__(self, repository: InventoryRepository) -> None:
        super().__init__()
        self.repository = repository
        self.cars: List[Car] = []
        self.filters = CarFilters()
        self.sort_option: Optional[SortOption] = None

    def set_filters(self, filters: CarFilters) -> None:
        self.filters = filters

    def set_sort_option(self, sort: Optional[SortOption]) -> None:
        self.sort_option = sort

    @tracks_state("Failed to fetch cars")
    async def fetch_cars(self) -> List[Car]:
        self.cars = await self.repository.list()
        return self.cars

    @tracks_state("Failed to search cars")
    async def search_cars(self) -> List[Car]:
        self.cars = await self.repository.search(self.filters, self.sort_option)
        return self.cars

    @tracks_state("Failed to fetch car")
    async def get_car(self, car_id: str) -> Optional[Car]:
        return await self.repository.get_by_id(car_id)

    async def refresh_cars(self) -> List[Car]:
        return await self.search_cars()

    @tracks_state("Failed to fetch popular cars")
    async def fetch_popular(self, limit: int = 6) -> List[Car]:
        return await self.repository.popular(limit)

    @tracks_state("Failed to fetch brands")
    async def fetch_brands(self) -> List[str]:
        return await self.repository.brands()

    # ---- Admin ----
    @tracks_state("Failed to save car")
    async def add_car(self, data: CarCreate) -> Car:
        car = await self.repository.create(data)
        self.cars = await self.repository.search(self.filters, self.sort_option)
        return car

    @tracks_state("Failed to save car")
    async def update_car(self, car_id: str, data: CarUpdate) -> Car:
        car = await self.repository.update(car_id, data)
        self.cars = await self.repository.search(self.filters, self.sort_option)
        return car

    @tracks_state("Failed to delete car")
    async def delete_car(self, car_id: str) -> None:
        await self.repository.delete(car_id)
        self.cars = await self.repository.search(self.filters, self.sort_option)
