from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from carbooking.identity.models import AuthSession
from carbooking.identity.permissions import require_admin
from carbooking.inventory.enums import ALL, SortOption
from carbooking.inventory.models import Car, CarFilters
from carbooking.inventory.schemas import CarCreate, CarUpdate
from carbooking.viewmodels import InventoryViewModel
from carbooking.web.api.errors import translate_service_errors
from carbooking.web.dependencies import get_inventory_vm

router = APIRouter()


# -----------------------
# Browsing endpoints
# -----------------------
@router.get("", response_model=List[Car])
@translate_service_errors
async def search_cars(
    search: str = "",
    category: str = ALL,
    brand: str = ALL,
    transmission: str = ALL,
    fuel_type: str = ALL,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    seating_capacity: Optional[int] = None,
    sort: Optional[SortOption] = None,
    vm: InventoryViewModel = Depends(get_inventory_vm),
):
    """Search the catalog. ``all`` leaves a field unconstrained."""
    vm.set_filters(
        CarFilters(
            search=search,
            category=category,
            brand=brand,
            transmission=transmission,
            fuel_type=fuel_type,
            min_price=min_price,
            max_price=max_price,
            seating_capacity=seating_capacity,
        )
    )
    vm.set_sort_option(sort)
    return await vm.search_cars()


@router.get("/popular", response_model=List[Car])
@translate_service_errors
async def popular_cars(
    limit: int = 6,
    vm: InventoryViewModel = Depends(get_inventory_vm),
):
    return await vm.fetch_popular(limit)


@router.get("/brands", response_model=List[str])
@translate_service_errors
async def list_brands(vm: InventoryViewModel = Depends(get_inventory_vm)):
    return await vm.fetch_brands()


@router.get("/{car_id}", response_model=Car)
@translate_service_errors
async def get_car(
    car_id: str,
    vm: InventoryViewModel = Depends(get_inventory_vm),
):
    car = await vm.get_car(car_id)
    if car is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Car not found")
    return car


# -----------------------
# Admin endpoints
# -----------------------
@router.post("", response_model=Car, status_code=status.HTTP_201_CREATED)
@translate_service_errors
async def add_car(
    payload: CarCreate,
    admin: AuthSession = Depends(require_admin),
    vm: InventoryViewModel = Depends(get_inventory_vm),
):
    return await vm.add_car(payload)


@router.patch("/{car_id}", response_model=Car)
@translate_service_errors
async def update_car(
    car_id: str,
    payload: CarUpdate,
    admin: AuthSession = Depends(require_admin),
    vm: InventoryViewModel = Depends(get_inventory_vm),
):
    return await vm.update_car(car_id, payload)


@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
@translate_service_errors
async def delete_car(
    car_id: str,
    admin: AuthSession = Depends(require_admin),
    vm: InventoryViewModel = Depends(get_inventory_vm),
):
    """Delete a car. Existing bookings keep their snapshot of it."""
    await vm.delete_car(car_id)
