from __future__ import annotations

from fastapi import Depends
from starlette.requests import Request

from carbooking.bookings.repository import BookingRepository
from carbooking.identity.repository import IdentityRepository
from carbooking.inventory.repository import InventoryRepository
from carbooking.storage.adapter import Storage
from carbooking.viewmodels import BookingViewModel, InventoryViewModel, SessionViewModel


def get_storage(request: Request) -> Storage:
    """Storage created at startup and kept on the application state."""
    return request.app.state.storage


def get_identity_repository(storage: Storage = Depends(get_storage)) -> IdentityRepository:
    return IdentityRepository(storage)


def get_inventory_repository(storage: Storage = Depends(get_storage)) -> InventoryRepository:
    return InventoryRepository(storage)


def get_booking_repository(
    storage: Storage = Depends(get_storage),
    inventory: InventoryRepository = Depends(get_inventory_repository),
) -> BookingRepository:
    return BookingRepository(storage, inventory)


def get_session_vm(
    repository: IdentityRepository = Depends(get_identity_repository),
) -> SessionViewModel:
    return SessionViewModel(repository)


def get_inventory_vm(
    repository: InventoryRepository = Depends(get_inventory_repository),
) -> InventoryViewModel:
    return InventoryViewModel(repository)


def get_booking_vm(
    repository: BookingRepository = Depends(get_booking_repository),
) -> BookingViewModel:
    return BookingViewModel(repository)
