from datetime import date, datetime
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, status

from carbooking.bookings.models import Booking, BookingFilters
from carbooking.bookings.repository import BookingRepository
from carbooking.bookings.schemas import BookingForm, RejectPayload
from carbooking.dashboard import DashboardStats, dashboard_stats
from carbooking.identity.models import AuthSession
from carbooking.identity.permissions import require_admin, require_user
from carbooking.inventory.enums import ALL
from carbooking.viewmodels import BookingViewModel
from carbooking.web.api.errors import translate_service_errors
from carbooking.web.dependencies import get_booking_repository, get_booking_vm

router = APIRouter()
admin_router = APIRouter()


# -----------------------
# Customer endpoints
# -----------------------
@router.post("", response_model=Booking, status_code=status.HTTP_201_CREATED)
@translate_service_errors
async def create_booking(
    car_id: str,
    payload: BookingForm,
    user: AuthSession = Depends(require_user),
    vm: BookingViewModel = Depends(get_booking_vm),
):
    """Request a car. The booking starts out pending."""
    return await vm.create_booking(user, car_id, payload)


@router.get("/mine", response_model=List[Booking])
@translate_service_errors
async def my_bookings(
    status_filter: str = ALL,
    user: AuthSession = Depends(require_user),
    vm: BookingViewModel = Depends(get_booking_vm),
):
    vm.set_filters(BookingFilters(status=status_filter))
    return await vm.fetch_user_bookings(user)


@router.post("/{booking_id}/cancel", response_model=Booking)
@translate_service_errors
async def cancel_booking(
    booking_id: str,
    user: AuthSession = Depends(require_user),
    vm: BookingViewModel = Depends(get_booking_vm),
):
    return await vm.cancel_booking(user, booking_id)


# -----------------------
# Admin endpoints
# -----------------------
@router.get("", response_model=List[Booking])
@translate_service_errors
async def list_bookings(
    status_filter: str = ALL,
    date_from: Optional[Union[date, datetime]] = None,
    date_to: Optional[Union[date, datetime]] = None,
    admin: AuthSession = Depends(require_admin),
    vm: BookingViewModel = Depends(get_booking_vm),
):
    """Every booking, newest first. Plain dates cover the whole day."""
    vm.set_filters(
        BookingFilters(status=status_filter, date_from=date_from, date_to=date_to)
    )
    return await vm.fetch_all_bookings()


@router.post("/{booking_id}/approve", response_model=Booking)
@translate_service_errors
async def approve_booking(
    booking_id: str,
    admin: AuthSession = Depends(require_admin),
    vm: BookingViewModel = Depends(get_booking_vm),
):
    return await vm.approve_booking(admin, booking_id)


@router.post("/{booking_id}/reject", response_model=Booking)
@translate_service_errors
async def reject_booking(
    booking_id: str,
    payload: RejectPayload,
    admin: AuthSession = Depends(require_admin),
    vm: BookingViewModel = Depends(get_booking_vm),
):
    return await vm.reject_booking(admin, booking_id, payload.reason)


@admin_router.get("/stats", response_model=DashboardStats)
@translate_service_errors
async def admin_stats(
    admin: AuthSession = Depends(require_admin),
    bookings: BookingRepository = Depends(get_booking_repository),
):
    return await dashboard_stats(bookings.inventory, bookings)
