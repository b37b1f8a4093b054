from __future__ import annotations

from typing import List, Optional

from carbooking.bookings.enums import BookingStatus
from carbooking.bookings.models import Booking, BookingFilters
from carbooking.bookings.repository import BookingRepository
from carbooking.bookings.schemas import BookingForm
from carbooking.identity.models import AuthSession
from carbooking.utils import Unauthorized
from carbooking.viewmodels.base import ViewModel, tracks_state


def _require_actor(actor: Optional[AuthSession]) -> AuthSession:
    if actor is None:
        raise Unauthorized("User not authenticated")
    return actor


def _require_admin(actor: Optional[AuthSession]) -> AuthSession:
    if actor is None or not actor.is_admin:
        raise Unauthorized("Unauthorized")
    return actor


class BookingViewModel(ViewModel):
    """
    Booking list state for one client.

    The acting session is passed to every call. After a mutation the cached
    list is re-fetched: the user's own bookings after user actions, every
    booking after admin actions.
    """

    def __init__(self, repository: BookingRepository) -> None:
        super().__init__()
        self.repository = repository
        self.bookings: List[Booking] = []
        self.filters = BookingFilters()

    def set_filters(self, filters: BookingFilters) -> None:
        self.filters = filters

    async def _load_user_bookings(self, actor: AuthSession) -> List[Booking]:
        filtered = await self.repository.filter(self.filters)
        self.bookings = [b for b in filtered if b.user_id == actor.id]
        return self.bookings

    async def _load_all_bookings(self) -> List[Booking]:
        self.bookings = await self.repository.filter(self.filters)
        return self.bookings

    @tracks_state("Failed to fetch bookings")
    async def fetch_user_bookings(self, actor: Optional[AuthSession]) -> List[Booking]:
        if actor is None:
            return self.bookings
        return await self._load_user_bookings(actor)

    @tracks_state("Failed to fetch bookings")
    async def fetch_all_bookings(self) -> List[Booking]:
        return await self._load_all_bookings()

    async def refresh_bookings(self, actor: Optional[AuthSession]) -> List[Booking]:
        if actor is not None and actor.is_admin:
            return await self.fetch_all_bookings()
        return await self.fetch_user_bookings(actor)

    @tracks_state("Failed to create booking")
    async def create_booking(
        self,
        actor: Optional[AuthSession],
        car_id: str,
        form: BookingForm,
    ) -> Booking:
        actor = _require_actor(actor)
        booking = await self.repository.create(
            car_id,
            actor.id,
            actor.name,
            actor.email,
            actor.phone or "",
            form,
        )
        await self._load_user_bookings(actor)
        return booking

    @tracks_state("Failed to cancel booking")
    async def cancel_booking(self, actor: Optional[AuthSession], booking_id: str) -> Booking:
        actor = _require_actor(actor)
        booking = await self.repository.cancel(booking_id, actor.id)
        await self._load_user_bookings(actor)
        return booking

    @tracks_state("Failed to approve booking")
    async def approve_booking(self, actor: Optional[AuthSession], booking_id: str) -> Booking:
        actor = _require_admin(actor)
        booking = await self.repository.update_status(
            booking_id, BookingStatus.APPROVED, actor.id,
        )
        await self._load_all_bookings()
        return booking

    @tracks_state("Failed to reject booking")
    async def reject_booking(
        self,
        actor: Optional[AuthSession],
        booking_id: str,
        reason: str,
    ) -> Booking:
        actor = _require_admin(actor)
        booking = await self.repository.update_status(
            booking_id, BookingStatus.REJECTED, actor.id, reason,
        )
        await self._load_all_bookings()
        return booking
