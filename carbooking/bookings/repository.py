from __future__ import annotations

from typing import List, Optional

from loguru import logger

from carbooking.bookings.enums import REVENUE_STATUSES, TRANSITIONS, BookingStatus
from carbooking.bookings.models import Booking, BookingFilters, CarSnapshot
from carbooking.bookings.schemas import BookingForm
from carbooking.fixtures import SeedData, default_seed
from carbooking.inventory.enums import ALL
from carbooking.inventory.repository import InventoryRepository
from carbooking.storage.adapter import Storage
from carbooking.storage.repository import CollectionRepository
from carbooking.utils import (
    CarNotFound,
    CarUnavailable,
    InvalidDateRange,
    InvalidState,
    NotFound,
    Unauthorized,
    _index_of,
    calculate_days,
    end_of_day,
    generate_id,
    start_of_day,
    utcnow,
)


class BookingRepository(CollectionRepository[Booking]):
    """
    Rental requests and their status machine.

    update_status: pending -> approved | rejected, approved -> completed.
    pending -> cancelled only through cancel, by the owner. Any other move
    raises InvalidState.
    """

    model = Booking

    def __init__(
        self,
        storage: Storage,
        inventory: InventoryRepository,
        seed: Optional[SeedData] = None,
    ) -> None:
        super().__init__(
            storage,
            storage.keys.bookings,
            lambda: (seed if seed is not None else default_seed()).bookings,
        )
        self.inventory = inventory

    async def list(self) -> List[Booking]:
        return await self._load()

    async def get_by_id(self, booking_id: str) -> Optional[Booking]:
        bookings = await self._load()
        return next((b for b in bookings if b.id == booking_id), None)

    async def list_for_user(self, user_id: str) -> List[Booking]:
        return [b for b in await self._load() if b.user_id == user_id]

    async def create(
        self,
        car_id: str,
        user_id: str,
        user_name: str,
        user_email: str,
        user_phone: str,
        form: BookingForm,
    ) -> Booking:
        """
        Create a pending booking.

        The car keeps its availability flag and overlapping bookings for the
        same car are not checked.
        """
        car = await self.inventory.get_by_id(car_id)
        if car is None:
            raise CarNotFound("Car not found")
        if not car.is_available:
            raise CarUnavailable("Car is not available")

        number_of_days = calculate_days(form.pickup_datetime, form.return_datetime)
        if number_of_days <= 0:
            raise InvalidDateRange("Return date must be after pickup date")

        now = utcnow()
        booking = Booking(
            id=generate_id("booking"),
            user_id=user_id,
            user_name=user_name,
            user_email=user_email,
            user_phone=user_phone,
            car_id=car_id,
            car_details=CarSnapshot(
                name=car.name,
                model=car.model,
                image=car.images[0] if car.images else None,
                price_per_day=car.price_per_day,
            ),
            pickup_location=form.pickup_location,
            dropoff_location=form.dropoff_location,
            pickup_datetime=form.pickup_datetime,
            return_datetime=form.return_datetime,
            number_of_days=number_of_days,
            total_cost=car.price_per_day * number_of_days,
            status=BookingStatus.PENDING,
            special_requests=form.special_requests,
            created_at=now,
            updated_at=now,
        )
        bookings = await self._load()
        bookings.append(booking)
        await self._save(bookings)
        logger.info(
            "Booking {} created for car {} by user {} ({} days)",
            booking.id,
            car_id,
            user_id,
            number_of_days,
        )
        return booking

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        actor_id: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> Booking:
        """
        Move a booking to ``status``.

        An empty rejection reason is stored as given.
        """
        bookings = await self._load()
        index = _index_of(bookings, booking_id)
        if index is None:
            raise NotFound("Booking not found")

        current = bookings[index]
        status = BookingStatus(status)
        if status not in TRANSITIONS.get(current.status, set()):
            raise InvalidState(
                f"Cannot move booking from {current.status.value} to {status.value}"
            )

        now = utcnow()
        patch: dict = {"status": status, "updated_at": now}
        if status == BookingStatus.APPROVED and actor_id:
            patch.update(approved_by=actor_id, approved_at=now)
        if status == BookingStatus.REJECTED and rejection_reason is not None:
            patch["rejection_reason"] = rejection_reason

        updated = current.model_copy(update=patch)
        bookings[index] = updated
        await self._save(bookings)
        logger.info(
            "Booking {} {} -> {} by {}",
            booking_id,
            current.status.value,
            status.value,
            actor_id,
        )
        return updated

    async def cancel(self, booking_id: str, user_id: str) -> Booking:
        """Owner-only cancel of a pending booking."""
        bookings = await self._load()
        index = _index_of(bookings, booking_id)
        if index is None:
            raise NotFound("Booking not found")

        booking = bookings[index]
        if booking.user_id != user_id:
            raise Unauthorized("Unauthorized to cancel this booking")
        if booking.status != BookingStatus.PENDING:
            raise InvalidState("Can only cancel pending bookings")

        cancelled = booking.model_copy(
            update={"status": BookingStatus.CANCELLED, "updated_at": utcnow()}
        )
        bookings[index] = cancelled
        await self._save(bookings)
        logger.info("Booking {} cancelled by user {}", booking_id, user_id)
        return cancelled

    async def filter(self, criteria: BookingFilters) -> List[Booking]:
        """Status and creation-date filter, newest first."""
        bookings = await self._load()

        if criteria.status and criteria.status != ALL:
            bookings = [b for b in bookings if b.status == criteria.status]
        if criteria.date_from is not None:
            lower = start_of_day(criteria.date_from)
            bookings = [b for b in bookings if b.created_at >= lower]
        if criteria.date_to is not None:
            upper = end_of_day(criteria.date_to)
            bookings = [b for b in bookings if b.created_at <= upper]

        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    async def pending_count(self) -> int:
        return sum(1 for b in await self._load() if b.status == BookingStatus.PENDING)

    async def total_revenue(self) -> float:
        return sum(
            b.total_cost for b in await self._load() if b.status in REVENUE_STATUSES
        )
