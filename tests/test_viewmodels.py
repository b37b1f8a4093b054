from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from carbooking.bookings.enums import BookingStatus
from carbooking.bookings.models import BookingFilters
from carbooking.bookings.repository import BookingRepository
from carbooking.identity.enums import UserRole
from carbooking.identity.repository import IdentityRepository
from carbooking.identity.schemas import LoginForm, RegisterForm
from carbooking.inventory.enums import SortOption
from carbooking.inventory.models import CarFilters
from carbooking.inventory.repository import InventoryRepository
from carbooking.utils import DuplicateEmail, InvalidState, Unauthorized
from carbooking.viewmodels import BookingViewModel, InventoryViewModel, SessionViewModel
from tests.factories import make_car, make_form, make_session


def _register_form(email: str = "ann@example.com") -> RegisterForm:
    return RegisterForm(
        name="Ann Lee",
        email=email,
        password="secret1",
        confirm_password="secret1",
    )


@pytest.mark.anyio
async def test_session_vm_register_login_logout(identity: IdentityRepository):
    vm = SessionViewModel(identity)

    await vm.register(_register_form())
    assert vm.is_authenticated and vm.is_user and not vm.is_admin

    await vm.logout()
    assert vm.user is None
    assert await identity.get_current_session() is None

    session = await vm.login(LoginForm(email="ann@example.com", password="secret1"))
    assert vm.user == session
    assert vm.loading is False
    assert vm.error is None


@pytest.mark.anyio
async def test_session_vm_stores_error_and_reraises(identity: IdentityRepository):
    vm = SessionViewModel(identity)
    await vm.register(_register_form())

    with pytest.raises(DuplicateEmail):
        await vm.register(_register_form())

    assert vm.error == "Email already registered"
    assert vm.loading is False


@pytest.mark.anyio
async def test_session_vm_keeps_email_as_typed(identity: IdentityRepository):
    vm = SessionViewModel(identity)

    upper = await vm.register(_register_form("Ann@EXAMPLE.com"))
    lower = await vm.register(_register_form("Ann@example.com"))

    assert upper.email == "Ann@EXAMPLE.com"
    assert lower.email == "Ann@example.com"
    assert await identity.get_user_by_email("Ann@EXAMPLE.com") is not None

    await vm.logout()
    session = await vm.login(LoginForm(email="Ann@EXAMPLE.com", password="secret1"))
    assert session.id == upper.id


def test_forms_reject_malformed_email():
    with pytest.raises(ValidationError):
        LoginForm(email="not-an-email", password="secret1")
    with pytest.raises(ValidationError):
        _register_form("ann@")


@pytest.mark.anyio
async def test_session_vm_load_restores_stored_session(identity: IdentityRepository):
    created = await identity.register("Ann Lee", "ann@example.com", "secret1")
    vm = SessionViewModel(identity)

    assert await vm.load() == created
    assert vm.is_authenticated


@pytest.mark.anyio
async def test_unexpected_error_gets_generic_message():
    repository = AsyncMock(spec=InventoryRepository)
    repository.list.side_effect = RuntimeError("disk on fire")
    vm = InventoryViewModel(repository)

    with pytest.raises(RuntimeError):
        await vm.fetch_cars()

    assert vm.error == "Failed to fetch cars"
    assert vm.loading is False


@pytest.mark.anyio
async def test_loading_flag_is_set_during_call(inventory: InventoryRepository):
    vm = InventoryViewModel(inventory)
    seen = []
    original = inventory.list

    async def spying_list():
        seen.append(vm.loading)
        return await original()

    inventory.list = spying_list  # type: ignore[method-assign]
    vm.error = "stale"

    await vm.fetch_cars()

    assert seen == [True]
    assert vm.error is None
    assert vm.loading is False


@pytest.mark.anyio
async def test_inventory_vm_search_uses_filter_state(inventory: InventoryRepository):
    cheap = await inventory.create(make_car(price_per_day=30))
    pricey = await inventory.create(make_car(price_per_day=90))
    vm = InventoryViewModel(inventory)

    vm.set_filters(CarFilters(min_price=20))
    vm.set_sort_option(SortOption.PRICE_DESC)
    cars = await vm.search_cars()

    assert [c.id for c in cars] == [pricey.id, cheap.id]
    assert vm.cars == cars


@pytest.mark.anyio
async def test_inventory_vm_admin_changes_refresh_list(inventory: InventoryRepository):
    vm = InventoryViewModel(inventory)
    car = await vm.add_car(make_car())
    assert [c.id for c in vm.cars] == [car.id]

    await vm.delete_car(car.id)
    assert vm.cars == []


@pytest.mark.anyio
async def test_booking_vm_create_refetches_user_list(
    inventory: InventoryRepository,
    bookings: BookingRepository,
):
    car = await inventory.create(make_car())
    ann = make_session(user_id="user-ann")
    bob = make_session(user_id="user-bob")
    vm = BookingViewModel(bookings)

    await vm.create_booking(bob, car.id, make_form())
    booking = await vm.create_booking(ann, car.id, make_form())

    assert [b.id for b in vm.bookings] == [booking.id]
    assert booking.user_name == ann.name
    assert booking.user_phone == ann.phone


@pytest.mark.anyio
async def test_booking_vm_requires_actor(bookings: BookingRepository):
    vm = BookingViewModel(bookings)

    with pytest.raises(Unauthorized, match="User not authenticated"):
        await vm.create_booking(None, "car-1", make_form())
    assert vm.error == "User not authenticated"


@pytest.mark.anyio
async def test_booking_vm_admin_actions(
    inventory: InventoryRepository,
    bookings: BookingRepository,
):
    car = await inventory.create(make_car())
    user = make_session(user_id="user-ann")
    admin = make_session(role=UserRole.ADMIN, user_id="admin-1")
    vm = BookingViewModel(bookings)
    first = await vm.create_booking(user, car.id, make_form())
    second = await vm.create_booking(user, car.id, make_form())

    with pytest.raises(Unauthorized):
        await vm.approve_booking(user, first.id)

    approved = await vm.approve_booking(admin, first.id)
    assert approved.approved_by == "admin-1"
    assert {b.id for b in vm.bookings} == {first.id, second.id}

    rejected = await vm.reject_booking(admin, second.id, "Licence expired")
    assert rejected.rejection_reason == "Licence expired"

    with pytest.raises(InvalidState):
        await vm.cancel_booking(user, first.id)
    assert vm.error == "Can only cancel pending bookings"


@pytest.mark.anyio
async def test_booking_vm_refresh_depends_on_role(
    inventory: InventoryRepository,
    bookings: BookingRepository,
):
    car = await inventory.create(make_car())
    ann = make_session(user_id="user-ann")
    bob = make_session(user_id="user-bob")
    admin = make_session(role=UserRole.ADMIN, user_id="admin-1")
    await bookings.create(car.id, ann.id, ann.name, ann.email, "", make_form())
    await bookings.create(car.id, bob.id, bob.name, bob.email, "", make_form())
    vm = BookingViewModel(bookings)

    assert len(await vm.refresh_bookings(ann)) == 1
    assert len(await vm.refresh_bookings(admin)) == 2

    vm.set_filters(BookingFilters(status=BookingStatus.APPROVED))
    assert await vm.refresh_bookings(admin) == []
