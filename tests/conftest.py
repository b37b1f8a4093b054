import pytest

from carbooking.bookings.repository import BookingRepository
from carbooking.fixtures import SeedData
from carbooking.identity.repository import IdentityRepository
from carbooking.inventory.repository import InventoryRepository
from carbooking.storage import InMemoryStore, Storage


@pytest.fixture
def anyio_backend() -> str:
    """
    Backend for anyio pytest plugin.

    :return: backend name.
    """
    return "asyncio"


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def storage(store: InMemoryStore) -> Storage:
    return Storage(store)


@pytest.fixture
def empty_seed() -> SeedData:
    return SeedData()


@pytest.fixture
def identity(storage: Storage, empty_seed: SeedData) -> IdentityRepository:
    return IdentityRepository(storage, empty_seed)


@pytest.fixture
def inventory(storage: Storage, empty_seed: SeedData) -> InventoryRepository:
    return InventoryRepository(storage, empty_seed)


@pytest.fixture
def bookings(
    storage: Storage,
    inventory: InventoryRepository,
    empty_seed: SeedData,
) -> BookingRepository:
    return BookingRepository(storage, inventory, empty_seed)
