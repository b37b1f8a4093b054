from datetime import datetime, timezone

from carbooking.bookings.schemas import BookingForm
from carbooking.identity.enums import UserRole
from carbooking.identity.models import AuthSession, User
from carbooking.inventory.schemas import CarCreate


def make_car(**overrides) -> CarCreate:
    data = {
        "name": "Test Sedan",
        "brand": "Toyota",
        "model": "Corolla",
        "year": 2022,
        "category": "sedan",
        "transmission": "automatic",
        "fuel_type": "petrol",
        "seating_capacity": 5,
        "color": "White",
        "mileage": "15 km/l",
        "price_per_day": 40,
        "images": ["https://example.com/corolla.jpg"],
        "features": ["Bluetooth"],
        "description": "Reliable compact sedan for everyday trips.",
        "location": "Downtown",
        "is_available": True,
    }
    data.update(overrides)
    return CarCreate(**data)


def make_form(**overrides) -> BookingForm:
    data = {
        "pickup_location": "Downtown",
        "dropoff_location": "Airport",
        "pickup_datetime": "2024-01-01T10:00",
        "return_datetime": "2024-01-03T10:00",
        "terms_accepted": True,
    }
    data.update(overrides)
    return BookingForm(**data)


def make_session(role: UserRole = UserRole.USER, user_id: str = "user-1") -> AuthSession:
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    user = User(
        id=user_id,
        name="Test Person",
        email=f"{user_id}@example.com",
        password="secret1",
        phone="+1-555-0000",
        role=role,
        created_at=now,
        updated_at=now,
    )
    return AuthSession.for_user(user, f"token_{user_id}_test")
