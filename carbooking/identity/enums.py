from enum import Enum


class UserRole(str, Enum):
    """Storefront roles"""
    ADMIN = "admin"  # Manages inventory and approves bookings
    USER = "user"  # Browses cars and requests bookings
