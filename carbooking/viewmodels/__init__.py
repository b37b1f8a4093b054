"""Presentation-facing state over the repositories."""

from carbooking.viewmodels.booking import BookingViewModel
from carbooking.viewmodels.inventory import InventoryViewModel
from carbooking.viewmodels.session import SessionViewModel

__all__ = ["BookingViewModel", "InventoryViewModel", "SessionViewModel"]
