"""carbooking package."""
