"""carbooking API package."""
