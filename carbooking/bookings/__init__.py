"""Rental requests and their lifecycle."""
