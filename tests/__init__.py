"""Tests for carbooking."""
