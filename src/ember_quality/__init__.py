"""Ember Score calculation and math question validation."""

__version__ = "0.1.0"
