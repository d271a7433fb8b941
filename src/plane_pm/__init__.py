"""Plane PM - Plane issue management by display ticket ID."""

__version__ = "1.0.0"
