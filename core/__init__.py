"""Lona workspace converter core."""

__version__ = "1.0.0"
