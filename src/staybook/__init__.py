"""Staybook: identity, ownership and booking-conflict checks for reservations."""

__version__ = "0.1.0"
