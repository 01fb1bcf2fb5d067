"""Enumeration types for Staybook data models."""

from enum import Enum


class ResourceKind(str, Enum):
    """Kinds of resource a request can target by identifier."""

    LISTING = "listing"
    REVIEW = "review"
    BOOKING = "booking"

    @property
    def label(self) -> str:
        """Human-readable name used in error messages."""
        return self.value.capitalize()


class ConflictReason(str, Enum):
    """Why a candidate booking was rejected."""

    START_CONFLICT = "startDate"
    END_CONFLICT = "endDate"
    PAST_DATE = "pastDate"
