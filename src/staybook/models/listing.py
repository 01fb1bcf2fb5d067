"""Listing and review models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Listing(BaseModel):
    """A bookable place owned by one user."""

    model_config = ConfigDict(strict=True)

    listing_id: str = Field(..., description="Unique listing ID")
    owner_id: str = Field(..., description="User ID of the owner")
    name: str = Field(..., description="Listing title")
    city: str | None = Field(default=None, description="City")
    created_at: datetime = Field(..., description="Creation timestamp")


class Review(BaseModel):
    """A guest review of a listing."""

    model_config = ConfigDict(strict=True)

    review_id: str = Field(..., description="Unique review ID")
    listing_id: str = Field(..., description="Reviewed listing")
    user_id: str = Field(..., description="Author user ID")
    review: str = Field(..., description="Review text")
    stars: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    created_at: datetime = Field(..., description="Creation timestamp")
