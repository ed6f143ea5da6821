"""Review data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReviewFields(BaseModel):
    """Caller-supplied review attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reviewer_name: str = Field(..., min_length=1, description="Name of the reviewer")
    rating: int = Field(..., ge=1, le=5, strict=True, description="Star rating")
    comment: str | None = Field(None, description="Review text")
    date: str | None = Field(None, description="Display date, e.g. '15 Dec 2024'")


class ReviewCreate(ReviewFields):
    """Body of a review submission; the restaurant comes from the URL."""


class Review(ReviewFields):
    """A stored review."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique review identifier")
    restaurant_id: str = Field(..., description="Restaurant this review belongs to")
    created_at: datetime = Field(..., description="When the record was created")
