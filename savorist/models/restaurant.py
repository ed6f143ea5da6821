"""Restaurant data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RestaurantFields(BaseModel):
    """Caller-supplied restaurant attributes.

    Attribute names are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Restaurant name")
    cuisine_type: str = Field(..., min_length=1, description="Type of cuisine")
    description: str | None = Field(None, description="Long description")
    image_url: str | None = Field(None, description="Cover image URI")
    rating: float = Field(default=4.0, ge=0.0, le=5.0, description="Average rating")
    review_count: int = Field(default=0, ge=0, description="Displayed review count")
    price_range: str | None = Field(default="$$", description="Price tier label")
    address: str | None = Field(None, description="Street address")
    phone: str | None = Field(None, description="Contact phone number")
    distance: str | None = Field(None, description="Display distance, e.g. '0.3 km'")
    is_trending: bool = Field(default=False, description="Shown in the trending view")

    @field_validator("rating")
    @classmethod
    def _one_decimal(cls, value: float) -> float:
        return round(value, 1)


class RestaurantCreate(RestaurantFields):
    """Fields accepted when inserting a restaurant."""


class Restaurant(RestaurantFields):
    """A stored restaurant."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique restaurant identifier")
    created_at: datetime = Field(..., description="When the record was created")
