"""On-device user profile model."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_DISPLAY_NAME = "Guest"


class Profile(BaseModel):
    """User profile kept in local storage."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    display_name: str = Field(default=DEFAULT_DISPLAY_NAME, description="Shown name")
    notifications_enabled: bool = Field(
        default=True, description="Whether push notifications are wanted"
    )
