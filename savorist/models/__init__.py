"""Data models for the Savorist system."""

from savorist.models.profile import Profile
from savorist.models.restaurant import Restaurant, RestaurantCreate
from savorist.models.review import Review, ReviewCreate

__all__ = ["Profile", "Restaurant", "RestaurantCreate", "Review", "ReviewCreate"]
