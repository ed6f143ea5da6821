"""Read views over the entity store: list, trending, nearby, search and filter."""

import logging
import math

from savorist.errors import InvalidFilterError
from savorist.models import Restaurant, Review, ReviewCreate
from savorist.services.entity_store import (
    EntityStore,
    Predicate,
    any_of,
    at_least,
    contains,
    equals,
)

logger = logging.getLogger(__name__)

# Cuisine value meaning "no cuisine filter"
ALL_CUISINES = "All"

DEFAULT_NEARBY_LIMIT = 10


def parse_min_rating(value: float | str | None) -> float | None:
    """Coerce a minimum-rating filter value.

    Args:
        value: A number, numeric text, or None

    Returns:
        The rating as a float, or None when the filter is absent

    Raises:
        InvalidFilterError: If the value is not a finite number
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            rating = float(value)
        except ValueError:
            raise InvalidFilterError("minRating", value) from None
    else:
        rating = float(value)

    if not math.isfinite(rating):
        raise InvalidFilterError("minRating", value)
    return rating


class QueryService:
    """Composes filter, search and canned views over an injected store."""

    def __init__(
        self, store: EntityStore, nearby_limit: int = DEFAULT_NEARBY_LIMIT
    ) -> None:
        """Initialize the query service.

        Args:
            store: Entity store to read from
            nearby_limit: Maximum size of the nearby view
        """
        self.store = store
        self.nearby_limit = nearby_limit

    def list_restaurants(self) -> list[Restaurant]:
        return self.store.get_all()

    def trending(self) -> list[Restaurant]:
        return self.store.find_restaurants([equals("is_trending", 1)])

    def nearby(self) -> list[Restaurant]:
        # No location data: the first N restaurants stand in for "nearby"
        return self.store.find_restaurants(limit=self.nearby_limit)

    def search(self, query: str | None) -> list[Restaurant]:
        """Case-insensitive substring search over name and cuisine type.

        An empty or whitespace-only query returns every restaurant.
        """
        text = (query or "").strip()
        if not text:
            return self.list_restaurants()

        logger.debug(f"Searching restaurants for '{text}'")
        return self.store.find_restaurants(
            [any_of(contains("name", text), contains("cuisine_type", text))]
        )

    def filter(
        self,
        cuisine_type: str | None = None,
        min_rating: float | str | None = None,
        price_range: str | None = None,
    ) -> list[Restaurant]:
        """AND-compose whichever filters are present.

        Args:
            cuisine_type: Exact cuisine; absent, empty or "All" means any
            min_rating: Inclusive lower bound on rating (number or numeric text)
            price_range: Exact price tier

        Returns:
            Matching restaurants; all restaurants when no filter is present

        Raises:
            InvalidFilterError: If min_rating cannot be coerced to a number
        """
        predicates: list[Predicate] = []

        if cuisine_type and cuisine_type != ALL_CUISINES:
            predicates.append(equals("cuisine_type", cuisine_type))

        rating = parse_min_rating(min_rating)
        if rating is not None:
            predicates.append(at_least("rating", rating))

        if price_range:
            predicates.append(equals("price_range", price_range))

        logger.debug(
            f"Filtering restaurants: cuisine={cuisine_type!r}, "
            f"min_rating={rating}, price={price_range!r}"
        )
        return self.store.find_restaurants(predicates)

    def get_restaurant(self, restaurant_id: str) -> Restaurant | None:
        return self.store.get_by_id(restaurant_id)

    def reviews_for(self, restaurant_id: str) -> list[Review]:
        return self.store.get_reviews_for(restaurant_id)

    def add_review(self, restaurant_id: str, review: ReviewCreate) -> Review | None:
        """Create a review for an existing restaurant.

        Args:
            restaurant_id: Restaurant being reviewed
            review: Review fields

        Returns:
            The stored Review, or None if the restaurant does not exist
        """
        if self.store.get_by_id(restaurant_id) is None:
            logger.warning(f"Review rejected: restaurant {restaurant_id} not found")
            return None

        created = self.store.insert_review(restaurant_id, review)
        logger.info(f"Review {created.id} added to restaurant {restaurant_id}")
        return created
