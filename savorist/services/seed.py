"""Demo catalog inserted into an empty store."""

import logging

from savorist.models import RestaurantCreate, ReviewCreate
from savorist.services.entity_store import EntityStore

logger = logging.getLogger(__name__)

SEED_RESTAURANTS: list[RestaurantCreate] = [
    RestaurantCreate(
        name="Bella Vista Italian",
        cuisine_type="Italian",
        description=(
            "Experience authentic Italian cuisine in an elegant atmosphere. Our chefs "
            "use only the finest imported ingredients to create traditional dishes "
            "with a modern twist."
        ),
        image_url="https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=400",
        rating=4.8,
        review_count=234,
        price_range="$325",
        address="123 Main Street, Downtown",
        phone="+1 234 567 8900",
        distance="0.3 km",
        is_trending=True,
    ),
    RestaurantCreate(
        name="Sushi Zen",
        cuisine_type="Japanese",
        description=(
            "Premium sushi and sashimi prepared by master chefs. Fresh fish flown in "
            "daily from Tokyo's famous Tsukiji market."
        ),
        image_url="https://images.unsplash.com/photo-1579027989536-b7b1f875659b?w=400",
        rating=4.6,
        review_count=189,
        price_range="$250",
        address="456 Ocean Avenue",
        phone="+1 234 567 8901",
        distance="0.8 km",
        is_trending=True,
    ),
    RestaurantCreate(
        name="Spice Garden",
        cuisine_type="Indian",
        description=(
            "Authentic Indian flavors from across the subcontinent. From fiery "
            "vindaloos to creamy butter chicken, experience the diversity of Indian "
            "cuisine."
        ),
        image_url="https://images.unsplash.com/photo-1585937421612-70a008356fbe?w=400",
        rating=4.5,
        review_count=156,
        price_range="$180",
        address="789 Curry Lane",
        phone="+1 234 567 8902",
        distance="1.2 km",
        is_trending=False,
    ),
    RestaurantCreate(
        name="Al Amir",
        cuisine_type="Arabian",
        description=(
            "Traditional Middle Eastern cuisine with a royal touch. Savor our "
            "signature lamb dishes and freshly baked pita bread."
        ),
        image_url="https://images.unsplash.com/photo-1544025162-d76694265947?w=400",
        rating=4.7,
        review_count=198,
        price_range="$220",
        address="321 Oasis Boulevard",
        phone="+1 234 567 8903",
        distance="0.5 km",
        is_trending=True,
    ),
    RestaurantCreate(
        name="The American Grill",
        cuisine_type="American",
        description=(
            "Classic American comfort food at its finest. Juicy steaks, gourmet "
            "burgers, and the best apple pie in town."
        ),
        image_url="https://images.unsplash.com/photo-1555396273-367ea4eb4db5?w=400",
        rating=4.4,
        review_count=312,
        price_range="$150",
        address="555 Liberty Street",
        phone="+1 234 567 8904",
        distance="0.9 km",
        is_trending=False,
    ),
    RestaurantCreate(
        name="Le Petit Bistro",
        cuisine_type="French",
        description=(
            "Charming French bistro serving classic Parisian dishes. From coq au vin "
            "to crème brûlée, every dish tells a story."
        ),
        image_url="https://images.unsplash.com/photo-1550966871-3ed3cdb5ed0c?w=400",
        rating=4.9,
        review_count=267,
        price_range="$380",
        address="88 Rue de Paris",
        phone="+1 234 567 8905",
        distance="1.5 km",
        is_trending=True,
    ),
]

# Every seeded restaurant gets the same three reviews
SEED_REVIEWS: list[ReviewCreate] = [
    ReviewCreate(
        reviewer_name="Jessica Williams",
        rating=5,
        comment=(
            "Amazing place! The ambiance was perfect for our anniversary dinner. "
            "Highly recommend the truffle risotto."
        ),
        date="15 Dec 2024",
    ),
    ReviewCreate(
        reviewer_name="Ruben Bator",
        rating=4,
        comment=(
            "Great food and service. The tiramisu was exceptional. "
            "Will definitely come back."
        ),
        date="12 Nov 2024",
    ),
    ReviewCreate(
        reviewer_name="Maria Siphon",
        rating=5,
        comment=(
            "Best restaurant in town! Fresh ingredients, authentic flavors, "
            "and wonderful staff."
        ),
        date="14 Nov 2024",
    ),
]


def ensure_seed_data(store: EntityStore) -> int:
    """Insert the demo catalog if the store holds no restaurants.

    Args:
        store: Entity store to populate

    Returns:
        Number of restaurants inserted (0 when the store was not empty)
    """
    existing = store.count_restaurants()
    if existing > 0:
        logger.info(f"Store already holds {existing} restaurants - skipping seed")
        return 0

    for fields in SEED_RESTAURANTS:
        restaurant = store.insert_restaurant(fields)
        for review in SEED_REVIEWS:
            store.insert_review(restaurant.id, review)

    logger.info(
        f"Seeded {len(SEED_RESTAURANTS)} restaurants "
        f"with {len(SEED_REVIEWS)} reviews each"
    )
    return len(SEED_RESTAURANTS)
