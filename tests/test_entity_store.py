"""Tests for the SQLite entity store and the seed catalog."""

import sqlite3

import pytest
from pydantic import ValidationError

from savorist.errors import ConstraintError, StoreError
from savorist.models import RestaurantCreate, ReviewCreate
from savorist.services import EntityStore, ensure_seed_data
from savorist.services.entity_store import any_of, at_least, contains, equals
from savorist.services.seed import SEED_RESTAURANTS, SEED_REVIEWS


class TestRestaurants:
    """Tests for restaurant persistence."""

    def test_insert_materializes_record(self, store):
        """Test that insert assigns id, timestamp and defaults."""
        restaurant = store.insert_restaurant(
            RestaurantCreate(name="Bella Vista Italian", cuisine_type="Italian")
        )

        assert restaurant.id
        assert restaurant.created_at is not None
        assert restaurant.rating == 4.0
        assert restaurant.review_count == 0
        assert restaurant.is_trending is False

    def test_get_by_id_round_trip(self, store):
        """Test that a stored restaurant reads back unchanged."""
        inserted = store.insert_restaurant(
            {
                "name": "Bella Vista Italian",
                "cuisineType": "Italian",
                "rating": "4.8",
                "isTrending": 1,
                "distance": "0.3 km",
            }
        )

        fetched = store.get_by_id(inserted.id)

        assert fetched == inserted
        assert fetched.rating == 4.8
        assert fetched.is_trending is True

    def test_ids_are_unique(self, store):
        """Test that every insert gets a fresh id."""
        fields = RestaurantCreate(name="Twin", cuisine_type="Thai")
        first = store.insert_restaurant(fields)
        second = store.insert_restaurant(fields)

        assert first.id != second.id
        assert len(store.get_all()) == 2

    def test_get_by_id_absent(self, store):
        """Test that an unknown id is a normal None result."""
        assert store.get_by_id("nonexistent") is None

    def test_invalid_fields_rejected(self, store):
        """Test that an invalid payload raises a validation error."""
        with pytest.raises(ValidationError):
            store.insert_restaurant({"name": "", "cuisineType": "Italian"})

        assert store.count_restaurants() == 0


class TestReviews:
    """Tests for review persistence."""

    def test_insert_and_list_reviews(self, store):
        """Test that reviews are returned for their restaurant only."""
        first = store.insert_restaurant(RestaurantCreate(name="A", cuisine_type="X"))
        second = store.insert_restaurant(RestaurantCreate(name="B", cuisine_type="Y"))

        review = store.insert_review(
            first.id, ReviewCreate(reviewer_name="Jessica Williams", rating=5)
        )

        assert store.get_reviews_for(first.id) == [review]
        assert store.get_reviews_for(second.id) == []

    def test_reviews_for_unknown_restaurant(self, store):
        """Test that an unknown restaurant has no reviews rather than an error."""
        assert store.get_reviews_for("nonexistent") == []

    def test_dangling_review_rejected(self, store):
        """Test that the foreign key rejects reviews of unknown restaurants."""
        with pytest.raises(ConstraintError):
            store.insert_review(
                "nonexistent", ReviewCreate(reviewer_name="Ruben Bator", rating=4)
            )


class TestPredicates:
    """Tests for predicate-based queries."""

    @pytest.fixture
    def catalog(self, store):
        store.insert_restaurant(
            RestaurantCreate(name="Sushi Zen", cuisine_type="Japanese", rating=4.6)
        )
        store.insert_restaurant(
            RestaurantCreate(name="100% Vegan", cuisine_type="Vegan", rating=3.9)
        )
        store.insert_restaurant(
            RestaurantCreate(name="Spice Garden", cuisine_type="Indian", rating=4.5)
        )
        return store

    def test_no_predicates_selects_all(self, catalog):
        assert len(catalog.find_restaurants()) == 3

    def test_predicates_are_anded(self, catalog):
        result = catalog.find_restaurants(
            [at_least("rating", 4.5), equals("cuisine_type", "Indian")]
        )
        assert [r.name for r in result] == ["Spice Garden"]

    def test_contains_is_case_insensitive(self, catalog):
        result = catalog.find_restaurants([contains("name", "SUSHI")])
        assert [r.name for r in result] == ["Sushi Zen"]

    def test_contains_escapes_wildcards(self, catalog):
        result = catalog.find_restaurants([contains("name", "%")])
        assert [r.name for r in result] == ["100% Vegan"]

    def test_any_of(self, catalog):
        result = catalog.find_restaurants(
            [any_of(contains("name", "garden"), contains("cuisine_type", "japan"))]
        )
        assert {r.name for r in result} == {"Sushi Zen", "Spice Garden"}

    def test_limit(self, catalog):
        assert len(catalog.find_restaurants(limit=2)) == 2

    def test_unknown_column_rejected(self):
        with pytest.raises(ValueError):
            equals("password", "x")


class TestStoreErrors:
    """Tests for storage failure reporting."""

    def test_unopenable_database(self, tmp_path):
        """Test that connection failures surface as StoreError."""
        store = EntityStore(tmp_path)  # a directory, not a database file

        with pytest.raises(StoreError):
            store.get_all()

    def test_corrupt_row(self, store):
        """Test that a row the model rejects surfaces as StoreError."""
        restaurant = store.insert_restaurant(
            RestaurantCreate(name="Sushi Zen", cuisine_type="Japanese")
        )
        conn = sqlite3.connect(store.database_path)
        try:
            conn.execute("UPDATE restaurants SET created_at = 'garbage'")
            conn.commit()
        finally:
            conn.close()

        with pytest.raises(StoreError):
            store.get_all()
        with pytest.raises(StoreError):
            store.get_by_id(restaurant.id)

    def test_missing_schema(self, tmp_path):
        """Test that queries against an uninitialized database raise StoreError."""
        store = EntityStore(tmp_path / "empty.db")

        with pytest.raises(StoreError):
            store.get_all()


class TestSeed:
    """Tests for the seed catalog."""

    def test_seed_empty_store(self, store):
        """Test that seeding fills the catalog and reviews."""
        inserted = ensure_seed_data(store)

        restaurants = store.get_all()
        assert inserted == len(SEED_RESTAURANTS) == 6
        assert len(restaurants) == 6
        for restaurant in restaurants:
            assert len(store.get_reviews_for(restaurant.id)) == len(SEED_REVIEWS)

    def test_seed_is_idempotent(self, seeded_store):
        """Test that a second seed call changes nothing."""
        assert ensure_seed_data(seeded_store) == 0
        assert seeded_store.count_restaurants() == 6

    def test_seed_skips_non_empty_store(self, store):
        """Test that any existing restaurant prevents seeding."""
        store.insert_restaurant(RestaurantCreate(name="Mine", cuisine_type="Greek"))

        assert ensure_seed_data(store) == 0
        assert [r.name for r in store.get_all()] == ["Mine"]
