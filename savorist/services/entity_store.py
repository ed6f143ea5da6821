"""SQLite-backed persistence for restaurants and reviews."""

import logging
import sqlite3
import uuid
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from savorist.errors import ConstraintError, StoreError
from savorist.models import Restaurant, RestaurantCreate, Review, ReviewCreate

logger = logging.getLogger(__name__)

RESTAURANT_COLUMNS = (
    "id",
    "name",
    "cuisine_type",
    "description",
    "image_url",
    "rating",
    "review_count",
    "price_range",
    "address",
    "phone",
    "distance",
    "is_trending",
    "created_at",
)

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS restaurants (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        cuisine_type TEXT NOT NULL,
        description TEXT,
        image_url TEXT,
        rating REAL NOT NULL DEFAULT 4.0 CHECK (rating BETWEEN 0 AND 5),
        review_count INTEGER NOT NULL DEFAULT 0 CHECK (review_count >= 0),
        price_range TEXT DEFAULT '$$',
        address TEXT,
        phone TEXT,
        distance TEXT,
        is_trending INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS reviews (
        id TEXT PRIMARY KEY,
        restaurant_id TEXT NOT NULL,
        reviewer_name TEXT NOT NULL,
        rating INTEGER NOT NULL CHECK (rating BETWEEN 1 AND 5),
        comment TEXT,
        date TEXT,
        created_at TEXT NOT NULL,
        FOREIGN KEY (restaurant_id) REFERENCES restaurants(id)
    );

    CREATE INDEX IF NOT EXISTS idx_reviews_restaurant ON reviews (restaurant_id);
"""


@dataclass(frozen=True)
class Predicate:
    """A single SQL condition over the restaurants table."""

    clause: str
    params: tuple[Any, ...] = ()


def _check_column(column: str) -> None:
    if column not in RESTAURANT_COLUMNS:
        raise ValueError(f"Unknown restaurant column: {column}")


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def equals(column: str, value: Any) -> Predicate:
    """Exact, case-sensitive equality."""
    _check_column(column)
    return Predicate(f"{column} = ?", (value,))


def at_least(column: str, value: float) -> Predicate:
    """Numeric ``column >= value``."""
    _check_column(column)
    return Predicate(f"{column} >= ?", (float(value),))


def contains(column: str, text: str) -> Predicate:
    """Case-insensitive substring match."""
    _check_column(column)
    pattern = f"%{_escape_like(text.lower())}%"
    return Predicate(f"py_lower({column}) LIKE ? ESCAPE '\\'", (pattern,))


def any_of(*predicates: Predicate) -> Predicate:
    """OR-group of predicates."""
    if not predicates:
        raise ValueError("any_of() needs at least one predicate")
    clause = " OR ".join(p.clause for p in predicates)
    params = tuple(param for p in predicates for param in p.params)
    return Predicate(f"({clause})", params)


def _py_lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _restaurant_from_row(row: sqlite3.Row) -> Restaurant:
    try:
        return Restaurant.model_validate(dict(row))
    except ValidationError as e:
        raise StoreError(f"Corrupt restaurant row {row['id']}: {e}") from e


def _review_from_row(row: sqlite3.Row) -> Review:
    try:
        return Review.model_validate(dict(row))
    except ValidationError as e:
        raise StoreError(f"Corrupt review row {row['id']}: {e}") from e


class EntityStore:
    """Durable CRUD over the restaurant and review tables.

    A new connection is opened for every operation, so one instance can be
    shared by concurrent request handlers.
    """

    def __init__(self, database_path: str | Path) -> None:
        """Initialize the store.

        Args:
            database_path: SQLite database file (created on first use)
        """
        self.database_path = Path(database_path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.database_path)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database {self.database_path}: {e}") from e

        try:
            conn.execute("PRAGMA foreign_keys = ON")
            conn.row_factory = sqlite3.Row
            conn.create_function("py_lower", 1, _py_lower, deterministic=True)
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise ConstraintError(str(e)) from e
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(str(e)) from e
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Create the tables if they do not exist yet."""
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(_SCHEMA)
        logger.info(f"Entity store initialized at {self.database_path}")

    def insert_restaurant(self, fields: RestaurantCreate | dict) -> Restaurant:
        """Insert a restaurant and return the stored record.

        Args:
            fields: Restaurant attributes (id and createdAt are assigned here)

        Returns:
            The materialized Restaurant

        Raises:
            pydantic.ValidationError: If ``fields`` is a dict that does not validate
            ConstraintError: If the database rejects the row
        """
        if not isinstance(fields, RestaurantCreate):
            fields = RestaurantCreate.model_validate(fields)

        restaurant = Restaurant(
            id=str(uuid.uuid4()),
            created_at=_now(),
            **fields.model_dump(),
        )
        row = restaurant.model_dump(mode="json")
        row["is_trending"] = int(restaurant.is_trending)

        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO restaurants ({', '.join(RESTAURANT_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in RESTAURANT_COLUMNS)})",
                tuple(row[column] for column in RESTAURANT_COLUMNS),
            )

        logger.debug(f"Inserted restaurant {restaurant.id} ({restaurant.name})")
        return restaurant

    def insert_review(self, restaurant_id: str, fields: ReviewCreate | dict) -> Review:
        """Insert a review for a restaurant.

        Raises:
            pydantic.ValidationError: If ``fields`` is a dict that does not validate
            ConstraintError: If ``restaurant_id`` references no restaurant
        """
        if not isinstance(fields, ReviewCreate):
            fields = ReviewCreate.model_validate(fields)

        review = Review(
            id=str(uuid.uuid4()),
            restaurant_id=restaurant_id,
            created_at=_now(),
            **fields.model_dump(),
        )

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO reviews
                    (id, restaurant_id, reviewer_name, rating, comment, date, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    review.id,
                    review.restaurant_id,
                    review.reviewer_name,
                    review.rating,
                    review.comment,
                    review.date,
                    review.created_at.isoformat(),
                ),
            )

        logger.debug(f"Inserted review {review.id} for restaurant {restaurant_id}")
        return review

    def find_restaurants(
        self, predicates: Sequence[Predicate] = (), limit: int | None = None
    ) -> list[Restaurant]:
        """Select restaurants matching every predicate.

        Args:
            predicates: Conditions joined with AND; empty selects all rows
            limit: Optional maximum number of rows

        Returns:
            Matching restaurants in insertion order
        """
        sql = "SELECT * FROM restaurants"
        params: list[Any] = []
        if predicates:
            sql += " WHERE " + " AND ".join(p.clause for p in predicates)
            for p in predicates:
                params.extend(p.params)
        sql += " ORDER BY rowid"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        with self._connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [_restaurant_from_row(row) for row in rows]

    def get_all(self) -> list[Restaurant]:
        """Return every restaurant."""
        return self.find_restaurants()

    def get_by_id(self, restaurant_id: str) -> Restaurant | None:
        """Return a restaurant by id, or None if absent."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM restaurants WHERE id = ?", (restaurant_id,)
            ).fetchone()
        return _restaurant_from_row(row) if row else None

    def get_reviews_for(self, restaurant_id: str) -> list[Review]:
        """Return the reviews of a restaurant (empty if none or unknown id)."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM reviews WHERE restaurant_id = ? ORDER BY rowid",
                (restaurant_id,),
            ).fetchall()
        return [_review_from_row(row) for row in rows]

    def count_restaurants(self) -> int:
        """Return the number of stored restaurants."""
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM restaurants").fetchone()[0]
