"""Favorite restaurants kept in on-device storage."""

import asyncio
import json
import logging

from savorist.client.storage import KeyValueStore
from savorist.errors import CacheReadError, CacheWriteError

logger = logging.getLogger(__name__)

# Storage key; must stay stable across releases
FAVORITES_KEY = "savorist_favorites"


class FavoritesStore:
    """Set of favorite restaurant ids, stored as an insertion-ordered JSON array.

    Reads fail open (empty set) and write failures are logged and ignored.
    Every read-modify-write holds ``_lock`` so concurrent add/remove/toggle
    calls cannot overwrite each other's result.
    """

    def __init__(self, storage: KeyValueStore) -> None:
        self.storage = storage
        self._lock = asyncio.Lock()

    async def _read(self) -> list[str]:
        try:
            raw = await self.storage.get_item(FAVORITES_KEY)
        except CacheReadError as e:
            logger.warning(f"Failed to load favorites: {e}")
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored favorites are not valid JSON - ignoring")
            return []

        if not isinstance(data, list):
            logger.warning("Stored favorites are not a list - ignoring")
            return []

        ids: list[str] = []
        for item in data:
            if isinstance(item, str) and item not in ids:
                ids.append(item)
        return ids

    async def _write(self, ids: list[str]) -> None:
        try:
            await self.storage.set_item(FAVORITES_KEY, json.dumps(ids))
        except CacheWriteError:
            logger.error("Failed to save favorites", exc_info=True)

    async def _add(self, restaurant_id: str) -> None:
        ids = await self._read()
        if restaurant_id not in ids:
            ids.append(restaurant_id)
            await self._write(ids)

    async def _remove(self, restaurant_id: str) -> None:
        ids = await self._read()
        if restaurant_id in ids:
            await self._write([i for i in ids if i != restaurant_id])

    async def get_favorites(self) -> list[str]:
        """Return favorite ids in the order they were added."""
        return await self._read()

    async def is_favorite(self, restaurant_id: str) -> bool:
        return restaurant_id in await self._read()

    async def add_favorite(self, restaurant_id: str) -> None:
        async with self._lock:
            await self._add(restaurant_id)

    async def remove_favorite(self, restaurant_id: str) -> None:
        async with self._lock:
            await self._remove(restaurant_id)

    async def toggle_favorite(self, restaurant_id: str) -> bool:
        """Flip membership of a restaurant.

        Returns:
            True if the restaurant is a favorite afterwards, False otherwise
        """
        async with self._lock:
            if restaurant_id in await self._read():
                await self._remove(restaurant_id)
                logger.info(f"Removed favorite {restaurant_id}")
                return False

            await self._add(restaurant_id)
            logger.info(f"Added favorite {restaurant_id}")
            return True
