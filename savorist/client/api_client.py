"""Async HTTP client for the Savorist API."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from savorist.config import get_config
from savorist.errors import ApiError
from savorist.models import Restaurant, Review, ReviewCreate

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    if response.headers.get("content-type", "").startswith("application/json"):
        try:
            return response.json().get("error", response.text)
        except (ValueError, AttributeError):
            pass
    return response.text or response.reason_phrase


class SavoristClient:
    """Client for the restaurant endpoints.

    Failures raise ApiError once; nothing is retried.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root; defaults to the configured server URL
            timeout: Request timeout in seconds; defaults to the configured value
            transport: Optional httpx transport (e.g. ASGITransport in tests)
        """
        if base_url is None or timeout is None:
            config = get_config()
            base_url = base_url or config.server_url
            timeout = timeout or config.request_timeout

        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "SavoristClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        allow_not_found: bool = False,
    ) -> Any:
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.TimeoutException as e:
            logger.error(f"Request to {path} timed out")
            raise ApiError("Request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Cannot reach {self.base_url}: {e}")
            raise ApiError(f"Cannot connect to server at {self.base_url}") from e

        if allow_not_found and response.status_code == 404:
            return None

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"{method} {path} failed ({response.status_code}): {message}")
            raise ApiError(message, response.status_code)

        return response.json()

    async def _restaurants(
        self, path: str, params: dict[str, str] | None = None
    ) -> list[Restaurant]:
        data = await self._request("GET", path, params=params)
        return [Restaurant.model_validate(item) for item in data]

    async def list_restaurants(self) -> list[Restaurant]:
        return await self._restaurants("/api/restaurants")

    async def trending(self) -> list[Restaurant]:
        return await self._restaurants("/api/restaurants/trending")

    async def nearby(self) -> list[Restaurant]:
        return await self._restaurants("/api/restaurants/nearby")

    async def search(self, query: str) -> list[Restaurant]:
        """Search by name or cuisine; a blank query lists everything."""
        if not query.strip():
            return await self.list_restaurants()
        return await self._restaurants("/api/restaurants/search", {"q": query})

    async def filter(
        self,
        cuisine_type: str | None = None,
        min_rating: float | None = None,
        price_range: str | None = None,
    ) -> list[Restaurant]:
        params: dict[str, str] = {}
        if cuisine_type:
            params["cuisineType"] = cuisine_type
        if min_rating is not None:
            params["minRating"] = str(min_rating)
        if price_range:
            params["priceRange"] = price_range
        return await self._restaurants("/api/restaurants/filter", params)

    async def get_restaurant(self, restaurant_id: str) -> Restaurant | None:
        data = await self._request(
            "GET",
            f"/api/restaurants/{quote(restaurant_id, safe='')}",
            allow_not_found=True,
        )
        return Restaurant.model_validate(data) if data is not None else None

    async def get_reviews(self, restaurant_id: str) -> list[Review]:
        data = await self._request(
            "GET", f"/api/restaurants/{quote(restaurant_id, safe='')}/reviews"
        )
        return [Review.model_validate(item) for item in data]

    async def post_review(self, restaurant_id: str, review: ReviewCreate) -> Review:
        data = await self._request(
            "POST",
            f"/api/restaurants/{quote(restaurant_id, safe='')}/reviews",
            json=review.model_dump(by_alias=True, exclude_none=True),
        )
        return Review.model_validate(data)
