"""Pexels photo search for recipe images."""

from __future__ import annotations

import logging

import httpx

from .network import DEFAULT_TIMEOUT, ApiError, NetworkError, request_json

logger = logging.getLogger(__name__)

SEARCH_URL = "https://api.pexels.com/v1/search"


class PexelsClient:
    """Look up a representative food photo for a dish name."""

    def __init__(
        self,
        api_key: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._transport = transport

    async def search_food_image(self, query: str) -> str:
        """Return the medium-size URL of the best match, or "" if none.

        Raises:
            ValueError: If no API key is configured.
            ApiError: If the request fails.
        """
        if not self._api_key:
            raise ValueError(
                "Pexels API key is not set. "
                "Check the config file or the PEXELS_API_KEY environment variable."
            )

        params = {
            "query": f"{query.strip()} food dish",
            "per_page": 1,
            "orientation": "landscape",
        }
        async with httpx.AsyncClient(
            timeout=DEFAULT_TIMEOUT, transport=self._transport
        ) as client:
            data = await request_json(
                client,
                "GET",
                SEARCH_URL,
                headers={"Authorization": self._api_key},
                params=params,
            )

        photos = data.get("photos") if isinstance(data, dict) else None
        if not photos:
            return ""
        first = photos[0] if isinstance(photos, list) else None
        src = first.get("src") if isinstance(first, dict) else None
        if not isinstance(src, dict):
            logger.warning("Unexpected Pexels payload for %r: %r", query, data)
            raise ApiError(NetworkError.SERIALIZATION)
        medium = src.get("medium")
        return medium if isinstance(medium, str) else ""

    async def search_food_images(self, queries: list[str]) -> dict[str, str]:
        """Look up images for several dishes.

        Queries without a result, or whose request failed, are left out.
        """
        results: dict[str, str] = {}
        for query in queries:
            try:
                url = await self.search_food_image(query)
            except ApiError as e:
                logger.warning("Failed to fetch image for %r: %s", query, e)
                continue
            if url:
                results[query] = url
        return results
