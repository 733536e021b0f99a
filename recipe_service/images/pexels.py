"""Recipe photo lookup through the Pexels search API.

fetch_image_for_recipe() never raises: any failure (missing key, network error,
non-OK status, malformed payload, empty result set) falls back to the configured
placeholder URL, since a missing photo must not fail recipe generation.
"""

from typing import Any, Optional

import aiohttp

from recipe_service.utils.config import config
from recipe_service.utils.logger import logger
from recipe_service.utils.safe_execute import safe_execute_async


class PexelsImageResolver:
    """Resolve a search phrase to the first matching Pexels photo URL."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        placeholder_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """Initialize the resolver; every argument defaults to its config value."""
        self.api_key = config.PEXELS_API_KEY if api_key is None else api_key
        self.api_url = api_url or config.PEXELS_API_URL
        self.placeholder_url = placeholder_url or config.PLACEHOLDER_IMAGE_URL
        self.timeout_seconds = timeout_seconds or config.IMAGE_SEARCH_TIMEOUT_SECONDS

    async def _search(self, query: str) -> dict[str, Any]:
        """Query the search endpoint for a single photo. Raises on HTTP errors."""
        async with aiohttp.ClientSession() as session:
            async with session.get(
                self.api_url,
                params={"query": query, "per_page": "1"},
                headers={"Authorization": self.api_key},
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            ) as response:
                response.raise_for_status()
                return await response.json()

    @staticmethod
    def _first_photo_url(payload: Any) -> Optional[str]:
        """Pick photos[0].src.original out of a search payload."""
        if not isinstance(payload, dict):
            return None
        photos = payload.get("photos") or []
        if not photos or not isinstance(photos[0], dict):
            return None
        src = photos[0].get("src") or {}
        url = src.get("original") if isinstance(src, dict) else None
        return url if isinstance(url, str) and url else None

    async def fetch_image_for_recipe(self, search_phrase: str) -> str:
        """Return the first photo URL for `search_phrase`, or the placeholder URL."""
        query = (search_phrase or "").strip()
        if not query:
            return self.placeholder_url

        if not self.api_key:
            logger.debug("PEXELS_API_KEY not set, using placeholder image")
            return self.placeholder_url

        payload = await safe_execute_async(
            self._search(query),
            f"Pexels photo search for {query!r}",
            log_level="error",
            default_return=None,
        )

        url = self._first_photo_url(payload)
        if url is None:
            logger.debug(f"No photo found for {query!r}, using placeholder image")
            return self.placeholder_url
        return url


async def fetch_image_for_recipe(search_phrase: str, resolver: Optional[PexelsImageResolver] = None) -> str:
    """Resolve a recipe photo with the default resolver. Never raises."""
    resolver = resolver or PexelsImageResolver()
    return await resolver.fetch_image_for_recipe(search_phrase)
