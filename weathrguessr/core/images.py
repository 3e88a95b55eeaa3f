from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from weathrguessr.core.config import COMMONS_API_URL
from weathrguessr.core.errors import ImageFetchError

logger = logging.getLogger(__name__)

PLACEHOLDER_URL = "https://via.placeholder.com/400x250/4a90e2/ffffff?text={text}"
THUMB_WIDTH = 400


def placeholder_url(city_name: str) -> str:
    return PLACEHOLDER_URL.format(text=quote(city_name, safe=""))


class CityImageClient:
    """Looks up a skyline photo for a city on Wikimedia Commons.

    ``image_url`` never raises: any failure, including an empty search, falls
    back to a placeholder keyed by the city name.
    """

    def __init__(
        self,
        base_url: str = COMMONS_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def image_url(self, city_name: str) -> str:
        try:
            return await self._lookup(city_name)
        except ImageFetchError as e:
            logger.warning("No image for %s, using placeholder: %s", city_name, e)
        return placeholder_url(city_name)

    async def download(self, url: str) -> Optional[bytes]:
        """Return the raw image bytes, or None if the download fails."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport, follow_redirects=True
            ) as client:
                r = await client.get(url)
                r.raise_for_status()
                return r.content
        except httpx.HTTPError as e:
            logger.warning("Could not download image %s: %s", url, e)
            return None

    async def _lookup(self, city_name: str) -> str:
        search = {
            "action": "query",
            "format": "json",
            "list": "search",
            "srsearch": f"{city_name} city skyline",
            "srnamespace": 6,
            "srlimit": 5,
            "origin": "*",
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.get(self._base_url, params=search)
                r.raise_for_status()
                hits = r.json()["query"]["search"]
                if not hits:
                    raise ImageFetchError("search returned no files")

                info = {
                    "action": "query",
                    "format": "json",
                    "titles": hits[0]["title"],
                    "prop": "imageinfo",
                    "iiprop": "url",
                    "iiurlwidth": THUMB_WIDTH,
                    "origin": "*",
                }
                r = await client.get(self._base_url, params=info)
                r.raise_for_status()
                pages = list(r.json()["query"]["pages"].values())
                imageinfo = pages[0].get("imageinfo") if pages else None
        except httpx.HTTPError as e:
            raise ImageFetchError(str(e)) from e
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            raise ImageFetchError(f"unexpected payload: {e!r}") from e

        if not imageinfo or not imageinfo[0].get("thumburl"):
            raise ImageFetchError("file has no thumbnail")
        return imageinfo[0]["thumburl"]
