"""Reachability probe for the two public APIs the game depends on."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from weathrguessr.core.config import COMMONS_API_URL, OPEN_METEO_URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiStatus:
    weather_ok: bool
    images_ok: bool

    @property
    def all_ok(self) -> bool:
        return self.weather_ok and self.images_ok


async def _probe(client: httpx.AsyncClient, url: str, params: dict) -> bool:
    try:
        r = await client.get(url, params=params)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("API probe %s failed: %s", url, e)
        return False
    return r.is_success


async def check_api_status(
    weather_url: str = OPEN_METEO_URL,
    commons_url: str = COMMONS_API_URL,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ApiStatus:
    weather_params = {
        "latitude": 40.7128,
        "longitude": -74.0060,
        "daily": "temperature_2m_max",
        "forecast_days": 1,
    }
    commons_params = {
        "action": "query",
        "format": "json",
        "list": "search",
        "srsearch": "London",
        "srnamespace": 6,
        "srlimit": 1,
        "origin": "*",
    }
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        weather_ok, images_ok = await asyncio.gather(
            _probe(client, weather_url, weather_params),
            _probe(client, commons_url, commons_params),
        )
    status = ApiStatus(weather_ok=weather_ok, images_ok=images_ok)
    logger.info("API status: weather=%s images=%s", status.weather_ok, status.images_ok)
    return status
