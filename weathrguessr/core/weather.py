from __future__ import annotations

import logging
from typing import Optional

import httpx

from weathrguessr.core.config import OPEN_METEO_URL
from weathrguessr.core.errors import DataFetchError
from weathrguessr.core.models import TemperaturePair
from weathrguessr.core.units import round_half_up

logger = logging.getLogger(__name__)


def parse_forecast(data: dict) -> TemperaturePair:
    """Pull today's max/min out of an Open-Meteo ``daily`` payload."""
    try:
        daily = data["daily"]
        high = float(daily["temperature_2m_max"][0])
        low = float(daily["temperature_2m_min"][0])
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise DataFetchError(f"Unexpected weather payload: {e!r}") from e
    return TemperaturePair(high=round_half_up(high), low=round_half_up(low))


class WeatherClient:
    """Fetches a single day's forecast high/low from Open-Meteo."""

    def __init__(
        self,
        base_url: str = OPEN_METEO_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def fetch_today(self, latitude: float, longitude: float) -> TemperaturePair:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "daily": "temperature_2m_max,temperature_2m_min",
            "timezone": "auto",
            "forecast_days": 1,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.get(self._base_url, params=params)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            raise DataFetchError(f"Weather API error: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise DataFetchError(f"Weather API unreachable: {e}") from e
        except ValueError as e:
            raise DataFetchError(f"Weather API returned invalid JSON: {e}") from e
        pair = parse_forecast(data)
        logger.info("Forecast for (%.4f, %.4f): high %d, low %d", latitude, longitude, pair.high, pair.low)
        return pair
