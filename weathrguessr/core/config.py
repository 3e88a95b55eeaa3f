"""Runtime settings read from ``WEATHRGUESSR_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
COMMONS_API_URL = "https://commons.wikimedia.org/w/api.php"
DEFAULT_FETCH_TIMEOUT = 10.0


def _float_from_env(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %s", key, raw, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    home_dir: Path
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    weather_url: str = OPEN_METEO_URL
    commons_url: str = COMMONS_API_URL
    log_level: str = "INFO"

    @property
    def preferences_path(self) -> Path:
        return self.home_dir / "preferences.json"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        home = env.get("WEATHRGUESSR_HOME")
        return cls(
            home_dir=Path(home).expanduser() if home else Path.home() / ".weathrguessr",
            fetch_timeout=_float_from_env(env, "WEATHRGUESSR_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT),
            weather_url=env.get("WEATHRGUESSR_WEATHER_URL") or OPEN_METEO_URL,
            commons_url=env.get("WEATHRGUESSR_COMMONS_URL") or COMMONS_API_URL,
            log_level=(env.get("WEATHRGUESSR_LOG_LEVEL") or "INFO").upper(),
        )
