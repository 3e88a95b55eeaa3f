from __future__ import annotations

import random
from pathlib import Path
from typing import List, Optional

import yaml

from weathrguessr.core.errors import CatalogError
from weathrguessr.core.models import City

DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "cities.yaml"


def _parse_city(index: int, raw: object, source: str) -> City:
    if not isinstance(raw, dict):
        raise CatalogError(f"{source}: entry {index} is not a mapping")
    name = raw.get("name")
    country = raw.get("country")
    if not name or not isinstance(name, str):
        raise CatalogError(f"{source}: entry {index} has missing or invalid 'name'")
    if not country or not isinstance(country, str):
        raise CatalogError(f"{source}: entry {index} ({name}) has missing or invalid 'country'")
    try:
        lat = float(raw["lat"])
        lon = float(raw["lon"])
    except (KeyError, TypeError, ValueError):
        raise CatalogError(f"{source}: entry {index} ({name}) needs numeric 'lat' and 'lon'") from None
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        raise CatalogError(f"{source}: entry {index} ({name}) has out of range coordinates")
    return City(name=name.strip(), country=country.strip(), latitude=lat, longitude=lon)


class CityRepository:
    """Static list of cities the game can ask about, loaded from YAML."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or DEFAULT_CATALOG
        self._cities = self._load_cities()

    def all(self) -> List[City]:
        return list(self._cities)

    def __len__(self) -> int:
        return len(self._cities)

    def random_city(self, rng: Optional[random.Random] = None) -> City:
        """Pick one city uniformly at random."""
        return (rng or random).choice(self._cities)

    def _load_cities(self) -> List[City]:
        if not self._path.exists():
            raise CatalogError(f"City catalog not found: {self._path}")
        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise CatalogError(f"{self._path.name}: expected YAML with a 'cities' list")
        entries = raw.get("cities")
        if not isinstance(entries, list):
            raise CatalogError(f"{self._path.name}: 'cities' must be a list")
        cities = [_parse_city(i, entry, self._path.name) for i, entry in enumerate(entries)]
        if not cities:
            raise CatalogError(f"{self._path.name}: no cities defined")
        return cities
