from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

THEMES = ("light", "dark")


@dataclass
class Preferences:
    theme: str = "light"
    use_metric: bool = False
    has_visited: bool = False


class PreferenceStore:
    """Theme, temperature unit and first-visit flag, persisted as JSON.

    Every setter writes through to disk. Counters are never stored here; a new
    app launch always starts a fresh game.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._prefs = self._load()

    @property
    def theme(self) -> str:
        return self._prefs.theme

    @property
    def use_metric(self) -> bool:
        return self._prefs.use_metric

    @property
    def has_visited(self) -> bool:
        return self._prefs.has_visited

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        self._prefs.theme = theme
        self._save()

    def toggle_theme(self) -> str:
        """Switch between light and dark and return the new theme."""
        self.set_theme("light" if self._prefs.theme == "dark" else "dark")
        return self._prefs.theme

    def set_use_metric(self, use_metric: bool) -> None:
        self._prefs.use_metric = bool(use_metric)
        self._save()

    def mark_visited(self) -> None:
        self._prefs.has_visited = True
        self._save()

    def _load(self) -> Preferences:
        prefs = Preferences()
        if not self._file_path.exists():
            return prefs
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load preferences from %s: %s", self._file_path, e)
            return prefs
        if not isinstance(payload, dict):
            logger.warning("Ignoring preferences in %s: expected a JSON object", self._file_path)
            return prefs

        theme = payload.get("theme")
        if theme in THEMES:
            prefs.theme = theme
        for key in ("use_metric", "has_visited"):
            value = payload.get(key)
            if isinstance(value, bool):
                setattr(prefs, key, value)
            elif value is not None:
                logger.warning("Ignoring non-boolean %r in %s", key, self._file_path)
        return prefs

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._file_path.write_text(json.dumps(asdict(self._prefs), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save preferences to %s: %s", self._file_path, e)
