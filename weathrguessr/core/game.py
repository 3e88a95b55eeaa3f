from __future__ import annotations

import asyncio
import logging
import random
from typing import List, Optional

from weathrguessr.core.cities import CityRepository
from weathrguessr.core.config import DEFAULT_FETCH_TIMEOUT
from weathrguessr.core.distractors import DistractorGenerator
from weathrguessr.core.errors import DataFetchError
from weathrguessr.core.images import CityImageClient
from weathrguessr.core.models import Choice, GameStats, Round, RoundOutcome, RoundState, TemperaturePair
from weathrguessr.core.preferences import PreferenceStore
from weathrguessr.core.units import format_pair, format_temperature
from weathrguessr.core.weather import WeatherClient

logger = logging.getLogger(__name__)


class RoundController:
    """Runs rounds of the guessing game and keeps the session score.

    Lifecycle of a round::

        LOADING --(weather + image fetched)--> WAITING --(first selection)--> ANSWERED

    A failed or timed out fetch leaves the round in LOADING and raises
    ``DataFetchError``; starting another round is the only way out. Selections
    made outside WAITING are ignored. The controller holds no UI references;
    a front end drives it through ``start_round``, ``submit_selection`` and
    ``restart_game``.
    """

    def __init__(
        self,
        cities: CityRepository,
        weather: WeatherClient,
        images: CityImageClient,
        generator: Optional[DistractorGenerator] = None,
        preferences: Optional[PreferenceStore] = None,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._cities = cities
        self._weather = weather
        self._images = images
        self._rng = rng or random.Random()
        self._generator = generator or DistractorGenerator(self._rng)
        self._preferences = preferences
        self._fetch_timeout = fetch_timeout
        use_metric = preferences.use_metric if preferences is not None else False
        self._stats = GameStats(use_metric=use_metric)
        self._round: Optional[Round] = None

    @property
    def stats(self) -> GameStats:
        return self._stats

    @property
    def current_round(self) -> Optional[Round]:
        return self._round

    @property
    def state(self) -> RoundState:
        if self._round is None:
            return RoundState.LOADING
        return self._round.state

    @property
    def choices(self) -> List[Choice]:
        if self._round is None:
            return []
        return list(self._round.choices)

    @property
    def use_metric(self) -> bool:
        return self._stats.use_metric

    async def start_round(self) -> Round:
        """Begin a new round, superseding any previous one.

        Both fetches run concurrently and the round only leaves LOADING once
        both have finished.
        """
        city = self._cities.random_city(self._rng)
        current = Round(city=city)
        self._round = current
        logger.info("Round %d: %s", self._stats.round_number, city.label)

        try:
            image_url, weather = await asyncio.wait_for(
                asyncio.gather(
                    self._images.image_url(city.name),
                    self._weather.fetch_today(city.latitude, city.longitude),
                ),
                timeout=self._fetch_timeout,
            )
        except asyncio.TimeoutError:
            if self._round is not current:
                logger.debug("Superseded round for %s timed out", city.label)
                return current
            logger.warning("Loading %s timed out after %.1fs", city.label, self._fetch_timeout)
            raise DataFetchError(f"Timed out loading round data for {city.label}") from None
        except DataFetchError as e:
            if self._round is not current:
                logger.debug("Superseded round for %s failed: %s", city.label, e)
                return current
            logger.warning("Loading %s failed: %s", city.label, e)
            raise

        if self._round is not current:
            logger.debug("Round for %s was superseded before it loaded", city.label)
            return current

        choices, correct_index = self._generator.generate(weather)
        current.image_url = image_url
        current.weather = weather
        current.choices = choices
        current.correct_index = correct_index
        current.state = RoundState.WAITING
        return current

    def submit_selection(self, index: int) -> Optional[RoundOutcome]:
        """Score the player's pick. Returns None when the input is ignored."""
        current = self._round
        if current is None or current.state is not RoundState.WAITING:
            logger.debug("Ignoring selection %s in state %s", index, self.state.value)
            return None
        if not 0 <= index < len(current.choices):
            raise ValueError(f"Choice index out of range: {index}")

        current.state = RoundState.ANSWERED
        current.selected_index = index
        is_correct = index == current.correct_index
        self._stats.record(is_correct)
        logger.info(
            "%s: picked %d, answer %d (%s); streak %d",
            current.city.label,
            index,
            current.correct_index,
            "correct" if is_correct else "wrong",
            self._stats.streak,
        )
        return RoundOutcome(
            is_correct=is_correct,
            selected_index=index,
            correct_index=current.correct_index,
            answer=current.weather,
            stats=self._stats.snapshot(),
        )

    def reset_stats(self) -> None:
        """Start the score over without touching the unit preference."""
        self._stats.reset()

    async def restart_game(self) -> Round:
        self.reset_stats()
        return await self.start_round()

    def set_use_metric(self, use_metric: bool) -> None:
        """Change the display unit. Switching units starts a new game."""
        self._stats.use_metric = bool(use_metric)
        if self._preferences is not None:
            self._preferences.set_use_metric(self._stats.use_metric)
        self.reset_stats()

    def toggle_unit(self) -> bool:
        self.set_use_metric(not self._stats.use_metric)
        return self._stats.use_metric

    def format_temperature(self, celsius: int) -> str:
        return format_temperature(celsius, self._stats.use_metric)

    def format_pair(self, pair: TemperaturePair) -> str:
        return format_pair(pair, self._stats.use_metric)
