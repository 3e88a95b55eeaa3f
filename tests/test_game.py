"""Tests for weathrguessr.core.game – round lifecycle and scoring."""

from __future__ import annotations

import asyncio
import random
from pathlib import Path
from typing import Optional

import pytest

from weathrguessr.core.cities import CityRepository
from weathrguessr.core.errors import DataFetchError
from weathrguessr.core.game import RoundController
from weathrguessr.core.models import RoundState, TemperaturePair
from weathrguessr.core.preferences import PreferenceStore

TRUTH = TemperaturePair(high=24, low=13)


class FakeWeather:
    def __init__(
        self,
        pair: TemperaturePair = TRUTH,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.pair = pair
        self.error = error
        self.delay = delay
        self.calls = []

    async def fetch_today(self, latitude: float, longitude: float) -> TemperaturePair:
        self.calls.append((latitude, longitude))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.pair


class FakeImages:
    def __init__(self) -> None:
        self.calls = []

    async def image_url(self, city_name: str) -> str:
        self.calls.append(city_name)
        return f"https://images.test/{city_name}.jpg"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def weather() -> FakeWeather:
    return FakeWeather()


@pytest.fixture()
def images() -> FakeImages:
    return FakeImages()


@pytest.fixture()
def controller(weather: FakeWeather, images: FakeImages) -> RoundController:
    return RoundController(
        cities=CityRepository(),
        weather=weather,
        images=images,
        rng=random.Random(42),
    )


def _wrong_index(controller: RoundController) -> int:
    return (controller.current_round.correct_index + 1) % 4


# ---------------------------------------------------------------------------
# start_round
# ---------------------------------------------------------------------------

class TestStartRound:
    def test_initial_state_is_loading(self, controller: RoundController):
        assert controller.state is RoundState.LOADING
        assert controller.current_round is None
        assert controller.choices == []

    def test_moves_to_waiting(self, controller: RoundController):
        current = asyncio.run(controller.start_round())
        assert controller.state is RoundState.WAITING
        assert current is controller.current_round
        assert current.weather == TRUTH
        assert len(current.choices) == 4
        assert current.choices[current.correct_index].pair == TRUTH
        assert current.choices[current.correct_index].is_correct

    def test_fetches_for_chosen_city(self, controller: RoundController, weather: FakeWeather, images: FakeImages):
        current = asyncio.run(controller.start_round())
        assert weather.calls == [(current.city.latitude, current.city.longitude)]
        assert images.calls == [current.city.name]
        assert current.image_url == f"https://images.test/{current.city.name}.jpg"

    def test_weather_failure_leaves_round_loading(self, weather: FakeWeather, controller: RoundController):
        weather.error = DataFetchError("Weather API error: 500")
        with pytest.raises(DataFetchError):
            asyncio.run(controller.start_round())
        assert controller.state is RoundState.LOADING
        assert controller.current_round.weather is None
        assert controller.choices == []

    def test_timeout_raises_data_fetch_error(self, images: FakeImages):
        slow = FakeWeather(delay=5.0)
        controller = RoundController(CityRepository(), slow, images, fetch_timeout=0.05)
        with pytest.raises(DataFetchError, match="Timed out"):
            asyncio.run(controller.start_round())
        assert controller.state is RoundState.LOADING

    def test_retry_after_failure(self, weather: FakeWeather, controller: RoundController):
        weather.error = DataFetchError("boom")
        with pytest.raises(DataFetchError):
            asyncio.run(controller.start_round())
        weather.error = None
        asyncio.run(controller.start_round())
        assert controller.state is RoundState.WAITING

    def test_new_round_supersedes_answered_one(self, controller: RoundController):
        first = asyncio.run(controller.start_round())
        controller.submit_selection(0)
        second = asyncio.run(controller.start_round())
        assert second is not first
        assert first.state is RoundState.ANSWERED
        assert controller.state is RoundState.WAITING


class SequencedWeather:
    """Each call consumes the next ``(delay, error)`` step."""

    def __init__(self, steps) -> None:
        self.steps = list(steps)

    async def fetch_today(self, latitude: float, longitude: float) -> TemperaturePair:
        delay, error = self.steps.pop(0)
        await asyncio.sleep(delay)
        if error is not None:
            raise error
        return TRUTH


class TestSupersededRounds:
    def _run_overlapping(self, controller: RoundController):
        async def scenario():
            old_task = asyncio.ensure_future(controller.start_round())
            await asyncio.sleep(0.01)
            new_round = await controller.start_round()
            old_round = await old_task
            return old_round, new_round

        return asyncio.run(scenario())

    def test_in_flight_success_is_dropped(self, images: FakeImages):
        weather = SequencedWeather([(0.05, None), (0.0, None)])
        controller = RoundController(CityRepository(), weather, images, rng=random.Random(3))
        old_round, new_round = self._run_overlapping(controller)
        assert controller.current_round is new_round
        assert controller.state is RoundState.WAITING
        assert old_round.state is RoundState.LOADING
        assert old_round.choices == []

    def test_in_flight_failure_does_not_raise(self, images: FakeImages):
        weather = SequencedWeather([(0.05, DataFetchError("old round failed")), (0.0, None)])
        controller = RoundController(CityRepository(), weather, images, rng=random.Random(3))
        old_round, new_round = self._run_overlapping(controller)
        assert controller.current_round is new_round
        assert controller.state is RoundState.WAITING
        assert old_round.state is RoundState.LOADING

    def test_in_flight_timeout_does_not_raise(self, images: FakeImages):
        weather = SequencedWeather([(5.0, None), (0.0, None)])
        controller = RoundController(CityRepository(), weather, images, fetch_timeout=0.05, rng=random.Random(3))
        old_round, new_round = self._run_overlapping(controller)
        assert controller.current_round is new_round
        assert controller.state is RoundState.WAITING
        assert old_round.state is RoundState.LOADING


# ---------------------------------------------------------------------------
# submit_selection
# ---------------------------------------------------------------------------

class TestSubmitSelection:
    def test_correct_pick(self, controller: RoundController):
        current = asyncio.run(controller.start_round())
        outcome = controller.submit_selection(current.correct_index)
        assert outcome is not None
        assert outcome.is_correct
        assert outcome.answer == TRUTH
        assert outcome.correct_index == current.correct_index
        assert controller.state is RoundState.ANSWERED
        assert controller.stats.correct_count == 1
        assert controller.stats.streak == 1
        assert controller.stats.round_number == 2

    def test_wrong_pick(self, controller: RoundController):
        asyncio.run(controller.start_round())
        wrong = _wrong_index(controller)
        outcome = controller.submit_selection(wrong)
        assert not outcome.is_correct
        assert outcome.selected_index == wrong
        assert outcome.answer == TRUTH
        assert controller.stats.correct_count == 0
        assert controller.stats.streak == 0
        assert controller.stats.round_number == 2

    def test_scoring_example_correct(self, controller: RoundController):
        controller.stats.round_number, controller.stats.correct_count, controller.stats.streak = 6, 5, 3
        current = asyncio.run(controller.start_round())
        controller.submit_selection(current.correct_index)
        s = controller.stats
        assert (s.streak, s.correct_count, s.round_number) == (4, 6, 7)

    def test_scoring_example_incorrect(self, controller: RoundController):
        controller.stats.round_number, controller.stats.correct_count, controller.stats.streak = 6, 5, 3
        asyncio.run(controller.start_round())
        controller.submit_selection(_wrong_index(controller))
        s = controller.stats
        assert (s.streak, s.correct_count, s.round_number) == (0, 5, 7)

    def test_outcome_stats_is_snapshot(self, controller: RoundController):
        current = asyncio.run(controller.start_round())
        outcome = controller.submit_selection(current.correct_index)
        controller.reset_stats()
        assert outcome.stats.round_number == 2

    def test_ignored_before_any_round(self, controller: RoundController):
        assert controller.submit_selection(0) is None
        assert controller.stats.round_number == 1

    def test_ignored_while_loading(self, images: FakeImages):
        slow = FakeWeather(delay=0.05)
        controller = RoundController(CityRepository(), slow, images, rng=random.Random(1))

        async def scenario():
            task = asyncio.ensure_future(controller.start_round())
            await asyncio.sleep(0)
            assert controller.state is RoundState.LOADING
            assert controller.submit_selection(0) is None
            await task

        asyncio.run(scenario())
        assert controller.stats.round_number == 1
        assert controller.state is RoundState.WAITING

    def test_ignored_after_failed_load(self, weather: FakeWeather, controller: RoundController):
        weather.error = DataFetchError("down")
        with pytest.raises(DataFetchError):
            asyncio.run(controller.start_round())
        assert controller.submit_selection(0) is None
        assert controller.stats.round_number == 1

    def test_double_click_scores_once(self, controller: RoundController):
        current = asyncio.run(controller.start_round())
        first = controller.submit_selection(current.correct_index)
        second = controller.submit_selection(current.correct_index)
        assert first is not None
        assert second is None
        assert controller.stats.correct_count == 1
        assert controller.stats.round_number == 2
        assert controller.state is RoundState.ANSWERED

    @pytest.mark.parametrize("index", [-1, 4, 10])
    def test_out_of_range_index(self, controller: RoundController, index: int):
        asyncio.run(controller.start_round())
        with pytest.raises(ValueError):
            controller.submit_selection(index)
        assert controller.state is RoundState.WAITING
        assert controller.stats.round_number == 1


# ---------------------------------------------------------------------------
# restart / units
# ---------------------------------------------------------------------------

class TestRestartAndUnits:
    def test_restart_resets_counters(self, controller: RoundController):
        current = asyncio.run(controller.start_round())
        controller.submit_selection(current.correct_index)
        asyncio.run(controller.restart_game())
        s = controller.stats
        assert (s.round_number, s.correct_count, s.streak) == (1, 0, 0)
        assert controller.state is RoundState.WAITING

    def test_restart_keeps_unit(self, controller: RoundController):
        controller.set_use_metric(True)
        asyncio.run(controller.restart_game())
        assert controller.use_metric is True

    def test_unit_from_preferences(self, tmp_path: Path, weather: FakeWeather, images: FakeImages):
        prefs = PreferenceStore(tmp_path / "preferences.json")
        prefs.set_use_metric(True)
        controller = RoundController(CityRepository(), weather, images, preferences=prefs)
        assert controller.use_metric is True

    def test_toggle_unit_persists_and_resets(self, tmp_path: Path, weather: FakeWeather, images: FakeImages):
        prefs = PreferenceStore(tmp_path / "preferences.json")
        controller = RoundController(CityRepository(), weather, images, preferences=prefs)
        current = asyncio.run(controller.start_round())
        controller.submit_selection(current.correct_index)

        assert controller.toggle_unit() is True
        assert prefs.use_metric is True
        assert PreferenceStore(tmp_path / "preferences.json").use_metric is True
        assert controller.stats.round_number == 1
        assert controller.stats.correct_count == 0

    def test_format_follows_unit(self, controller: RoundController):
        assert controller.format_temperature(20) == "68°F"
        controller.set_use_metric(True)
        assert controller.format_temperature(20) == "20°C"
        assert controller.format_pair(TemperaturePair(20, 0)) == "20°C / 0°C"
