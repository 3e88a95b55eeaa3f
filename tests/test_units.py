"""Tests for weathrguessr.core.units – conversion and formatting."""

from __future__ import annotations

import pytest

from weathrguessr.core.models import TemperaturePair
from weathrguessr.core.units import (
    celsius_to_fahrenheit,
    format_pair,
    format_temperature,
    round_half_up,
    unit_toggle_label,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(2.4, 2), (2.5, 3), (2.6, 3), (-2.5, -2), (-2.6, -3), (0.0, 0), (-0.4, 0)],
    )
    def test_values(self, value: float, expected: int):
        assert round_half_up(value) == expected


class TestCelsiusToFahrenheit:
    def test_twenty(self):
        assert celsius_to_fahrenheit(20) == 68

    def test_freezing(self):
        assert celsius_to_fahrenheit(0) == 32

    def test_minus_forty(self):
        assert celsius_to_fahrenheit(-40) == -40

    def test_rounds(self):
        # 21 * 9/5 + 32 = 69.8
        assert celsius_to_fahrenheit(21) == 70


class TestFormatting:
    def test_metric(self):
        assert format_temperature(20, use_metric=True) == "20°C"

    def test_imperial(self):
        assert format_temperature(20, use_metric=False) == "68°F"

    def test_negative_metric(self):
        assert format_temperature(-7, use_metric=True) == "-7°C"

    def test_pair(self):
        assert format_pair(TemperaturePair(20, 0), use_metric=False) == "68°F / 32°F"

    def test_toggle_label_names_the_other_unit(self):
        assert unit_toggle_label(use_metric=True) == "°F"
        assert unit_toggle_label(use_metric=False) == "°C"
