"""Temperature unit conversion and display formatting.

All game comparisons happen on Celsius integers; these helpers are for
presentation only.
"""

from __future__ import annotations

import math

from weathrguessr.core.models import TemperaturePair


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def celsius_to_fahrenheit(celsius: int) -> int:
    return round_half_up(celsius * 9 / 5 + 32)


def format_temperature(celsius: int, use_metric: bool) -> str:
    """Return e.g. ``20°C`` or ``68°F`` depending on the selected unit."""
    if use_metric:
        return f"{celsius}°C"
    return f"{celsius_to_fahrenheit(celsius)}°F"


def format_pair(pair: TemperaturePair, use_metric: bool) -> str:
    return f"{format_temperature(pair.high, use_metric)} / {format_temperature(pair.low, use_metric)}"


def unit_toggle_label(use_metric: bool) -> str:
    """Label for the unit button: the unit a click would switch to."""
    return "°F" if use_metric else "°C"
