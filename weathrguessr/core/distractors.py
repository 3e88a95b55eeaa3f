"""Plausible wrong answers for a day's high/low.

Each decoy starts as the true pair moved by one shared shift, so it stays in
the same climate as the truth, then high and low are nudged independently so
the decoys do not all carry the true spread.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, Tuple

from weathrguessr.core.models import Choice, TemperaturePair

logger = logging.getLogger(__name__)

SHIFTS: Tuple[int, ...] = (-15, -12, -10, -8, -6, -4, -2, 2, 4, 6, 8, 10, 12, 15)
JITTER = 3
MAX_SPREAD = 25
DECOY_COUNT = 3


def cap_spread(high: int, low: int, max_spread: int = MAX_SPREAD) -> Tuple[int, int]:
    """Shrink a pair from both ends until its spread is at most ``max_spread``.

    High drops by floor(excess / 2) and low rises by ceil(excess / 2), so the
    two adjustments add up to the excess exactly.
    """
    spread = high - low
    if spread <= max_spread:
        return high, low
    excess = spread - max_spread
    return high - excess // 2, low + (excess - excess // 2)


def shuffle_in_place(items: list, rng: random.Random) -> None:
    """Fisher-Yates shuffle driven by ``rng``."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


class DistractorGenerator:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        shifts: Sequence[int] = SHIFTS,
        jitter: int = JITTER,
        max_spread: int = MAX_SPREAD,
    ) -> None:
        if 0 in shifts:
            raise ValueError("shifts must not contain 0")
        self._rng = rng or random.Random()
        self._shifts = tuple(shifts)
        self._jitter = jitter
        self._max_spread = max_spread

    def make_decoy(self, truth: TemperaturePair) -> TemperaturePair:
        shift = self._rng.choice(self._shifts)
        high = truth.high + shift + self._rng.randint(-self._jitter, self._jitter)
        low = truth.low + shift + self._rng.randint(-self._jitter, self._jitter)
        if low > high:
            low, high = high, low
        high, low = cap_spread(high, low, self._max_spread)
        return TemperaturePair(high=high, low=low)

    def generate(self, truth: TemperaturePair) -> Tuple[List[Choice], int]:
        """Return four shuffled choices and the index holding ``truth``."""
        choices = [Choice(pair=truth, is_correct=True)]
        choices.extend(Choice(pair=self.make_decoy(truth)) for _ in range(DECOY_COUNT))
        # Decoys can occasionally coincide with the truth after jitter; left as is.
        shuffle_in_place(choices, self._rng)
        correct_index = next(i for i, choice in enumerate(choices) if choice.is_correct)
        logger.debug(
            "Generated choices %s (correct index %d)",
            [(c.pair.high, c.pair.low) for c in choices],
            correct_index,
        )
        return choices, correct_index
