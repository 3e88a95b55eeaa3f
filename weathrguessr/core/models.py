"""Plain data types shared by the game core and the UI."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class TemperaturePair:
    """A daily high/low in whole degrees Celsius."""

    high: int
    low: int

    @property
    def spread(self) -> int:
        return self.high - self.low


@dataclass(frozen=True)
class Choice:
    pair: TemperaturePair
    is_correct: bool = False


class RoundState(Enum):
    WAITING = "waiting"
    LOADING = "loading"
    ANSWERED = "answered"


@dataclass(frozen=True)
class City:
    name: str
    country: str
    latitude: float
    longitude: float

    @property
    def label(self) -> str:
        return f"{self.name}, {self.country}"


@dataclass
class GameStats:
    """Session counters. ``round_number`` is the round currently being played."""

    round_number: int = 1
    correct_count: int = 0
    streak: int = 0
    use_metric: bool = False

    @property
    def completed_rounds(self) -> int:
        return self.round_number - 1

    @property
    def accuracy(self) -> int:
        """Percentage of completed rounds answered correctly, rounded half up."""
        if self.completed_rounds <= 0 or self.correct_count <= 0:
            return 0
        return int(math.floor(self.correct_count / self.completed_rounds * 100 + 0.5))

    def record(self, is_correct: bool) -> None:
        """Apply the result of one resolved round."""
        if is_correct:
            self.correct_count += 1
            self.streak += 1
        else:
            self.streak = 0
        self.round_number += 1

    def reset(self) -> None:
        """Zero the counters, keeping the unit preference."""
        self.round_number = 1
        self.correct_count = 0
        self.streak = 0

    def snapshot(self) -> "GameStats":
        return GameStats(
            round_number=self.round_number,
            correct_count=self.correct_count,
            streak=self.streak,
            use_metric=self.use_metric,
        )


@dataclass
class Round:
    """One city and its four choices. Replaced wholesale when a new round starts."""

    city: City
    state: RoundState = RoundState.LOADING
    image_url: Optional[str] = None
    weather: Optional[TemperaturePair] = None
    choices: List[Choice] = field(default_factory=list)
    correct_index: int = -1
    selected_index: Optional[int] = None


@dataclass(frozen=True)
class RoundOutcome:
    """What the front end needs to show once a selection is scored."""

    is_correct: bool
    selected_index: int
    correct_index: int
    answer: TemperaturePair
    stats: GameStats
