"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from weathrguessr.core.models import Choice, GameStats, RoundOutcome
from weathrguessr.core.units import format_pair, format_temperature

CORRECT_MESSAGE = "🎉 Correct! Great guess!"
LOAD_ERROR_MESSAGE = "Failed to load round data. Please try again."


@dataclass
class ChoiceView:
    """What one answer card shows: its two lines and how it is highlighted."""

    index: int
    high_text: str
    low_text: str
    highlight: Optional[str] = None  # "correct" | "incorrect"
    enabled: bool = True


@dataclass
class StatsView:
    round_text: str
    correct_text: str
    accuracy_text: str
    streak_text: str


def build_choice_views(
    choices: List[Choice],
    use_metric: bool,
    outcome: Optional[RoundOutcome] = None,
) -> List[ChoiceView]:
    views = []
    for index, choice in enumerate(choices):
        highlight = None
        if outcome is not None:
            if index == outcome.correct_index:
                highlight = "correct"
            elif index == outcome.selected_index:
                highlight = "incorrect"
        views.append(
            ChoiceView(
                index=index,
                high_text=f"High: {format_temperature(choice.pair.high, use_metric)}",
                low_text=f"Low: {format_temperature(choice.pair.low, use_metric)}",
                highlight=highlight,
                enabled=outcome is None,
            )
        )
    return views


def build_stats_view(stats: GameStats) -> StatsView:
    return StatsView(
        round_text=str(stats.round_number),
        correct_text=str(stats.correct_count),
        accuracy_text=f"{stats.accuracy}%",
        streak_text=str(stats.streak),
    )


def feedback_message(outcome: RoundOutcome, use_metric: bool) -> str:
    if outcome.is_correct:
        return CORRECT_MESSAGE
    return f"❌ Incorrect. The correct answer was {format_pair(outcome.answer, use_metric)}"
