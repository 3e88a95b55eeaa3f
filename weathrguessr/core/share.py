from __future__ import annotations

from weathrguessr.core.models import GameStats

PLAY_URL = "https://weathrguessr.com"


def build_share_text(stats: GameStats, play_url: str = PLAY_URL) -> str:
    """Results summary the player can paste elsewhere."""
    return (
        "🌍 WeathrGuessr Results 🌍\n"
        "\n"
        f"📊 Completed Rounds: {stats.completed_rounds}\n"
        f"✅ Correct Answers: {stats.correct_count}\n"
        f"🎯 Accuracy: {stats.accuracy}%\n"
        f"🔥 Current Streak: {stats.streak}\n"
        "\n"
        f"Think you can beat my score? Play at {play_url}"
    )
