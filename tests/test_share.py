"""Tests for weathrguessr.core.share – results text."""

from __future__ import annotations

from weathrguessr.core.models import GameStats
from weathrguessr.core.share import PLAY_URL, build_share_text


class TestShareText:
    def test_contents(self):
        text = build_share_text(GameStats(round_number=5, correct_count=3, streak=2))
        assert "Completed Rounds: 4" in text
        assert "Correct Answers: 3" in text
        assert "Accuracy: 75%" in text
        assert "Current Streak: 2" in text
        assert text.endswith(f"Play at {PLAY_URL}")

    def test_fresh_game(self):
        text = build_share_text(GameStats())
        assert "Completed Rounds: 0" in text
        assert "Accuracy: 0%" in text

    def test_custom_url(self):
        assert build_share_text(GameStats(), play_url="http://localhost").endswith("http://localhost")
