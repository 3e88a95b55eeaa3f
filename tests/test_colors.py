"""Tests for weathrguessr.ui.colors – palettes and color blending."""

from __future__ import annotations

import dataclasses

import pytest

from weathrguessr.ui.colors import DARK, LIGHT, blend_hex, palette_for, theme_toggle_icon


# ===========================================================================
# Palettes
# ===========================================================================

class TestPalettes:
    @pytest.mark.parametrize("palette", [LIGHT, DARK])
    def test_all_hex(self, palette):
        for f in dataclasses.fields(palette):
            value = getattr(palette, f.name)
            assert value.startswith("#") and len(value) == 7, f.name

    def test_palette_for(self):
        assert palette_for("dark") is DARK
        assert palette_for("light") is LIGHT
        assert palette_for("unknown") is LIGHT

    def test_toggle_icon(self):
        assert theme_toggle_icon("dark") == "☀️"
        assert theme_toggle_icon("light") == "🌓"


# ===========================================================================
# blend_hex
# ===========================================================================

class TestBlendHex:
    def test_t_zero_returns_a(self):
        assert blend_hex("#FF0000", "#0000FF", 0.0) == "#FF0000"

    def test_t_one_returns_b(self):
        assert blend_hex("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_midpoint(self):
        result = blend_hex("#000000", "#FFFFFF", 0.5)
        assert 126 <= int(result[1:3], 16) <= 128

    def test_clamps_t(self):
        assert blend_hex("#000000", "#FFFFFF", 5.0) == "#FFFFFF"
        assert blend_hex("#000000", "#FFFFFF", -1.0) == "#000000"

    def test_non_hex_returns_a(self):
        assert blend_hex("red", "#FFFFFF", 0.5) == "red"

    def test_bad_digits_return_a(self):
        assert blend_hex("#GGGGGG", "#FFFFFF", 0.5) == "#GGGGGG"
