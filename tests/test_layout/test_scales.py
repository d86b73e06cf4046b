"""Tests for the radius and color scales."""

from __future__ import annotations

import pytest

from logit_bubbles.layout.scales import (
    color_value_for,
    interpolate_rgb,
    parse_hex_color,
    radius_for,
)


class TestRadiusFor:
    def test_endpoints(self) -> None:
        assert radius_for(0.0, 40.0, 60.0) == 40.0
        assert radius_for(1.0, 40.0, 60.0) == 60.0

    def test_square_root_scale(self) -> None:
        assert radius_for(0.25, 40.0, 60.0) == pytest.approx(50.0)

    def test_monotonic(self) -> None:
        radii = [radius_for(p / 10, 40.0, 60.0) for p in range(11)]
        assert radii == sorted(radii)

    def test_out_of_range_clamped(self) -> None:
        assert radius_for(1.5, 40.0, 60.0) == 60.0
        assert radius_for(-0.1, 40.0, 60.0) == 40.0


class TestColorValueFor:
    def test_endpoints(self) -> None:
        assert color_value_for(0.0) == 0.0
        assert color_value_for(1.0) == 1.0

    def test_power_scale_boosts_small_probabilities(self) -> None:
        assert color_value_for(0.1, 0.4) == pytest.approx(0.1**0.4)
        assert color_value_for(0.1, 0.4) > 0.1

    def test_independent_of_radius_scale(self) -> None:
        """Color and size both grow with probability but not identically."""
        p = 0.3
        size_fraction = (radius_for(p, 0.0, 1.0) - 0.0) / 1.0
        assert color_value_for(p) != pytest.approx(size_fraction)


class TestHexColors:
    def test_parse_six_digits(self) -> None:
        assert parse_hex_color("#3ca5f5") == (0x3C, 0xA5, 0xF5)

    def test_parse_ignores_alpha(self) -> None:
        assert parse_hex_color("#004c87ff") == (0x00, 0x4C, 0x87)

    def test_parse_short_form(self) -> None:
        assert parse_hex_color("#fa0") == (0xFF, 0xAA, 0x00)

    def test_parse_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_hex_color("#12345")

    def test_interpolate_endpoints(self) -> None:
        assert interpolate_rgb("#3ca5f5", "#004c87", 0.0) == "#3ca5f5"
        assert interpolate_rgb("#3ca5f5", "#004c87", 1.0) == "#004c87"

    def test_interpolate_midpoint(self) -> None:
        assert interpolate_rgb("#000000", "#ffffff", 0.5) == "#808080"

    def test_interpolate_clamps_t(self) -> None:
        assert interpolate_rgb("#000000", "#ffffff", 2.0) == "#ffffff"
