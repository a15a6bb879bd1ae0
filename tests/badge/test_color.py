"""Tests for badge.color."""

import pytest

from testcov.badge.color import ANCHORS, Color, interpolate_color


class TestColor:
    def test_hex(self):
        assert Color(0xE0, 0x5D, 0x44).hex == "#e05d44"
        assert Color(0, 0, 0).hex == "#000000"


class TestAnchors:
    def test_ascending(self):
        thresholds = [t for t, _ in ANCHORS]
        assert thresholds == sorted(thresholds)
        assert thresholds == [0.0, 0.5, 0.6, 0.9, 1.0]


class TestInterpolateColor:
    @pytest.mark.parametrize("threshold,color", ANCHORS)
    def test_anchor_returns_exact_color(self, threshold, color):
        assert interpolate_color(threshold) == color

    def test_flat_red_below_half(self):
        assert interpolate_color(0.25) == Color(0xE0, 0x5D, 0x44)

    def test_two_thirds_lies_between_yellow_and_green(self):
        color = interpolate_color(2 / 3)
        yellow = Color(0xDF, 0xB3, 0x17)
        green = Color(0x97, 0xCA, 0x00)

        for channel, lo, hi in zip(color, yellow, green):
            assert min(lo, hi) < channel < max(lo, hi)

    def test_monotonic_within_segment(self):
        samples = [interpolate_color(0.6 + i * 0.03) for i in range(11)]
        for channel in range(3):
            values = [s[channel] for s in samples]
            assert values == sorted(values) or values == sorted(values, reverse=True)

    def test_no_extrapolation(self):
        assert interpolate_color(1.5) == ANCHORS[-1][1]
        assert interpolate_color(-0.5) == ANCHORS[0][1]

    def test_nan(self):
        with pytest.raises(ValueError):
            interpolate_color(float("nan"))
