"""Tests for evosim.math_utils and evosim.color."""

import math
import random

import pytest

from evosim.color import color_small_change, hex_to_rgb, hue_to_rgb, random_color, rgb_to_hex
from evosim.math_utils import Vector2, angle_difference, clamp


class TestVector2:
    def test_normalize(self):
        v = Vector2(3, 4).normalize()
        assert v.length() == pytest.approx(1.0)
        assert v == Vector2(0.6, 0.8)

    def test_normalize_zero_vector(self):
        assert Vector2(0, 0).normalize().is_zero()

    def test_arithmetic(self):
        assert Vector2(1, 2) + Vector2(3, 4) == Vector2(4, 6)
        assert Vector2(3, 4) - Vector2(1, 1) == Vector2(2, 3)
        assert Vector2(1, 2) * 3 == Vector2(3, 6)

    def test_distance(self):
        assert Vector2(0, 0).distance_to(Vector2(3, 4)) == 5


class TestAngles:
    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0

    def test_angle_difference_wraps(self):
        assert angle_difference(0.1, 2 * math.pi - 0.1) == pytest.approx(0.2)
        assert angle_difference(-math.pi / 2, math.pi / 2) == pytest.approx(math.pi)


class TestColor:
    def test_hex_round_trip(self):
        assert hex_to_rgb(rgb_to_hex((12, 200, 255))) == (12, 200, 255)

    def test_bad_hex_raises(self):
        with pytest.raises(ValueError):
            hex_to_rgb("#abc")

    def test_hue_to_rgb_in_range(self):
        for hue in (0.0, 0.3, 0.6, 0.9):
            assert all(0 <= channel <= 255 for channel in hue_to_rgb(hue, saturation=1.0))

    def test_random_color_is_hex(self):
        color = random_color(random.Random(1))
        assert color.startswith("#") and len(color) == 7

    def test_small_change_stays_close(self):
        rng = random.Random(2)
        for _ in range(50):
            changed = color_small_change("#808080", rng, amount=10)
            assert all(abs(c - 128) <= 10 for c in hex_to_rgb(changed))

    def test_small_change_clamps_channels(self):
        rng = random.Random(3)
        for _ in range(50):
            assert all(0 <= c <= 255 for c in hex_to_rgb(color_small_change("#ff0000", rng)))
