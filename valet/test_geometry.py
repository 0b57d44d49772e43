#!/usr/bin/env python3
"""
Tests for the 2D distance / angle helpers.
"""

from __future__ import annotations

import math
import unittest

from valet.geometry import (
    angle_difference,
    angle_to,
    clamp,
    distance,
    normalize_degrees,
    round_half_up,
)


class DistanceTests(unittest.TestCase):
    def test_pythagorean_triple(self) -> None:
        self.assertAlmostEqual(distance((0.0, 0.0), (3.0, 4.0)), 5.0)

    def test_zero_and_symmetric(self) -> None:
        self.assertEqual(distance((7.0, -2.0), (7.0, -2.0)), 0.0)
        self.assertEqual(distance((1.0, 2.0), (5.0, 9.0)), distance((5.0, 9.0), (1.0, 2.0)))


class AngleTests(unittest.TestCase):
    def test_angle_to_axes(self) -> None:
        self.assertAlmostEqual(angle_to((0.0, 0.0), (1.0, 0.0)), 0.0)
        self.assertAlmostEqual(angle_to((0.0, 0.0), (0.0, 1.0)), math.pi / 2)
        self.assertAlmostEqual(angle_to((0.0, 0.0), (0.0, -1.0)), -math.pi / 2)
        self.assertAlmostEqual(angle_to((0.0, 0.0), (-1.0, 0.0)), math.pi)

    def test_difference_wraps_around(self) -> None:
        near_pos = math.radians(179.0)
        near_neg = math.radians(-179.0)
        self.assertAlmostEqual(angle_difference(near_pos, near_neg), math.radians(2.0))
        self.assertAlmostEqual(angle_difference(0.0, 2 * math.pi), 0.0)
        self.assertAlmostEqual(angle_difference(0.0, math.pi), math.pi)

    def test_difference_symmetric_and_bounded(self) -> None:
        samples = [-10 * math.pi, -math.pi, -3.0, -0.5, 0.0, 0.5, 3.0, math.pi, 7.5, 12 * math.pi + 0.1]
        for a in samples:
            for b in samples:
                d = angle_difference(a, b)
                self.assertGreaterEqual(d, 0.0)
                self.assertLessEqual(d, math.pi + 1e-12)
                self.assertAlmostEqual(d, angle_difference(b, a))


class ScalarHelperTests(unittest.TestCase):
    def test_clamp(self) -> None:
        self.assertEqual(clamp(-5.0, 0.0, 100.0), 0.0)
        self.assertEqual(clamp(150.0, 0.0, 100.0), 100.0)
        self.assertEqual(clamp(42.0, 0.0, 100.0), 42.0)

    def test_normalize_degrees(self) -> None:
        self.assertEqual(normalize_degrees(-90.0), 270.0)
        self.assertEqual(normalize_degrees(360.0), 0.0)
        self.assertEqual(normalize_degrees(725.0), 5.0)
        self.assertEqual(normalize_degrees(-1e-17), 0.0)

    def test_round_half_up(self) -> None:
        self.assertEqual(round_half_up(92.5), 93)
        self.assertEqual(round_half_up(90.49), 90)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(0.0), 0)


if __name__ == "__main__":
    unittest.main()
