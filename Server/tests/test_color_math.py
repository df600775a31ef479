"""
Color math tests: hex/RGB conversion, distance, clamping and name lookup.

Run: python -m pytest Server/tests/test_color_math.py
"""

import math
import random
import unittest

from color_game.models.color import Color
from color_game.models.errors import InvalidColorFormat
from color_game.utils.color_math import (
    clamp, coerce_color, color_name, describe_color, distance,
    hex_to_rgb, nearest_color_name, rgb_to_hex
)


class TestHexToRgb(unittest.TestCase):

    def test_parses_with_and_without_hash(self):
        self.assertEqual(hex_to_rgb('#ff8000'), Color(255, 128, 0))
        self.assertEqual(hex_to_rgb('ff8000'), Color(255, 128, 0))

    def test_case_insensitive(self):
        self.assertEqual(hex_to_rgb('#0080FF'), hex_to_rgb('#0080ff'))
        self.assertEqual(hex_to_rgb('AbCdEf'), Color(0xab, 0xcd, 0xef))

    def test_rejects_malformed_strings(self):
        for bad in ['#fff', 'fff', '#12345', '#1234567', 'gg0000', '##ff0000', '', 'red',
                    ' #ff0000\n', '#ff0000 ', '\tff0000']:
            with self.subTest(value=bad):
                with self.assertRaises(InvalidColorFormat):
                    hex_to_rgb(bad)

    def test_rejects_non_strings(self):
        with self.assertRaises(InvalidColorFormat):
            hex_to_rgb(None)
        with self.assertRaises(InvalidColorFormat):
            hex_to_rgb(0xff0000)

    def test_invalid_format_is_a_value_error(self):
        with self.assertRaises(ValueError):
            hex_to_rgb('nope')


class TestRgbToHex(unittest.TestCase):

    def test_formats_lowercase_zero_padded(self):
        self.assertEqual(rgb_to_hex(255, 128, 0), '#ff8000')
        self.assertEqual(rgb_to_hex(1, 2, 3), '#010203')

    def test_rounds_and_clamps(self):
        self.assertEqual(rgb_to_hex(0.4, 254.6, 300), '#00ffff')
        self.assertEqual(rgb_to_hex(-5, 15.5, 128), '#001080')

    def test_color_hex_matches_channel_form(self):
        self.assertEqual(rgb_to_hex(*Color(16, 32, 48)), '#102030')
        self.assertEqual(Color(16, 32, 48).hex, '#102030')

    def test_requires_three_channels(self):
        with self.assertRaises(TypeError):
            rgb_to_hex(1, 2)
        with self.assertRaises(TypeError):
            rgb_to_hex(Color(1, 2, 3))

    def test_round_trip_is_stable(self):
        rng = random.Random(99)
        for _ in range(500):
            raw = ''.join(rng.choice('0123456789abcdefABCDEF') for _ in range(6))
            first = hex_to_rgb(raw)
            self.assertEqual(hex_to_rgb(rgb_to_hex(*first)), first)
            self.assertEqual(first.hex, '#' + raw.lower())


class TestDistanceAndClamp(unittest.TestCase):

    def test_distance_black_to_white(self):
        self.assertAlmostEqual(distance(Color(0, 0, 0), Color(255, 255, 255)), math.sqrt(3) * 255)

    def test_distance_is_symmetric_and_zero_only_for_equal(self):
        a, b = Color(10, 200, 30), Color(40, 100, 90)
        self.assertEqual(distance(a, b), distance(b, a))
        self.assertEqual(distance(a, a), 0)
        self.assertGreater(distance(a, Color(10, 200, 31)), 0)

    def test_clamp(self):
        self.assertEqual(clamp(-3, 0, 255), 0)
        self.assertEqual(clamp(300, 0, 255), 255)
        self.assertEqual(clamp(42, 0, 255), 42)


class TestColorNames(unittest.TestCase):

    def test_exact_lookup(self):
        self.assertEqual(color_name('#FF0000'), 'Red')
        self.assertEqual(color_name(Color(0, 128, 255)), 'Azure')

    def test_unmapped_is_unknown(self):
        self.assertEqual(color_name('#123457'), 'unknown')

    def test_nearest_name(self):
        self.assertEqual(nearest_color_name((250, 5, 5)), 'Red')

    def test_describe_color(self):
        self.assertEqual(describe_color('#ffff00'), 'Yellow')
        self.assertEqual(describe_color('#fa0505'), 'Red-ish #fa0505')


class TestCoerceColor(unittest.TestCase):

    def test_accepts_color_string_and_sequence(self):
        self.assertEqual(coerce_color(Color(1, 2, 3)), Color(1, 2, 3))
        self.assertEqual(coerce_color('#010203'), Color(1, 2, 3))
        self.assertEqual(coerce_color([1, 2, 3]), Color(1, 2, 3))

    def test_rejects_bad_sequences(self):
        for bad in [(1, 2), (256, 0, 0), (-1, 0, 0), (1.5, 2, 3), 42]:
            with self.subTest(value=bad):
                with self.assertRaises(InvalidColorFormat):
                    coerce_color(bad)


if __name__ == '__main__':
    unittest.main()
