"""
Color set generator tests: option invariants per policy, target selection
and the Fisher-Yates shuffle.
"""

import itertools
import random
import unittest

from color_game.config.game_settings import BASE_PALETTE, OPTION_COUNT, GameSettings
from color_game.models.color import Color
from color_game.models.game import GenerationPolicy, TargetSource
from color_game.services.color_generator import ColorSetGenerator
from color_game.utils.color_math import distance, hex_to_rgb, rgb_to_hex

SEEDS = range(150)


def _generator(seed=0, **settings):
    return ColorSetGenerator(GameSettings(**settings).validate(), random.Random(seed))


class TestOptionInvariants(unittest.TestCase):
    """Every policy yields six distinct colors containing the target once."""

    def _assert_round(self, target, options):
        self.assertEqual(len(options), OPTION_COUNT)
        self.assertEqual(len(set(options)), OPTION_COUNT)
        self.assertEqual(options.count(target), 1)
        for color in options:
            self.assertIsInstance(color, Color)
            self.assertTrue(all(0 <= channel <= 255 for channel in color))
            self.assertEqual(hex_to_rgb(rgb_to_hex(*color)), color)

    def test_all_policies(self):
        for policy in GenerationPolicy:
            for seed in SEEDS:
                with self.subTest(policy=policy.value, seed=seed):
                    generator = _generator(seed, policy=policy)
                    target = generator.pick_target()
                    self._assert_round(target, generator.generate_options(target))

    def test_similar_stays_within_variation(self):
        for seed in SEEDS:
            generator = _generator(seed, policy=GenerationPolicy.SIMILAR, variation=40)
            target = generator.pick_target()
            for color in generator.generate_options(target):
                for channel, base in zip(color, target):
                    self.assertLessEqual(abs(channel - base), 40)

    def test_contrasting_respects_min_distance(self):
        for seed in SEEDS:
            generator = _generator(seed, policy=GenerationPolicy.CONTRASTING)
            target = generator.pick_target()
            decoys = [c for c in generator.generate_options(target) if c != target]
            self.assertEqual(len(decoys), OPTION_COUNT - 1)
            for decoy in decoys:
                self.assertGreaterEqual(distance(target, decoy), 150)

    def test_contrasting_from_extreme_target(self):
        generator = _generator(3, policy=GenerationPolicy.CONTRASTING, min_distance=200)
        target = Color(128, 128, 128)
        for decoy in generator.generate_options(target):
            if decoy != target:
                self.assertGreaterEqual(distance(target, decoy), 200)

    def test_basic_distinct_uses_palette(self):
        palette = {hex_to_rgb(c) for c in BASE_PALETTE}
        for seed in SEEDS:
            generator = _generator(seed, policy=GenerationPolicy.BASIC_DISTINCT)
            target = generator.pick_target()
            self.assertTrue(set(generator.generate_options(target)) <= palette)

    def test_similar_falls_back_to_jitter(self):
        generator = _generator(1, policy=GenerationPolicy.SIMILAR,
                               variation=0, similar_retry_limit=10)
        target = Color(0, 0, 0)
        options = generator.generate_options(target)
        self._assert_round(target, options)
        for color in options:
            self.assertLessEqual(distance(target, color), 2)

    def test_similar_on_white_corner(self):
        generator = _generator(8, policy=GenerationPolicy.SIMILAR, variation=1)
        target = Color(255, 255, 255)
        self._assert_round(target, generator.generate_options(target))


class TestTargetSelection(unittest.TestCase):

    def test_palette_target_avoids_on_screen_colors(self):
        palette = [hex_to_rgb(c) for c in BASE_PALETTE]
        for seed in range(20):
            generator = _generator(seed)
            self.assertEqual(generator.pick_target(palette[:-1]), palette[-1])

    def test_palette_target_when_everything_is_on_screen(self):
        palette = [hex_to_rgb(c) for c in BASE_PALETTE]
        generator = _generator(4)
        self.assertIn(generator.pick_target(palette), palette)

    def test_exclusion_can_be_disabled(self):
        palette = [hex_to_rgb(c) for c in BASE_PALETTE]
        picks = {_generator(seed, exclude_on_screen=False).pick_target(palette[:-1])
                 for seed in range(50)}
        self.assertGreater(len(picks), 1)

    def test_random_target_source(self):
        generator = _generator(11, policy=GenerationPolicy.SIMILAR,
                               target_source=TargetSource.RANDOM)
        on_screen = [Color(0, 0, 0), Color(255, 255, 255)]
        target = generator.pick_target(on_screen)
        self.assertNotIn(target, on_screen)

    def test_contrasting_defaults_to_random_targets(self):
        settings = GameSettings(policy=GenerationPolicy.CONTRASTING)
        self.assertEqual(settings.effective_target_source, TargetSource.RANDOM)
        self.assertEqual(GameSettings().effective_target_source, TargetSource.PALETTE)


class TestShuffle(unittest.TestCase):

    def test_every_permutation_is_reachable(self):
        generator = _generator(2024)
        items = list(range(6))
        seen = {tuple(generator.shuffle(items)) for _ in range(36000)}
        self.assertEqual(seen, set(itertools.permutations(items)))

    def test_shuffle_returns_new_list_with_same_items(self):
        generator = _generator(5)
        items = ['a', 'b', 'c', 'd', 'e', 'f']
        shuffled = generator.shuffle(items)
        self.assertEqual(items, ['a', 'b', 'c', 'd', 'e', 'f'])
        self.assertEqual(sorted(shuffled), items)


class TestSettingsValidation(unittest.TestCase):

    def test_basic_distinct_needs_six_palette_colors(self):
        with self.assertRaises(ValueError):
            GameSettings(policy=GenerationPolicy.BASIC_DISTINCT,
                         base_palette=('#ff0000', '#00ff00', '#0000ff')).validate()

    def test_rejects_unreachable_contrast(self):
        with self.assertRaises(ValueError):
            GameSettings(min_distance=300).validate()

    def test_rejects_bad_counts(self):
        with self.assertRaises(ValueError):
            GameSettings(max_lives=0).validate()
        with self.assertRaises(ValueError):
            GameSettings(max_hints=-1).validate()

    def test_rejects_malformed_palette(self):
        with self.assertRaises(ValueError):
            GameSettings(base_palette=('#FF0000', 'blue')).validate()


if __name__ == '__main__':
    unittest.main()
