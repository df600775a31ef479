"""
Color Set Generator

Picks a round's target color and builds the six on-screen options around it
according to the configured GenerationPolicy.
"""

import random
from typing import Iterable, Iterator, List, Optional, Sequence, TypeVar

from ..config.game_settings import GameSettings, OPTION_COUNT
from ..models.color import Color
from ..models.errors import ColorGenerationError
from ..models.game import GenerationPolicy, TargetSource
from ..utils.color_math import clamp, distance, hex_to_rgb, to_color

T = TypeVar('T')

# Upper bound on random draws for policies that rely on rejection sampling
MAX_SAMPLING_ATTEMPTS = 100_000


class ColorSetGenerator:
    """
    Produces a target plus five distractors for one round.

    All randomness goes through ``rng`` (any object with the ``random.Random``
    interface), so a seeded generator yields reproducible rounds.
    """

    def __init__(self, settings: GameSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng or random.Random()
        self.palette: List[Color] = [hex_to_rgb(c) for c in settings.base_palette]

    # ------------------------------------------------------------------
    # Target selection
    # ------------------------------------------------------------------

    def pick_target(self, on_screen: Iterable[Color] = ()) -> Color:
        """
        Choose the next target color.

        When ``exclude_on_screen`` is set, colors currently displayed are
        skipped so the same color is not asked twice in a row.
        """
        excluded = set(on_screen) if self.settings.exclude_on_screen else set()

        if self.settings.effective_target_source == TargetSource.RANDOM:
            for _ in range(MAX_SAMPLING_ATTEMPTS):
                candidate = self._random_color()
                if candidate not in excluded:
                    return candidate
            raise ColorGenerationError("Could not find a target outside the displayed colors")

        candidates = [c for c in self.palette if c not in excluded]
        if not candidates:
            # Every palette color is on screen; repeating one is unavoidable
            candidates = self.palette
        return self.rng.choice(candidates)

    # ------------------------------------------------------------------
    # Option generation
    # ------------------------------------------------------------------

    def generate_options(self, target: Color) -> List[Color]:
        """Return OPTION_COUNT distinct colors, target included, in shuffled order."""
        policy = self.settings.policy
        if policy == GenerationPolicy.SIMILAR:
            colors = self._similar_colors(target)
        elif policy == GenerationPolicy.CONTRASTING:
            colors = self._contrasting_colors(target)
        elif policy == GenerationPolicy.BASIC_DISTINCT:
            colors = self._basic_distinct_colors(target)
        else:
            raise ColorGenerationError(f"Unsupported generation policy: {policy}")
        return self.shuffle(colors)

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Fisher-Yates shuffle; returns a new list, input left untouched."""
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def _similar_colors(self, target: Color) -> List[Color]:
        variation = self.settings.variation
        colors = {target: None}

        for _ in range(self.settings.similar_retry_limit):
            if len(colors) >= OPTION_COUNT:
                break
            candidate = to_color(
                target.r + self.rng.uniform(-variation, variation),
                target.g + self.rng.uniform(-variation, variation),
                target.b + self.rng.uniform(-variation, variation),
            )
            colors.setdefault(candidate, None)

        if len(colors) < OPTION_COUNT:
            for candidate in self._jitter(target):
                colors.setdefault(candidate, None)
                if len(colors) >= OPTION_COUNT:
                    break

        return list(colors)

    @staticmethod
    def _jitter(target: Color) -> Iterator[Color]:
        """Deterministic single-channel nudges of growing size around target."""
        for step in range(1, 256):
            for channel in range(3):
                for sign in (1, -1):
                    channels = list(target)
                    channels[channel] = clamp(channels[channel] + sign * step, 0, 255)
                    yield Color(*channels)
        raise ColorGenerationError(f"No distinct jitter left around {target.hex}")

    def _contrasting_colors(self, target: Color) -> List[Color]:
        min_distance = self.settings.min_distance
        colors = {target: None}

        for _ in range(MAX_SAMPLING_ATTEMPTS):
            candidate = self._random_color()
            if distance(target, candidate) >= min_distance:
                colors.setdefault(candidate, None)
                if len(colors) >= OPTION_COUNT:
                    return list(colors)

        raise ColorGenerationError(
            f"Could not find {OPTION_COUNT - 1} colors at distance >= {min_distance} "
            f"from {target.hex}"
        )

    def _basic_distinct_colors(self, target: Color) -> List[Color]:
        if len(set(self.palette) | {target}) < OPTION_COUNT:
            raise ColorGenerationError(
                f"Base palette is too small to fill {OPTION_COUNT} distinct options"
            )

        colors = {target: None}
        while len(colors) < OPTION_COUNT:
            colors.setdefault(self.rng.choice(self.palette), None)
        return list(colors)

    def _random_color(self) -> Color:
        return Color(self.rng.randint(0, 255), self.rng.randint(0, 255), self.rng.randint(0, 255))
