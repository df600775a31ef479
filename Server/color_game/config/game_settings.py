"""
Game Configuration Constants Module

This module defines the game rules and the color palette used for target
selection and hint text. The palette is loaded from palette.json; the rule
knobs live on the GameSettings dataclass so each session can be constructed
with its own configuration.
"""

import json
import os
import re
from dataclasses import dataclass, replace
from typing import Dict, List, Final, Optional, Tuple

from ..models.game import GenerationPolicy, TargetSource

# Every round shows exactly this many options
OPTION_COUNT: Final[int] = 6
"""
Number of color options displayed per round.
Type: Final[int] - Immutable, the round-options invariant depends on it
"""

# Largest min_distance rejection sampling can serve for every target: even a
# mid-gray target keeps roughly 0.4% of RGB space this far away.
MAX_SAFE_CONTRAST_DISTANCE: Final[float] = 200.0

_HEX_PATTERN = re.compile(r'^#[0-9a-f]{6}$')


def _load_palette() -> Tuple[List[str], Dict[str, str]]:
    """
    Load the base palette and named colors from palette.json.

    Returns:
        Tuple of (base palette as lowercase "#rrggbb" strings,
        mapping of lowercase hex -> display name)

    Raises:
        FileNotFoundError: If palette.json is not found
        ValueError: If the file is malformed or a color is not "#rrggbb"
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'palette.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Palette file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in palette.json: {e}")

    if not isinstance(data, dict):
        raise ValueError("palette.json must contain an object")

    base_palette = [str(c).lower() for c in data.get('base_palette', [])]
    if not base_palette:
        raise ValueError("Base palette cannot be empty")

    named_colors = {}
    for name, hex_value in data.get('named_colors', {}).items():
        named_colors[str(hex_value).lower()] = name

    for hex_value in list(base_palette) + list(named_colors):
        if not _HEX_PATTERN.match(hex_value):
            raise ValueError(f"Color '{hex_value}' is not in #rrggbb format")

    return base_palette, named_colors


_BASE_PALETTE, _NAMED_COLORS = _load_palette()

BASE_PALETTE: Final[Tuple[str, ...]] = tuple(_BASE_PALETTE)
NAMED_COLORS: Final[Dict[str, str]] = _NAMED_COLORS


def validate_palette_integrity() -> bool:
    """
    Validates the loaded palette.

    Checks that the base palette has no duplicates and holds enough entries to
    fill a round on its own (needed by the basic-distinct policy).

    Returns:
        bool: True if the palette passes all checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if len(BASE_PALETTE) != len(set(BASE_PALETTE)):
        duplicates = sorted({c for c in BASE_PALETTE if BASE_PALETTE.count(c) > 1})
        raise ValueError(f"Duplicate colors found in base palette: {duplicates}")

    if len(BASE_PALETTE) < OPTION_COUNT:
        raise ValueError(
            f"Base palette needs at least {OPTION_COUNT} colors, found {len(BASE_PALETTE)}"
        )

    for index, color in enumerate(BASE_PALETTE):
        if not _HEX_PATTERN.match(color):
            raise ValueError(f"Palette color at index {index} '{color}' is not #rrggbb")

    return True


def get_palette_statistics() -> dict:
    """Summarise the palette for diagnostics and the palette endpoint."""
    named_in_palette = [NAMED_COLORS[c] for c in BASE_PALETTE if c in NAMED_COLORS]
    return {
        "base_palette_size": len(BASE_PALETTE),
        "named_colors": len(NAMED_COLORS),
        "named_base_colors": named_in_palette,
        "unnamed_base_colors": [c for c in BASE_PALETTE if c not in NAMED_COLORS],
    }


@dataclass(frozen=True)
class GameSettings:
    """Per-session game rules."""
    max_lives: int = 5
    max_hints: int = 3
    max_help: int = 3
    variation: int = 76
    min_distance: float = 150.0
    reveal_delay_ms: int = 1000
    policy: GenerationPolicy = GenerationPolicy.SIMILAR
    target_source: Optional[TargetSource] = None  # None = policy default
    exclude_on_screen: bool = True
    similar_retry_limit: int = 1000
    base_palette: Tuple[str, ...] = BASE_PALETTE

    @property
    def effective_target_source(self) -> TargetSource:
        if self.target_source is not None:
            return self.target_source
        if self.policy == GenerationPolicy.CONTRASTING:
            return TargetSource.RANDOM
        return TargetSource.PALETTE

    @property
    def reveal_delay_seconds(self) -> float:
        return self.reveal_delay_ms / 1000.0

    def validate(self) -> 'GameSettings':
        """
        Reject configurations the engine cannot play.

        Raises:
            ValueError: With a message naming the offending setting
        """
        if self.max_lives < 1:
            raise ValueError("max_lives must be at least 1")
        if self.max_hints < 0 or self.max_help < 0:
            raise ValueError("max_hints and max_help cannot be negative")
        if self.variation < 0:
            raise ValueError("variation cannot be negative")
        if not 0 < self.min_distance <= MAX_SAFE_CONTRAST_DISTANCE:
            raise ValueError(
                f"min_distance must be in (0, {MAX_SAFE_CONTRAST_DISTANCE:g}]"
            )
        if self.reveal_delay_ms < 0:
            raise ValueError("reveal_delay_ms cannot be negative")
        if self.similar_retry_limit < 0:
            raise ValueError("similar_retry_limit cannot be negative")
        if not self.base_palette:
            raise ValueError("base_palette cannot be empty")
        for color in self.base_palette:
            if not _HEX_PATTERN.match(color):
                raise ValueError(f"Palette color '{color}' is not #rrggbb")
        if len(set(self.base_palette)) != len(self.base_palette):
            raise ValueError("base_palette contains duplicates")
        if (self.policy == GenerationPolicy.BASIC_DISTINCT
                and len(self.base_palette) < OPTION_COUNT):
            raise ValueError(
                f"basic_distinct needs a base palette of at least {OPTION_COUNT} colors"
            )
        return self

    @classmethod
    def from_config(cls, config_class) -> 'GameSettings':
        """Build settings from a Config class (environment-backed)."""
        target_source = getattr(config_class, 'TARGET_SOURCE', '') or None
        return cls(
            max_lives=config_class.MAX_LIVES,
            max_hints=config_class.MAX_HINTS,
            max_help=config_class.MAX_HELP,
            variation=config_class.VARIATION_AMOUNT,
            min_distance=float(config_class.MIN_CONTRAST_DISTANCE),
            reveal_delay_ms=config_class.REVEAL_DELAY_MS,
            policy=GenerationPolicy.parse(config_class.GENERATION_POLICY),
            target_source=TargetSource.parse(target_source) if target_source else None,
            exclude_on_screen=config_class.EXCLUDE_ON_SCREEN,
        ).validate()

    def with_overrides(self, overrides: Optional[dict]) -> 'GameSettings':
        """
        Return a copy with client-supplied overrides applied.

        Only the rule knobs a player may pick are accepted; unknown keys raise.
        """
        if not overrides:
            return self

        allowed = {'policy', 'target_source', 'max_lives', 'max_hints', 'max_help'}
        unknown = set(overrides) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings: {sorted(unknown)}")

        changes = {}
        if 'policy' in overrides:
            changes['policy'] = GenerationPolicy.parse(overrides['policy'])
        if 'target_source' in overrides:
            source = overrides['target_source']
            changes['target_source'] = TargetSource.parse(source) if source else None
        for key in ('max_lives', 'max_hints', 'max_help'):
            if key in overrides:
                value = overrides[key]
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{key} must be an integer")
                changes[key] = value

        return replace(self, **changes).validate()


if __name__ == "__main__":

    try:
        validate_palette_integrity()
        print(" Palette validation passed")

        stats = get_palette_statistics()
        print(f" Palette statistics: {stats}")

        GameSettings().validate()
        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
