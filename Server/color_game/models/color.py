"""
Color Data Model

A color is an RGB triple of integer channels in [0, 255].
"""

from typing import NamedTuple


class Color(NamedTuple):
    """RGB color with a canonical lowercase "#rrggbb" form."""
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return '#{:02x}{:02x}{:02x}'.format(self.r, self.g, self.b)

    def __str__(self) -> str:
        return self.hex
