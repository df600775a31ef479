"""
Game Errors

Exceptions raised by the color game engine.
"""


class ColorGameError(Exception):
    """Base class for color game errors."""


class InvalidColorFormat(ColorGameError, ValueError):
    """A color string is not an optional '#' followed by six hex digits."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid color format: {value!r}")


class ColorGenerationError(ColorGameError, RuntimeError):
    """The generator could not collect enough distinct colors."""
