# dominant_colors/errors.py
"""
Exceptions raised by the quantizer and its I/O helpers.

All derive from ValueError so callers that already guard bad input with
`except ValueError` keep working.
"""

from __future__ import annotations


class DominantColorsError(ValueError):
    """Base class for all quantizer errors."""


class InvalidColorCount(DominantColorsError):
    """Requested colour count is not an integer in [1, 255]."""

    def __init__(self, count: object) -> None:
        super().__init__(
            f"The color count needs to be between 1-255. You picked: {count}"
        )
        self.count = count


class EmptyOrUnreadableImage(DominantColorsError):
    """Image is missing, has zero pixels, or could not be decoded."""


class DegenerateClass(DominantColorsError):
    """A class has no pixels, so its mean and covariance are undefined."""

    def __init__(self, class_id: int) -> None:
        super().__init__(f"class {class_id} has no pixels")
        self.class_id = class_id


__all__ = [
    "DominantColorsError",
    "InvalidColorCount",
    "EmptyOrUnreadableImage",
    "DegenerateClass",
]
