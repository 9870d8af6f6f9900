"""
Resize options: which axis to carve along and whether to grow or shrink.
"""

from enum import Enum


class Mode(str, Enum):
    """Whether seams are removed (shrink) or synthesized (grow)."""

    GROW = 'grow'
    SHRINK = 'shrink'

    @classmethod
    def coerce(cls, value) -> 'Mode':
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid mode: {value!r}. Must be 'shrink' or 'grow'.")


class Orientation(str, Enum):
    """
    Axis of resizing.

    HORIZONTAL changes the image width. VERTICAL changes the height and is
    implemented by transposing the grid and carving horizontally.
    """

    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'

    @classmethod
    def coerce(cls, value) -> 'Orientation':
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid orientation: {value!r}. "
                             f"Must be 'horizontal' or 'vertical'.")
