"""
    Value types shared by the models: points and hex colors with validation.
"""
import math
import re
from typing import Tuple

Point = Tuple[float, float]

_HEX_COLOR = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


class ColorValidator:
    """Validation of node colors (``#RGB`` or ``#RRGGBB``)"""

    @staticmethod
    def is_valid(value: str) -> bool:
        return isinstance(value, str) and bool(_HEX_COLOR.match(value))

    @staticmethod
    def validate(value: str) -> str:
        """
        Return the color unchanged if it is a hex color.

        Raises:
            ValueError: If the value is not a ``#RGB`` / ``#RRGGBB`` string.
        """
        if not ColorValidator.is_valid(value):
            raise ValueError(f"Invalid color {value!r}: expected #RGB or #RRGGBB")
        return value


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points"""
    return math.hypot(a[0] - b[0], a[1] - b[1])
