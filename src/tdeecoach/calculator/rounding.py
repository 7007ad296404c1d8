"""Integer rounding for reported calorie and gram values."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up.

    The built-in ``round()`` sends ties to the even neighbour, so 1742.5
    would report as 1742 kcal.
    """
    return int(math.floor(value + 0.5))
