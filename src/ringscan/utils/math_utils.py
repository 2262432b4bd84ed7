"""Mathematical utilities for galaxy analysis."""

import math
from typing import Tuple


def distance_to_origin(point: Tuple[float, float, float]) -> float:
    """Calculate distance from point to galactic origin (Sol at 0,0,0).

    Args:
        point: Point coordinates as (x, y, z) tuple

    Returns:
        Euclidean distance to origin
    """
    x, y, z = point
    return math.sqrt(x * x + y * y + z * z)


def percentage(numerator: int, denominator: int) -> float:
    """Percentage of numerator over denominator, NaN when denominator is zero."""
    if denominator == 0:
        return math.nan
    return numerator / denominator * 100
