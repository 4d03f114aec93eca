"""Bracketing and linear interpolation over sparse sample series.

A series is a tuple of ``(key, value)`` points sorted by key (ties allowed).
Both conversion directions of the percentile table and the grade-equivalent
curve are answered with the same two helpers.
"""

from __future__ import annotations

from typing import Sequence, Tuple

__all__ = ["Point", "bracket", "lerp", "interpolate_series"]

Point = Tuple[float, float]


def lerp(query: float, lower: Point, upper: Point) -> float:
    """Linear interpolation of ``query`` between two points."""

    lower_key, lower_value = lower
    upper_key, upper_value = upper
    if upper_key == lower_key:
        return lower_value
    ratio = (query - lower_key) / (upper_key - lower_key)
    return lower_value + (upper_value - lower_value) * ratio


def bracket(points: Sequence[Point], query: float) -> Tuple[bool, Point, Point]:
    """Binary search for the points surrounding ``query``.

    Requires ``points[0][0] < query < points[-1][0]``; callers handle the ends.
    Returns ``(exact, lower, upper)``. When a probed midpoint has exactly the
    query key the search stops there and ``lower is upper`` is that point, so
    with duplicate keys the probe order decides which point wins.
    """

    left = 0
    right = len(points) - 1
    while left < right - 1:
        mid = (left + right) // 2
        key = points[mid][0]
        if key == query:
            return True, points[mid], points[mid]
        if key < query:
            left = mid
        else:
            right = mid
    return False, points[left], points[right]


def interpolate_series(points: Sequence[Point], query: float) -> float:
    """Value at ``query``, interpolated between neighbours.

    Queries outside the sampled keys take the nearest endpoint value; the
    series is never extrapolated.
    """

    if not points:
        raise ValueError("cannot interpolate an empty series")
    first_key, first_value = points[0]
    last_key, last_value = points[-1]
    if query <= first_key:
        return first_value
    if query >= last_key:
        return last_value
    exact, lower, upper = bracket(points, query)
    if exact:
        return lower[1]
    return lerp(query, lower, upper)
