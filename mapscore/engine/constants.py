from __future__ import annotations

from typing import Final, Tuple

__all__ = [
    "GRADE_MIN",
    "GRADE_MAX",
    "ALL_GRADES",
    "PERCENTILE_MIN",
    "PERCENTILE_MAX",
]

GRADE_MIN: Final[int] = 0
GRADE_MAX: Final[int] = 12
ALL_GRADES: Final[Tuple[int, ...]] = tuple(range(GRADE_MIN, GRADE_MAX + 1))

PERCENTILE_MIN: Final[int] = 1
PERCENTILE_MAX: Final[int] = 99
