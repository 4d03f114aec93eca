from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from mapscore.core.errors import InvalidReferenceData
from mapscore.core.numeric import as_float, clamp, finite_or, round_half_up
from mapscore.engine.constants import (
    ALL_GRADES,
    GRADE_MAX,
    GRADE_MIN,
    PERCENTILE_MAX,
    PERCENTILE_MIN,
)
from mapscore.engine.norms.interpolation import Point, bracket, interpolate_series, lerp

__all__ = [
    "PercentileTable",
    "GradeEquivalentCurve",
    "normalize_grade",
    "normalize_percentile",
]


def normalize_grade(grade: float) -> int:
    """Round a grade and clamp it into 0 (kindergarten) .. 12."""
    return round_half_up(clamp(finite_or(as_float(grade), GRADE_MIN), GRADE_MIN, GRADE_MAX))


def normalize_percentile(percentile: float) -> int:
    return round_half_up(
        clamp(finite_or(as_float(percentile), PERCENTILE_MIN), PERCENTILE_MIN, PERCENTILE_MAX)
    )


def _as_int_key(value: Any, *, label: str) -> int:
    if isinstance(value, bool):
        raise InvalidReferenceData(f"{label} key must be an integer", detail={label: value})
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidReferenceData(
            f"{label} key must be an integer", detail={label: value}
        ) from exc
    if not math.isfinite(number) or number != int(number):
        raise InvalidReferenceData(f"{label} key must be an integer", detail={label: value})
    return int(number)


def _as_finite(value: Any, *, label: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidReferenceData(f"{label} must be numeric", detail={label: value}) from exc
    if not math.isfinite(number):
        raise InvalidReferenceData(f"{label} must be finite", detail={label: value})
    return number


class PercentileTable:
    """Percentile -> grade -> RIT lookup with interpolation in both directions.

    Construction validates the data: percentiles 1-99, grades 0-12, at least
    one entry per grade, and RIT non-decreasing as percentile rises within a
    grade. Instances are read-only after construction.
    """

    __slots__ = ("_rows", "_by_percentile", "_by_score")

    def __init__(self, rows: Mapping[Any, Mapping[Any, Any]]) -> None:
        if not isinstance(rows, Mapping) or not rows:
            raise InvalidReferenceData("Percentile table is empty")

        normalized: Dict[int, Dict[int, int]] = {}
        for raw_percentile, grades in rows.items():
            percentile = _as_int_key(raw_percentile, label="percentile")
            if not PERCENTILE_MIN <= percentile <= PERCENTILE_MAX:
                raise InvalidReferenceData(
                    "Percentile outside 1-99", detail={"percentile": percentile}
                )
            if not isinstance(grades, Mapping):
                raise InvalidReferenceData(
                    "Percentile row must map grade to RIT", detail={"percentile": percentile}
                )
            row = normalized.setdefault(percentile, {})
            for raw_grade, raw_rit in grades.items():
                grade = _as_int_key(raw_grade, label="grade")
                if not GRADE_MIN <= grade <= GRADE_MAX:
                    raise InvalidReferenceData(
                        "Grade outside 0-12", detail={"percentile": percentile, "grade": grade}
                    )
                rit = _as_finite(raw_rit, label="rit_score")
                if rit != int(rit):
                    raise InvalidReferenceData(
                        "RIT score must be an integer",
                        detail={"percentile": percentile, "grade": grade, "rit_score": raw_rit},
                    )
                row[grade] = int(rit)

        by_percentile: Dict[int, Tuple[Point, ...]] = {}
        missing: List[int] = []
        for grade in ALL_GRADES:
            series = tuple(
                (percentile, normalized[percentile][grade])
                for percentile in sorted(normalized)
                if grade in normalized[percentile]
            )
            if not series:
                missing.append(grade)
                continue
            for (low_pct, low_rit), (high_pct, high_rit) in zip(series, series[1:]):
                if high_rit < low_rit:
                    raise InvalidReferenceData(
                        "RIT decreases as percentile rises",
                        detail={
                            "grade": grade,
                            "percentiles": [low_pct, high_pct],
                            "rit_scores": [low_rit, high_rit],
                        },
                    )
            by_percentile[grade] = series
        if missing:
            raise InvalidReferenceData(
                "Percentile table has no entries for some grades",
                detail={"missing_grades": missing},
            )

        self._rows = MappingProxyType(
            {pct: MappingProxyType(dict(row)) for pct, row in sorted(normalized.items())}
        )
        self._by_percentile = MappingProxyType(by_percentile)
        self._by_score = MappingProxyType(
            {
                grade: tuple((rit, pct) for pct, rit in series)
                for grade, series in by_percentile.items()
            }
        )

    @property
    def rows(self) -> Mapping[int, Mapping[int, int]]:
        return self._rows

    def entry_count(self) -> int:
        return sum(len(row) for row in self._rows.values())

    def series(self, grade: float) -> Tuple[Point, ...]:
        """Known ``(percentile, rit)`` points for a grade, ascending."""
        return self._by_percentile[normalize_grade(grade)]

    def lookup(self, percentile: int, grade: int) -> int | None:
        row = self._rows.get(percentile)
        if row is None:
            return None
        return row.get(grade)

    def percentile_from_score(self, rit_score: float, grade: float) -> int:
        """Percentile (1-99) of a RIT score within a grade.

        At or below the lowest tabulated RIT the answer is 1; at or above the
        highest it is 99. Between, the surrounding entries are found by binary
        search and interpolated.
        """
        points = self._by_score[normalize_grade(grade)]
        rit = finite_or(as_float(rit_score), -math.inf)
        if rit <= points[0][0]:
            return PERCENTILE_MIN
        if rit >= points[-1][0]:
            return PERCENTILE_MAX
        exact, lower, upper = bracket(points, rit)
        if exact:
            return int(lower[1])
        return round_half_up(lerp(rit, lower, upper))

    def score_from_percentile(self, percentile: float, grade: float) -> int:
        """RIT score at a percentile within a grade.

        Exact entries are returned as is. Otherwise the nearest tabulated
        percentiles on each side are interpolated; when only one side exists
        its value is returned.
        """
        valid_percentile = normalize_percentile(percentile)
        valid_grade = normalize_grade(grade)
        exact = self.lookup(valid_percentile, valid_grade)
        if exact is not None:
            return exact
        return round_half_up(interpolate_series(self._by_percentile[valid_grade], valid_percentile))


class GradeEquivalentCurve:
    """RIT -> R50 grade equivalent samples, interpolated between keys."""

    __slots__ = ("_points",)

    def __init__(self, samples: Mapping[Any, Any]) -> None:
        if not isinstance(samples, Mapping) or not samples:
            raise InvalidReferenceData("Grade-equivalent curve is empty")
        points = sorted(
            (_as_int_key(rit, label="rit_score"), _as_finite(value, label="grade_equivalent"))
            for rit, value in samples.items()
        )
        for (low_rit, low_value), (high_rit, high_value) in zip(points, points[1:]):
            if low_rit == high_rit:
                raise InvalidReferenceData(
                    "Duplicate RIT key in grade-equivalent curve", detail={"rit_score": low_rit}
                )
            if high_value < low_value:
                raise InvalidReferenceData(
                    "Grade equivalent decreases as RIT rises",
                    detail={"rit_scores": [low_rit, high_rit], "values": [low_value, high_value]},
                )
        self._points: Tuple[Point, ...] = tuple(points)

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    @property
    def rit_range(self) -> Tuple[int, int]:
        return int(self._points[0][0]), int(self._points[-1][0])

    def grade_equivalent(self, rit_score: float) -> float:
        """Fractional grade level represented by a RIT score (clamped to the sampled range)."""
        rit = finite_or(as_float(rit_score), -math.inf)
        return interpolate_series(self._points, rit)
