"""Improvement projection engine.

Turns tutoring hours into an expected RIT gain and answers the reverse
question, "how many hours to reach a target score". Both directions are
calibrated on the same reference points::

    10 hours -> 0.2 grade levels
    20 hours -> 0.5 grade levels
    40 hours -> 1.0 grade level

``grade_equivalent_gain`` (hours -> gain) and ``hours_for_improvement``
(gain -> hours) are two separate piecewise-linear models and are not exact
inverses of each other; numbers already shown to families depend on both
curves as they are.
"""

from __future__ import annotations

import math
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from mapscore.core.errors import ConfigurationError
from mapscore.core.numeric import as_float, clamp, finite_or, round_half_up, round_to
from mapscore.engine.constants import PERCENTILE_MAX, PERCENTILE_MIN
from mapscore.engine.enums import TutoringPackage
from mapscore.engine.norms import get_reference_tables
from mapscore.engine.norms.loader import ReferenceTables
from mapscore.engine.types import Projection, ProjectionParameters, Recommendation, Score

__all__ = [
    "load_parameters",
    "grade_equivalent",
    "effective_grade_level",
    "hours_for_improvement",
    "grade_equivalent_gain",
    "projected_score",
    "hours_to_target",
    "grade_level_score",
    "stretch_score",
    "hours_to_grade_level",
    "hours_to_percentile",
    "recommended_package",
    "estimate_new_percentile",
    "build_projections",
    "build_recommendation",
]

PARAMETERS_PATH = Path(__file__).with_name("projection.yaml")


@lru_cache(maxsize=1)
def load_parameters() -> ProjectionParameters:
    try:
        with PARAMETERS_PATH.open("r", encoding="utf-8") as fh:
            raw: Dict[str, Any] = yaml.safe_load(fh)
        return ProjectionParameters.from_raw(raw)
    except (OSError, yaml.YAMLError, KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(
            "Projection parameters could not be loaded",
            detail={"path": str(PARAMETERS_PATH), "error": str(exc)},
        ) from exc


def _params(params: Optional[ProjectionParameters]) -> ProjectionParameters:
    return params if params is not None else load_parameters()


def _tables(tables: Optional[ReferenceTables]) -> ReferenceTables:
    return tables if tables is not None else get_reference_tables()


def _bounded_rit(value: float, params: ProjectionParameters) -> float:
    bounds = params.bounds
    return clamp(finite_or(as_float(value), bounds.rit_min), bounds.rit_min, bounds.rit_max)


def _finite_rit(value: float, params: ProjectionParameters) -> float:
    """Finite scores pass through untouched; NaN and infinities are bounded."""
    score = as_float(value)
    if math.isfinite(score):
        return score
    return _bounded_rit(score, params)


def _bounded_hours(value: float, params: ProjectionParameters) -> float:
    return clamp(finite_or(as_float(value), 0.0), 0.0, params.bounds.hours_max)


def grade_equivalent(rit_score: float, *, tables: Optional[ReferenceTables] = None) -> float:
    """R50 grade equivalent of a RIT score (unrounded)."""
    return _tables(tables).grade_equivalents.grade_equivalent(rit_score)


def effective_grade_level(rit_score: float, *, tables: Optional[ReferenceTables] = None) -> float:
    """Grade equivalent rounded to one decimal for display."""
    return round_to(grade_equivalent(rit_score, tables=tables), 1)


def hours_for_improvement(delta: float) -> float:
    """Tutoring hours needed to gain ``delta`` grade levels.

    Each band costs more per grade level than the one before it.
    """
    delta = finite_or(delta, 0.0)
    if delta <= 0:
        return 0.0
    if delta <= 0.2:
        return delta * 50
    if delta <= 0.5:
        return 10 + (delta - 0.2) * (100 / 3)
    if delta <= 1.0:
        return 20 + (delta - 0.5) * 40
    return delta * 40


def grade_equivalent_gain(hours: float) -> float:
    """Grade levels gained from ``hours`` of tutoring (hours taken as given)."""
    if hours <= 10:
        return (hours / 10) * 0.2
    if hours <= 20:
        return 0.2 + ((hours - 10) / 10) * 0.3
    if hours <= 40:
        return 0.5 + ((hours - 20) / 20) * 0.5
    return 1.0 + (hours - 40) / 40


def projected_score(
    current_score: float,
    tutoring_hours: float,
    *,
    params: Optional[ProjectionParameters] = None,
) -> int:
    """RIT score expected after ``tutoring_hours`` of tutoring."""
    params = _params(params)
    current = _finite_rit(current_score, params)
    gain = grade_equivalent_gain(_bounded_hours(tutoring_hours, params))
    return round_half_up(current + gain * params.rit_points_per_grade)


def hours_to_target(
    current_score: float,
    target_score: float,
    *,
    tables: Optional[ReferenceTables] = None,
    params: Optional[ProjectionParameters] = None,
) -> int:
    """Whole hours of tutoring to move from ``current_score`` to ``target_score``.

    Zero when the student is already at or above the target.
    """
    params = _params(params)
    current = _bounded_rit(current_score, params)
    target = _bounded_rit(target_score, params)
    if current >= target:
        return 0
    delta = grade_equivalent(target, tables=tables) - grade_equivalent(current, tables=tables)
    return round_half_up(hours_for_improvement(delta))


def grade_level_score(
    grade: float,
    *,
    tables: Optional[ReferenceTables] = None,
    params: Optional[ProjectionParameters] = None,
) -> int:
    """RIT score that counts as "at grade level" (the 50th percentile)."""
    percentile = _params(params).grade_level_percentile
    return _tables(tables).percentiles.score_from_percentile(percentile, grade)


def stretch_score(
    grade: float,
    *,
    tables: Optional[ReferenceTables] = None,
    params: Optional[ProjectionParameters] = None,
) -> int:
    """RIT score of the stretch goal (the 90th percentile)."""
    percentile = _params(params).stretch_percentile
    return _tables(tables).percentiles.score_from_percentile(percentile, grade)


def hours_to_grade_level(
    current_score: float,
    grade: float,
    *,
    tables: Optional[ReferenceTables] = None,
    params: Optional[ProjectionParameters] = None,
) -> int:
    target = grade_level_score(grade, tables=tables, params=params)
    return hours_to_target(current_score, target, tables=tables, params=params)


def hours_to_percentile(
    current_score: float,
    current_percentile: float,
    grade: float,
    target_percentile: Optional[int] = None,
    *,
    tables: Optional[ReferenceTables] = None,
    params: Optional[ProjectionParameters] = None,
) -> int:
    """Hours to reach ``target_percentile`` (the stretch percentile by default)."""
    params = _params(params)
    target_pct = params.stretch_percentile if target_percentile is None else target_percentile
    if finite_or(as_float(current_percentile), PERCENTILE_MIN) >= target_pct:
        return 0
    target = _tables(tables).percentiles.score_from_percentile(target_pct, grade)
    return hours_to_target(current_score, target, tables=tables, params=params)


def recommended_package(
    hours_to_grade_level: float,
    hours_to_stretch: float,
    *,
    params: Optional[ProjectionParameters] = None,
) -> TutoringPackage:
    """Smallest package that covers the most pressing goal.

    Closing the grade-level gap comes first; the stretch goal only decides
    once the student is already at grade level.
    """
    params = _params(params)
    grade_hours = finite_or(hours_to_grade_level, 0.0)
    target_hours = grade_hours if grade_hours > 0 else finite_or(hours_to_stretch, 0.0)
    for package, limit in params.package_limits:
        if target_hours <= limit:
            return package
    return params.fallback_package


def estimate_new_percentile(
    current_score: float,
    new_score: float,
    current_percentile: float,
    *,
    params: Optional[ProjectionParameters] = None,
) -> int:
    """Rough percentile after moving from ``current_score`` to ``new_score``.

    Percentile movement per RIT point shrinks toward the top of the
    distribution, so the estimate is damped for students who start high.
    """
    estimate = _params(params).percentile_estimate
    start = clamp(
        finite_or(as_float(current_percentile), PERCENTILE_MIN), PERCENTILE_MIN, PERCENTILE_MAX
    )
    gained = finite_or(as_float(new_score), 0.0) - finite_or(as_float(current_score), 0.0)
    change = gained * estimate.points_per_rit
    for band in estimate.damping:
        if start > band.above:
            change *= band.factor
    moved = clamp(float(start + change), PERCENTILE_MIN, PERCENTILE_MAX)
    return round_half_up(moved)


def build_projections(
    current_score: float,
    current_percentile: float,
    *,
    params: Optional[ProjectionParameters] = None,
) -> List[Projection]:
    """One projection per tutoring package, smallest package first."""
    params = _params(params)
    current = round_half_up(_finite_rit(current_score, params))
    projections: List[Projection] = []
    for package in TutoringPackage:
        projected = projected_score(current_score, package.hours, params=params)
        projections.append(
            Projection(
                package=package,
                hours=package.hours,
                projected_rit_score=projected,
                projected_percentile=estimate_new_percentile(
                    current, projected, current_percentile, params=params
                ),
                improvement_points=projected - current,
            )
        )
    return projections


def build_recommendation(
    score: Score,
    *,
    tables: Optional[ReferenceTables] = None,
    params: Optional[ProjectionParameters] = None,
) -> Recommendation:
    to_grade_level = hours_to_grade_level(score.rit_score, score.grade, tables=tables, params=params)
    to_stretch = hours_to_percentile(
        score.rit_score, score.percentile, score.grade, tables=tables, params=params
    )
    return Recommendation(
        hours_to_grade_level=to_grade_level,
        hours_to_stretch=to_stretch,
        recommended_package=recommended_package(to_grade_level, to_stretch, params=params),
    )
