from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from mapscore.engine.enums import TutoringPackage


@dataclass(frozen=True, slots=True)
class Score:
    """A student's MAP result in one subject."""

    rit_score: float
    percentile: int
    grade: int

    def as_dict(self) -> dict[str, float | int]:
        return {"rit_score": self.rit_score, "percentile": self.percentile, "grade": self.grade}


@dataclass(frozen=True, slots=True)
class Projection:
    """Expected outcome of one tutoring package."""

    package: TutoringPackage
    hours: int
    projected_rit_score: int
    projected_percentile: int
    improvement_points: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "package": self.package.value,
            "hours": self.hours,
            "projected_rit_score": self.projected_rit_score,
            "projected_percentile": self.projected_percentile,
            "improvement_points": self.improvement_points,
        }


@dataclass(frozen=True, slots=True)
class Recommendation:
    hours_to_grade_level: int
    hours_to_stretch: int
    recommended_package: TutoringPackage

    def as_dict(self) -> dict[str, Any]:
        return {
            "hours_to_grade_level": self.hours_to_grade_level,
            "hours_to_stretch": self.hours_to_stretch,
            "recommended_package": self.recommended_package.value,
        }


@dataclass(frozen=True, slots=True)
class DampingBand:
    """Multiply percentile movement by ``factor`` when the start is above ``above``."""

    above: float
    factor: float


@dataclass(frozen=True, slots=True)
class PercentileEstimate:
    points_per_rit: float
    damping: Tuple[DampingBand, ...]


@dataclass(frozen=True, slots=True)
class InputBounds:
    rit_min: float
    rit_max: float
    hours_max: float


@dataclass(frozen=True, slots=True)
class ProjectionParameters:
    """Immutable container for the projection model parameters."""

    rit_points_per_grade: float
    package_limits: Tuple[Tuple[TutoringPackage, float], ...]
    fallback_package: TutoringPackage
    grade_level_percentile: int
    stretch_percentile: int
    percentile_estimate: PercentileEstimate
    bounds: InputBounds

    @classmethod
    def from_raw(cls, payload: Mapping[str, Any]) -> "ProjectionParameters":
        recommend = payload["recommendation"]
        limits = tuple(
            sorted(
                (
                    (TutoringPackage(name), float(limit))
                    for name, limit in recommend["up_to_hours"].items()
                ),
                key=lambda item: item[1],
            )
        )
        targets = payload["targets"]
        estimate = payload["percentile_estimate"]
        bounds = payload["bounds"]
        return cls(
            rit_points_per_grade=float(payload["rit_points_per_grade"]),
            package_limits=limits,
            fallback_package=TutoringPackage(recommend["otherwise"]),
            grade_level_percentile=int(targets["grade_level_percentile"]),
            stretch_percentile=int(targets["stretch_percentile"]),
            percentile_estimate=PercentileEstimate(
                points_per_rit=float(estimate["points_per_rit"]),
                damping=tuple(
                    DampingBand(above=float(band["above"]), factor=float(band["factor"]))
                    for band in estimate.get("damping", ())
                ),
            ),
            bounds=InputBounds(
                rit_min=float(bounds["rit_min"]),
                rit_max=float(bounds["rit_max"]),
                hours_max=float(bounds["hours_max"]),
            ),
        )


__all__ = [
    "Score",
    "Projection",
    "Recommendation",
    "DampingBand",
    "PercentileEstimate",
    "InputBounds",
    "ProjectionParameters",
]
