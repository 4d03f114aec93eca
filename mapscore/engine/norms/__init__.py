"""Percentile table engine: RIT score <-> percentile conversion per grade."""

from __future__ import annotations

from mapscore.engine.norms.loader import ReferenceTables, get_reference_tables
from mapscore.engine.norms.tables import GradeEquivalentCurve, PercentileTable

__all__ = [
    "GradeEquivalentCurve",
    "PercentileTable",
    "ReferenceTables",
    "get_reference_tables",
    "percentile_from_score",
    "score_from_percentile",
]


def percentile_from_score(rit_score: float, grade: float) -> int:
    """Percentile (1-99) of ``rit_score`` for ``grade`` using the loaded table."""
    return get_reference_tables().percentiles.percentile_from_score(rit_score, grade)


def score_from_percentile(percentile: float, grade: float) -> int:
    """RIT score at ``percentile`` for ``grade`` using the loaded table."""
    return get_reference_tables().percentiles.score_from_percentile(percentile, grade)
