from __future__ import annotations

from typing import Any, Optional, Sequence, TypeAlias, TYPE_CHECKING

from mapscore.engine.constants import PERCENTILE_MAX, PERCENTILE_MIN
from mapscore.engine.norms import get_reference_tables
from mapscore.engine.norms.loader import ReferenceTables
from mapscore.engine.norms.tables import PercentileTable

if TYPE_CHECKING:  # pragma: no cover
    import numpy as _np
    from numpy.typing import NDArray as _NDArray

    IntArray: TypeAlias = _NDArray[_np.int64]
    FloatArray: TypeAlias = _NDArray[_np.float64]
else:  # Runtime fallback keeps import lazy until needed
    IntArray = Any  # type: ignore[assignment]
    FloatArray = Any  # type: ignore[assignment]

_NUMPY_MODULE = None


def _require_numpy():
    """Import numpy lazily so single-record requests never load it."""

    global _NUMPY_MODULE
    if _NUMPY_MODULE is None:
        import numpy as np  # type: ignore[import-not-found]

        _NUMPY_MODULE = np
    return _NUMPY_MODULE


def _grade_percentiles(table: PercentileTable, grade: int, scores: FloatArray) -> IntArray:
    np_mod = _require_numpy()
    series = table.series(grade)
    pcts = np_mod.array([point[0] for point in series], dtype=np_mod.float64)
    rits = np_mod.array([point[1] for point in series], dtype=np_mod.float64)
    if rits.size > 1 and not bool(np_mod.all(np_mod.diff(rits) > 0)):
        # Tied RIT values resolve by binary-search probe order; keep scalar semantics.
        return np_mod.array(
            [table.percentile_from_score(float(value), grade) for value in scores],
            dtype=np_mod.int64,
        )
    if rits.size == 1:
        return np_mod.where(scores <= rits[0], PERCENTILE_MIN, PERCENTILE_MAX).astype(np_mod.int64)
    # Same operation order as the scalar lerp so half-way values round identically.
    inside = np_mod.clip(scores, rits[0], rits[-1])
    upper = np_mod.clip(np_mod.searchsorted(rits, inside, side="left"), 1, rits.size - 1)
    lower = upper - 1
    ratio = (inside - rits[lower]) / (rits[upper] - rits[lower])
    interpolated = np_mod.floor(pcts[lower] + (pcts[upper] - pcts[lower]) * ratio + 0.5)
    result = np_mod.where(scores <= rits[0], PERCENTILE_MIN, interpolated)
    result = np_mod.where(scores >= rits[-1], PERCENTILE_MAX, result)
    return result.astype(np_mod.int64)


def batch_percentiles(
    rit_scores: Sequence[float] | FloatArray,
    grades: Sequence[float] | FloatArray,
    *,
    tables: Optional[ReferenceTables] = None,
) -> IntArray:
    """Percentile for every ``(rit_score, grade)`` row of an import.

    Args:
        rit_scores: ``(n,)`` RIT scores; NaN is treated as below the table.
        grades: ``(n,)`` grades, rounded and clamped to 0-12 like the scalar path.

    Returns:
        ``(n,)`` int64 array of percentiles, equal row-for-row to
        :meth:`PercentileTable.percentile_from_score`.
    """

    np_mod = _require_numpy()
    scores = np_mod.asarray(rit_scores, dtype=np_mod.float64)
    grade_values = np_mod.asarray(grades, dtype=np_mod.float64)
    if scores.ndim != 1 or grade_values.shape != scores.shape:
        raise ValueError("rit_scores and grades must be 1-D arrays of equal length")
    if scores.size == 0:
        return np_mod.empty((0,), dtype=np_mod.int64)

    table = (tables if tables is not None else get_reference_tables()).percentiles
    scores = np_mod.where(np_mod.isnan(scores), -np_mod.inf, scores)
    grade_values = np_mod.where(np_mod.isnan(grade_values), 0.0, grade_values)
    normalized = np_mod.floor(np_mod.clip(grade_values, 0, 12) + 0.5).astype(np_mod.int64)

    result = np_mod.empty(scores.shape, dtype=np_mod.int64)
    for grade in np_mod.unique(normalized):
        mask = normalized == grade
        result[mask] = _grade_percentiles(table, int(grade), scores[mask])
    return result


__all__ = ["batch_percentiles"]
