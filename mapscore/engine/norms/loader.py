"""Process-wide reference tables, loaded once and never mutated."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from mapscore.core.config import get_settings
from mapscore.core.errors import ConfigurationError, InvalidReferenceData
from mapscore.core.logging import get_logger
from mapscore.data.norms import PERCENTILE_RIT_NORMS, RIT_GRADE_EQUIVALENTS
from mapscore.engine.norms.tables import GradeEquivalentCurve, PercentileTable

__all__ = [
    "ReferenceTables",
    "build_reference_tables",
    "load_reference_tables",
    "get_reference_tables",
]

logger = get_logger("mapscore.engine.norms", component="engine")

BUILTIN_SOURCE = "builtin"


@dataclass(frozen=True, slots=True)
class ReferenceTables:
    percentiles: PercentileTable
    grade_equivalents: GradeEquivalentCurve
    source: str

    def stats(self) -> Dict[str, Any]:
        low, high = self.grade_equivalents.rit_range
        return {
            "source": self.source,
            "percentile_rows": len(self.percentiles.rows),
            "percentile_entries": self.percentiles.entry_count(),
            "grade_equivalent_points": len(self.grade_equivalents.points),
            "grade_equivalent_rit_range": [low, high],
        }


def build_reference_tables(
    percentiles: Mapping[Any, Mapping[Any, Any]],
    grade_equivalents: Mapping[Any, Any],
    *,
    source: str,
) -> ReferenceTables:
    """Validate raw mappings into :class:`ReferenceTables`.

    Raises:
        InvalidReferenceData: when either table violates its invariants.
    """
    try:
        tables = ReferenceTables(
            percentiles=PercentileTable(percentiles),
            grade_equivalents=GradeEquivalentCurve(grade_equivalents),
            source=source,
        )
    except InvalidReferenceData as exc:
        logger.error(
            "norm_tables_invalid",
            extra={"structured_data": {"source": source, "reason": exc.message, "detail": exc.detail}},
        )
        raise
    logger.info("norm_tables_loaded", extra={"structured_data": tables.stats()})
    return tables


def _read_override(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read norms file {path}", detail={"path": str(path)}
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Norms file {path} is not valid YAML", detail={"path": str(path)}
        ) from exc
    if not isinstance(payload, Mapping):
        raise ConfigurationError(
            "Norms file must be a mapping", detail={"path": str(path)}
        )
    missing = [key for key in ("percentiles", "grade_equivalents") if key not in payload]
    if missing:
        raise ConfigurationError(
            "Norms file is missing sections", detail={"path": str(path), "missing": missing}
        )
    return payload


def load_reference_tables(path: Optional[Path] = None) -> ReferenceTables:
    """Load the built-in tables, or the YAML override at ``path``."""
    if path is None:
        return build_reference_tables(
            PERCENTILE_RIT_NORMS, RIT_GRADE_EQUIVALENTS, source=BUILTIN_SOURCE
        )
    payload = _read_override(Path(path))
    return build_reference_tables(
        payload["percentiles"], payload["grade_equivalents"], source=f"file:{path}"
    )


@lru_cache(maxsize=1)
def get_reference_tables() -> ReferenceTables:
    return load_reference_tables(get_settings().norms_file)
