import csv
import sys
from hashlib import sha256
from pathlib import Path

import yaml

from mapscore.core.errors import InvalidReferenceData
from mapscore.data.norms import RIT_GRADE_EQUIVALENTS
from mapscore.engine.norms.loader import build_reference_tables

"""
CLI usage:
python -m scripts.import_norms <percentiles_csv> <output_yaml> [grade_equivalents_csv]
Percentile CSV columns: percentile,grade,rit_score
Grade-equivalent CSV columns: rit_score,grade_equivalent (built-in curve when omitted)
Point MAPSCORE_NORMS_FILE at the output to serve the imported tables.
"""

PERCENTILE_HEADER = {"percentile", "grade", "rit_score"}
GRADE_EQUIVALENT_HEADER = {"rit_score", "grade_equivalent"}


def _read_rows(path, expected):
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    reader = csv.DictReader(content.splitlines())
    if not reader.fieldnames or set(reader.fieldnames) != expected:
        return None, content
    return list(reader), content


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) not in (2, 3):
        print("Usage: python -m scripts.import_norms <percentiles_csv> <output_yaml> [grade_equivalents_csv]")
        return 1
    percentile_path, output_path = args[0], Path(args[1])

    rows, content = _read_rows(percentile_path, PERCENTILE_HEADER)
    if rows is None:
        print("Percentile CSV header must be: percentile,grade,rit_score")
        return 2
    percentiles = {}
    try:
        for row in rows:
            pct_row = percentiles.setdefault(float(row["percentile"]), {})
            grade = float(row["grade"])
            if grade in pct_row:
                print(f"Percentile CSV repeats percentile {row['percentile']} for grade {row['grade']}")
                return 2
            pct_row[grade] = float(row["rit_score"])
    except ValueError as exc:
        print(f"Percentile CSV contains a non-numeric value: {exc}")
        return 2

    grade_equivalents = dict(RIT_GRADE_EQUIVALENTS)
    if len(args) == 3:
        ge_rows, ge_content = _read_rows(args[2], GRADE_EQUIVALENT_HEADER)
        if ge_rows is None:
            print("Grade-equivalent CSV header must be: rit_score,grade_equivalent")
            return 2
        try:
            grade_equivalents = {float(r["rit_score"]): float(r["grade_equivalent"]) for r in ge_rows}
        except ValueError as exc:
            print(f"Grade-equivalent CSV contains a non-numeric value: {exc}")
            return 2
        content += ge_content

    try:
        tables = build_reference_tables(percentiles, grade_equivalents, source=f"file:{output_path}")
    except InvalidReferenceData as exc:
        print(f"Rejected: {exc.message} {exc.detail}")
        return 3

    document = {
        "source_sha256": sha256(content.encode("utf-8")).hexdigest(),
        "percentiles": {pct: dict(row) for pct, row in tables.percentiles.rows.items()},
        "grade_equivalents": {int(rit): value for rit, value in tables.grade_equivalents.points},
    }
    with open(output_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(document, f, sort_keys=False)
    print(f"Wrote {tables.percentiles.entry_count()} percentile entries to {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
