import pytest

from mapscore.core.errors import ConfigurationError, InvalidReferenceData
from mapscore.engine.constants import ALL_GRADES
from mapscore.engine.norms.loader import load_reference_tables
from mapscore.engine.norms.tables import GradeEquivalentCurve, PercentileTable


def _full_row(rit):
    return {grade: rit for grade in ALL_GRADES}


def test_rejects_rit_that_falls_as_percentile_rises():
    rows = {50: _full_row(219), 90: _full_row(240)}
    rows[90][5] = 210
    with pytest.raises(InvalidReferenceData) as excinfo:
        PercentileTable(rows)
    assert excinfo.value.detail["grade"] == 5
    assert excinfo.value.detail["percentiles"] == [50, 90]


def test_accepts_flat_segments():
    table = PercentileTable({50: _full_row(219), 60: _full_row(219), 90: _full_row(240)})
    assert table.score_from_percentile(55, 5) == 219


def test_rejects_missing_grades():
    rows = {50: {grade: 219 for grade in range(1, 13)}}
    with pytest.raises(InvalidReferenceData) as excinfo:
        PercentileTable(rows)
    assert excinfo.value.detail == {"missing_grades": [0]}


@pytest.mark.parametrize(
    "rows",
    [
        {},
        {0: _full_row(200)},
        {100: _full_row(200)},
        {50: {13: 200}},
        {50: {**_full_row(219), 5: 219.5}},
        {50: {**_full_row(219), 5: "n/a"}},
        {"fifty": _full_row(219)},
        {50: [219, 220]},
    ],
)
def test_rejects_malformed_rows(rows):
    with pytest.raises(InvalidReferenceData):
        PercentileTable(rows)


def test_accepts_string_keys_from_csv_or_yaml():
    table = PercentileTable({"50": {str(g): "219" for g in ALL_GRADES}})
    assert table.lookup(50, 5) == 219


def test_rows_are_read_only(tables):
    with pytest.raises(TypeError):
        tables.percentiles.rows[50] = {}
    with pytest.raises(TypeError):
        tables.percentiles.rows[50][5] = 1


def test_grade_equivalent_curve_rejects_decreasing_values():
    with pytest.raises(InvalidReferenceData):
        GradeEquivalentCurve({200: 4.0, 210: 3.9})


def test_grade_equivalent_curve_rejects_empty_and_non_numeric():
    with pytest.raises(InvalidReferenceData):
        GradeEquivalentCurve({})
    with pytest.raises(InvalidReferenceData):
        GradeEquivalentCurve({200: "four"})
    with pytest.raises(InvalidReferenceData):
        GradeEquivalentCurve({200.0: 4.0, "200": 4.1})


def test_builtin_tables_load(tables):
    stats = tables.stats()
    assert stats["source"] == "builtin"
    assert stats["percentile_entries"] == 20 * 13
    assert stats["grade_equivalent_rit_range"] == [187, 285]


def test_yaml_override_is_loaded_and_validated(tmp_path):
    path = tmp_path / "norms.yaml"
    rows = "\n".join(
        f"  {pct}: {{{', '.join(f'{g}: {rit}' for g in ALL_GRADES)}}}"
        for pct, rit in ((50, 219), (90, 240))
    )
    path.write_text(
        f"percentiles:\n{rows}\ngrade_equivalents:\n  200: 4.0\n  240: 7.4\n",
        encoding="utf-8",
    )
    tables = load_reference_tables(path)
    assert tables.source == f"file:{path}"
    assert tables.percentiles.percentile_from_score(230, 5) == 71
    assert tables.grade_equivalents.grade_equivalent(220) == pytest.approx(5.7)


def test_yaml_override_with_bad_data_fails_fast(tmp_path):
    path = tmp_path / "norms.yaml"
    path.write_text(
        "percentiles:\n  50: {5: 219}\ngrade_equivalents:\n  200: 4.0\n",
        encoding="utf-8",
    )
    with pytest.raises(InvalidReferenceData):
        load_reference_tables(path)


def test_yaml_override_problems_are_configuration_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_reference_tables(tmp_path / "missing.yaml")

    partial = tmp_path / "partial.yaml"
    partial.write_text("percentiles: {}\n", encoding="utf-8")
    with pytest.raises(ConfigurationError) as excinfo:
        load_reference_tables(partial)
    assert excinfo.value.detail["missing"] == ["grade_equivalents"]

    broken = tmp_path / "broken.yaml"
    broken.write_text("percentiles: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_reference_tables(broken)
