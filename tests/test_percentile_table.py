import math

import pytest

from mapscore.engine.constants import ALL_GRADES
from mapscore.engine.norms import percentile_from_score, score_from_percentile
from mapscore.engine.norms.tables import normalize_grade, normalize_percentile


def test_interpolates_between_sparse_entries(sparse_tables):
    # 50 + 40 * (230 - 219) / (240 - 219) = 70.95
    assert sparse_tables.percentiles.percentile_from_score(230, 5) == 71


def test_builtin_table_interpolation():
    # grade 5: 73rd -> 229, 80th -> 233
    assert percentile_from_score(230, 5) == 75
    assert percentile_from_score(229, 5) == 73


def test_floor_and_ceiling_clamps(tables):
    for grade in ALL_GRADES:
        assert tables.percentiles.percentile_from_score(-1e9, grade) == 1
        assert tables.percentiles.percentile_from_score(1e9, grade) == 99
        assert tables.percentiles.percentile_from_score(-math.inf, grade) == 1
        assert tables.percentiles.percentile_from_score(math.inf, grade) == 99


def test_score_at_lowest_and_highest_entries_clamps():
    assert percentile_from_score(181, 5) == 1
    assert percentile_from_score(257, 5) == 99


def test_nan_score_is_treated_as_below_table():
    assert percentile_from_score(float("nan"), 5) == 1


def test_integers_too_large_for_float_are_clamped():
    huge = 10 ** 400
    assert percentile_from_score(huge, 5) == 99
    assert percentile_from_score(-huge, 5) == 1
    assert score_from_percentile(50, huge) == score_from_percentile(50, 12)
    assert score_from_percentile(50, -huge) == score_from_percentile(50, 0)
    assert score_from_percentile(huge, 5) == score_from_percentile(99, 5)
    assert normalize_percentile(-huge) == 1


def test_grade_is_rounded_and_clamped():
    assert normalize_grade(4.6) == 5
    assert normalize_grade(4.5) == 5
    assert normalize_grade(-3) == 0
    assert normalize_grade(15) == 12
    assert normalize_grade(float("inf")) == 12
    assert percentile_from_score(219, 4.6) == 50
    assert percentile_from_score(234, 40) == percentile_from_score(234, 12)


def test_score_from_percentile_exact_entry():
    assert score_from_percentile(50, 5) == 219
    assert score_from_percentile(90, 8) == 256
    assert score_from_percentile(73, 12) == 249


def test_score_from_percentile_interpolates_between_rows():
    # grade 5: 50th -> 219, 55th -> 221; 52nd -> 219.8
    assert score_from_percentile(52, 5) == 220
    # 51st -> 219.4
    assert score_from_percentile(51, 5) == 219


def test_score_from_percentile_clamps_inputs():
    assert normalize_percentile(0) == 1
    assert normalize_percentile(150) == 99
    assert score_from_percentile(0, 5) == score_from_percentile(1, 5)
    assert score_from_percentile(150, 5) == score_from_percentile(99, 5)
    assert score_from_percentile(50, -2) == score_from_percentile(50, 0)


def test_score_from_percentile_single_side_returns_nearest(sparse_tables):
    table = sparse_tables.percentiles
    assert table.score_from_percentile(95, 5) == 240
    assert table.score_from_percentile(10, 5) == 219
    assert table.score_from_percentile(70, 5) == 230


@pytest.mark.parametrize("grade", ALL_GRADES)
def test_scores_never_decrease_with_percentile(tables, grade):
    scores = [tables.percentiles.score_from_percentile(p, grade) for p in range(1, 100)]
    assert scores == sorted(scores)


def test_round_trip_on_table_entries(tables):
    for percentile, row in tables.percentiles.rows.items():
        for grade in row:
            rit = tables.percentiles.score_from_percentile(percentile, grade)
            assert abs(tables.percentiles.percentile_from_score(rit, grade) - percentile) <= 1


def test_published_anchor_rows():
    assert [score_from_percentile(p, 1) for p in (50, 73, 90)] == [176, 184, 193]
    assert [score_from_percentile(p, 5) for p in (50, 73, 90)] == [219, 229, 240]
