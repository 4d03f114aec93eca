from __future__ import annotations

import numpy as np
import pytest

from mapscore.engine.constants import ALL_GRADES
from mapscore.services.batch_scores import batch_percentiles

from conftest import make_tables


def test_batch_matches_scalar_for_every_grade(tables):
    scores = np.arange(120, 300, 0.5)
    for grade in ALL_GRADES:
        grades = np.full(scores.shape, grade)
        batch = batch_percentiles(scores, grades, tables=tables)
        scalar = [tables.percentiles.percentile_from_score(float(s), grade) for s in scores]
        assert batch.tolist() == scalar


def test_batch_handles_mixed_grades_and_nan(tables):
    scores = [230.0, float("nan"), 1e6, 219.0]
    grades = [5, 5, 3, 4.6]
    result = batch_percentiles(scores, grades, tables=tables)
    assert result.dtype == np.int64
    assert result.tolist() == [75, 1, 99, 50]


def test_batch_with_tied_table_falls_back_to_scalar():
    tied = make_tables({40: {5: 215}, 50: {5: 219}, 60: {5: 219}, 90: {5: 240}})
    scores = [219.0, 218.0, 230.0]
    result = batch_percentiles(scores, [5, 5, 5], tables=tied)
    assert result.tolist() == [
        tied.percentiles.percentile_from_score(value, 5) for value in scores
    ]


def test_batch_validates_shape(tables):
    with pytest.raises(ValueError):
        batch_percentiles([200.0, 210.0], [5], tables=tables)
    with pytest.raises(ValueError):
        batch_percentiles(np.zeros((2, 2)), np.zeros((2, 2)), tables=tables)


def test_batch_empty(tables):
    assert batch_percentiles([], [], tables=tables).shape == (0,)
