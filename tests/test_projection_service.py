import pytest

from mapscore.core.errors import ValidationError
from mapscore.engine.enums import TutoringPackage
from mapscore.services.projections import build_student_projection, complete_score


def test_complete_score_fills_percentile():
    score = complete_score(5, rit_score=230)
    assert (score.rit_score, score.percentile, score.grade) == (230, 75, 5)


def test_complete_score_fills_rit_score():
    score = complete_score(5.2, percentile=50)
    assert (score.rit_score, score.percentile, score.grade) == (219, 50, 5)


def test_complete_score_keeps_both_values():
    score = complete_score(5, rit_score=230, percentile=140)
    assert score.rit_score == 230
    assert score.percentile == 99


def test_complete_score_requires_a_value():
    with pytest.raises(ValidationError) as excinfo:
        complete_score(5)
    assert excinfo.value.detail == {"grade": 5}


def test_complete_score_with_custom_tables(sparse_tables):
    assert complete_score(5, rit_score=230, tables=sparse_tables).percentile == 71


def test_build_student_projection():
    result = build_student_projection(complete_score(5, rit_score=200, percentile=30))
    assert result.effective_grade_level == 4.0
    assert result.grade_level_score == 219
    assert result.stretch_score == 240
    assert len(result.projections) == 3
    assert result.recommendation.recommended_package is TutoringPackage.FORTY_HOUR

    payload = result.as_dict()
    assert payload["score"] == {"rit_score": 200, "percentile": 30, "grade": 5}
    assert payload["recommendation"] == {
        "hours_to_grade_level": 60,
        "hours_to_stretch": 136,
        "recommended_package": "40-hour",
    }
