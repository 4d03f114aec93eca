import pytest
from fastapi.testclient import TestClient

from mapscore.engine.constants import ALL_GRADES
from mapscore.engine.norms.loader import build_reference_tables, load_reference_tables
from mapscore.main import app


def make_tables(rows, grade_equivalents=None, *, source="test"):
    """Build reference tables, copying grade 5's row to grades that lack one."""
    filled = {}
    for percentile, grades in rows.items():
        template = grades.get(5, next(iter(grades.values())))
        filled[percentile] = {grade: grades.get(grade, template) for grade in ALL_GRADES}
    curve = grade_equivalents or {200: 4.0, 219: 5.5, 240: 7.4}
    return build_reference_tables(filled, curve, source=source)


@pytest.fixture(scope="session")
def tables():
    return load_reference_tables()


@pytest.fixture()
def sparse_tables():
    return make_tables({50: {5: 219}, 90: {5: 240}})


@pytest.fixture()
def client():
    return TestClient(app)
