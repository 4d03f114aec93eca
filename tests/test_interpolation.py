import pytest

from mapscore.engine.norms.interpolation import bracket, interpolate_series, lerp


def test_lerp_between_points():
    assert lerp(230, (219, 50), (240, 90)) == pytest.approx(70.952, rel=1e-4)
    assert lerp(5, (5, 1.0), (5, 9.0)) == 1.0


def test_bracket_returns_surrounding_points():
    points = ((10, 1), (20, 2), (30, 3), (40, 4))
    assert bracket(points, 25) == (False, (20, 2), (30, 3))
    assert bracket(points, 11) == (False, (10, 1), (20, 2))


def test_bracket_stops_on_probed_exact_match():
    points = ((10, 1), (20, 2), (30, 3), (40, 4), (50, 5))
    exact, lower, upper = bracket(points, 30)
    assert exact is True
    assert lower is upper
    assert lower == (30, 3)


def test_bracket_tie_resolved_by_probe_order():
    # Keys 20 repeat; the first probe (index 2) wins.
    points = ((10, 1), (20, 2), (20, 3), (20, 4), (30, 5))
    assert bracket(points, 20) == (True, (20, 3), (20, 3))


def test_interpolate_series_clamps_to_endpoints():
    points = ((187, 3.0), (189, 3.2), (193, 3.5))
    assert interpolate_series(points, 150) == 3.0
    assert interpolate_series(points, 300) == 3.5
    assert interpolate_series(points, 188) == pytest.approx(3.1)
    assert interpolate_series(points, 189) == 3.2


def test_interpolate_series_requires_points():
    with pytest.raises(ValueError):
        interpolate_series((), 1.0)
