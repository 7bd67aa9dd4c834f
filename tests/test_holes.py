import pytest

from tolgeom.errors import UnsupportedTopologyError
from tolgeom.geom import winding
from tolgeom.holes import dedupe, split_hole
from tolgeom.tolerance import Tolerance

TOL = Tolerance(1e-8)


def _area(ring):
    total = 0.0
    for i, (x0, y0) in enumerate(ring):
        x1, y1 = ring[(i + 1) % len(ring)]
        total += x0 * y1 - x1 * y0
    return total / 2.0


def _count(ring, point):
    return sum(1 for p in ring if TOL.close(p[0], point[0]) and TOL.close(p[1], point[1]))


EXTERIOR = [(0, 0), (10, 0), (10, 10), (0, 10)]
HOLE = [(3, 3), (6, 3), (6, 6), (3, 6)]


def test_square_hole():
    upper, lower = split_hole(EXTERIOR, HOLE, TOL)
    assert len(upper) == 8
    assert len(lower) == 8
    assert _area(upper) == pytest.approx(50.5)
    assert _area(lower) == pytest.approx(40.5)
    for point in [(0, 4.5), (3, 4.5), (6, 4.5), (10, 4.5)]:
        assert _count(upper, point) == 1
        assert _count(lower, point) == 1
    assert _count(upper, (0, 10)) == 1
    assert _count(lower, (0, 0)) == 1


def test_orientation_of_inputs_does_not_matter():
    upper, lower = split_hole(list(reversed(EXTERIOR)), list(reversed(HOLE)), TOL)
    assert winding(upper) == -1
    assert winding(lower) == -1
    assert _area(upper) + _area(lower) == pytest.approx(91.0)


def test_hole_touching_exterior():
    # diamond touching the left side of the exterior at (0, 5)
    hole = [(0, 5), (2, 3), (4, 5), (2, 7)]
    upper, lower = split_hole(EXTERIOR, hole, TOL)
    assert _area(upper) + _area(lower) == pytest.approx(92.0)
    assert _count(upper, (0, 5)) == 1
    assert _count(lower, (0, 5)) == 1
    assert len(upper) == 6
    assert len(lower) == 6


def test_break_points_on_vertices():
    # bisector of this hole passes through exterior and hole vertices
    exterior = [(0, 0), (5, -5), (10, 0), (5, 10)]
    hole = [(3, 0), (5, -2), (7, 0), (5, 2)]
    upper, lower = split_hole(exterior, hole, TOL)
    assert _area(upper) + _area(lower) == pytest.approx(_area(exterior) - _area(hole))
    for ring in (upper, lower):
        for i in range(len(ring)):
            a, b = ring[i], ring[(i + 1) % len(ring)]
            assert not (TOL.close(a[0], b[0]) and TOL.close(a[1], b[1]))


def test_hole_outside_exterior():
    hole = [(20, 3), (23, 3), (23, 6), (20, 6)]
    with pytest.raises(UnsupportedTopologyError):
        split_hole(EXTERIOR, hole, TOL)


def test_dedupe():
    ring = [(0, 0), (0, 0), (1, 0), (1, 1 + 1e-10), (1, 1), (0, 0)]
    assert dedupe(ring, TOL) == [(0, 0), (1, 0), (1, 1 + 1e-10)]
