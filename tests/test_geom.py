import math

import pytest

from tolgeom.geom import (BoundingBox, Matrix, Segment, Vector, line_intersect,
                          vector, winding)
from tolgeom.errors import DegenerateGeometryError

EPS = 1.0e-8


class TestVector:

    def test_equality_is_reflexive(self):
        v = vector(1, 2, 3)
        assert v.equals(v)
        assert v == v

    @pytest.mark.parametrize("axis", ["x", "y", "z"])
    def test_half_epsilon_keeps_equality(self, axis):
        v = vector(1, 2, 3)
        coords = {"x": v.x, "y": v.y, "z": v.z}
        coords[axis] += 0.5 * EPS
        w = vector(coords["x"], coords["y"], coords["z"])
        assert v.equals(w)
        assert w.equals(v)

    @pytest.mark.parametrize("axis", ["x", "y", "z"])
    def test_two_epsilon_breaks_equality(self, axis):
        v = vector(1, 2, 3)
        coords = {"x": v.x, "y": v.y, "z": v.z}
        coords[axis] += 2 * EPS
        w = vector(coords["x"], coords["y"], coords["z"])
        assert not v.equals(w)
        assert not w.equals(v)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(vector(1, 2, 3))

    def test_arithmetic(self):
        a = vector(1, 2, 3)
        b = vector(4, 5, 6)
        assert a.add(b) == vector(5, 7, 9)
        assert b.subtract(a) == vector(3, 3, 3)
        assert a.scale(2) == vector(2, 4, 6)
        assert a + b == vector(5, 7, 9)
        assert b - a == vector(3, 3, 3)
        assert 2 * a == a * 2
        assert -a == vector(-1, -2, -3)

    def test_cross_and_dot(self):
        x = vector(1, 0, 0)
        y = vector(0, 1, 0)
        assert x.cross(y) == vector(0, 0, 1)
        assert y.cross(x) == vector(0, 0, -1)
        assert x.dot(y) == 0
        assert vector(1, 2, 3).dot(vector(4, 5, 6)) == 32

    def test_length_and_unit(self):
        v = vector(3, 4, 0)
        assert v.length() == pytest.approx(5.0)
        assert v.unit() == vector(0.6, 0.8, 0)
        assert v.unit().length() == pytest.approx(1.0)

    def test_unit_of_zero_is_not_finite(self):
        u = vector(0, 0, 0).unit()
        assert not any(math.isfinite(c) for c in u)

    def test_angle(self):
        assert vector(1, 0, 0).angle(vector(0, 1, 0)) == pytest.approx(math.pi / 2)
        assert vector(1, 1, 0).angle(vector(2, 2, 0)) == pytest.approx(0.0, abs=1e-7)

    def test_of_accepts_sequences_and_mappings(self):
        assert Vector.of((1, 2, 3)) == vector(1, 2, 3)
        assert Vector.of({"x": 1, "y": 2, "z": 3}) == vector(1, 2, 3)
        v = vector(1, 2, 3)
        assert Vector.of(v) is v
        with pytest.raises(ValueError):
            Vector.of((1, 2))

    def test_immutable(self):
        v = vector(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 5


class TestMatrix:

    def test_identity(self):
        m = Matrix.from_rows((1, 0, 0), (0, 1, 0), (0, 0, 1))
        assert m.determinant() == 1

    def test_columns(self):
        m = Matrix.from_columns((1, 2, 3), (4, 5, 6), (7, 8, 10))
        assert m.get(0, 1) == 4
        assert m.determinant() == pytest.approx(-3.0)

    def test_transpose_has_same_determinant(self):
        rows = ((2, -1, 0), (1, 3, 4), (0, 5, -2))
        assert (Matrix.from_rows(*rows).determinant()
                == pytest.approx(Matrix.from_columns(*rows).determinant()))

    def test_singular(self):
        m = Matrix.from_columns(vector(1, 1, 1), vector(2, 2, 2), vector(0, 1, 0))
        assert m.determinant() == pytest.approx(0.0)

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            Matrix.from_rows((1, 2), (3, 4), (5, 6))


class TestSegment:

    def test_undirected_equality(self):
        s = Segment(vector(0, 0, 0), vector(1, 2, 3))
        assert s == Segment(vector(1, 2, 3), vector(0, 0, 0))
        assert s != Segment(vector(0, 0, 0), vector(1, 2, 4))

    def test_collinear(self):
        g = Segment(vector(1, 1, 1), vector(2, 2, 2))
        h = Segment(vector(3, 3, 3), vector(4, 4, 4))
        t1, t2 = g.collinear(h)
        assert t1 == pytest.approx(2)
        assert t2 == pytest.approx(3)
        t1, t2 = h.collinear(g)
        assert t1 == pytest.approx(-2)
        assert t2 == pytest.approx(-1)

    def test_collinear_within_epsilon(self):
        g = Segment(vector(1, 1, 1), vector(2, 2, 2))
        h = Segment(vector(3 + EPS / 2, 3, 3), vector(4, 4, 4))
        assert g.collinear(h) is not None

    def test_not_collinear(self):
        g = Segment(vector(1, 1, 1), vector(2, 2, 2))
        assert g.collinear(Segment(vector(3, 3, 4), vector(4, 4, 5))) is None
        assert g.collinear(Segment(vector(0, 0, 1), vector(1, 1, 1))) is None

    def test_crossing_point(self):
        g = Segment(vector(1, 1, 1), vector(5, 5, 5))
        h = Segment(vector(1, 3, 3), vector(5, 3, 3))
        assert g.intersect(h) == vector(3, 3, 3)
        assert h.intersect(g) == vector(3, 3, 3)

    def test_shared_start_point(self):
        g = Segment(vector(1, 1, 1), vector(2, 2, 2))
        h = Segment(vector(1, 1, 1), vector(3, 4, 5))
        assert g.intersect(h) == vector(1, 1, 1)

    def test_lines_cross_outside_segments(self):
        g = Segment(vector(1, 1, 1), vector(2, 2, 2))
        h = Segment(vector(1, 3, 3), vector(5, 3, 3))
        assert g.intersect(h) is None

    def test_skew(self):
        g = Segment(vector(0, 0, 0), vector(1, 0, 0))
        h = Segment(vector(0, 1, 1), vector(0, 2, 1))
        assert g.intersect(h) is None

    def test_parallel(self):
        g = Segment(vector(0, 0, 0), vector(1, 0, 0))
        h = Segment(vector(0, 1, 0), vector(1, 1, 0))
        assert g.intersect(h) is None

    def test_overlap(self):
        g = Segment(vector(1, 1, 1), vector(5, 5, 5))
        h = Segment(vector(3, 3, 3), vector(8, 8, 8))
        assert g.intersect(h) == Segment(vector(3, 3, 3), vector(5, 5, 5))
        assert g.intersect(g) == g

    def test_contained_overlap(self):
        g = Segment(vector(2, 0, 0), vector(3, 0, 0))
        h = Segment(vector(0, 0, 0), vector(10, 0, 0))
        assert g.intersect(h) == g

    def test_collinear_touching_at_endpoint(self):
        g = Segment(vector(0, 0, 0), vector(1, 0, 0))
        h = Segment(vector(1, 0, 0), vector(2, 0, 0))
        assert g.intersect(h) == vector(1, 0, 0)

    def test_collinear_disjoint(self):
        g = Segment(vector(0, 0, 0), vector(1, 0, 0))
        h = Segment(vector(2, 0, 0), vector(3, 0, 0))
        assert g.intersect(h) is None


class TestLineIntersect:

    def test_point(self):
        p = line_intersect(vector(1, 1, 1), vector(2, 2, 2),
                           vector(1, 1, 1), vector(3, 4, 5))
        assert isinstance(p, Vector)
        assert p == vector(1, 1, 1)

    def test_lines_extend_past_points(self):
        p = line_intersect(vector(1, 1, 1), vector(2, 2, 2),
                           vector(1, 3, 3), vector(5, 3, 3))
        assert p == vector(3, 3, 3)

    def test_skew(self):
        assert line_intersect(vector(0, 0, 0), vector(1, 0, 0),
                              vector(0, 1, 1), vector(0, 2, 1)) is None

    def test_parallel(self):
        assert line_intersect(vector(0, 0, 0), vector(1, 0, 0),
                              vector(0, 1, 0), vector(1, 1, 0)) is None

    def test_collinear(self):
        a, b = vector(0, 0, 0), vector(1, 1, 1)
        result = line_intersect(a, b, vector(2, 2, 2), vector(5, 5, 5))
        assert isinstance(result, Segment)
        assert result == Segment(a, b)


def test_winding():
    ccw = [(0, 0), (1, 0), (1, 1), (0, 1)]
    assert winding(ccw) == -1
    assert winding(list(reversed(ccw))) == 1
    assert winding([(0, 0), (1, 1), (2, 2)]) == 0


def test_bounding_box():
    box = BoundingBox.of([vector(1, -2, 3), vector(-1, 5, 0), vector(0, 0, 7)])
    assert box.min == vector(-1, -2, 0)
    assert box.max == vector(1, 5, 7)
    assert box.size() == vector(2, 7, 7)
    with pytest.raises(DegenerateGeometryError):
        BoundingBox.of([])
