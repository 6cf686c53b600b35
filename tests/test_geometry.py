"""Tests for light2d geometry classes.

Every class in light2d.geometry is tested for:
- Correct instantiation and argument validation
- sdf() returns correct sign (negative inside, positive outside)
- Transform and boolean methods return new Geometry2D objects
"""

import numpy as np
import numpy.testing as npt
import pytest

from light2d import (
    Geometry2D,
    Circle2D, Box2D, Segment2D, Capsule2D, Triangle2D, Plane2D,
    Union2D, Intersection2D, Subtraction2D,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _p(*xy) -> np.ndarray:
    """Single 2-D point as shape ``(1, 2)``."""
    return np.array([list(xy)], dtype=float)


def _grid(n: int = 16) -> np.ndarray:
    lin = np.linspace(-1.0, 1.0, n)
    Y, X = np.meshgrid(lin, lin, indexing="ij")
    return np.stack([X, Y], axis=-1)


# ===========================================================================
# Base class
# ===========================================================================

class TestGeometry2D:
    def test_sdf_callable(self):
        g = Geometry2D(lambda p: np.zeros(p.shape[:-1]))
        assert g.sdf(_grid()).shape == (16, 16)

    def test_call_is_sdf(self):
        g = Circle2D(0.3)
        npt.assert_array_equal(g(_p(0.1, 0.0)), g.sdf(_p(0.1, 0.0)))

    def test_sdf_accepts_lists(self):
        npt.assert_allclose(Circle2D(0.3).sdf([[0.0, 0.0]]), [-0.3], atol=1e-12)

    def test_translate_moves_origin(self):
        moved = Circle2D(0.3).translate(0.5, 0.0)
        npt.assert_allclose(moved.sdf(_p(0.5, 0.0)), [-0.3], atol=1e-12)

    def test_rotate_quarter_turn(self):
        bar = Box2D((0.5, 0.1)).rotate(np.pi / 2.0)
        npt.assert_allclose(bar.sdf(_p(0.0, 0.4)), [-0.1], atol=1e-12)
        assert bar.sdf(_p(0.4, 0.0))[0] > 0

    def test_rotate_about_centre(self):
        c = Circle2D(0.1, center=(1.0, 0.0)).rotate(np.pi, center=(0.5, 0.0))
        npt.assert_allclose(c.sdf(_p(0.0, 0.0)), [-0.1], atol=1e-12)

    def test_rotate_about_origin_moves_centre(self):
        c = Circle2D(0.1, center=(1.0, 0.0)).rotate(np.pi / 2.0)
        npt.assert_allclose(c.sdf(_p(0.0, 1.0)), [-0.1], atol=1e-12)

    def test_warp(self):
        g = Circle2D(0.2).warp(lambda p: p * np.array([-1.0, 1.0]))
        npt.assert_allclose(g.sdf(_p(0.0, 0.0)), [-0.2], atol=1e-12)

    def test_mirror_repeats_quadrant(self):
        lamp = Circle2D(0.05, center=(0.9, 0.9)).mirror(0.5, 0.5)
        for corner in [(0.1, 0.1), (0.9, 0.1), (0.1, 0.9), (0.9, 0.9)]:
            npt.assert_allclose(lamp.sdf(_p(*corner)), [-0.05], atol=1e-12)

    def test_methods_return_geometry(self):
        a, b = Circle2D(0.3), Box2D((0.2, 0.2))
        for g in (a.union(b), a.subtract(b), a.intersect(b), a.translate(1, 0),
                  a.rotate(0.3), a.mirror(0, 0), a.warp(lambda p: p)):
            assert isinstance(g, Geometry2D)


# ===========================================================================
# Primitive shapes
# ===========================================================================

class TestCircle2D:
    def test_inside_centre(self):
        npt.assert_allclose(Circle2D(0.1, center=(0.5, 0.5)).sdf(_p(0.5, 0.5)), [-0.1], atol=1e-12)

    def test_outside(self):
        assert Circle2D(0.1).sdf(_p(1.0, 0.0))[0] > 0

    def test_attributes(self):
        c = Circle2D(0.25, center=(1.0, 2.0))
        assert c.radius == 0.25
        npt.assert_array_equal(c.center, [1.0, 2.0])

    def test_negative_radius_raises(self):
        with pytest.raises(ValueError):
            Circle2D(-0.1)

    def test_bad_centre_raises(self):
        with pytest.raises(ValueError):
            Circle2D(0.1, center=(0.0, 0.0, 0.0))


class TestBox2D:
    def test_inside(self):
        npt.assert_allclose(Box2D((0.5, 0.3)).sdf(_p(0.0, 0.0)), [-0.3], atol=1e-12)

    def test_centre_and_rotation(self):
        b = Box2D((0.05, 0.25), center=(0.4, 0.25), theta=np.pi / 2.0)
        # a quarter turn makes the box wide: x in [0.15, 0.65], y in [0.2, 0.3]
        assert b.sdf(_p(0.6, 0.25))[0] < 0
        assert b.sdf(_p(0.4, 0.4))[0] > 0

    def test_negative_half_size_raises(self):
        with pytest.raises(ValueError):
            Box2D((-0.1, 0.2))


class TestSegment2D:
    def test_distance(self):
        npt.assert_allclose(Segment2D((0, 0), (1, 0)).sdf(_p(0.5, 0.25)), [0.25], atol=1e-12)


class TestCapsule2D:
    def test_inside(self):
        assert Capsule2D((0, 0), (1, 0), 0.1).sdf(_p(0.5, 0.05))[0] < 0

    def test_negative_radius_raises(self):
        with pytest.raises(ValueError):
            Capsule2D((0, 0), (1, 0), -0.1)


class TestTriangle2D:
    def test_inside_either_winding(self):
        a = Triangle2D((0.55, 0.13), (0.5, 0.3), (0.9, 0.3))
        b = Triangle2D((0.55, 0.13), (0.9, 0.3), (0.5, 0.3))
        assert a.sdf(_p(0.75, 0.27))[0] < 0
        npt.assert_allclose(a.sdf(_grid()), b.sdf(_grid()), atol=1e-12)

    def test_outside(self):
        assert Triangle2D((0, 0), (1, 0), (0, 1)).sdf(_p(1.0, 1.0))[0] > 0


class TestPlane2D:
    def test_normal_is_normalised(self):
        npt.assert_allclose(Plane2D((0.0, 0.0), (0.0, 2.0)).sdf(_p(5.0, 3.0)), [3.0], atol=1e-12)

    def test_solid_side_negative(self):
        assert Plane2D((0.0, 0.92), (0.0, -1.0)).sdf(_p(0.5, 0.95))[0] < 0

    def test_zero_normal_raises(self):
        with pytest.raises(ValueError):
            Plane2D((0.0, 0.0), (0.0, 0.0))


# ===========================================================================
# Boolean operations
# ===========================================================================

class TestBooleans:
    def test_union_method(self):
        u = Circle2D(0.2).union(Circle2D(0.2, center=(1.0, 0.0)))
        npt.assert_allclose(u.sdf(_p(1.0, 0.0)), [-0.2], atol=1e-12)

    def test_subtract_method(self):
        ring = Circle2D(0.3).subtract(Circle2D(0.1))
        npt.assert_allclose(ring.sdf(_p(0.0, 0.0)), [0.1], atol=1e-12)
        npt.assert_allclose(ring.sdf(_p(0.2, 0.0)), [-0.1], atol=1e-12)

    def test_intersect_method(self):
        lens = Circle2D(0.35, center=(0.25, 0.5)).intersect(Circle2D(0.35, center=(0.75, 0.5)))
        assert lens.sdf(_p(0.5, 0.5))[0] < 0
        assert lens.sdf(_p(0.2, 0.5))[0] > 0

    def test_union_class_many(self):
        u = Union2D(Circle2D(0.1), Circle2D(0.1, center=(0.5, 0)), Circle2D(0.1, center=(1.0, 0)))
        npt.assert_allclose(u.sdf(_p(1.0, 0.0)), [-0.1], atol=1e-12)

    def test_intersection_class(self):
        i = Intersection2D(Box2D((0.5, 0.5)), Circle2D(0.6))
        npt.assert_allclose(i.sdf(_p(0.0, 0.0)), [-0.5], atol=1e-12)

    def test_subtraction_class(self):
        s = Subtraction2D(Circle2D(0.3), Circle2D(0.1))
        npt.assert_allclose(s.sdf(_p(0.0, 0.0)), [0.1], atol=1e-12)

    @pytest.mark.parametrize("cls", [Union2D, Intersection2D])
    def test_empty_raises(self, cls):
        with pytest.raises(ValueError):
            cls()
