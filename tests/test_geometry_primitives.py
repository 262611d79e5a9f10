"""
Tests for Coordinate and AffineTransform.
"""
import math

import numpy as np
import pytest

from earthcurve.exceptions import SingularTransformError
from earthcurve.model.geometry_primitives import AffineTransform, Coordinate

from conftest import assert_coordinates_close


# ══════════════════════════════════════════════════════════════════════════
# Coordinate
# ══════════════════════════════════════════════════════════════════════════

class TestCoordinate:

    def test_arithmetic(self):
        p = Coordinate(1.0, 2.0)
        q = Coordinate(3.0, -1.0)
        assert p + q == Coordinate(4.0, 1.0)
        assert p - q == Coordinate(-2.0, 3.0)
        assert p * 2 == Coordinate(2.0, 4.0)
        assert 2 * p == Coordinate(2.0, 4.0)
        assert p / 2 == Coordinate(0.5, 1.0)
        assert -p == Coordinate(-1.0, -2.0)

    def test_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            Coordinate(1.0, 1.0) / 0.0

    def test_is_immutable(self):
        p = Coordinate(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 5.0

    def test_magnitude_and_angle(self):
        p = Coordinate(3.0, 4.0)
        assert p.magnitude == 5.0
        assert p.squared_magnitude == 25.0
        assert Coordinate(0.0, 1.0).angle == pytest.approx(math.pi / 2)
        assert Coordinate(-1.0, 0.0).angle == pytest.approx(math.pi)

    def test_rotate_quarter_turn(self):
        assert_coordinates_close(Coordinate(1.0, 0.0).rotate(math.pi / 2), Coordinate(0.0, 1.0))

    def test_normalize(self):
        assert Coordinate(0.0, 0.0).normalize() == Coordinate(0.0, 0.0)
        assert Coordinate(0.0, -3.0).normalize() == Coordinate(0.0, -1.0)

    def test_array_round_trip(self):
        p = Coordinate(1.5, -2.5)
        assert Coordinate.from_array(p.to_array()) == p


# ══════════════════════════════════════════════════════════════════════════
# AffineTransform
# ══════════════════════════════════════════════════════════════════════════

class TestAffineTransform:

    def test_default_is_identity(self):
        t = AffineTransform()
        assert t.is_identity()
        assert t.apply(Coordinate(3.0, 4.0)) == Coordinate(3.0, 4.0)

    def test_components_follow_svg_order(self):
        t = AffineTransform.from_components(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
        assert t.components() == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
        # x' = a x + c y + e, y' = b x + d y + f
        assert t.apply(Coordinate(1.0, 1.0)) == Coordinate(9.0, 12.0)
        assert t.to_svg() == "matrix(1,2,3,4,5,6)"

    def test_accepts_2x3_matrix(self):
        t = AffineTransform([[1.0, 0.0, 2.0], [0.0, 1.0, 3.0]])
        assert t == AffineTransform.translation(2.0, 3.0)

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            AffineTransform(np.zeros((2, 2)))

    def test_matrix_is_read_only(self):
        t = AffineTransform.translation(1.0, 1.0)
        with pytest.raises(ValueError):
            t.matrix[0, 0] = 5.0

    def test_multiply_applies_right_operand_first(self):
        translate = AffineTransform.translation(1.0, 0.0)
        scale = AffineTransform.scaling(2.0)
        p = Coordinate(1.0, 1.0)
        # scale first, then translate
        assert (translate @ scale).apply(p) == Coordinate(3.0, 2.0)
        assert translate.multiply(scale).apply(p) == Coordinate(3.0, 2.0)
        # translate first, then scale
        assert translate.pre_multiply(scale).apply(p) == Coordinate(4.0, 2.0)

    def test_rotation(self):
        t = AffineTransform.rotation(math.pi / 2)
        assert_coordinates_close(t.apply(Coordinate(2.0, 0.0)), Coordinate(0.0, 2.0))

    def test_inverse_round_trip(self):
        t = (
            AffineTransform.translation(3.0, -2.0)
            @ AffineTransform.rotation(0.7)
            @ AffineTransform.scaling(2.5)
        )
        p = Coordinate(-4.0, 9.0)
        assert_coordinates_close(t.inverse().apply(t.apply(p)), p)
        assert (t @ t.inverse()).is_identity(tol=1e-12)

    def test_singular_inverse_raises(self):
        with pytest.raises(SingularTransformError):
            AffineTransform.scaling(0.0).inverse()

    def test_apply_many_matches_apply(self):
        t = AffineTransform.translation(1.0, 2.0) @ AffineTransform.rotation(1.1)
        points = np.array([[0.0, 0.0], [1.0, 0.0], [-3.0, 4.5]])
        result = t.apply_many(points)
        assert result.shape == (3, 2)
        for row, (x, y) in zip(result, points):
            expected = t.apply(Coordinate(x, y))
            assert row[0] == pytest.approx(expected.x)
            assert row[1] == pytest.approx(expected.y)

    def test_callable(self):
        t = AffineTransform.translation(1.0, 1.0)
        assert t(Coordinate(0.0, 0.0)) == Coordinate(1.0, 1.0)
