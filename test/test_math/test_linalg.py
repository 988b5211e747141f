"""Tests of the linear algebra routines."""

import numpy as np
import pytest

from slidefit.math.linalg import line_intersection, norm


class TestLinalg:
    """Test the compiled linear algebra routines."""

    def test_norm(self):
        """Test the row and column norms of a matrix."""
        x = np.array([[3.0, 4.0], [6.0, 8.0]])

        assert np.allclose(norm(x, 1), [5.0, 10.0])
        assert np.allclose(norm(x, 0), np.linalg.norm(x, axis=0))

    def test_intersection(self):
        """Test the intersection of two perpendicular lines."""
        found, s = line_intersection(
            np.array([0.0, 0.0]),
            np.array([1.0, 0.0]),
            np.array([1.0, -1.0]),
            np.array([0.0, 1.0]),
            1e-6,
        )

        assert found
        assert s == pytest.approx(1.0)

    def test_oblique_intersection(self):
        """Test that the intersection lies on both lines."""
        p1, d1 = np.array([1.0, 2.0]), np.array([0.6, 0.8])
        p2, d2 = np.array([5.0, 0.0]), np.array([-1.0, 1.0]) / np.sqrt(2)
        found, s = line_intersection(p1, d1, p2, d2, 1e-6)

        point = p1 + s * d1
        cross = (point - p2)[0] * d2[1] - (point - p2)[1] * d2[0]
        assert found
        assert cross == pytest.approx(0.0, abs=1e-9)

    def test_parallel(self):
        """Test that parallel lines do not intersect."""
        found, _ = line_intersection(
            np.array([0.0, 0.0]),
            np.array([1.0, 0.0]),
            np.array([0.0, 1.0]),
            np.array([-1.0, 0.0]),
            1e-6,
        )

        assert not found
