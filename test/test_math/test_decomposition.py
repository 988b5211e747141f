"""Tests of the principal axis routines."""

import numpy as np

from slidefit.math.decomposition import principal_axis, principal_components


class TestDecomposition:
    """Test the principal component analysis of point clouds."""

    def test_principal_components(self):
        """Test that the first component follows the main spread."""
        rng = np.random.default_rng(seed=0)
        x = np.column_stack([rng.normal(0, 10, 500), rng.normal(0, 1, 500)])
        components = principal_components(x)

        assert components.shape == (2, 2)
        assert abs(components[0, 0]) > 0.99
        assert np.allclose(np.linalg.norm(components, axis=1), 1.0)

    def test_principal_axis(self):
        """Test the least-squares line through aligned points."""
        t = np.arange(10, dtype=np.float64)
        x = np.column_stack([1.0 + 0.6 * t, 2.0 + 0.8 * t])
        centroid, direction = principal_axis(x)

        assert np.allclose(centroid, [3.7, 5.6])
        assert np.allclose(np.abs(direction), [0.6, 0.8])
        assert np.sign(direction[0]) == np.sign(direction[1])

    def test_single_point(self):
        """Test that a single point has no direction."""
        centroid, direction = principal_axis(np.array([[1.0, 2.0]]))

        assert np.allclose(centroid, [1.0, 2.0])
        assert np.allclose(direction, 0.0)
