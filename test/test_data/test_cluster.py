"""Test suite for the slidefit.data module."""

import numpy as np
import pytest

from slidefit.data import Cluster, LayerFitContribution, LayerFitResult


class TestCluster:
    """Test Cluster class creation and validation."""

    def test_default_cluster(self):
        """Test that a default cluster is empty."""
        cluster = Cluster()

        assert cluster.id == -1
        assert cluster.points.shape == (0, 3)
        assert cluster.depositions.shape == (0,)
        assert len(cluster) == 0
        assert cluster.energy == 0.0

    def test_cluster_creation(self):
        """Test that the hit attributes are cast to their expected types."""
        cluster = Cluster(
            id=3, points=[[0, 0, 0], [1, 0, 1]], depositions=[0.5, 1.5]
        )

        assert cluster.points.dtype == np.float64
        assert cluster.depositions.dtype == np.float32
        assert cluster.size == 2
        assert cluster.energy == pytest.approx(2.0)

    def test_invalid_points(self):
        """Test that the points must be 3D."""
        with pytest.raises(ValueError):
            Cluster(points=np.zeros((4, 2)))

    def test_invalid_depositions(self):
        """Test that there is one deposition per point."""
        with pytest.raises(ValueError):
            Cluster(points=np.zeros((4, 3)), depositions=np.ones(3))

    def test_equality(self):
        """Test that clusters compare by value."""
        first = Cluster(id=0, points=np.ones((2, 3)))
        second = Cluster(id=0, points=np.ones((2, 3)))

        assert first == second
        assert first != Cluster(id=1, points=np.ones((2, 3)))
        assert first.as_dict()["id"] == 0


class TestLayerFit:
    """Test the per-layer fit records."""

    def test_contribution(self):
        """Test the accumulation of sufficient statistics."""
        contribution = LayerFitContribution()
        contribution.add_point(1.0, 2.0)
        contribution.add_point(3.0, -1.0)

        assert contribution.n_points == 2
        assert contribution.mean_l == pytest.approx(2.0)
        assert np.allclose(contribution.as_array(), [4.0, 1.0, 10.0, 5.0, -1.0])

    def test_result_is_frozen(self):
        """Test that a layer fit result cannot be modified."""
        result = LayerFitResult(1.0, 0.5, 0.1, 0.01)
        with pytest.raises(AttributeError):
            result.rms = 0.0
