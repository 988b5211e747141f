"""Tests of the configurable fit modules and their factory."""

import numpy as np
import pytest

from slidefit.fit import AxisFrame, fitter_factory
from slidefit.fit.fitters import ShowerEdgeFitter, SlidingFitter, SlidingXZFitter
from slidefit.utils.enums import ShowerEdge


class TestFitterFactory:
    """Test the instantiation of fitters from configuration blocks."""

    def test_from_name(self):
        """Test that a fitter can be built from its name only."""
        fitter = fitter_factory("global")

        assert isinstance(fitter, SlidingFitter)
        assert fitter.half_window == 20
        assert fitter.pitch == pytest.approx(0.3)
        assert fitter.frame is None

    def test_from_dict(self, straight_cluster):
        """Test that the configuration block parameters are forwarded."""
        fitter = fitter_factory({"name": "xz", "half_window": 5, "pitch": 0.6})
        assert isinstance(fitter, SlidingXZFitter)

        fit = fitter.fit(straight_cluster)
        assert fit.half_window == 5
        assert fit.pitch == pytest.approx(0.6)
        assert fit.frame == AxisFrame.xz()
        assert len(fit) == 100

    def test_class_name(self):
        """Test that a fitter can be built from its class name."""
        assert isinstance(fitter_factory("ShowerEdgeFitter"), ShowerEdgeFitter)

    def test_alias(self):
        """Test that deprecated names still work, with a warning."""
        with pytest.warns(DeprecationWarning):
            fitter = fitter_factory("sliding_xz_fit")

        assert isinstance(fitter, SlidingXZFitter)

    def test_unknown_name(self):
        """Test that an unknown fitter name is rejected."""
        with pytest.raises(ValueError):
            fitter_factory("spline")

    def test_invalid_argument(self):
        """Test that an unknown parameter is rejected."""
        with pytest.raises(TypeError):
            fitter_factory({"name": "xz", "window": 5})


class TestFitters:
    """Test the behavior of each fitter."""

    def test_fixed_axis(self, sloped_cluster):
        """Test that a fixed axis can be configured."""
        fitter = SlidingFitter(
            intercept=[0.0, 0.0, 0.0], direction=[0.0, 0.0, 1.0], half_window=5
        )
        fit = fitter(sloped_cluster)

        assert fit.frame == AxisFrame.xz()
        assert np.allclose(fit.min_layer_position(), sloped_cluster.points[0])

    def test_incomplete_axis(self):
        """Test that a fixed axis needs both an intercept and a direction."""
        with pytest.raises(ValueError):
            SlidingFitter(direction=[0.0, 0.0, 1.0])

    def test_shower_edge(self, cluster_factory):
        """Test the edge fitter parameters."""
        fitter = fitter_factory({"name": "shower_edge", "edge": "negative"})
        assert fitter.edge == ShowerEdge.NEGATIVE

        z = np.repeat(np.arange(50) * 0.3, 2)
        x = np.tile([-1.0, 1.0], 50)
        fit = fitter.fit(cluster_factory(x, z))
        assert np.allclose(np.abs(fit.layer_fit_t), 1.0)
        assert len(fit.local_points) == 50

    def test_repr(self):
        """Test the representation of a fitter."""
        assert repr(SlidingXZFitter(half_window=3)).startswith("SlidingXZFitter(")
