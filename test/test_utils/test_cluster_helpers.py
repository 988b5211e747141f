"""Tests of the cluster shape helpers."""

import numpy as np
import pytest

from slidefit.fit import AxisFrame, PseudoLayerCalculator, sliding_xz_fit
from slidefit.utils.cluster import (
    get_closest_distance,
    get_energy_from_length,
    get_inner_layer,
    get_layer_occupancy,
    get_layer_span,
    get_length,
    get_length_squared,
    get_occupied_layers,
    get_outer_layer,
    get_sliding_fit_width,
    get_track_width,
    inner_layer_key,
    n_hits_key,
    occupied_layers_key,
)


class TestLayers:
    """Test the pseudo-layer helpers of a cluster."""

    def test_occupied_layers(self, cluster_factory):
        """Test the layers occupied by the hits of a cluster."""
        cluster = cluster_factory(np.zeros(5), [0.0, 0.3, 0.35, 0.6, 2.7])

        assert get_occupied_layers(cluster).tolist() == [0, 1, 2, 9]
        assert get_inner_layer(cluster) == 0
        assert get_outer_layer(cluster) == 9
        assert get_layer_span(cluster) == 10
        assert get_layer_occupancy(cluster) == pytest.approx(0.4)

    def test_custom_pitch(self, cluster_factory):
        """Test that the layers follow the provided calculator."""
        cluster = cluster_factory(np.zeros(4), [0.0, 0.3, 0.6, 0.9])
        calculator = PseudoLayerCalculator(0.6)

        assert get_occupied_layers(cluster, calculator).tolist() == [0, 1]
        assert get_layer_span(cluster, calculator) == 2

    def test_pair_occupancy(self, cluster_factory):
        """Test the occupancy of a pair of clusters."""
        first = cluster_factory(np.zeros(5), np.arange(5) * 0.3)
        second = cluster_factory(np.zeros(5), 3.0 + np.arange(5) * 0.3)

        assert get_layer_occupancy(first, second) == pytest.approx(10 / 15)
        assert get_layer_occupancy(first, first) == pytest.approx(2.0)

    def test_empty_cluster(self, cluster_factory):
        """Test the layer helpers of an empty cluster."""
        empty = cluster_factory([], [])

        assert get_layer_occupancy(empty) == 0.0
        with pytest.raises(ValueError):
            get_layer_span(empty)


class TestGeometry:
    """Test the length and distance helpers."""

    def test_length(self, cluster_factory):
        """Test the bounding box diagonal of a cluster."""
        cluster = cluster_factory([0.0, 3.0, 1.0], [0.0, 4.0, 2.0])

        assert get_length_squared(cluster) == pytest.approx(25.0)
        assert get_length(cluster) == pytest.approx(5.0)
        assert get_energy_from_length(cluster) == pytest.approx(0.01)
        assert get_length(cluster_factory([], [])) == 0.0

    def test_closest_distance(self, cluster_factory):
        """Test the distance to another cluster or to a point."""
        first = cluster_factory([0.0, 1.0], [0.0, 0.0])
        second = cluster_factory([4.0, 6.0], [0.0, 0.0])

        assert get_closest_distance(first, second) == pytest.approx(3.0)
        assert get_closest_distance(first, [0.0, 0.0, 2.0]) == pytest.approx(2.0)
        with pytest.raises(ValueError):
            get_closest_distance(first, cluster_factory([], []))


class TestWidth:
    """Test the width of a cluster about its sliding fit."""

    def test_straight_track(self, straight_cluster):
        """Test that a straight track has no width."""
        fit = sliding_xz_fit(straight_cluster, 5)

        assert get_sliding_fit_width(fit) == pytest.approx(0.0, abs=1e-9)

    def test_zigzag_track(self, zigzag_cluster):
        """Test the width of a track with a transverse spread."""
        fit = sliding_xz_fit(zigzag_cluster, 5)
        width = get_sliding_fit_width(fit)

        assert 0.07 < width < 0.11
        assert get_track_width(
            zigzag_cluster, 5, frame=AxisFrame.xz()
        ) == pytest.approx(width)

    def test_invalid_quantile(self, straight_cluster):
        """Test that the quantile must be in [0, 1]."""
        fit = sliding_xz_fit(straight_cluster, 5)
        with pytest.raises(ValueError):
            get_sliding_fit_width(fit, -0.1)


class TestSortKeys:
    """Test the keys used to order clusters."""

    def test_inner_layer_key(self, cluster_factory):
        """Test ordering by inner layer, then by occupied layers."""
        late = cluster_factory(np.zeros(3), [3.0, 3.3, 3.6])
        short = cluster_factory(np.zeros(2), [0.0, 0.3])
        long = cluster_factory(np.zeros(4), [0.0, 0.3, 0.6, 0.9])

        ordered = sorted([late, short, long], key=inner_layer_key)
        assert ordered == [long, short, late]

    def test_occupied_layers_key(self, cluster_factory):
        """Test ordering by decreasing number of occupied layers."""
        short = cluster_factory(np.zeros(2), [5.0, 5.3])
        long = cluster_factory(np.zeros(4), [6.0, 6.3, 6.6, 6.9])

        assert sorted([short, long], key=occupied_layers_key) == [long, short]

    def test_n_hits_key(self, cluster_factory):
        """Test ordering by number of hits, then by energy."""
        small = cluster_factory(np.zeros(2), [0.0, 0.3], energy=[1.0, 1.0])
        large = cluster_factory(np.zeros(3), [0.0, 0.0, 0.0])
        bright = cluster_factory(np.zeros(2), [0.0, 0.3], energy=[2.0, 2.0])

        assert sorted([small, large, bright], key=n_hits_key) == [large, bright, small]
