"""Tests of the windowed least-squares kernel."""

import numpy as np
import pytest

from slidefit.math.regression import window_fit


def layer_sums(ls, ts, layers):
    """Accumulates per-layer sufficient statistics of a set of points."""
    unique = np.unique(layers)
    sums = np.zeros((len(unique), 5))
    counts = np.zeros(len(unique), dtype=np.int64)
    rep_l = np.zeros(len(unique))
    for i, layer in enumerate(unique):
        l, t = ls[layers == layer], ts[layers == layer]
        sums[i] = [l.sum(), t.sum(), (l * l).sum(), (t * t).sum(), (l * t).sum()]
        counts[i] = len(l)
        rep_l[i] = l.mean()

    return unique.astype(np.int64), sums, counts, rep_l


class TestWindowFit:
    """Test the straight line fit in a sliding window of layers."""

    def test_exact_line(self):
        """Test that points on a line are fitted exactly."""
        ls = np.arange(10, dtype=np.float64)
        ts = 0.5 * ls - 1.0
        layers, sums, counts, rep_l = layer_sums(ls, ts, np.arange(10))

        valid, fit_t, gradient, rms = window_fit(layers, sums, counts, rep_l, 1, 1e-6)

        assert valid.all()
        assert np.allclose(gradient, 0.5)
        assert np.allclose(fit_t, ts)
        assert np.allclose(rms, 0.0)

    def test_null_window(self):
        """Test that single-point windows are not fitted."""
        ls = np.arange(5, dtype=np.float64)
        layers, sums, counts, rep_l = layer_sums(ls, ls, np.arange(5))

        valid, _, _, _ = window_fit(layers, sums, counts, rep_l, 0, 1e-6)

        assert not valid.any()

    def test_degenerate_window(self):
        """Test that a window with no spread in L is not fitted."""
        ls = np.array([1.0, 1.0, 1.0])
        ts = np.array([0.0, 1.0, 2.0])
        layers, sums, counts, rep_l = layer_sums(ls, ts, np.zeros(3, dtype=int))

        valid, _, _, _ = window_fit(layers, sums, counts, rep_l, 3, 1e-6)

        assert not valid[0]

    def test_perpendicular_rms(self):
        """Test the RMS of the residuals perpendicular to the line."""
        ls = np.array([0.0, 1.0, 2.0, 3.0])
        ts = np.array([1.0, -1.0, 1.0, -1.0])
        layers, sums, counts, rep_l = layer_sums(ls, ts, np.arange(4))

        valid, fit_t, gradient, rms = window_fit(layers, sums, counts, rep_l, 3, 1e-6)

        slope, intercept = np.polyfit(ls, ts, 1)
        residuals = (ts - slope * ls - intercept) / np.sqrt(1 + slope**2)
        assert valid.all()
        assert np.allclose(gradient, slope)
        assert np.allclose(fit_t, slope * rep_l + intercept)
        assert np.allclose(rms, np.sqrt(np.mean(residuals**2)))

    def test_window_boundaries(self):
        """Test that only the layers within the half window contribute."""
        ls = np.array([0.0, 1.0, 2.0, 10.0, 11.0])
        ts = np.array([0.0, 0.0, 0.0, 5.0, 6.0])
        layers, sums, counts, rep_l = layer_sums(
            ls, ts, np.array([0, 1, 2, 10, 11])
        )

        valid, fit_t, gradient, _ = window_fit(layers, sums, counts, rep_l, 2, 1e-6)

        assert valid.tolist() == [True, True, True, True, True]
        assert np.allclose(gradient[:3], 0.0)
        assert gradient[3] == pytest.approx(1.0)
        assert fit_t[4] == pytest.approx(6.0)
