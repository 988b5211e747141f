"""Numba JIT compiled implementation of windowed least-squares regressions."""

import numba as nb
import numpy as np

__all__ = ["window_fit"]


@nb.njit(cache=True)
def window_fit(
    layers: nb.int64[:],
    sums: nb.float64[:, :],
    counts: nb.int64[:],
    rep_l: nb.float64[:],
    half_window: nb.int64,
    eps: nb.float64,
) -> (nb.boolean[:], nb.float64[:], nb.float64[:], nb.float64[:]):
    """Fits a straight line T = gradient * L + intercept in a sliding window.

    For each populated layer, the sufficient statistics of all the layers
    within `half_window` of it (inclusive) are summed and the least-squares
    line is solved for in centered coordinates.

    Parameters
    ----------
    layers : np.ndarray
        (K) Sorted, unique populated layer indexes
    sums : np.ndarray
        (K, 5) Per-layer (sum_l, sum_t, sum_ll, sum_tt, sum_lt)
    counts : np.ndarray
        (K) Number of points in each layer
    rep_l : np.ndarray
        (K) Longitudinal coordinate at which to evaluate each layer's fit
    half_window : int
        Number of layers on each side of a layer included in its fit
    eps : float
        Tolerance below which the spread in L (or the variance) is degenerate

    Returns
    -------
    np.ndarray
        (K) Mask of layers for which the fit is well defined
    np.ndarray
        (K) Fitted transverse coordinate at `rep_l`
    np.ndarray
        (K) Fitted gradient dT/dL
    np.ndarray
        (K) RMS of the perpendicular residuals about the fitted line
    """
    num_layers = len(layers)
    valid = np.zeros(num_layers, dtype=np.bool_)
    fit_t = np.zeros(num_layers, dtype=np.float64)
    gradient = np.zeros(num_layers, dtype=np.float64)
    rms = np.zeros(num_layers, dtype=np.float64)

    lo, hi = 0, 0
    for k in range(num_layers):
        # Move the window boundaries, [lo, hi) spans the window of layer k
        while layers[lo] < layers[k] - half_window:
            lo += 1
        while hi < num_layers and layers[hi] <= layers[k] + half_window:
            hi += 1

        n = 0
        sum_l, sum_t, sum_ll, sum_tt, sum_lt = 0.0, 0.0, 0.0, 0.0, 0.0
        for j in range(lo, hi):
            n += counts[j]
            sum_l += sums[j, 0]
            sum_t += sums[j, 1]
            sum_ll += sums[j, 2]
            sum_tt += sums[j, 3]
            sum_lt += sums[j, 4]

        if n < 2:
            continue

        # Centered second moments
        mean_l, mean_t = sum_l / n, sum_t / n
        s_ll = sum_ll - n * mean_l * mean_l
        s_lt = sum_lt - n * mean_l * mean_t
        s_tt = sum_tt - n * mean_t * mean_t
        if abs(s_ll) < eps:
            continue

        # Line parameters and perpendicular variance about the line
        grad = s_lt / s_ll
        variance = (s_tt - grad * s_lt) / (1.0 + grad * grad)
        if variance < -eps:
            continue
        if variance < 0.0:
            variance = 0.0

        valid[k] = True
        gradient[k] = grad
        fit_t[k] = mean_t + grad * (rep_l[k] - mean_l)
        rms[k] = np.sqrt(variance / n)

    return valid, fit_t, gradient, rms
