"""Construction of two-dimensional sliding linear fits.

A sliding fit is built in three steps:
- each hit is projected into the local (L, T) frame of the cluster axis;
- the hits are accumulated into per-layer sufficient statistics;
- for each populated layer, the statistics of the layers within a half window
  of it are summed and a straight line T(L) is solved for.

Layers for which the line is undefined (all the window hits share the same L)
are left out of the result.
"""

import numpy as np

from slidefit.data import Cluster, LayerFitContribution
from slidefit.errors import InsufficientDataError
from slidefit.math.regression import window_fit
from slidefit.utils.enums import ShowerEdge, enum_factory
from slidefit.utils.globals import (
    DEFAULT_HALF_WINDOW,
    DEFAULT_MIN_LAYER_SPAN,
    DEFAULT_PITCH,
    FLOAT_EPS,
)
from slidefit.utils.logger import logger

from .frame import AxisFrame
from .layer import PseudoLayerCalculator
from .result import SlidingFitResult

__all__ = ["sliding_fit", "sliding_xz_fit", "shower_edge_fit"]


def sliding_fit(
    cluster,
    half_window=DEFAULT_HALF_WINDOW,
    frame=None,
    pitch=DEFAULT_PITCH,
    min_layer_span=DEFAULT_MIN_LAYER_SPAN,
):
    """Performs a sliding fit of a cluster along a primary axis.

    Parameters
    ----------
    cluster : Union[Cluster, np.ndarray]
        Cluster or (N, 3) set of hit coordinates
    half_window : int, default 20
        Number of layers on each side of a layer included in its fit
    frame : AxisFrame, optional
        Primary axis. If not specified, it is derived from a least-squares
        fit to all the hits of the cluster.
    pitch : float, default 0.3
        Pseudo-layer pitch
    min_layer_span : int, default 2
        Minimum number of layers the cluster must span

    Returns
    -------
    SlidingFitResult
        Sliding fit of the cluster
    """
    points, cluster = _parse_cluster(cluster)
    half_window = _check_half_window(half_window)
    if frame is None:
        if len(points) < 2:
            raise InsufficientDataError(
                f"Need at least two hits to define an axis, got {len(points)}."
            )
        frame = AxisFrame.from_points(points)

    calculator = PseudoLayerCalculator(pitch)
    ls, ts = frame.to_local_points(points)

    return _store_results(
        ls, ts, frame, calculator, half_window, min_layer_span, cluster
    )


def sliding_xz_fit(
    cluster,
    half_window=DEFAULT_HALF_WINDOW,
    pitch=DEFAULT_PITCH,
    min_layer_span=DEFAULT_MIN_LAYER_SPAN,
):
    """Performs a sliding fit using the z axis as primary axis.

    This fits the x coordinate of the hits as a function of z.

    Parameters
    ----------
    cluster : Union[Cluster, np.ndarray]
        Cluster or (N, 3) set of hit coordinates
    half_window : int, default 20
        Number of layers on each side of a layer included in its fit
    pitch : float, default 0.3
        Pseudo-layer pitch
    min_layer_span : int, default 2
        Minimum number of layers the cluster must span

    Returns
    -------
    SlidingFitResult
        Sliding fit of the cluster
    """
    return sliding_fit(
        cluster, half_window, AxisFrame.xz(), pitch=pitch, min_layer_span=min_layer_span
    )


def shower_edge_fit(
    cluster,
    half_window=DEFAULT_HALF_WINDOW,
    frame=None,
    edge=ShowerEdge.POSITIVE,
    pitch=DEFAULT_PITCH,
    min_layer_span=DEFAULT_MIN_LAYER_SPAN,
):
    """Performs a sliding fit to one transverse edge of a cluster.

    Only the hit with the largest (positive edge) or smallest (negative edge)
    transverse coordinate of each layer contributes to the fit.

    Parameters
    ----------
    cluster : Union[Cluster, np.ndarray]
        Cluster or (N, 3) set of hit coordinates
    half_window : int, default 20
        Number of layers on each side of a layer included in its fit
    frame : AxisFrame, optional
        Primary axis. If not specified, it is derived from a least-squares
        fit to all the hits of the cluster.
    edge : Union[ShowerEdge, str], default ShowerEdge.POSITIVE
        Edge of the cluster to fit
    pitch : float, default 0.3
        Pseudo-layer pitch
    min_layer_span : int, default 2
        Minimum number of layers the cluster must span

    Returns
    -------
    SlidingFitResult
        Sliding fit of the cluster edge
    """
    points, cluster = _parse_cluster(cluster)
    half_window = _check_half_window(half_window)
    edge = enum_factory(ShowerEdge, edge)
    if frame is None:
        if len(points) < 2:
            raise InsufficientDataError(
                f"Need at least two hits to define an axis, got {len(points)}."
            )
        frame = AxisFrame.from_points(points)

    calculator = PseudoLayerCalculator(pitch)
    ls, ts = frame.to_local_points(points)

    # Keep the extremal transverse hit of each layer
    if len(ls):
        layers = calculator.get_layers(ls)
        order = np.lexsort((ts, layers))
        _, first_index, counts = np.unique(
            layers[order], return_index=True, return_counts=True
        )
        if edge == ShowerEdge.POSITIVE:
            index = order[first_index + counts - 1]
        else:
            index = order[first_index]
        ls, ts = ls[index], ts[index]

    return _store_results(
        ls, ts, frame, calculator, half_window, min_layer_span, cluster
    )


def _parse_cluster(cluster):
    """Fetches the hit coordinates from a cluster or an array of points.

    Parameters
    ----------
    cluster : Union[Cluster, np.ndarray]
        Cluster or (N, 3) set of hit coordinates

    Returns
    -------
    np.ndarray
        (N, 3) Set of hit coordinates
    Cluster
        Cluster object the points belong to (`None` if points were provided)
    """
    if isinstance(cluster, Cluster):
        return np.asarray(cluster.points, dtype=np.float64), cluster

    points = np.asarray(cluster, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 3:
        raise ValueError(f"The hit coordinates must be of shape (N, 3), got {points.shape}.")

    return points, None


def _check_half_window(half_window):
    """Checks that the layer half window is a non-negative integer."""
    if int(half_window) != half_window or half_window < 0:
        raise ValueError(
            f"The layer half window must be a non-negative integer, got {half_window}."
        )

    return int(half_window)


def _accumulate(ls, ts, calculator):
    """Accumulates the local hit coordinates into per-layer contributions.

    Parameters
    ----------
    ls : np.ndarray
        (N) Longitudinal coordinates
    ts : np.ndarray
        (N) Transverse coordinates
    calculator : PseudoLayerCalculator
        Pseudo-layer calculator

    Returns
    -------
    Dict[int, LayerFitContribution]
        Contributions, ordered by layer
    """
    contributions = {}
    layers = calculator.get_layers(ls)
    for layer, l, t in zip(layers.tolist(), ls.tolist(), ts.tolist()):
        if layer not in contributions:
            contributions[layer] = LayerFitContribution()
        contributions[layer].add_point(l, t)

    return dict(sorted(contributions.items()))


def _store_results(ls, ts, frame, calculator, half_window, min_layer_span, cluster):
    """Fits each populated layer and wraps the output in a result object.

    Parameters
    ----------
    ls : np.ndarray
        (N) Longitudinal coordinates of the hits to fit
    ts : np.ndarray
        (N) Transverse coordinates of the hits to fit
    frame : AxisFrame
        Primary axis
    calculator : PseudoLayerCalculator
        Pseudo-layer calculator
    half_window : int
        Number of layers on each side of a layer included in its fit
    min_layer_span : int
        Minimum number of layers the hits must span
    cluster : Cluster
        Cluster the hits belong to, if any

    Returns
    -------
    SlidingFitResult
        Sliding fit result
    """
    contributions = _accumulate(ls, ts, calculator)
    if not contributions:
        raise InsufficientDataError("Cannot fit a cluster with no hits.")

    layers = np.fromiter(contributions.keys(), dtype=np.int64, count=len(contributions))
    layer_span = 1 + layers[-1] - layers[0]
    if layer_span < min_layer_span:
        raise InsufficientDataError(
            f"The cluster spans {layer_span} layer(s), need at least {min_layer_span}."
        )

    # Solve for the line in each layer window
    sums = np.vstack([c.as_array() for c in contributions.values()])
    counts = np.array([c.n_points for c in contributions.values()], dtype=np.int64)
    rep_l = np.array([c.mean_l for c in contributions.values()], dtype=np.float64)
    valid, fit_t, gradient, rms = window_fit(
        layers, sums, counts, rep_l, half_window, FLOAT_EPS
    )

    if not np.any(valid):
        raise InsufficientDataError(
            "None of the layer windows constrain a line, cannot fit the cluster."
        )
    if not np.all(valid):
        logger.debug(
            f"Skipped {np.sum(~valid)} layer(s) with a degenerate fit window: "
            f"{layers[~valid].tolist()}"
        )

    return SlidingFitResult(
        frame,
        calculator,
        half_window,
        layers[valid],
        rep_l[valid],
        fit_t[valid],
        gradient[valid],
        rms[valid],
        contributions=contributions,
        local_points=np.column_stack([ls, ts]),
        cluster=cluster,
    )
