"""Shape helpers of two-dimensional clusters.

The pseudo-layer of a hit is computed from its wire (z) coordinate. Functions
which take a `calculator` use a :class:`PseudoLayerCalculator` with the
default pitch if it is not provided.
"""

import numpy as np
from scipy.spatial.distance import cdist

from slidefit.data import Cluster
from slidefit.fit.builder import sliding_fit
from slidefit.fit.layer import PseudoLayerCalculator

from .globals import DEDX, DEFAULT_HALF_WINDOW, TRACK_RESIDUAL_QUANTILE

__all__ = [
    "get_occupied_layers",
    "get_inner_layer",
    "get_outer_layer",
    "get_layer_span",
    "get_layer_occupancy",
    "get_length_squared",
    "get_length",
    "get_energy_from_length",
    "get_closest_distance",
    "get_sliding_fit_width",
    "get_track_width",
    "inner_layer_key",
    "occupied_layers_key",
    "n_hits_key",
]


def get_occupied_layers(cluster, calculator=None):
    """Sorted set of pseudo-layers which contain at least one hit.

    Parameters
    ----------
    cluster : Cluster
        Cluster of hits
    calculator : PseudoLayerCalculator, optional
        Pseudo-layer calculator

    Returns
    -------
    np.ndarray
        (L) Sorted, unique occupied layers
    """
    calculator = calculator or PseudoLayerCalculator()

    return np.unique(calculator.get_layers(cluster.points[:, 2]))


def get_inner_layer(cluster, calculator=None):
    """Lowest pseudo-layer occupied by a cluster."""
    layers = get_occupied_layers(cluster, calculator)
    if not len(layers):
        raise ValueError("An empty cluster does not occupy any layer.")

    return int(layers[0])


def get_outer_layer(cluster, calculator=None):
    """Highest pseudo-layer occupied by a cluster."""
    layers = get_occupied_layers(cluster, calculator)
    if not len(layers):
        raise ValueError("An empty cluster does not occupy any layer.")

    return int(layers[-1])


def get_layer_span(cluster, calculator=None):
    """Number of pseudo-layers between the inner and outer layers of a cluster.

    Parameters
    ----------
    cluster : Cluster
        Cluster of hits
    calculator : PseudoLayerCalculator, optional
        Pseudo-layer calculator

    Returns
    -------
    int
        Inclusive layer span
    """
    return (
        1
        + get_outer_layer(cluster, calculator)
        - get_inner_layer(cluster, calculator)
    )


def get_layer_occupancy(cluster, other=None, calculator=None):
    """Fraction of the spanned pseudo-layers which contain hits.

    If a second cluster is provided, the occupancy of the pair is computed
    over the span of both clusters combined.

    Parameters
    ----------
    cluster : Cluster
        Cluster of hits
    other : Cluster, optional
        Second cluster of hits
    calculator : PseudoLayerCalculator, optional
        Pseudo-layer calculator

    Returns
    -------
    float
        Layer occupancy, in [0, 1]
    """
    layers = get_occupied_layers(cluster, calculator)
    if other is None:
        if not len(layers):
            return 0.0

        return len(layers) / (1 + layers[-1] - layers[0])

    other_layers = get_occupied_layers(other, calculator)
    all_layers = np.concatenate([layers, other_layers])
    if not len(all_layers):
        return 0.0

    span = 1 + np.max(all_layers) - np.min(all_layers)

    return (len(layers) + len(other_layers)) / span


def get_length_squared(cluster):
    """Squared diagonal of the bounding box of a cluster.

    Parameters
    ----------
    cluster : Cluster
        Cluster of hits

    Returns
    -------
    float
        Squared length
    """
    if not len(cluster.points):
        return 0.0

    extent = np.max(cluster.points, axis=0) - np.min(cluster.points, axis=0)

    return float(np.dot(extent, extent))


def get_length(cluster):
    """Diagonal of the bounding box of a cluster."""
    return np.sqrt(get_length_squared(cluster))


def get_energy_from_length(cluster, dedx=DEDX):
    """Energy estimate of a minimum ionizing cluster from its length.

    Parameters
    ----------
    cluster : Cluster
        Cluster of hits
    dedx : float, default 0.002
        Energy loss per unit length, in GeV/cm

    Returns
    -------
    float
        Energy estimate, in GeV
    """
    return dedx * get_length(cluster)


def get_closest_distance(cluster, other):
    """Smallest distance between the hits of a cluster and a target.

    Parameters
    ----------
    cluster : Cluster
        Cluster of hits
    other : Union[Cluster, np.ndarray]
        Second cluster or (3) position

    Returns
    -------
    float
        Closest distance
    """
    if isinstance(other, Cluster):
        targets = other.points
    else:
        targets = np.asarray(other, dtype=np.float64).reshape(-1, 3)

    if not len(cluster.points) or not len(targets):
        raise ValueError("Cannot compute the distance to an empty set of points.")

    return float(np.min(cdist(cluster.points, targets)))


def get_sliding_fit_width(fit, quantile=TRACK_RESIDUAL_QUANTILE):
    """Quantile of the hit residuals about a sliding fit.

    The residual of a hit is its transverse distance to the fitted line of
    its own layer. Hits in layers without a fit are ignored.

    Parameters
    ----------
    fit : SlidingFitResult
        Sliding fit of a cluster
    quantile : float, default 0.8
        Quantile of the residual distribution

    Returns
    -------
    float
        Fit width, 0 if no hit has a residual
    """
    if not 0.0 <= quantile <= 1.0:
        raise ValueError(f"The quantile must be in [0, 1], got {quantile}.")

    points = fit.local_points
    if not len(points):
        return 0.0

    # Match each hit to the fit of its layer
    ls, ts = points[:, 0], points[:, 1]
    hit_layers = fit.layer_calculator.get_layers(ls)
    index = np.searchsorted(fit.layers, hit_layers)
    index = np.minimum(index, len(fit.layers) - 1)
    found = fit.layers[index] == hit_layers
    if not np.any(found):
        return 0.0

    index = index[found]
    expected = fit.layer_fit_t[index] + fit.layer_gradients[index] * (
        ls[found] - fit.layer_l[index]
    )
    residuals = np.abs(ts[found] - expected)

    return float(np.quantile(residuals, quantile))


def get_track_width(
    cluster,
    half_window=DEFAULT_HALF_WINDOW,
    quantile=TRACK_RESIDUAL_QUANTILE,
    **kwargs,
):
    """Width of a cluster measured about its sliding fit.

    Parameters
    ----------
    cluster : Cluster
        Cluster of hits
    half_window : int, default 20
        Sliding fit layer half window
    quantile : float, default 0.8
        Quantile of the residual distribution
    **kwargs : dict, optional
        Additional arguments passed to :func:`sliding_fit`

    Returns
    -------
    float
        Track width
    """
    fit = sliding_fit(cluster, half_window, **kwargs)

    return get_sliding_fit_width(fit, quantile)


def inner_layer_key(cluster):
    """Sort key which orders clusters by increasing inner layer.

    Ties are broken by the number of occupied layers, then by energy.
    """
    return (
        get_inner_layer(cluster),
        -len(get_occupied_layers(cluster)),
        -cluster.energy,
    )


def occupied_layers_key(cluster):
    """Sort key which orders clusters by decreasing number of occupied layers.

    Ties are broken by the inner layer, then by energy.
    """
    return (
        -len(get_occupied_layers(cluster)),
        get_inner_layer(cluster),
        -cluster.energy,
    )


def n_hits_key(cluster):
    """Sort key which orders clusters by decreasing number of hits.

    Ties are broken by the layer span, then by energy.
    """
    return (-len(cluster), -get_layer_span(cluster), -cluster.energy)
