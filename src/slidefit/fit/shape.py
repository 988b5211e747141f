"""Shape diagnostics derived from a sliding fit.

These functions only use the public query interface of a
:class:`SlidingFitResult`.
"""

import numpy as np

from slidefit.errors import OutOfRangeError
from slidefit.math.linalg import line_intersection, norm
from slidefit.utils.globals import (
    FLOAT_EPS,
    MAX_TRACK_FIT_RMS,
    MIN_COS_SCATTERING_ANGLE,
    MULTIVALUED_STEP_FRACTION_CUT,
    MULTIVALUED_TAN_THETA_CUT,
    TRACK_RESIDUAL_QUANTILE,
    VIEW_COLS,
)

__all__ = ["find_largest_scatter", "is_multivalued_in_x", "get_track_width"]


def find_largest_scatter(
    fit,
    min_cos_scattering_angle=MIN_COS_SCATTERING_ANGLE,
    max_track_fit_rms=MAX_TRACK_FIT_RMS,
):
    """Finds the position of the sharpest direction change along a fit.

    For each candidate layer, the fitted directions one half window upstream
    and one half window downstream are compared. The layer with the smallest
    opening cosine (below `min_cos_scattering_angle`) for which both probes
    have a fit RMS below `max_track_fit_rms` is retained. The scatter position
    is the intersection of the two probe lines in the (x, z) view.

    Parameters
    ----------
    fit : SlidingFitResult
        Sliding fit of a cluster
    min_cos_scattering_angle : float, default 0.98
        Opening cosine above which a direction change is ignored
    max_track_fit_rms : float, default 0.15
        Largest fit RMS for which the probe directions are trusted

    Returns
    -------
    np.ndarray
        (3) Global position of the largest scatter, `None` if there is none
    """
    half_window = fit.half_window
    min_layer, max_layer = fit.min_layer, fit.max_layer
    if half_window < 1 or 1 + max_layer - min_layer <= 2 * half_window:
        return None

    best_cos, best = min_cos_scattering_angle, None
    for layer in fit.layers.tolist():
        if layer < min_layer + half_window or layer > max_layer - half_window:
            continue

        first_l = fit.get_layer_position(layer - half_window)
        second_l = fit.get_layer_position(layer + half_window)
        try:
            first_dir = fit.global_direction_at(first_l)
            second_dir = fit.global_direction_at(second_l)
            rms = max(fit.rms_at(first_l), fit.rms_at(second_l))
        except OutOfRangeError:
            continue

        cos_theta = float(np.dot(first_dir, second_dir))
        if rms < max_track_fit_rms and cos_theta < best_cos:
            best_cos = cos_theta
            best = (layer, first_l, second_l, first_dir, second_dir)

    if best is None:
        return None

    # Intersect the upstream and downstream probe lines
    layer, first_l, second_l, first_dir, second_dir = best
    first_pos = fit.global_position_at(first_l)
    second_pos = fit.global_position_at(second_l)
    found, s = line_intersection(
        first_pos[VIEW_COLS],
        first_dir[VIEW_COLS],
        second_pos[VIEW_COLS],
        second_dir[VIEW_COLS],
        FLOAT_EPS,
    )
    if found and 0.0 <= s <= np.linalg.norm(second_pos - first_pos):
        return first_pos + s * first_dir

    return fit.global_position_at(fit.get_layer_position(layer))


def is_multivalued_in_x(
    fit,
    tan_theta_cut=MULTIVALUED_TAN_THETA_CUT,
    step_fraction_cut=MULTIVALUED_STEP_FRACTION_CUT,
):
    """Checks whether a fitted trajectory folds back on itself in x.

    The fitted layer positions are walked in order. A step between two
    consecutive layers is steep if its x extent exceeds `tan_theta_cut` times
    its z extent. The trajectory is multivalued if the steep steps going
    towards increasing x and those going towards decreasing x each make up
    more than `step_fraction_cut` of the total path length.

    Parameters
    ----------
    fit : SlidingFitResult
        Sliding fit of a cluster
    tan_theta_cut : float, default 1.0
        Ratio |dx|/|dz| above which a step is considered steep
    step_fraction_cut : float, default 0.1
        Fraction of the path length required in each x direction

    Returns
    -------
    bool
        `True` if the trajectory is multivalued in x
    """
    positions = fit.layer_positions
    if len(positions) < 2:
        return False

    steps = np.ascontiguousarray(np.diff(positions, axis=0))
    lengths = norm(steps, 1)
    total_length = np.sum(lengths)
    if total_length < FLOAT_EPS:
        return False

    dx, dz = steps[:, 0], steps[:, 2]
    steep = np.abs(dx) > tan_theta_cut * np.abs(dz)
    pos_fraction = np.sum(lengths[steep & (dx > 0.0)]) / total_length
    neg_fraction = np.sum(lengths[steep & (dx < 0.0)]) / total_length

    return bool(pos_fraction > step_fraction_cut and neg_fraction > step_fraction_cut)


def get_track_width(fit, quantile=TRACK_RESIDUAL_QUANTILE):
    """Characteristic transverse width of a fitted trajectory.

    Parameters
    ----------
    fit : SlidingFitResult
        Sliding fit of a cluster
    quantile : float, default 0.8
        Quantile of the per-layer fit RMS distribution used as the width

    Returns
    -------
    float
        Track width
    """
    if not 0.0 <= quantile <= 1.0:
        raise ValueError(f"The quantile must be in [0, 1], got {quantile}.")

    return float(np.quantile(fit.layer_rms, quantile))
