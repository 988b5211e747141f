"""Data structures which make up a sliding linear fit."""

from dataclasses import dataclass

import numpy as np

__all__ = ["LayerFitContribution", "LayerFitResult"]


@dataclass
class LayerFitContribution:
    """Sufficient statistics of a least-squares regression of T on L.

    One contribution accumulates the hits of one pseudo-layer.

    Attributes
    ----------
    sum_l : float
        Sum of the longitudinal coordinates
    sum_t : float
        Sum of the transverse coordinates
    sum_ll : float
        Sum of the squared longitudinal coordinates
    sum_tt : float
        Sum of the squared transverse coordinates
    sum_lt : float
        Sum of the products of the longitudinal and transverse coordinates
    n_points : int
        Number of points added to the contribution
    """

    sum_l: float = 0.0
    sum_t: float = 0.0
    sum_ll: float = 0.0
    sum_tt: float = 0.0
    sum_lt: float = 0.0
    n_points: int = 0

    def add_point(self, l, t):
        """Adds one point to the sums.

        Parameters
        ----------
        l : float
            Longitudinal coordinate of the point
        t : float
            Transverse coordinate of the point
        """
        l, t = float(l), float(t)
        self.sum_l += l
        self.sum_t += t
        self.sum_ll += l * l
        self.sum_tt += t * t
        self.sum_lt += l * t
        self.n_points += 1

    @property
    def mean_l(self):
        """Mean longitudinal coordinate of the points in the contribution.

        Returns
        -------
        float
            Mean L
        """
        return self.sum_l / self.n_points

    def as_array(self):
        """Returns the sums as an array, in the order expected by the kernel.

        Returns
        -------
        np.ndarray
            (5) Array of (sum_l, sum_t, sum_ll, sum_tt, sum_lt)
        """
        return np.array(
            [self.sum_l, self.sum_t, self.sum_ll, self.sum_tt, self.sum_lt],
            dtype=np.float64,
        )


@dataclass(frozen=True)
class LayerFitResult:
    """Finalized local fit of one pseudo-layer.

    Attributes
    ----------
    l : float
        Representative longitudinal coordinate of the layer
    fit_t : float
        Fitted transverse coordinate at `l`
    gradient : float
        Fitted gradient dT/dL
    rms : float
        RMS of the perpendicular residuals of the points in the fit window
    """

    l: float
    fit_t: float
    gradient: float
    rms: float
