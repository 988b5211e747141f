"""Numba JIT compiled implementation of linear algebra routines."""

import numba as nb
import numpy as np

__all__ = ["norm", "line_intersection"]


@nb.njit(cache=True)
def norm(x: nb.float64[:, :], axis: nb.int32) -> nb.float64[:]:
    """Compute vector norms along specified axis.

    This is a Numba-compiled implementation of `np.linalg.norm(x, axis=axis)`
    for 2D arrays.

    Parameters
    ----------
    x : ndarray of shape (n, m)
        Input array of floating-point values.
    axis : {0, 1}
        Axis along which to compute the norm:
        - 0: compute norm of each column (returns array of length m)
        - 1: compute norm of each row (returns array of length n)

    Returns
    -------
    norms : ndarray of shape (m,) or (n,)
        Array of norm values along the specified axis.
    """
    assert axis == 0 or axis == 1
    xnorm = np.empty(x.shape[1 - axis], dtype=x.dtype)
    if axis == 0:
        for i in range(len(xnorm)):
            xnorm[i] = np.linalg.norm(x[:, i])
    else:
        for i in range(len(xnorm)):
            xnorm[i] = np.linalg.norm(x[i])

    return xnorm


@nb.njit(cache=True)
def line_intersection(
    p1: nb.float64[:],
    d1: nb.float64[:],
    p2: nb.float64[:],
    d2: nb.float64[:],
    eps: nb.float64,
) -> (nb.boolean, nb.float64):
    """Intersection of two lines in a plane.

    Solves `p1 + s * d1 = p2 + u * d2` for `s`.

    Parameters
    ----------
    p1 : np.ndarray
        (2) Point on the first line
    d1 : np.ndarray
        (2) Direction of the first line
    p2 : np.ndarray
        (2) Point on the second line
    d2 : np.ndarray
        (2) Direction of the second line
    eps : float
        Determinant below which the lines are considered parallel

    Returns
    -------
    bool
        `True` if the lines intersect
    float
        Position of the intersection along the first line, in units of `d1`
    """
    det = d2[0] * d1[1] - d1[0] * d2[1]
    if abs(det) < eps:
        return False, 0.0

    dx, dy = p2[0] - p1[0], p2[1] - p1[1]
    s = (d2[0] * dy - dx * d2[1]) / det

    return True, s
