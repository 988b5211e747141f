"""Numba JIT compiled implementation of decomposition routines."""

import numba as nb
import numpy as np

__all__ = ["principal_components", "principal_axis"]


@nb.njit(cache=True)
def principal_components(x: nb.float64[:, :]) -> nb.float64[:, :]:
    """Computes the principal components of a point cloud by computing the
    eigenvectors of the centered covariance matrix.

    Parameters
    ----------
    x : np.ndarray
        (N, d) Coordinates in d dimensions

    Returns
    -------
    np.ndarray
        (d, d) List of principal components (row-ordered)
    """
    # Get covariance matrix
    A = np.cov(x.T, ddof=len(x) - 1).astype(x.dtype)

    # Get eigenvectors, sorted by decreasing eigenvalue
    _, v = np.linalg.eigh(A)
    v = np.ascontiguousarray(np.fliplr(v).T)

    return v


@nb.njit(cache=True)
def principal_axis(x: nb.float64[:, :]) -> (nb.float64[:], nb.float64[:]):
    """Least-squares line through a point cloud (orthogonal regression).

    Parameters
    ----------
    x : np.ndarray
        (N, d) Coordinates in d dimensions, N > 0

    Returns
    -------
    np.ndarray
        (d) Centroid of the point cloud, through which the line goes
    np.ndarray
        (d) Unit direction of the line
    """
    centroid = np.empty(x.shape[1], dtype=x.dtype)
    for i in range(x.shape[1]):
        centroid[i] = np.mean(x[:, i])

    # A single point has no preferred direction
    if len(x) < 2:
        direction = np.zeros(x.shape[1], dtype=x.dtype)
        return centroid, direction

    direction = principal_components(x)[0]

    return centroid, direction
