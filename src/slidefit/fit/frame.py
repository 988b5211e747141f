"""Local (longitudinal, transverse) coordinate frame of a cluster."""

from dataclasses import dataclass

import numpy as np

from slidefit.errors import InvalidAxisError
from slidefit.math.decomposition import principal_axis
from slidefit.utils.globals import FLOAT_EPS, VIEW_COLS

__all__ = ["AxisFrame"]

# Unit vector along the global y axis, normal to the 2D views
Y_AXIS = np.array([0.0, 1.0, 0.0])


@dataclass(frozen=True, eq=False)
class AxisFrame:
    """Primary axis of a cluster, defining its local coordinates.

    A point `p` is described by its longitudinal coordinate along the axis,
    `L = (p - intercept) . direction`, and its signed transverse distance to
    the axis, `T`. The magnitude of `T` is that of `(p - intercept) x direction`
    and its sign is the sign of the y component of that cross product.

    Attributes
    ----------
    intercept : np.ndarray
        (3) Origin of the axis
    direction : np.ndarray
        (3) Unit direction of the axis, in the (x, z) plane
    """

    intercept: np.ndarray
    direction: np.ndarray

    def __post_init__(self):
        """Validates and freezes the axis vectors."""
        intercept = np.array(self.intercept, dtype=np.float64).reshape(-1)
        direction = np.array(self.direction, dtype=np.float64).reshape(-1)
        if len(intercept) != 3 or len(direction) != 3:
            raise ValueError("The axis intercept and direction must be 3-vectors.")

        mag = np.linalg.norm(direction)
        if mag < FLOAT_EPS:
            raise InvalidAxisError("The axis direction must not be a null vector.")
        direction = direction / mag
        if abs(direction[1]) > FLOAT_EPS:
            raise InvalidAxisError(
                "The axis direction must lie in the (x, z) plane, got "
                f"{direction}."
            )

        intercept.flags.writeable = False
        direction.flags.writeable = False
        object.__setattr__(self, "intercept", intercept)
        object.__setattr__(self, "direction", direction)

    def __eq__(self, other):
        """Checks that two frames share the same intercept and direction."""
        if not isinstance(other, AxisFrame):
            return False

        return np.array_equal(self.intercept, other.intercept) and np.array_equal(
            self.direction, other.direction
        )

    @classmethod
    def from_points(cls, points):
        """Derives the axis from a least-squares fit to a set of points.

        The fit is performed in the (x, z) plane. The intercept is the
        centroid of the points and the direction is oriented towards
        increasing z (increasing x if the axis is perpendicular to z).

        Parameters
        ----------
        points : np.ndarray
            (N, 3) Point coordinates

        Returns
        -------
        AxisFrame
            Axis frame of the point set
        """
        points = np.asarray(points, dtype=np.float64)
        if not len(points):
            raise ValueError("Cannot derive an axis from an empty set of points.")

        coords = np.ascontiguousarray(points[:, VIEW_COLS])
        centroid, axis = principal_axis(coords)
        if axis[1] < -FLOAT_EPS or (abs(axis[1]) <= FLOAT_EPS and axis[0] < 0.0):
            axis = -axis

        intercept = np.array([centroid[0], 0.0, centroid[1]])
        direction = np.array([axis[0], 0.0, axis[1]])

        return cls(intercept, direction)

    @classmethod
    def xz(cls):
        """Axis along z, through the origin (fits x as a function of z).

        Returns
        -------
        AxisFrame
            Axis frame along z
        """
        return cls(np.zeros(3), np.array([0.0, 0.0, 1.0]))

    @property
    def transverse_direction(self):
        """Direction of increasing transverse coordinate.

        Returns
        -------
        np.ndarray
            (3) Unit vector `direction x y`
        """
        return np.cross(self.direction, Y_AXIS)

    def to_local(self, point):
        """Projects a global position into the local frame.

        Parameters
        ----------
        point : np.ndarray
            (3) Global position

        Returns
        -------
        float
            Longitudinal coordinate L
        float
            Transverse coordinate T
        """
        displacement = np.asarray(point, dtype=np.float64) - self.intercept
        cross = np.cross(displacement, self.direction)
        l = float(np.dot(displacement, self.direction))
        t = float(np.linalg.norm(cross))

        return l, (-t if cross[1] < 0.0 else t)

    def to_local_points(self, points):
        """Vectorized version of :meth:`to_local`.

        Parameters
        ----------
        points : np.ndarray
            (N, 3) Global positions

        Returns
        -------
        np.ndarray
            (N) Longitudinal coordinates
        np.ndarray
            (N) Transverse coordinates
        """
        displacements = np.asarray(points, dtype=np.float64) - self.intercept
        cross = np.cross(displacements, self.direction).reshape(-1, 3)
        ls = displacements.reshape(-1, 3) @ self.direction
        ts = np.linalg.norm(cross, axis=1)
        ts[cross[:, 1] < 0.0] *= -1.0

        return ls, ts

    def to_global(self, l, t):
        """Converts local coordinates back to a global position.

        Parameters
        ----------
        l : float
            Longitudinal coordinate L
        t : float
            Transverse coordinate T

        Returns
        -------
        np.ndarray
            (3) Global position
        """
        return self.intercept + self.direction * l + self.transverse_direction * t
