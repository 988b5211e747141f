"""Module with a data class object which represents a 2D cluster of hits."""

from dataclasses import dataclass

import numpy as np

from .base import DataBase

__all__ = ["Cluster"]


@dataclass(eq=False)
class Cluster(DataBase):
    """Set of hits believed to belong to a single trajectory.

    The hits are provided as 3D points. In a 2D view, the hits live in the
    (x, z) plane, x being the drift coordinate and z the wire coordinate.

    Attributes
    ----------
    id : int
        Index of the cluster in the list
    points : np.ndarray
        (N, 3) Set of hit coordinates
    depositions : np.ndarray
        (N) Energy deposited by each hit, in GeV
    """

    id: int = -1
    points: np.ndarray = None
    depositions: np.ndarray = None

    # Variable-length attributes as (key, dtype) or (key, (width, dtype)) pairs
    _var_length_attrs = (("points", (3, np.float64)), ("depositions", np.float32))

    def __post_init__(self):
        """Checks that the depositions, if provided, match the points."""
        super().__post_init__()

        if len(self.depositions) and len(self.depositions) != len(self.points):
            raise ValueError(
                f"Got {len(self.depositions)} depositions for "
                f"{len(self.points)} points."
            )

    def __len__(self):
        """Returns the number of hits in the cluster.

        Returns
        -------
        int
            Number of hits
        """
        return len(self.points)

    @property
    def size(self):
        """Number of hits in the cluster.

        Returns
        -------
        int
            Number of hits
        """
        return len(self.points)

    @property
    def energy(self):
        """Total energy deposited by the hits of the cluster.

        Returns
        -------
        float
            Sum of the hit depositions
        """
        return float(np.sum(self.depositions))
