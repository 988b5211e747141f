"""Configurable sliding fit modules.

Each fitter wraps one of the sliding fit builders with a fixed set of
parameters, so that it can be built from a configuration block.
"""

from slidefit.utils.enums import ShowerEdge, enum_factory
from slidefit.utils.globals import (
    DEFAULT_HALF_WINDOW,
    DEFAULT_MIN_LAYER_SPAN,
    DEFAULT_PITCH,
)

from .builder import shower_edge_fit, sliding_fit, sliding_xz_fit
from .frame import AxisFrame

__all__ = ["SlidingFitter", "SlidingXZFitter", "ShowerEdgeFitter"]


class FitterBase:
    """Base class of all sliding fit modules.

    Attributes
    ----------
    name : str
        Name of the fitter (as specified in the configuration)
    aliases : Tuple[str]
        Alternative allowed names of the fitter
    """

    name = None
    aliases = ()

    def __init__(
        self,
        half_window=DEFAULT_HALF_WINDOW,
        pitch=DEFAULT_PITCH,
        min_layer_span=DEFAULT_MIN_LAYER_SPAN,
    ):
        """Store the parameters shared by all the sliding fits.

        Parameters
        ----------
        half_window : int, default 20
            Number of layers on each side of a layer included in its fit
        pitch : float, default 0.3
            Pseudo-layer pitch
        min_layer_span : int, default 2
            Minimum number of layers a cluster must span
        """
        self.half_window = half_window
        self.pitch = pitch
        self.min_layer_span = min_layer_span

    def __repr__(self):
        """Readable representation of the fitter."""
        return (
            f"{self.__class__.__name__}(half_window={self.half_window}, "
            f"pitch={self.pitch}, min_layer_span={self.min_layer_span})"
        )

    def __call__(self, cluster):
        """Alias of :meth:`fit`."""
        return self.fit(cluster)

    def fit(self, cluster):
        """Fits one cluster.

        Parameters
        ----------
        cluster : Union[Cluster, np.ndarray]
            Cluster or (N, 3) set of hit coordinates

        Returns
        -------
        SlidingFitResult
            Sliding fit of the cluster
        """
        raise NotImplementedError("Must define the `fit` method.")


class SlidingFitter(FitterBase):
    """Sliding fit along the principal axis of the cluster or a fixed axis."""

    # Name of the fitter (as specified in the configuration)
    name = "global"

    # Alternative allowed names of the fitter
    aliases = ("sliding_fit",)

    def __init__(self, intercept=None, direction=None, **kwargs):
        """Store the optional fixed axis.

        Parameters
        ----------
        intercept : List[float], optional
            (3) Origin of a fixed primary axis
        direction : List[float], optional
            (3) Direction of a fixed primary axis
        **kwargs : dict
            Parameters passed to :class:`FitterBase`
        """
        super().__init__(**kwargs)

        if (intercept is None) != (direction is None):
            raise ValueError(
                "Must specify both the `intercept` and the `direction` of a "
                "fixed axis, or neither."
            )

        self.frame = None
        if direction is not None:
            self.frame = AxisFrame(intercept, direction)

    def fit(self, cluster):
        """Fits one cluster along the configured axis."""
        return sliding_fit(
            cluster,
            self.half_window,
            self.frame,
            pitch=self.pitch,
            min_layer_span=self.min_layer_span,
        )


class SlidingXZFitter(FitterBase):
    """Sliding fit of x as a function of z."""

    # Name of the fitter (as specified in the configuration)
    name = "xz"

    # Alternative allowed names of the fitter
    aliases = ("sliding_xz_fit",)

    def fit(self, cluster):
        """Fits one cluster along the z axis."""
        return sliding_xz_fit(
            cluster,
            self.half_window,
            pitch=self.pitch,
            min_layer_span=self.min_layer_span,
        )


class ShowerEdgeFitter(FitterBase):
    """Sliding fit to one transverse edge of a shower-like cluster."""

    # Name of the fitter (as specified in the configuration)
    name = "shower_edge"

    # Alternative allowed names of the fitter
    aliases = ("shower_edge_fit",)

    def __init__(self, edge="positive", **kwargs):
        """Store the edge to fit.

        Parameters
        ----------
        edge : str, default 'positive'
            Transverse edge of the cluster to fit, 'positive' or 'negative'
        **kwargs : dict
            Parameters passed to :class:`FitterBase`
        """
        super().__init__(**kwargs)

        self.edge = enum_factory(ShowerEdge, edge)

    def fit(self, cluster):
        """Fits one edge of a cluster along its principal axis."""
        return shower_edge_fit(
            cluster,
            self.half_window,
            edge=self.edge,
            pitch=self.pitch,
            min_layer_span=self.min_layer_span,
        )
