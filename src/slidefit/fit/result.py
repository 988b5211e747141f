"""Result of a two-dimensional sliding fit and its query engine.

The result holds a sparse, ordered map from pseudo-layer to local fit. Any
longitudinal position within the populated span is resolved into the pair of
populated layers that bracket it, and positions, directions and RMS values are
linearly interpolated between the two.
"""

from types import MappingProxyType
from typing import NamedTuple

import numpy as np

from slidefit.data import LayerFitResult
from slidefit.errors import (
    DegenerateSeparationError,
    InsufficientDataError,
    InvalidAxisError,
    LayerNotFoundError,
    OutOfRangeError,
)
from slidefit.utils.globals import FLOAT_EPS

from .shape import find_largest_scatter, get_track_width, is_multivalued_in_x

__all__ = ["LayerBracket", "SlidingFitResult"]


class LayerBracket(NamedTuple):
    """Pair of populated layers surrounding a query and their weights.

    Attributes
    ----------
    first_layer : int
        Populated layer before the query
    second_layer : int
        Populated layer after the query (same as `first_layer` at boundaries)
    first_weight : float
        Interpolation weight of the first layer
    second_weight : float
        Interpolation weight of the second layer
    """

    first_layer: int
    second_layer: int
    first_weight: float
    second_weight: float


class SlidingFitResult:
    """Immutable sliding linear fit of a cluster.

    Attributes
    ----------
    frame : AxisFrame
        Primary axis of the fit
    layer_calculator : PseudoLayerCalculator
        Pseudo-layer quantizer of the longitudinal coordinate
    half_window : int
        Number of layers on each side of a layer included in its fit
    cluster : Cluster
        Cluster which was fitted, if provided
    """

    def __init__(
        self,
        frame,
        layer_calculator,
        half_window,
        layers,
        l,
        fit_t,
        gradient,
        rms,
        contributions=None,
        local_points=None,
        cluster=None,
    ):
        """Stores the per-layer fits.

        Parameters
        ----------
        frame : AxisFrame
            Primary axis of the fit
        layer_calculator : PseudoLayerCalculator
            Pseudo-layer quantizer
        half_window : int
            Number of layers on each side of a layer included in its fit
        layers : np.ndarray
            (K) Strictly increasing populated layer indexes
        l : np.ndarray
            (K) Representative longitudinal coordinate of each layer
        fit_t : np.ndarray
            (K) Fitted transverse coordinate of each layer
        gradient : np.ndarray
            (K) Fitted gradient of each layer
        rms : np.ndarray
            (K) RMS of the residuals in the window of each layer
        contributions : Dict[int, LayerFitContribution], optional
            Per-layer sufficient statistics the fit was built from
        local_points : np.ndarray, optional
            (N, 2) Local (L, T) coordinates of the fitted hits
        cluster : Cluster, optional
            Cluster which was fitted
        """
        self.frame = frame
        self.layer_calculator = layer_calculator
        self.half_window = half_window
        self.cluster = cluster

        # Store the per-layer arrays, check the map is well-formed
        self._layers = self._freeze(layers, np.int64)
        if not len(self._layers):
            raise InsufficientDataError("A sliding fit needs at least one layer.")
        if np.any(np.diff(self._layers) <= 0):
            raise ValueError("The layer indexes must be strictly increasing.")

        self._l = self._freeze(l)
        self._fit_t = self._freeze(fit_t)
        self._gradient = self._freeze(gradient)
        self._rms = self._freeze(rms)
        for arr in (self._l, self._fit_t, self._gradient, self._rms):
            if len(arr) != len(self._layers):
                raise ValueError("Each layer must have exactly one fit record.")

        # Global position and direction of the fit in each layer
        transverse = frame.transverse_direction
        positions = (
            frame.intercept
            + np.outer(self._l, frame.direction)
            + np.outer(self._fit_t, transverse)
        )
        norm = np.sqrt(1.0 + self._gradient**2)
        directions = np.outer(1.0 / norm, frame.direction) + np.outer(
            self._gradient / norm, transverse
        )
        directions /= np.linalg.norm(directions, axis=1)[:, None]
        self._positions = self._freeze(positions)
        self._directions = self._freeze(directions)

        self._index = {layer: i for i, layer in enumerate(self._layers.tolist())}
        self._results = MappingProxyType(
            {
                layer: LayerFitResult(
                    float(self._l[i]),
                    float(self._fit_t[i]),
                    float(self._gradient[i]),
                    float(self._rms[i]),
                )
                for layer, i in self._index.items()
            }
        )
        self._contributions = MappingProxyType(dict(contributions or {}))

        if local_points is None:
            local_points = np.empty((0, 2))
        self._local_points = self._freeze(local_points)

    @staticmethod
    def _freeze(values, dtype=np.float64):
        """Copies an array and makes it read-only."""
        arr = np.array(values, dtype=dtype)
        arr.flags.writeable = False

        return arr

    def __len__(self):
        """Returns the number of populated layers."""
        return len(self._layers)

    def __repr__(self):
        """Readable representation of the fit."""
        return (
            f"SlidingFitResult(layers=[{self.min_layer}, {self.max_layer}], "
            f"num_layers={len(self)}, half_window={self.half_window}, "
            f"pitch={self.pitch})"
        )

    @property
    def pitch(self):
        """Pseudo-layer pitch of the fit."""
        return self.layer_calculator.pitch

    @property
    def layers(self):
        """(K) Sorted populated layer indexes."""
        return self._layers

    @property
    def min_layer(self):
        """Lowest populated layer."""
        return int(self._layers[0])

    @property
    def max_layer(self):
        """Highest populated layer."""
        return int(self._layers[-1])

    @property
    def layer_l(self):
        """(K) Representative longitudinal coordinate of each layer."""
        return self._l

    @property
    def layer_fit_t(self):
        """(K) Fitted transverse coordinate of each layer."""
        return self._fit_t

    @property
    def layer_gradients(self):
        """(K) Fitted gradient of each layer."""
        return self._gradient

    @property
    def layer_rms(self):
        """(K) Residual RMS of each layer."""
        return self._rms

    @property
    def layer_positions(self):
        """(K, 3) Global fitted position of each layer."""
        return self._positions

    @property
    def layer_directions(self):
        """(K, 3) Global fitted unit direction of each layer."""
        return self._directions

    @property
    def layer_fit_results(self):
        """Read-only ordered map from layer index to :class:`LayerFitResult`."""
        return self._results

    @property
    def layer_fit_contributions(self):
        """Read-only ordered map from layer index to its fit contribution."""
        return self._contributions

    @property
    def local_points(self):
        """(N, 2) Local (L, T) coordinates of the fitted hits."""
        return self._local_points

    def get_layer(self, l):
        """Pseudo-layer of a longitudinal coordinate.

        Parameters
        ----------
        l : float
            Longitudinal coordinate

        Returns
        -------
        int
            Pseudo-layer index
        """
        return self.layer_calculator.get_layer(l)

    def get_layer_position(self, layer):
        """Longitudinal coordinate of a pseudo-layer.

        Parameters
        ----------
        layer : int
            Pseudo-layer index

        Returns
        -------
        float
            Longitudinal coordinate
        """
        return self.layer_calculator.get_position(layer)

    def get_local_position(self, point):
        """Local (L, T) coordinates of a global position."""
        return self.frame.to_local(point)

    def get_global_position(self, l, t):
        """Global position of local (L, T) coordinates."""
        return self.frame.to_global(l, t)

    def locate(self, l):
        """Finds the populated layers surrounding a longitudinal coordinate.

        Parameters
        ----------
        l : float
            Longitudinal coordinate

        Returns
        -------
        LayerBracket
            Surrounding layers and their interpolation weights
        """
        start_layer = self.get_layer(l)
        bracket = self._check_start_layer(start_layer)
        if bracket is not None:
            return bracket

        # Nearest populated layer at or below the start layer, and the next one
        first = int(np.searchsorted(self._layers, start_layer, side="right")) - 1
        second = first + 1
        if first < 0 or second >= len(self._layers):
            raise LayerNotFoundError(
                f"Could not find the layers surrounding layer {start_layer}."
            )

        return self._bracket(
            first, second, l - self._l[first], self._l[second] - self._l[first]
        )

    def locate_position(self, point):
        """Finds the populated layers surrounding the projection of a point.

        Parameters
        ----------
        point : np.ndarray
            (3) Global position

        Returns
        -------
        LayerBracket
            Surrounding layers and their interpolation weights
        """
        l, _ = self.frame.to_local(point)

        return self.locate(l)

    def locate_by_coordinate(self, p, use_x):
        """Finds the populated layers surrounding a global x or z coordinate.

        The fitted trajectory need not be monotonic in the chosen coordinate,
        even though it is in L. The search starts from the layer of the
        straight-axis estimate of the position, then walks through the
        populated layers until the fitted coordinate crosses `p`.

        Parameters
        ----------
        p : float
            Global x or z coordinate
        use_x : bool
            If `True`, `p` is an x coordinate, otherwise a z coordinate

        Returns
        -------
        LayerBracket
            Surrounding layers and their interpolation weights
        """
        axis = 0 if use_x else 2
        component = self.frame.direction[axis]
        if abs(component) < FLOAT_EPS:
            raise InvalidAxisError(
                f"The fit axis does not vary along {'x' if use_x else 'z'}."
            )

        start_layer = self.get_layer((p - self.frame.intercept[axis]) / component)
        bracket = self._check_start_layer(start_layer)
        if bracket is not None:
            return bracket

        first = self._find_anchor(start_layer)

        return self._walk(first, p, axis)

    def _check_start_layer(self, start_layer):
        """Checks a start layer against the populated span.

        Parameters
        ----------
        start_layer : int
            Layer of the query

        Returns
        -------
        LayerBracket
            Clamped bracket if the start layer is a boundary layer, `None`
            otherwise
        """
        if start_layer < self.min_layer or start_layer > self.max_layer:
            raise OutOfRangeError(
                f"Layer {start_layer} is outside of the fitted layer range "
                f"[{self.min_layer}, {self.max_layer}]."
            )

        if start_layer in (self.min_layer, self.max_layer):
            return LayerBracket(start_layer, start_layer, 0.5, 0.5)

        return None

    def _find_anchor(self, start_layer):
        """Index of the first populated layer at or above a start layer.

        The maximum layer is never used as an anchor.
        """
        first = int(np.searchsorted(self._layers, start_layer, side="left"))
        if first >= len(self._layers) - 1:
            raise LayerNotFoundError(
                f"Could not find a populated layer in [{start_layer}, "
                f"{self.max_layer}) to start the search from."
            )

        return first

    def _walk(self, first, p, axis):
        """Walks from an anchor layer until the fitted coordinate crosses `p`.

        The walk goes backwards if the anchor is already past `p` in the
        direction the coordinate increases with layer, forwards otherwise. If
        no crossing is found and `p` lies outside of the fitted coordinates of
        the walked layers, the query is out of range. Otherwise the last
        visited layer is used.

        Parameters
        ----------
        first : int
            Index of the anchor layer
        p : float
            Target global coordinate
        axis : int
            Index of the global coordinate (0 for x, 2 for z)

        Returns
        -------
        LayerBracket
            Surrounding layers and their interpolation weights
        """
        first_p = self._positions[first, axis]
        first_ahead = first_p > p
        increases = self.frame.direction[axis] > 0.0
        step = -1 if first_ahead == increases else 1

        second, crossed = None, False
        index = first + step
        while 0 <= index < len(self._layers):
            second = index
            if (self._positions[index, axis] > p) != first_ahead:
                crossed = True
                break
            index += step

        if second is None:
            raise LayerNotFoundError(
                f"Could not find a layer past layer {self._layers[first]} to "
                "interpolate with."
            )

        if not crossed:
            lo, hi = min(first, second), max(first, second)
            walked = self._positions[lo : hi + 1, axis]
            if p < np.min(walked) or p > np.max(walked):
                raise OutOfRangeError(
                    f"Coordinate {p} is outside of the fitted range "
                    f"[{np.min(walked)}, {np.max(walked)}] of the walked layers."
                )

        return self._bracket(
            first, second, p - first_p, self._positions[second, axis] - first_p
        )

    def _bracket(self, first, second, delta, delta_layers):
        """Builds a bracket with weights linear in the provided separation."""
        if abs(delta_layers) < FLOAT_EPS:
            raise DegenerateSeparationError(
                f"Layers {self._layers[first]} and {self._layers[second]} "
                "coincide, cannot interpolate between them."
            )

        second_weight = float(delta / delta_layers)

        return LayerBracket(
            int(self._layers[first]),
            int(self._layers[second]),
            1.0 - second_weight,
            second_weight,
        )

    def _interpolate(self, values, bracket):
        """Blends per-layer values with the weights of a bracket.

        Parameters
        ----------
        values : np.ndarray
            (K, ...) Per-layer values
        bracket : LayerBracket
            Surrounding layers and their weights

        Returns
        -------
        Union[float, np.ndarray]
            Interpolated value
        """
        first = self._index[bracket.first_layer]
        if bracket.first_layer == bracket.second_layer:
            return np.copy(values[first])

        second = self._index[bracket.second_layer]
        weight = bracket.first_weight + bracket.second_weight
        if abs(weight) < FLOAT_EPS:
            raise DegenerateSeparationError("The interpolation weights sum to zero.")

        return (
            values[first] * bracket.first_weight
            + values[second] * bracket.second_weight
        ) / weight

    def _interpolate_direction(self, bracket):
        """Blends the layer directions of a bracket into a unit vector."""
        direction = self._interpolate(self._directions, bracket)
        mag = np.linalg.norm(direction)
        if mag < FLOAT_EPS:
            raise DegenerateSeparationError("The interpolated direction vanishes.")

        return direction / mag

    def global_position_at(self, l):
        """Fitted global position at a longitudinal coordinate.

        Parameters
        ----------
        l : float
            Longitudinal coordinate

        Returns
        -------
        np.ndarray
            (3) Global position
        """
        return self._interpolate(self._positions, self.locate(l))

    def global_direction_at(self, l):
        """Fitted global unit direction at a longitudinal coordinate.

        Parameters
        ----------
        l : float
            Longitudinal coordinate

        Returns
        -------
        np.ndarray
            (3) Global unit direction
        """
        return self._interpolate_direction(self.locate(l))

    def rms_at(self, l):
        """Fit residual RMS at a longitudinal coordinate.

        Parameters
        ----------
        l : float
            Longitudinal coordinate

        Returns
        -------
        float
            Interpolated RMS
        """
        return float(self._interpolate(self._rms, self.locate(l)))

    def project_onto_fit(self, point):
        """Projects a global position onto the fitted trajectory.

        Parameters
        ----------
        point : np.ndarray
            (3) Global position

        Returns
        -------
        np.ndarray
            (3) Fitted global position at the longitudinal coordinate of `point`
        """
        return self._interpolate(self._positions, self.locate_position(point))

    def global_position_at_coordinate(self, p, use_x):
        """Fitted global position at a global x or z coordinate.

        Parameters
        ----------
        p : float
            Global x or z coordinate
        use_x : bool
            If `True`, `p` is an x coordinate, otherwise a z coordinate

        Returns
        -------
        np.ndarray
            (3) Global position
        """
        return self._interpolate(self._positions, self.locate_by_coordinate(p, use_x))

    def global_direction_at_coordinate(self, p, use_x):
        """Fitted global unit direction at a global x or z coordinate.

        Parameters
        ----------
        p : float
            Global x or z coordinate
        use_x : bool
            If `True`, `p` is an x coordinate, otherwise a z coordinate

        Returns
        -------
        np.ndarray
            (3) Global unit direction
        """
        return self._interpolate_direction(self.locate_by_coordinate(p, use_x))

    def local_fit_position_at_x(self, x):
        """Local coordinates of the fitted trajectory at a global x coordinate.

        Parameters
        ----------
        x : float
            Global x coordinate

        Returns
        -------
        float
            Longitudinal coordinate
        float
            Transverse coordinate
        int
            Pseudo-layer index
        """
        l, t = self.frame.to_local(self.global_position_at_coordinate(x, True))

        return l, t, self.get_layer(l)

    def min_layer_position(self):
        """Fitted global position of the lowest populated layer."""
        return np.copy(self._positions[0])

    def max_layer_position(self):
        """Fitted global position of the highest populated layer."""
        return np.copy(self._positions[-1])

    def min_layer_direction(self):
        """Fitted global unit direction of the lowest populated layer."""
        return np.copy(self._directions[0])

    def max_layer_direction(self):
        """Fitted global unit direction of the highest populated layer."""
        return np.copy(self._directions[-1])

    def largest_scatter(self, **kwargs):
        """Position of the largest scatter, see :func:`find_largest_scatter`."""
        return find_largest_scatter(self, **kwargs)

    def is_multivalued_in_x(self, **kwargs):
        """Whether the fit folds back in x, see :func:`is_multivalued_in_x`."""
        return is_multivalued_in_x(self, **kwargs)

    def track_width(self, **kwargs):
        """Width of the trajectory, see :func:`get_track_width`."""
        return get_track_width(self, **kwargs)
