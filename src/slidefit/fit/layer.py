"""Pseudo-layer quantization of a longitudinal coordinate."""

import numpy as np

from slidefit.utils.globals import DEFAULT_PITCH, LAYER_TOLERANCE

__all__ = ["PseudoLayerCalculator"]


class PseudoLayerCalculator:
    """Maps a longitudinal coordinate to an integer layer index and back.

    Layer `k` covers the longitudinal range `[k * pitch, (k + 1) * pitch)`.
    A small fraction of a layer is added before flooring so that positions
    sitting exactly on a layer boundary are not pushed into the layer below
    by floating point rounding.

    Attributes
    ----------
    pitch : float
        Longitudinal size of a pseudo-layer
    """

    def __init__(self, pitch=DEFAULT_PITCH):
        """Stores the layer pitch.

        Parameters
        ----------
        pitch : float, default 0.3
            Longitudinal size of a pseudo-layer (detector sampling granularity)
        """
        if not pitch > 0.0:
            raise ValueError(f"The pseudo-layer pitch must be positive, got {pitch}.")

        self.pitch = float(pitch)

    def __repr__(self):
        """Readable representation of the calculator."""
        return f"PseudoLayerCalculator(pitch={self.pitch})"

    def get_layer(self, l):
        """Returns the pseudo-layer index of a longitudinal coordinate.

        Parameters
        ----------
        l : float
            Longitudinal coordinate

        Returns
        -------
        int
            Pseudo-layer index
        """
        return int(np.floor(l / self.pitch + LAYER_TOLERANCE))

    def get_layers(self, ls):
        """Vectorized version of :meth:`get_layer`.

        Parameters
        ----------
        ls : np.ndarray
            (N) Longitudinal coordinates

        Returns
        -------
        np.ndarray
            (N) Pseudo-layer indexes
        """
        ls = np.asarray(ls, dtype=np.float64)

        return np.floor(ls / self.pitch + LAYER_TOLERANCE).astype(np.int64)

    def get_position(self, layer):
        """Returns the longitudinal coordinate at the start of a layer.

        Parameters
        ----------
        layer : int
            Pseudo-layer index

        Returns
        -------
        float
            Longitudinal coordinate
        """
        return layer * self.pitch
