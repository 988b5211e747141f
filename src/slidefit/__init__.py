"""slidefit: two-dimensional sliding linear fits of LArTPC clusters.

A cluster of hits is projected onto a primary axis, binned into pseudo-layers
and fitted with a straight line in a window of layers around each layer. The
resulting piecewise description of the trajectory can be queried at any
longitudinal or global x/z coordinate.

Main entry points:
- :func:`sliding_fit`, :func:`sliding_xz_fit`, :func:`shower_edge_fit`
- :class:`SlidingFitResult` and its queries
- :func:`fitter_factory` to build a fitter from a configuration block
"""

from .data import Cluster
from .errors import (
    DegenerateSeparationError,
    InsufficientDataError,
    InvalidAxisError,
    LayerNotFoundError,
    OutOfRangeError,
    SlidingFitError,
)
from .fit import (
    AxisFrame,
    LayerBracket,
    PseudoLayerCalculator,
    SlidingFitResult,
    fitter_factory,
    shower_edge_fit,
    sliding_fit,
    sliding_xz_fit,
)
from .version import __version__
