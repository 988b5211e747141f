"""Two-dimensional sliding linear fits of clusters.

This subpackage contains:
- :mod:`layer`: pseudo-layer quantization of the longitudinal coordinate
- :mod:`frame`: local (L, T) coordinate frame of a cluster
- :mod:`builder`: construction of sliding fits from hits
- :mod:`result`: immutable fit result and its positional queries
- :mod:`shape`: shape diagnostics (largest scatter, multivaluedness, width)
- :mod:`fitters`: configurable fitter classes and their factory
"""

from .builder import shower_edge_fit, sliding_fit, sliding_xz_fit
from .factories import fitter_factory
from .fitters import ShowerEdgeFitter, SlidingFitter, SlidingXZFitter
from .frame import AxisFrame
from .layer import PseudoLayerCalculator
from .result import LayerBracket, SlidingFitResult
from .shape import find_largest_scatter, get_track_width, is_multivalued_in_x
