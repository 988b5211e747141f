"""Typed exceptions raised by the sliding fit engine.

Callers are expected to handle :class:`InsufficientDataError` and
:class:`OutOfRangeError` as "this cluster is not a candidate", whereas
:class:`LayerNotFoundError` and :class:`DegenerateSeparationError` point at an
inconsistent layer map and should be treated as defects.
"""


class SlidingFitError(Exception):
    """Base exception for all sliding fit errors."""


class InsufficientDataError(SlidingFitError):
    """Raised when a cluster does not hold enough layers to be fitted."""


class OutOfRangeError(SlidingFitError):
    """Raised when a query lies outside of the populated layer span."""


class LayerNotFoundError(SlidingFitError):
    """Raised when a bracketing layer cannot be found in the layer map."""


class DegenerateSeparationError(SlidingFitError):
    """Raised when two bracketing layers coincide, making weights undefined."""


class InvalidAxisError(SlidingFitError):
    """Raised when the axis frame cannot support the requested operation."""
