"""Data structures used by the sliding fit engine."""

from .cluster import Cluster
from .fit import LayerFitContribution, LayerFitResult
