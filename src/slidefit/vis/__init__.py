"""Visualization tools for sliding fits, using plotly.

- `point`: Hit and position scatters (`scatter_points`)
- `fit`: Sliding fit trajectories (`draw_sliding_fit`)
"""

from .fit import draw_sliding_fit
from .point import scatter_points
