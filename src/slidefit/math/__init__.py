"""Module with fast, Numba-accelerated, compiled math routines.

This includes multiple submodules:
- `decomposition.py` includes principal axis routines, as found in sklearn
- `linalg.py` includes linear algebra routines, as found in numpy.linalg
- `regression.py` includes the windowed least-squares kernel of sliding fits
"""

# Expose submodules
from . import decomposition, linalg, regression
