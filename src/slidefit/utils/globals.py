"""Constants shared across the package."""

import numpy as np

# Column indexes of the Euclidean coordinates in a point array
COORD_COLS = np.array([0, 1, 2])

# Coordinates which span the 2D projection views (x is the drift direction)
VIEW_COLS = np.array([0, 2])

# Default pseudo-layer pitch in cm (wire pitch of the collection plane)
DEFAULT_PITCH = 0.3

# Fraction of a layer added before flooring, absorbs floating point noise
LAYER_TOLERANCE = 1e-4

# Tolerance used to detect degenerate separations, axes and denominators
FLOAT_EPS = float(np.finfo(np.float32).eps)

# Default sliding fit layer half window
DEFAULT_HALF_WINDOW = 20

# Minimum number of layers a cluster must span to be fitted
DEFAULT_MIN_LAYER_SPAN = 2

# Largest scatter search parameters
MIN_COS_SCATTERING_ANGLE = 0.98
MAX_TRACK_FIT_RMS = 0.15

# Multivalued in x parameters
MULTIVALUED_TAN_THETA_CUT = 1.0
MULTIVALUED_STEP_FRACTION_CUT = 0.1

# Quantile of the residuals (or layer RMS) used as a track width
TRACK_RESIDUAL_QUANTILE = 0.8

# Approximate energy loss per unit length of a MIP in liquid argon, in GeV/cm
DEDX = 0.002
