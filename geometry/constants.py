# geometry/constants.py
"""Constants for geometric calculations."""
import math

# Default tolerance for floating-point comparisons
EPSILON = 1e-10

# Maximum deviation from unit length accepted when constructing a direction
DIRECTION_TOLERANCE = 1e-9

# Default maximum error (in curve length units) for arc length parameterization
DEFAULT_ARC_LENGTH_TOLERANCE = 1e-4

# Relative slack allowed when a queried distance lands just past the end of the table
ARC_LENGTH_SLACK = 1e-12

# Iteration cap when inverting arc length within one table bracket
MAX_INVERSE_ITERATIONS = 60

# Three-point Gauss-Legendre rule mapped onto the unit interval [0, 1]
GAUSS_LEGENDRE_NODES = (
    0.5 - 0.5 * math.sqrt(3.0 / 5.0),
    0.5,
    0.5 + 0.5 * math.sqrt(3.0 / 5.0),
)
GAUSS_LEGENDRE_WEIGHTS = (5.0 / 18.0, 8.0 / 18.0, 5.0 / 18.0)
