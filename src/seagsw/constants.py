"""
Constants and configuration defaults for TEOS-10 property dispatch.

This module provides:
1. Physical configuration defaults for operations with optional arguments
2. Array layout conventions shared by the reconciler and the reshaper
3. Shape classification for function arguments
"""

from enum import IntEnum

# Physical defaults
SATURATION_FRACTION_DEFAULT = 1.0  # Saturation fraction of dissolved air (0..1)
NSQUARED_LATITUDE_DEFAULT = 0.0  # Latitude used for gravity in N2 (degrees N)

# Array layout
STORAGE_ORDER = "F"  # Column-major: first grid index varies fastest
MAX_DIMENSIONS = 2  # Grids are at most two-dimensional


class ShapeKind(IntEnum):
    """Classification of an argument by its dimensionality"""

    SCALAR = 0
    SEQUENCE = 1
    GRID = 2
