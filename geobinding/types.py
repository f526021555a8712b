"""
Unit type annotations for type-safe numeric parameters.

This module defines NewType aliases for the units used across the
geobinding codebase. They document expected units in function signatures
and let static type checkers catch unit mismatches while remaining
transparent at runtime.

Usage Example:
    >>> from geobinding.types import Degrees, PixelsFloat
    >>>
    >>> def pixel_to_lon(col: PixelsFloat) -> Degrees:
    ...     pass
"""

from typing import NewType

# Angular units
Degrees = NewType('Degrees', float)
"""Angle in degrees (e.g., latitude, longitude)"""

# Image coordinate units
PixelsFloat = NewType('PixelsFloat', float)
"""Floating-point raster coordinates in pixels (column/row, sub-pixel allowed)"""

# Georeferenced coordinate units
MapUnits = NewType('MapUnits', float)
"""Coordinate in the units of the raster's reference system (metres, degrees, ...)"""

# Dimensionless quantities
Unitless = NewType('Unitless', float)
"""Dimensionless scalar (e.g., determinant, tolerance, ratios)"""
