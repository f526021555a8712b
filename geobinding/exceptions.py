"""
Exception hierarchy for geobinding operations.

Every error subclasses both ``GeoBindingError`` and the closest built-in
exception, so callers can catch either the package-specific type or the
usual ``ValueError`` / ``ArithmeticError`` / ``OSError``.
"""


class GeoBindingError(Exception):
    """Base exception for all geobinding errors."""


class InvalidArgumentError(GeoBindingError, ValueError):
    """Invalid input passed across the binding boundary.

    Raised for coefficient sequences that are not exactly six finite numbers,
    unrecognized axis tokens, non-finite angles, negative precision, invalid
    open modes, and malformed config option names or values.
    """


class SingularTransformError(GeoBindingError, ArithmeticError):
    """Inversion attempted on a geotransform whose 2x2 part has no inverse.

    Attributes:
        determinant: Determinant of the linear part that failed the check.
    """

    def __init__(self, message: str, determinant: float = 0.0):
        super().__init__(message)
        self.determinant = determinant


class DatasetOpenError(GeoBindingError, OSError):
    """No registered backend could open the requested dataset."""
