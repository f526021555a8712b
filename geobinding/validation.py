"""
Input validation helpers shared by the geotransform, DMS and binding modules.

All checks accept Python and numpy numeric scalars (via the ``numbers`` ABCs)
and reject ``bool``, ``complex`` and anything non-numeric.
"""

import math
import numbers
from typing import Any, Tuple

from geobinding.exceptions import InvalidArgumentError

GEOTRANSFORM_SIZE = 6


def is_real_number(value: Any) -> bool:
    """Check if a value is a real number (int, float, or numpy real scalar).

    Args:
        value: Value to check

    Returns:
        True for real numeric scalars, False for bools, complex and non-numbers
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, numbers.Real)


def is_finite_number(value: Any) -> bool:
    """Check if a value is a real number that is neither NaN nor infinite.

    Args:
        value: Value to check

    Returns:
        True if value is a valid finite number, False otherwise
    """
    if not is_real_number(value):
        return False

    try:
        return math.isfinite(value)
    except (TypeError, ValueError, OverflowError):
        return False


def require_real(value: Any, name: str) -> float:
    """Return ``value`` as a float, raising if it is not a real number.

    Non-finite values are accepted; callers that need finiteness use
    :func:`require_finite`.

    Raises:
        InvalidArgumentError: If value is not a real number
    """
    if not is_real_number(value):
        raise InvalidArgumentError(
            f"{name} must be a number, got {type(value).__name__}"
        )
    return float(value)


def require_finite(value: Any, name: str) -> float:
    """Return ``value`` as a float, raising if it is not a finite number.

    Raises:
        InvalidArgumentError: If value is not a number, or is NaN/infinite
    """
    number = require_real(value, name)
    if not math.isfinite(number):
        raise InvalidArgumentError(f"{name} must be finite, got {number}")
    return number


def require_coefficients(values: Any, name: str = "geotransform") -> Tuple[float, ...]:
    """Validate a geotransform coefficient sequence.

    The sequence must hold exactly six finite real numbers. Strings and
    mappings are rejected even though they are iterable.

    Args:
        values: Candidate coefficient sequence (list, tuple, numpy array, ...)
        name: Name used in error messages

    Returns:
        Tuple of six floats

    Raises:
        InvalidArgumentError: On wrong type, wrong length, or a non-finite or
            non-numeric element
    """
    if isinstance(values, (str, bytes, dict)) or not hasattr(values, '__len__'):
        raise InvalidArgumentError(
            f"{name} must be a sequence of {GEOTRANSFORM_SIZE} numbers, "
            f"got {type(values).__name__}"
        )

    if len(values) != GEOTRANSFORM_SIZE:
        raise InvalidArgumentError(
            f"{name} array length must equal {GEOTRANSFORM_SIZE}, got {len(values)}"
        )

    coefficients = []
    for index, value in enumerate(values):
        if not is_real_number(value):
            raise InvalidArgumentError(f"{name} array must only contain numbers")
        if not is_finite_number(value):
            raise InvalidArgumentError(
                f"{name}[{index}] must be finite, got {value}"
            )
        coefficients.append(float(value))

    return tuple(coefficients)
