"""
Geographic angle formatting and parsing.

This module converts between signed decimal degrees and sexagesimal
degrees/minutes/seconds (DMS) strings such as ``45d30'0.00"W``.
"""

import math
import numbers
import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from geobinding.exceptions import InvalidArgumentError
from geobinding.types import Degrees
from geobinding.validation import require_finite

DEFAULT_DMS_PRECISION = 2

# Degree marker may be GDAL's "d" or the typographic degree sign
_DMS_PATTERN = re.compile(r"""(\d+)[°d](\d+)'([\d.]+)"?([NSEW])""")


class Axis(Enum):
    """Geographic axis an angle is measured along.

    Values are the only accepted axis tokens after normalization.
    """
    LATITUDE = "Lat"
    LONGITUDE = "Long"

    def hemisphere(self, angle: float) -> str:
        """Hemisphere letter for a signed angle on this axis."""
        if self is Axis.LATITUDE:
            return "S" if angle < 0 else "N"
        return "W" if angle < 0 else "E"


def parse_axis(axis: Union[str, Axis]) -> Axis:
    """Parse an axis token into an :class:`Axis`.

    The token is normalized by upper-casing its first character and
    lower-casing the rest, then matched exactly against ``"Lat"`` and
    ``"Long"``. ``"lat"``, ``"LAT"`` and ``"Lat"`` are accepted; spelled-out
    words such as ``"latitude"`` are not.

    Args:
        axis: Axis token or an existing Axis

    Returns:
        The matching Axis

    Raises:
        InvalidArgumentError: If the token is not a string or does not
            normalize to ``"Lat"`` or ``"Long"``
    """
    if isinstance(axis, Axis):
        return axis
    if not isinstance(axis, str):
        raise InvalidArgumentError(f"axis must be a string, got {type(axis).__name__}")

    normalized = axis[:1].upper() + axis[1:].lower()
    try:
        return Axis(normalized)
    except ValueError:
        raise InvalidArgumentError("Axis must be 'lat' or 'long'") from None


@dataclass(frozen=True)
class DMSAngle:
    """A decimal-degree angle split into degrees, minutes and seconds.

    Attributes:
        sign: +1 or -1, the sign of the source angle.
        degrees: Whole degrees of the absolute angle.
        minutes: Whole minutes, 0-59.
        seconds: Seconds already rounded to ``precision`` digits, in [0, 60).
        hemisphere: N/S for latitude, E/W for longitude.
        precision: Number of fractional digits rendered for seconds.
    """

    sign: int
    degrees: int
    minutes: int
    seconds: float
    hemisphere: str
    precision: int = DEFAULT_DMS_PRECISION

    def format(self) -> str:
        """Render as ``{degrees}d{minutes}'{seconds}"{hemisphere}``."""
        return (
            f"{self.degrees}d{self.minutes}'"
            f"{self.seconds:.{self.precision}f}\"{self.hemisphere}"
        )

    def __str__(self) -> str:
        return self.format()

    def to_decimal(self) -> Degrees:
        """Signed decimal degrees represented by this angle."""
        value = self.degrees + self.minutes / 60 + self.seconds / 3600
        return Degrees(self.sign * value)


def _require_precision(precision) -> int:
    if isinstance(precision, bool) or not isinstance(precision, numbers.Integral):
        raise InvalidArgumentError(
            f"precision must be an integer, got {type(precision).__name__}"
        )
    if precision < 0:
        raise InvalidArgumentError(f"precision must be non-negative, got {precision}")
    return int(precision)


def to_dms(
    angle: Degrees,
    axis: Union[str, Axis],
    precision: int = DEFAULT_DMS_PRECISION,
) -> DMSAngle:
    """Split a decimal-degree angle into a :class:`DMSAngle`.

    Seconds are rounded to ``precision`` digits; a value that rounds up to
    60 carries into minutes, and 60 minutes carry into degrees.

    Args:
        angle: Signed angle in decimal degrees
        axis: ``"lat"`` or ``"long"`` in any casing, or an Axis
        precision: Fractional digits kept for seconds

    Returns:
        DMSAngle for the given angle

    Raises:
        InvalidArgumentError: If the angle is not finite, the axis token is
            unrecognized, or precision is not a non-negative integer
    """
    angle = require_finite(angle, "angle")
    parsed_axis = parse_axis(axis)
    precision = _require_precision(precision)

    hemisphere = parsed_axis.hemisphere(angle)
    abs_angle = abs(angle)

    degrees = math.floor(abs_angle)
    minutes_full = (abs_angle - degrees) * 60
    minutes = math.floor(minutes_full)
    seconds = round((minutes_full - minutes) * 60, precision)

    if seconds >= 60.0:
        seconds = 0.0
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        degrees += 1

    return DMSAngle(
        sign=-1 if angle < 0 else 1,
        degrees=int(degrees),
        minutes=int(minutes),
        seconds=float(seconds),
        hemisphere=hemisphere,
        precision=precision,
    )


def dec_to_dms(
    angle: Degrees,
    axis: Union[str, Axis],
    precision: int = DEFAULT_DMS_PRECISION,
) -> str:
    """
    Convert decimal degrees to a degrees, minutes and seconds string.

    Args:
        angle: Signed angle in decimal degrees
        axis: ``"lat"`` or ``"long"`` (first letter case-insensitive)
        precision: Fractional digits for the seconds field (default 2)

    Returns:
        A string ``nndnn'nn.nn"L`` where L is N/S for latitude or E/W for
        longitude

    Raises:
        InvalidArgumentError: On a non-finite angle, unknown axis, or
            negative precision

    Examples:
        >>> dec_to_dms(-45.5, "long")
        '45d30\\'0.00"W'
        >>> dec_to_dms(45.999999, "lat", 0)
        '46d0\\'0"N'
    """
    return to_dms(angle, axis, precision).format()


def dms_to_dd(dms_str: str) -> Degrees:
    """
    Convert DMS (degrees, minutes, seconds) string to decimal degrees.

    Supports formats like:
    - "39°38'25.72\"N"
    - "0°13'48.63\"W"
    - "45d30'0.00\"W" (as produced by :func:`dec_to_dms`)

    Args:
        dms_str: DMS coordinate string

    Returns:
        Decimal degrees (negative for S/W)

    Raises:
        InvalidArgumentError: If DMS format is invalid
    """
    if not isinstance(dms_str, str):
        raise InvalidArgumentError(f"Invalid DMS format: {dms_str!r}")

    match = _DMS_PATTERN.fullmatch(dms_str.strip())
    if not match:
        raise InvalidArgumentError(f"Invalid DMS format: {dms_str}")

    degrees = int(match.group(1))
    minutes = int(match.group(2))
    try:
        seconds = float(match.group(3))
    except ValueError:
        raise InvalidArgumentError(f"Invalid DMS format: {dms_str}") from None
    direction = match.group(4)

    dd = degrees + minutes / 60 + seconds / 3600

    if direction in ("S", "W"):
        dd = -dd

    return Degrees(dd)
