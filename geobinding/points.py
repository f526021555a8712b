"""Pixel and georeferenced coordinate representations.

The host calling surface accepts points in several loose shapes (two
scalars, a pair, a mapping with ``x``/``y`` keys, or any object with
``x``/``y`` attributes). :func:`as_geo_point` normalizes all of them to a
single :class:`GeoPoint` before any transform math runs.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Union

from geobinding.exceptions import InvalidArgumentError
from geobinding.validation import is_real_number


@dataclass(frozen=True)
class PixelPoint:
    """Pixel coordinates in a raster.

    Attributes:
        x: Pixel x coordinate (column), fractional for sub-pixel positions.
        y: Pixel y coordinate (row), fractional for sub-pixel positions.
    """

    x: float
    y: float

    @property
    def to_pixel(self) -> tuple[int, int]:
        """Convert to integer pixel coordinates.

        Returns:
            Tuple of (x, y) rounded to nearest integer.
        """
        return (round(self.x), round(self.y))


@dataclass(frozen=True)
class GeoPoint:
    """Georeferenced coordinates in the raster's reference system.

    Attributes:
        x: Easting or longitude.
        y: Northing or latitude.
    """

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        """Return the ``{"x": ..., "y": ...}`` object handed back to hosts."""
        return {"x": self.x, "y": self.y}


PointInput = Union[GeoPoint, PixelPoint, Mapping, Sequence, Any]


def as_geo_point(point: PointInput, y: Optional[float] = None) -> GeoPoint:
    """Normalize any accepted point shape into a :class:`GeoPoint`.

    Accepted shapes:
        - ``as_geo_point(x, y)`` with two real scalars
        - ``as_geo_point((x, y))`` with a 2-item sequence
        - ``as_geo_point({"x": x, "y": y})`` with a mapping
        - ``as_geo_point(obj)`` where ``obj`` has numeric ``x``/``y`` attributes

    Non-finite values pass through unchanged; only the type is checked.

    Args:
        point: The x scalar, or a point-like object when ``y`` is omitted
        y: The y scalar when ``point`` is a scalar

    Returns:
        GeoPoint with float coordinates

    Raises:
        InvalidArgumentError: If the input matches none of the accepted shapes
            or a coordinate is not numeric
    """
    if y is not None:
        return GeoPoint(x=_coordinate(point, "x"), y=_coordinate(y, "y"))

    if isinstance(point, (GeoPoint, PixelPoint)):
        return GeoPoint(x=float(point.x), y=float(point.y))

    if isinstance(point, Mapping):
        if "x" not in point or "y" not in point:
            raise InvalidArgumentError("point must contain numerical properties x and y")
        return GeoPoint(x=_point_field(point["x"]), y=_point_field(point["y"]))

    if isinstance(point, Sequence) and not isinstance(point, (str, bytes)):
        if len(point) != 2:
            raise InvalidArgumentError(
                f"point sequence must have exactly 2 values, got {len(point)}"
            )
        return GeoPoint(x=_coordinate(point[0], "x"), y=_coordinate(point[1], "y"))

    if hasattr(point, "x") and hasattr(point, "y"):
        return GeoPoint(x=_point_field(point.x), y=_point_field(point.y))

    if is_real_number(point):
        raise InvalidArgumentError("y must be provided when x is a number")

    raise InvalidArgumentError(
        f"point must be two numbers, a pair, or have x and y properties, "
        f"got {type(point).__name__}"
    )


def _coordinate(value: Any, name: str) -> float:
    if not is_real_number(value):
        raise InvalidArgumentError(f"{name} must be a number, got {type(value).__name__}")
    return float(value)


def _point_field(value: Any) -> float:
    if not is_real_number(value):
        raise InvalidArgumentError("point must contain numerical properties x and y")
    return float(value)
