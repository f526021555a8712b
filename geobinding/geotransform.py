"""
Affine geotransform model.

Implements GDAL's standard 6-parameter affine GeoTransform for converting
between pixel/line raster coordinates and georeferenced coordinates, in both
directions.

    Xgeo = GT[0] + P*GT[1] + L*GT[2]
    Ygeo = GT[3] + P*GT[4] + L*GT[5]

Where:
    GT[0]: X-coordinate of the upper-left corner (origin easting/longitude)
    GT[1]: Pixel width (map units per pixel in X direction)
    GT[2]: Row rotation (typically 0 for north-up images)
    GT[3]: Y-coordinate of the upper-left corner (origin northing/latitude)
    GT[4]: Column rotation (typically 0 for north-up images)
    GT[5]: Pixel height (map units per pixel in Y direction, typically negative)

References:
    - GDAL GeoTransform: https://gdal.org/tutorials/geotransforms_tut.html
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from geobinding.exceptions import InvalidArgumentError, SingularTransformError
from geobinding.points import GeoPoint, PixelPoint
from geobinding.types import MapUnits, PixelsFloat, Unitless
from geobinding.validation import require_coefficients, require_finite

logger = logging.getLogger(__name__)

# Type alias for the 6-parameter GDAL affine geotransform
Geotransform = Tuple[float, float, float, float, float, float]

# Inversion fails only on an exactly zero determinant unless a caller widens it
DEFAULT_SINGULAR_TOLERANCE: Unitless = Unitless(0.0)

# Inversions below this determinant magnitude still succeed but are logged
NEAR_SINGULAR_DETERMINANT: Unitless = Unitless(1e-15)


def _require_tolerance(tolerance: float) -> float:
    tolerance = require_finite(tolerance, "tolerance")
    if tolerance < 0:
        raise InvalidArgumentError(f"tolerance must be non-negative, got {tolerance}")
    return tolerance


@dataclass(frozen=True)
class GeoTransform:
    """Immutable 6-coefficient affine map from pixel space to map space.

    Any six reals form a valid forward transform. Inversion additionally
    requires the 2x2 linear part ``[[c1, c2], [c4, c5]]`` to be non-singular.

    Attributes:
        c0: Origin X (translation along map X).
        c1: X map units per pixel column.
        c2: X map units per pixel row (rotation/shear term).
        c3: Origin Y (translation along map Y).
        c4: Y map units per pixel column (rotation/shear term).
        c5: Y map units per pixel row (negative for north-up rasters).

    Example:
        >>> gt = GeoTransform.from_sequence([737575.05, 0.15, 0, 4391595.45, 0, -0.15])
        >>> point = gt.apply(10, 20)
        >>> print(f"({point.x:.2f}, {point.y:.2f})")
        (737576.55, 4391592.45)
    """

    c0: float
    c1: float
    c2: float
    c3: float
    c4: float
    c5: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> 'GeoTransform':
        """Build a transform from a host coefficient sequence.

        Args:
            values: Sequence of exactly six finite numbers in GDAL order

        Returns:
            New GeoTransform

        Raises:
            InvalidArgumentError: If values is not six finite numbers
        """
        return cls(*require_coefficients(values))

    @classmethod
    def identity(cls) -> 'GeoTransform':
        """Transform that maps every pixel coordinate onto itself."""
        return cls(0.0, 1.0, 0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_origin(
        cls,
        origin_x: MapUnits,
        origin_y: MapUnits,
        pixel_width: MapUnits,
        pixel_height: MapUnits,
    ) -> 'GeoTransform':
        """Build a north-up transform from its upper-left corner and pixel size.

        ``pixel_height`` is the positive size of a pixel; the Y step is stored
        negated because rows grow downward while northing grows upward.

        Raises:
            InvalidArgumentError: If any argument is not finite, or a pixel
                size is not strictly positive
        """
        origin_x = require_finite(origin_x, "origin_x")
        origin_y = require_finite(origin_y, "origin_y")
        pixel_width = require_finite(pixel_width, "pixel_width")
        pixel_height = require_finite(pixel_height, "pixel_height")
        if pixel_width <= 0 or pixel_height <= 0:
            raise InvalidArgumentError(
                f"pixel size must be positive, got ({pixel_width}, {pixel_height})"
            )
        return cls(origin_x, pixel_width, 0.0, origin_y, 0.0, -pixel_height)

    def to_tuple(self) -> Geotransform:
        """Return the coefficients as a GDAL-ordered tuple."""
        return (self.c0, self.c1, self.c2, self.c3, self.c4, self.c5)

    def to_list(self) -> list[float]:
        """Return the coefficients as a GDAL-ordered list."""
        return list(self.to_tuple())

    @property
    def determinant(self) -> float:
        """Determinant of the 2x2 linear part ``c1*c5 - c2*c4``."""
        return self.c1 * self.c5 - self.c2 * self.c4

    def is_invertible(self, tolerance: float = DEFAULT_SINGULAR_TOLERANCE) -> bool:
        """Whether :meth:`invert` would succeed with the given tolerance.

        Raises:
            InvalidArgumentError: If tolerance is negative or not finite
        """
        tolerance = _require_tolerance(tolerance)
        det = self.determinant
        return math.isfinite(det) and abs(det) > tolerance

    def apply(self, col: PixelsFloat, row: PixelsFloat) -> GeoPoint:
        """Map a pixel/line position to georeferenced coordinates.

        Fractional positions address sub-pixel locations; non-finite inputs
        propagate into the result.

        Args:
            col: Pixel column (P)
            row: Pixel row / line (L)

        Returns:
            GeoPoint with the map-space coordinates
        """
        x = self.c0 + col * self.c1 + row * self.c2
        y = self.c3 + col * self.c4 + row * self.c5
        return GeoPoint(x=x, y=y)

    def apply_array(
        self,
        cols: npt.ArrayLike,
        rows: npt.ArrayLike,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorized :meth:`apply` over broadcastable column/row arrays.

        Args:
            cols: Pixel columns, any shape broadcastable with ``rows``
            rows: Pixel rows

        Returns:
            Tuple of ``(xs, ys)`` float64 arrays with the broadcast shape
        """
        cols = np.asarray(cols, dtype=np.float64)
        rows = np.asarray(rows, dtype=np.float64)
        xs = self.c0 + cols * self.c1 + rows * self.c2
        ys = self.c3 + cols * self.c4 + rows * self.c5
        return xs, ys

    def invert(self, tolerance: float = DEFAULT_SINGULAR_TOLERANCE) -> 'GeoTransform':
        """Compute the transform mapping georeferenced coordinates back to pixels.

        The inverse linear part is ``M' = 1/det * [[c5, -c2], [-c4, c1]]`` and
        the new origin is ``M'`` applied to ``(-c0, -c3)``. Applying the inverse
        to ``self.apply(col, row)`` recovers ``(col, row)`` to floating-point
        precision (error grows with the condition number of M).

        Args:
            tolerance: Largest ``|det|`` still treated as singular. The default
                of 0.0 fails only on an exactly zero determinant.

        Returns:
            New GeoTransform, the inverse of this one

        Raises:
            InvalidArgumentError: If tolerance is negative or not finite
            SingularTransformError: If ``|det| <= tolerance``
        """
        tolerance = _require_tolerance(tolerance)
        det = self.determinant
        if not math.isfinite(det) or abs(det) <= tolerance:
            raise SingularTransformError(
                f"Geotransform matrix is singular (cannot invert): determinant={det!r}",
                determinant=det,
            )

        if abs(det) < NEAR_SINGULAR_DETERMINANT:
            logger.warning(
                "Geotransform %s is nearly singular (determinant=%r); "
                "inverse may be numerically unstable",
                self.to_tuple(),
                det,
            )
        logger.debug("Inverting geotransform %s with determinant %r", self.to_tuple(), det)

        inv_det = 1.0 / det
        c1 = self.c5 * inv_det
        c2 = -self.c2 * inv_det
        c4 = -self.c4 * inv_det
        c5 = self.c1 * inv_det
        c0 = -self.c0 * c1 - self.c3 * c2
        c3 = -self.c0 * c4 - self.c3 * c5
        return GeoTransform(c0, c1, c2, c3, c4, c5)

    def geo_to_pixel(
        self,
        x: MapUnits,
        y: MapUnits,
        tolerance: float = DEFAULT_SINGULAR_TOLERANCE,
    ) -> PixelPoint:
        """Map georeferenced coordinates to a (fractional) pixel position.

        Raises:
            SingularTransformError: If this transform cannot be inverted
        """
        point = self.invert(tolerance).apply(x, y)
        return PixelPoint(x=point.x, y=point.y)


@dataclass(frozen=True)
class InversionResult:
    """Outcome of :func:`try_invert`: either an inverse or a reason it failed.

    Attributes:
        ok: True when the inversion succeeded.
        transform: The inverse transform, set only when ``ok`` is True.
        error: Human-readable failure reason, set only when ``ok`` is False.
        determinant: Determinant of the input's linear part.
    """

    ok: bool
    determinant: float
    transform: Optional[GeoTransform] = None
    error: Optional[str] = None

    def unwrap(self) -> GeoTransform:
        """Return the inverse transform or raise the failure.

        Raises:
            SingularTransformError: If the inversion failed
        """
        if not self.ok or self.transform is None:
            raise SingularTransformError(self.error or "Geotransform is singular", self.determinant)
        return self.transform


def try_invert(
    transform: GeoTransform,
    tolerance: float = DEFAULT_SINGULAR_TOLERANCE,
) -> InversionResult:
    """Invert ``transform`` and report singularity as a value instead of raising."""
    try:
        inverse = transform.invert(tolerance)
    except SingularTransformError as e:
        return InversionResult(ok=False, determinant=e.determinant, error=str(e))
    return InversionResult(ok=True, determinant=transform.determinant, transform=inverse)


def apply_geotransform(px: float, py: float, gt: Sequence[float]) -> Tuple[float, float]:
    """
    Apply GDAL 6-parameter affine geotransform to convert pixel to geographic coordinates.

    Pixel Origin Convention:
        GDAL GeoTransform references the UPPER-LEFT CORNER of a pixel.
        To get pixel CENTER coordinates, add 0.5 to both px and py before calling.

    Args:
        px: Pixel X coordinate (column), 0-indexed from left
        py: Pixel Y coordinate (row), 0-indexed from top
        gt: GeoTransform array [GT0, GT1, GT2, GT3, GT4, GT5]

    Returns:
        Tuple of (easting, northing) or (longitude, latitude) in the coordinate
        reference system of the raster.

    Raises:
        InvalidArgumentError: If gt is not exactly six finite numbers. The
            check runs before any arithmetic.

    Examples:
        >>> # North-up raster with 0.15m pixels
        >>> gt = [737575.05, 0.15, 0, 4391595.45, 0, -0.15]
        >>> easting, northing = apply_geotransform(10, 20, gt)
        >>> print(f"({easting:.2f}, {northing:.2f})")
        (737576.55, 4391592.45)

        >>> # Rotated raster (22.5 degrees clockwise)
        >>> gt_rotated = [500000, 0.1387, 0.0574, 4400000, 0.0574, -0.1387]
        >>> easting, northing = apply_geotransform(100, 0, gt_rotated)
        >>> print(f"({easting:.2f}, {northing:.2f})")
        (500013.87, 4400005.74)
    """
    point = GeoTransform.from_sequence(gt).apply(px, py)
    return point.x, point.y


def invert_geotransform(
    gt: Sequence[float],
    tolerance: float = DEFAULT_SINGULAR_TOLERANCE,
) -> Geotransform:
    """
    Invert a GDAL 6-parameter geotransform (pixel->geo becomes geo->pixel).

    Args:
        gt: GeoTransform array [GT0, GT1, GT2, GT3, GT4, GT5]
        tolerance: Largest ``|det|`` still treated as singular

    Returns:
        The inverse geotransform as a 6-tuple

    Raises:
        InvalidArgumentError: If gt is not exactly six finite numbers
        SingularTransformError: If the linear part cannot be inverted

    Examples:
        >>> invert_geotransform([100.0, 2.0, 0.0, 50.0, 0.0, -2.0])
        (-50.0, 0.5, 0.0, 25.0, 0.0, -0.5)
    """
    return GeoTransform.from_sequence(gt).invert(tolerance).to_tuple()
