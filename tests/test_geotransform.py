#!/usr/bin/env python3
"""
Test suite for the 6-parameter affine geotransform.

The GDAL GeoTransform standard defines pixel-to-coordinate transformation as:
    Xgeo = GT[0] + P*GT[1] + L*GT[2]
    Ygeo = GT[3] + P*GT[4] + L*GT[5]

Where:
    GT[0]: X-coordinate of upper-left corner (origin easting)
    GT[1]: Pixel width (meters per pixel in X direction)
    GT[2]: Row rotation (typically 0 for north-up images)
    GT[3]: Y-coordinate of upper-left corner (origin northing)
    GT[4]: Column rotation (typically 0 for north-up images)
    GT[5]: Pixel height (meters per pixel in Y direction, typically negative)
"""

import logging
import math
from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from geobinding.exceptions import InvalidArgumentError, SingularTransformError
from geobinding.geotransform import (
    GeoTransform,
    InversionResult,
    apply_geotransform,
    invert_geotransform,
    try_invert,
)
from geobinding.points import GeoPoint, PixelPoint

NORTH_UP_GT = [737575.05, 0.15, 0, 4391595.45, 0, -0.15]
ROTATED_GT = [500000, 0.1387, 0.0574, 4400000, 0.0574, -0.1387]


class TestApplyGeotransform:
    """Test the apply_geotransform utility function."""

    def test_north_up_raster_origin(self):
        """Test north-up raster transform at origin (0, 0)."""
        easting, northing = apply_geotransform(0, 0, NORTH_UP_GT)

        assert easting == pytest.approx(737575.05, abs=0.01), "Easting at origin should match GT[0]"
        assert northing == pytest.approx(4391595.45, abs=0.01), (
            "Northing at origin should match GT[3]"
        )

    def test_north_up_raster_offset_pixel(self):
        """Test north-up raster transform at offset pixel."""
        # Expected easting = 737575.05 + 10*0.15 = 737576.55
        # Expected northing = 4391595.45 + 20*(-0.15) = 4391592.45
        easting, northing = apply_geotransform(10, 20, NORTH_UP_GT)

        assert easting == pytest.approx(737576.55, abs=0.01)
        assert northing == pytest.approx(4391592.45, abs=0.01)

    def test_rotated_raster_22_5_degrees(self):
        """Test rotated raster (22.5° clockwise) affine transform."""
        easting, northing = apply_geotransform(100, 0, ROTATED_GT)
        assert easting == pytest.approx(500013.87, abs=0.01)
        assert northing == pytest.approx(4400005.74, abs=0.01)

        easting, northing = apply_geotransform(0, 100, ROTATED_GT)
        assert easting == pytest.approx(500005.74, abs=0.01)
        assert northing == pytest.approx(4399986.13, abs=0.01)

    def test_half_pixel_center_offset(self):
        """Test pixel center offset convention (GDAL uses pixel corner)."""
        corner_e, corner_n = apply_geotransform(0, 0, NORTH_UP_GT)
        center_e, center_n = apply_geotransform(0.5, 0.5, NORTH_UP_GT)

        assert center_e == pytest.approx(corner_e + 0.075, abs=0.001)
        assert center_n == pytest.approx(corner_n - 0.075, abs=0.001)

    def test_fractional_pixel_coordinates(self):
        """Test that fractional pixel coordinates interpolate correctly."""
        easting, northing = apply_geotransform(10.5, 20.25, NORTH_UP_GT)

        assert easting == pytest.approx(737576.625, abs=0.001)
        assert northing == pytest.approx(4391592.4125, abs=0.001)

    def test_numpy_coefficients_accepted(self):
        """Test that a numpy array works as the coefficient sequence."""
        easting, northing = apply_geotransform(10, 20, np.array(NORTH_UP_GT))

        assert easting == pytest.approx(737576.55, abs=0.01)
        assert northing == pytest.approx(4391592.45, abs=0.01)

    @pytest.mark.parametrize(
        "gt",
        [
            [],
            [1.0, 2.0, 3.0, 4.0, 5.0],
            [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0],
        ],
        ids=["empty", "five", "seven"],
    )
    def test_wrong_length_rejected(self, gt):
        """Test that coefficient sequences of length != 6 fail."""
        with pytest.raises(InvalidArgumentError, match="length must equal 6"):
            apply_geotransform(0, 0, gt)

    @pytest.mark.parametrize(
        "gt",
        [
            [0, 1, 0, 0, 0, "1"],
            [0, 1, 0, 0, 0, None],
            [0, 1, True, 0, 0, 1],
        ],
        ids=["string", "none", "bool"],
    )
    def test_non_numeric_rejected(self, gt):
        """Test that non-numeric coefficients fail."""
        with pytest.raises(InvalidArgumentError, match="only contain numbers"):
            apply_geotransform(0, 0, gt)

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf], ids=["nan", "inf", "-inf"])
    def test_non_finite_coefficients_rejected(self, bad):
        """Test that non-finite coefficients fail at the sequence boundary."""
        with pytest.raises(InvalidArgumentError, match="finite"):
            apply_geotransform(0, 0, [0, 1, 0, 0, 0, bad])

    def test_string_rejected(self):
        """Test that a string is not treated as a sequence of coefficients."""
        with pytest.raises(InvalidArgumentError):
            apply_geotransform(0, 0, "123456")


class TestGeoTransformApply:
    """Test GeoTransform.apply and apply_array."""

    def test_identity_returns_input(self):
        """Test identity transform maps every position onto itself."""
        identity = GeoTransform.identity()
        for col, row in [(0.0, 0.0), (3.5, -2.25), (1e6, 1e-6)]:
            assert identity.apply(col, row) == GeoPoint(x=col, y=row)

    def test_non_finite_pixel_propagates(self):
        """Test non-finite pixel inputs propagate rather than raise."""
        point = GeoTransform.identity().apply(math.inf, 0.0)

        assert math.isinf(point.x)
        assert point.y == 0.0

    def test_apply_array_matches_scalar(self):
        """Test vectorized apply agrees with scalar apply."""
        gt = GeoTransform.from_sequence(ROTATED_GT)
        cols = np.array([0.0, 10.0, 250.5])
        rows = np.array([0.0, 20.0, 99.25])

        xs, ys = gt.apply_array(cols, rows)

        for i in range(3):
            point = gt.apply(cols[i], rows[i])
            assert xs[i] == pytest.approx(point.x, rel=1e-12)
            assert ys[i] == pytest.approx(point.y, rel=1e-12)

    def test_apply_array_broadcasts(self):
        """Test apply_array broadcasts a column vector against a row vector."""
        gt = GeoTransform.from_sequence([100.0, 2.0, 0.0, 50.0, 0.0, -2.0])
        cols, rows = np.meshgrid(np.arange(4), np.arange(3))

        xs, ys = gt.apply_array(cols, rows)

        assert xs.shape == (3, 4)
        assert ys.shape == (3, 4)
        assert xs[2, 3] == pytest.approx(106.0)
        assert ys[2, 3] == pytest.approx(46.0)


class TestGeoTransformConstruction:
    """Test GeoTransform constructors and value semantics."""

    def test_frozen(self):
        """Test GeoTransform is immutable."""
        gt = GeoTransform.identity()

        with pytest.raises(FrozenInstanceError):
            gt.c0 = 5.0  # type: ignore[misc]

    def test_equality_and_hash(self):
        """Test value equality and hashability."""
        a = GeoTransform.from_sequence(NORTH_UP_GT)
        b = GeoTransform.from_sequence(tuple(NORTH_UP_GT))

        assert a == b
        assert len({a, b}) == 1

    def test_round_trips_through_list(self):
        """Test to_list/to_tuple preserve GDAL ordering."""
        gt = GeoTransform.from_sequence(ROTATED_GT)

        assert gt.to_list() == [float(v) for v in ROTATED_GT]
        assert gt.to_tuple() == tuple(float(v) for v in ROTATED_GT)

    def test_from_origin_north_up(self):
        """Test from_origin builds a north-up transform with negative Y step."""
        gt = GeoTransform.from_origin(725140.0, 4373490.0, 0.05, 0.05)

        assert gt.to_tuple() == (725140.0, 0.05, 0.0, 4373490.0, 0.0, -0.05)

    @pytest.mark.parametrize("width,height", [(0.0, 1.0), (1.0, -1.0)], ids=["zero", "negative"])
    def test_from_origin_rejects_bad_pixel_size(self, width, height):
        """Test from_origin rejects non-positive pixel sizes."""
        with pytest.raises(InvalidArgumentError, match="positive"):
            GeoTransform.from_origin(0.0, 0.0, width, height)


class TestGeoTransformInvert:
    """Test inversion of geotransforms."""

    def test_identity_inverts_to_identity(self):
        """Test (0,1,0,0,0,1) inverts to itself and maps unit points onto themselves."""
        inverse = GeoTransform.from_sequence([0, 1, 0, 0, 0, 1]).invert()

        assert inverse == GeoTransform.identity()
        assert inverse.apply(0, 0) == GeoPoint(0.0, 0.0)
        assert inverse.apply(1, 0) == GeoPoint(1.0, 0.0)
        assert inverse.apply(0, 1) == GeoPoint(0.0, 1.0)

    def test_known_inverse(self):
        """Test inversion of a simple scaled and shifted transform."""
        inverse = invert_geotransform([100.0, 2.0, 0.0, 50.0, 0.0, -2.0])

        assert inverse == pytest.approx((-50.0, 0.5, 0.0, 25.0, 0.0, -0.5))

    def test_rotated_round_trip(self):
        """Test pixel -> geo -> pixel recovers the pixel for a rotated raster."""
        gt = GeoTransform.from_sequence(ROTATED_GT)
        inverse = gt.invert()

        for col, row in [(0, 0), (100, 0), (0, 100), (50.5, 75.25)]:
            geo = gt.apply(col, row)
            back = inverse.apply(geo.x, geo.y)
            assert back.x == pytest.approx(col, rel=1e-9, abs=1e-9)
            assert back.y == pytest.approx(row, rel=1e-9, abs=1e-9)

    def test_geo_to_pixel(self):
        """Test geo_to_pixel returns the fractional pixel position."""
        gt = GeoTransform.from_sequence([100.0, 2.0, 0.0, 50.0, 0.0, -2.0])

        pixel = gt.geo_to_pixel(121.0, 39.0)

        assert pixel == PixelPoint(x=10.5, y=5.5)
        assert pixel.to_pixel == (10, 6)

    @pytest.mark.parametrize(
        "gt",
        [
            [0, 0, 0, 0, 0, 0],
            [10, 2, 2, 20, 2, 2],
            [0, 1, 2, 0, 2, 4],
            [5, 0, 3, 7, 0, -1],
        ],
        ids=["all-zero", "all-equal", "proportional-rows", "zero-column"],
    )
    def test_singular_raises(self, gt):
        """Test that a zero determinant raises SingularTransformError."""
        transform = GeoTransform.from_sequence(gt)

        assert transform.determinant == 0.0
        assert not transform.is_invertible()
        with pytest.raises(SingularTransformError, match="singular") as exc_info:
            transform.invert()
        assert exc_info.value.determinant == 0.0

    def test_singular_is_arithmetic_error(self):
        """Test SingularTransformError is catchable as ArithmeticError."""
        with pytest.raises(ArithmeticError):
            invert_geotransform([0, 0, 0, 0, 0, 0])

    def test_tolerance_widens_singularity(self):
        """Test a positive tolerance rejects tiny determinants."""
        gt = GeoTransform.from_sequence([0, 1e-6, 0, 0, 0, 1e-6])

        assert gt.invert().c1 == pytest.approx(1e6)
        with pytest.raises(SingularTransformError):
            gt.invert(tolerance=1e-9)
        assert not gt.is_invertible(tolerance=1e-9)

    @pytest.mark.parametrize(
        "tolerance",
        [-1.0, math.nan, math.inf, "0"],
        ids=["negative", "nan", "inf", "string"],
    )
    def test_invalid_tolerance_rejected(self, tolerance):
        """Test a bad tolerance fails validation instead of dividing by zero."""
        transform = GeoTransform(0, 0, 0, 0, 0, 0)

        with pytest.raises(InvalidArgumentError, match="tolerance"):
            transform.invert(tolerance)
        with pytest.raises(InvalidArgumentError, match="tolerance"):
            transform.is_invertible(tolerance)
        with pytest.raises(InvalidArgumentError, match="tolerance"):
            transform.geo_to_pixel(1.0, 1.0, tolerance)
        with pytest.raises(InvalidArgumentError, match="tolerance"):
            try_invert(transform, tolerance)

    def test_near_singular_logs_warning(self, caplog):
        """Test near-singular inversion succeeds but logs a warning."""
        gt = GeoTransform.from_sequence([0, 1e-8, 0, 0, 0, 1e-8])

        with caplog.at_level(logging.WARNING, logger="geobinding.geotransform"):
            gt.invert()

        assert "nearly singular" in caplog.text

    def test_invert_validates_before_arithmetic(self):
        """Test wrong arity fails with InvalidArgumentError, not a math error."""
        with pytest.raises(InvalidArgumentError):
            invert_geotransform([0, 1, 0, 0, 1])


class TestTryInvert:
    """Test the tagged InversionResult API."""

    def test_success(self):
        """Test successful inversion carries the inverse transform."""
        result = try_invert(GeoTransform.from_sequence([100.0, 2.0, 0.0, 50.0, 0.0, -2.0]))

        assert isinstance(result, InversionResult)
        assert result.ok
        assert result.error is None
        assert result.determinant == pytest.approx(-4.0)
        assert result.unwrap().c1 == pytest.approx(0.5)

    def test_failure(self):
        """Test singular inversion is reported as a value, not a default transform."""
        result = try_invert(GeoTransform(0, 0, 0, 0, 0, 0))

        assert not result.ok
        assert result.transform is None
        assert "singular" in result.error
        with pytest.raises(SingularTransformError):
            result.unwrap()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
