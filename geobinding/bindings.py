"""
Host calling surface.

Thin adapters that keep the conventions a host application expects
(``{"x", "y"}`` result objects, integer status codes, caller-owned output
buffers) on top of the pure geotransform and DMS functions. Validation
happens here, before any arithmetic.

    apply_geo_transform  -> GeoTransform.apply
    inv_geo_transform    -> GeoTransform.invert   (1 = success, 0 = singular)
    dec_to_dms           -> coordinates.dec_to_dms
"""

import logging
from typing import Any, MutableSequence, Optional, Sequence

import numpy as np

from geobinding.config_options import ConfigOptionStore
from geobinding.coordinates import DEFAULT_DMS_PRECISION
from geobinding.coordinates import dec_to_dms as _dec_to_dms
from geobinding.dataset import DatasetOpener
from geobinding.exceptions import InvalidArgumentError
from geobinding.geotransform import GeoTransform, try_invert
from geobinding.points import PointInput, as_geo_point
from geobinding.validation import GEOTRANSFORM_SIZE

logger = logging.getLogger(__name__)

# Status codes returned by inv_geo_transform
STATUS_SUCCESS = 1
STATUS_FAILURE = 0


def apply_geo_transform(
    gt_in: Sequence[float],
    x: PointInput,
    y: Optional[float] = None,
) -> dict[str, float]:
    """Apply a geotransform to a pixel coordinate.

    Args:
        gt_in: Input geotransform (six numbers, unaltered)
        x: Pixel column, or a point with ``x``/``y`` when ``y`` is omitted
        y: Pixel row

    Returns:
        ``{"x": geo_x, "y": geo_y}``

    Raises:
        InvalidArgumentError: If gt_in is not six finite numbers, or the
            point cannot be read
    """
    transform = GeoTransform.from_sequence(gt_in)
    point = as_geo_point(x, y)
    return transform.apply(point.x, point.y).to_dict()


def inv_geo_transform(gt_in: Sequence[float], gt_out: MutableSequence[float]) -> int:
    """Invert a geotransform into a caller-owned output buffer.

    On success the six inverse coefficients overwrite ``gt_out`` and 1 is
    returned. A singular transform returns 0 and leaves ``gt_out`` as it was.

    Args:
        gt_in: Input geotransform (six numbers, unaltered)
        gt_out: Output geotransform buffer (updated in place)

    Returns:
        STATUS_SUCCESS (1) or STATUS_FAILURE (0)

    Raises:
        InvalidArgumentError: If gt_in is not six finite numbers, or gt_out
            cannot hold six values
    """
    transform = GeoTransform.from_sequence(gt_in)
    _check_output_buffer(gt_out)

    result = try_invert(transform)
    if not result.ok:
        logger.debug("invGeoTransform failed: %s", result.error)
        return STATUS_FAILURE

    inverse = result.unwrap().to_list()
    if isinstance(gt_out, list):
        gt_out[:GEOTRANSFORM_SIZE] = inverse
    else:
        for index, value in enumerate(inverse):
            gt_out[index] = value
    return STATUS_SUCCESS


def _check_output_buffer(gt_out: Any) -> None:
    if isinstance(gt_out, (str, bytes, bytearray, tuple, dict)) or not hasattr(gt_out, "__setitem__"):
        raise InvalidArgumentError("gtOut must be a mutable sequence")
    # Lists grow like the host's arrays; fixed-size buffers must already fit
    if not isinstance(gt_out, list) and len(gt_out) < GEOTRANSFORM_SIZE:
        raise InvalidArgumentError(
            f"gtOut must have length {GEOTRANSFORM_SIZE}, got {len(gt_out)}"
        )
    # Integer buffers would truncate the coefficients
    if isinstance(gt_out, np.ndarray) and not np.issubdtype(gt_out.dtype, np.floating):
        raise InvalidArgumentError(f"gtOut must have a floating dtype, got {gt_out.dtype}")
    typecode = getattr(gt_out, "typecode", None)
    if typecode is not None and typecode not in ("f", "d"):
        raise InvalidArgumentError(f"gtOut must hold floats, got typecode '{typecode}'")


def dec_to_dms(angle: float, axis: str, precision: int = DEFAULT_DMS_PRECISION) -> str:
    """Convert decimal degrees to a degrees, minutes and seconds string.

    Returns:
        A string ``nndnn'nn.nn"L`` where L is the hemisphere letter
    """
    return _dec_to_dms(angle, axis, precision)


def set_config_option(store: ConfigOptionStore, name: str, value: Optional[str]) -> None:
    """Set (string) or clear (None) a config option in ``store``.

    ``value`` has no default; clearing an option takes an explicit None.
    """
    store.set(name, value)


def get_config_option(store: ConfigOptionStore, name: str) -> Optional[str]:
    """Read a config option from ``store``; None when unset."""
    return store.get(name)


def open_dataset(opener: DatasetOpener, path: str, mode: str = "r") -> Any:
    """Open a dataset through ``opener``'s backend chain.

    Raises:
        InvalidArgumentError: If mode is not "r" or "r+"
        DatasetOpenError: If no backend could open the path
    """
    return opener.open(path, mode)
