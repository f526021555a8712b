"""
Geospatial binding layer: affine geotransforms and DMS angle formatting.

This package provides the numeric core a host application needs around an
external geospatial engine:
    - GeoTransform: 6-coefficient affine map between pixel/line and
      georeferenced coordinates, with forward application and inversion
    - dec_to_dms / to_dms: decimal degrees to degrees/minutes/seconds
    - bindings: host-facing adapters with status-code conventions
    - ConfigOptionStore: injectable config option storage
    - DatasetOpener: access-mode validation and backend priority chain

Example Usage:
    >>> from geobinding import GeoTransform, dec_to_dms
    >>>
    >>> gt = GeoTransform.from_sequence([100.0, 2.0, 0.0, 50.0, 0.0, -2.0])
    >>> gt.apply(10, 5)
    GeoPoint(x=120.0, y=40.0)
    >>> gt.invert().apply(120.0, 40.0)
    GeoPoint(x=10.0, y=5.0)
    >>> dec_to_dms(-45.5, "long")
    '45d30\\'0.00"W'
"""

# Core value types
from geobinding.points import GeoPoint, PixelPoint, as_geo_point
from geobinding.geotransform import (
    GeoTransform,
    Geotransform,
    InversionResult,
    apply_geotransform,
    invert_geotransform,
    try_invert,
)
from geobinding.coordinates import Axis, DMSAngle, dec_to_dms, dms_to_dd, to_dms

# Errors
from geobinding.exceptions import (
    DatasetOpenError,
    GeoBindingError,
    InvalidArgumentError,
    SingularTransformError,
)

# Boundary collaborators and configuration
from geobinding.config_options import ConfigOptionStore
from geobinding.dataset import AccessMode, DatasetOpener, validate_open_mode
from geobinding.settings import GeoBindingSettings, get_default_settings

# Define public API
__all__ = [
    # Core
    'GeoTransform',
    'Geotransform',
    'InversionResult',
    'apply_geotransform',
    'invert_geotransform',
    'try_invert',
    'GeoPoint',
    'PixelPoint',
    'as_geo_point',
    'Axis',
    'DMSAngle',
    'dec_to_dms',
    'dms_to_dd',
    'to_dms',

    # Errors
    'GeoBindingError',
    'InvalidArgumentError',
    'SingularTransformError',
    'DatasetOpenError',

    # Boundary and configuration
    'ConfigOptionStore',
    'AccessMode',
    'DatasetOpener',
    'validate_open_mode',
    'GeoBindingSettings',
    'get_default_settings',
]

# Package metadata
__version__ = '0.1.0'
__description__ = 'Affine geotransform and DMS angle utilities for geospatial bindings'
