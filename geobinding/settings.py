"""
Runtime settings for geobinding.

Settings live under a ``geobinding`` section of a YAML file:

    geobinding:
      dms_precision: 3
      singular_tolerance: 0.0
      config_options:
        GDAL_CACHEMAX: "512"
"""

from dataclasses import dataclass, field
from typing import Any, Dict
from pathlib import Path
import logging
import math

import yaml

from geobinding.config_options import ConfigOptionStore
from geobinding.coordinates import DEFAULT_DMS_PRECISION
from geobinding.exceptions import InvalidArgumentError
from geobinding.geotransform import DEFAULT_SINGULAR_TOLERANCE

logger = logging.getLogger(__name__)

SETTINGS_SECTION = 'geobinding'


@dataclass
class GeoBindingSettings:
    """Package-level settings.

    Attributes:
        dms_precision: Default number of fractional digits for DMS seconds
        singular_tolerance: Largest determinant magnitude treated as singular
            when inverting geotransforms (0.0 means exact zero only)
        config_options: Initial options for stores built by create_store()
    """
    dms_precision: int = DEFAULT_DMS_PRECISION
    singular_tolerance: float = DEFAULT_SINGULAR_TOLERANCE
    config_options: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: str) -> 'GeoBindingSettings':
        """Load settings from YAML file.

        Args:
            path: Path to YAML settings file

        Returns:
            GeoBindingSettings instance loaded from file

        Raises:
            FileNotFoundError: If settings file does not exist
            ValueError: If settings file is malformed or contains invalid values
        """
        settings_path = Path(path)

        if not settings_path.exists():
            raise FileNotFoundError(
                f"Settings file not found: {path}\n"
                f"Please create a settings file or use get_default_settings()"
            )

        try:
            with open(settings_path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidArgumentError(f"Failed to parse YAML settings file: {e}") from e

        if not data:
            raise InvalidArgumentError(
                f"Settings file is empty: {path}\n"
                f"Expected a '{SETTINGS_SECTION}' section"
            )

        if not isinstance(data, dict) or SETTINGS_SECTION not in data:
            raise InvalidArgumentError(
                f"Settings file missing '{SETTINGS_SECTION}' section: {path}\n"
                f"Expected structure: {SETTINGS_SECTION}:\n  dms_precision: ...\n  ..."
            )

        logger.debug("Loaded settings from %s", settings_path)
        return cls.from_dict(data[SETTINGS_SECTION] or {})

    @classmethod
    def from_dict(cls, config: dict) -> 'GeoBindingSettings':
        """Create settings from dictionary.

        Args:
            config: Dictionary with optional keys 'dms_precision',
                'singular_tolerance' and 'config_options'

        Returns:
            GeoBindingSettings instance

        Raises:
            ValueError: If a value has the wrong type or range
        """
        if not isinstance(config, dict):
            raise InvalidArgumentError(f"Settings must be a dictionary, got {type(config)}")

        unknown = set(config) - {'dms_precision', 'singular_tolerance', 'config_options'}
        if unknown:
            raise InvalidArgumentError(
                f"Unknown settings key(s): {', '.join(sorted(unknown))}"
            )

        precision = config.get('dms_precision', DEFAULT_DMS_PRECISION)
        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
            raise InvalidArgumentError(
                f"'dms_precision' must be a non-negative integer, got {precision!r}"
            )

        tolerance = config.get('singular_tolerance', DEFAULT_SINGULAR_TOLERANCE)
        if (
            isinstance(tolerance, bool)
            or not isinstance(tolerance, (int, float))
            or not math.isfinite(tolerance)
            or tolerance < 0
        ):
            raise InvalidArgumentError(
                f"'singular_tolerance' must be a non-negative number, got {tolerance!r}"
            )

        options = config.get('config_options') or {}
        if not isinstance(options, dict):
            raise InvalidArgumentError(
                f"'config_options' must be a mapping, got {type(options)}"
            )
        config_options = {}
        for name, value in options.items():
            # Null leaves the option unset
            if value is None:
                continue
            # YAML reads unquoted ON/OFF/yes/no as booleans
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise InvalidArgumentError(
                    f"config option '{name}' must be a string or number, got {value!r} "
                    f"(quote values such as \"ON\" or \"YES\")"
                )
            config_options[str(name)] = str(value)

        return cls(
            dms_precision=precision,
            singular_tolerance=float(tolerance),
            config_options=config_options,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary.

        Returns:
            Dictionary representation suitable for YAML serialization
        """
        result: Dict[str, Any] = {
            'dms_precision': self.dms_precision,
            'singular_tolerance': self.singular_tolerance,
        }
        if self.config_options:
            result['config_options'] = dict(self.config_options)
        return result

    def save_to_yaml(self, path: str) -> None:
        """Save settings to YAML file under the ``geobinding`` section.

        Raises:
            IOError: If file cannot be written
        """
        settings_path = Path(path)
        settings_path.parent.mkdir(parents=True, exist_ok=True)

        output = {SETTINGS_SECTION: self.to_dict()}

        try:
            with open(settings_path, 'w') as f:
                yaml.safe_dump(output, f, default_flow_style=False, sort_keys=False)
        except IOError as e:
            raise IOError(f"Failed to write settings file: {e}") from e

    def create_store(self) -> ConfigOptionStore:
        """Build a new ConfigOptionStore seeded with ``config_options``."""
        return ConfigOptionStore.from_mapping(self.config_options)


def get_default_settings() -> GeoBindingSettings:
    """Return default settings: 2-digit DMS seconds, exact-zero singularity test.

    Returns:
        GeoBindingSettings with defaults
    """
    return GeoBindingSettings()
