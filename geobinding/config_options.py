"""
Config option store.

Holds named string options handed to the geospatial engine (for example
``GDAL_CACHEMAX`` or ``CPL_DEBUG``). Each :class:`ConfigOptionStore` owns its
own state, so callers pass a store to whatever needs it instead of sharing a
process-wide table, and tests can isolate instances.
"""

import logging
import os
import threading
from typing import Dict, Mapping, Optional

from geobinding.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class ConfigOptionStore:
    """Thread-safe mapping of config option names to string values.

    Setting an option to ``None`` unsets it, mirroring the engine's
    convention that a null value clears the option.

    Example:
        >>> store = ConfigOptionStore()
        >>> store.set("GDAL_CACHEMAX", "512")
        >>> store.get("GDAL_CACHEMAX")
        '512'
        >>> store.set("GDAL_CACHEMAX", None)
        >>> store.get("GDAL_CACHEMAX") is None
        True
    """

    def __init__(self, options: Optional[Mapping[str, str]] = None):
        self._options: Dict[str, str] = {}
        self._lock = threading.Lock()
        if options:
            self.update(options)

    @classmethod
    def from_mapping(cls, options: Mapping[str, str]) -> 'ConfigOptionStore':
        """Create a store seeded from a mapping of option names to values."""
        return cls(options)

    @classmethod
    def from_env(
        cls,
        prefix: str,
        environ: Optional[Mapping[str, str]] = None,
    ) -> 'ConfigOptionStore':
        """Create a store from environment variables starting with ``prefix``.

        The prefix is kept as part of the option name, so ``prefix="GDAL_"``
        picks up ``GDAL_CACHEMAX`` as ``GDAL_CACHEMAX``.

        Args:
            prefix: Required name prefix, e.g. ``"GDAL_"`` or ``"CPL_"``
            environ: Mapping to read instead of ``os.environ``

        Returns:
            New ConfigOptionStore
        """
        if not isinstance(prefix, str) or not prefix:
            raise InvalidArgumentError("prefix must be a non-empty string")
        source = os.environ if environ is None else environ
        return cls({name: value for name, value in source.items() if name.startswith(prefix)})

    @staticmethod
    def _check_name(name: str) -> str:
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("config option name must be a non-empty string")
        return name

    def set(self, name: str, value: Optional[str]) -> None:
        """Set an option, or unset it when ``value`` is None.

        Raises:
            InvalidArgumentError: If name is not a non-empty string, or value
                is neither a string nor None
        """
        self._check_name(name)
        if value is not None and not isinstance(value, str):
            raise InvalidArgumentError("value must be a string or null")

        with self._lock:
            if value is None:
                self._options.pop(name, None)
            else:
                self._options[name] = value
        logger.debug("Config option %s set to %r", name, value)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return an option's value, or ``default`` when it is not set."""
        self._check_name(name)
        with self._lock:
            return self._options.get(name, default)

    def unset(self, name: str) -> None:
        """Remove an option if it is set."""
        self.set(name, None)

    def update(self, options: Mapping[str, Optional[str]]) -> None:
        """Set several options at once; ``None`` values unset."""
        for name, value in options.items():
            self.set(name, value)

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of all options currently set."""
        with self._lock:
            return dict(self._options)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._options

    def __len__(self) -> int:
        with self._lock:
            return len(self._options)

    def __repr__(self) -> str:
        return f"ConfigOptionStore({self.snapshot()!r})"
