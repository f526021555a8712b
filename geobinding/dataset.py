"""
Dataset open boundary.

Opening datasets is the geospatial engine's job. This module only fixes the
contract around it: the accepted access modes, and a priority-ordered chain
of backend openers (for example a vector-format family tried before a
raster-format family) that is walked until one of them returns a handle.

Backends are plain callables ``(path, AccessMode) -> handle | None``; a
backend returns None when it does not recognize the path.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from geobinding.exceptions import DatasetOpenError, InvalidArgumentError

logger = logging.getLogger(__name__)


class AccessMode(Enum):
    """Dataset access mode requested from a backend."""
    READ_ONLY = "r"
    UPDATE = "r+"


def validate_open_mode(mode: str) -> AccessMode:
    """Map an open mode string onto an :class:`AccessMode`.

    Raises:
        InvalidArgumentError: If mode is not ``"r"`` or ``"r+"``
    """
    try:
        return AccessMode(mode)
    except ValueError:
        raise InvalidArgumentError('Invalid open mode. Must be "r" or "r+"') from None


Opener = Callable[[str, AccessMode], Optional[Any]]


@dataclass(frozen=True)
class DatasetBackend:
    """A named backend opener.

    Attributes:
        name: Format family name used in logs (e.g. ``"ogr"``, ``"gdal"``).
        opener: Callable returning a dataset handle, or None if it cannot
            open the path.
    """

    name: str
    opener: Opener


class DatasetOpener:
    """Ordered chain of dataset backends.

    Backends are tried in registration order; the first non-None handle
    wins. Each instance owns its chain.

    Example:
        >>> opener = DatasetOpener()
        >>> opener.register("vector", open_vector)
        >>> opener.register("raster", open_raster)
        >>> handle = opener.open("roads.shp", mode="r")
    """

    def __init__(self, backends: Optional[Iterable[DatasetBackend]] = None):
        self._backends: List[DatasetBackend] = list(backends or [])

    @property
    def backends(self) -> tuple[DatasetBackend, ...]:
        """Registered backends in priority order."""
        return tuple(self._backends)

    def register(self, name: str, opener: Opener, first: bool = False) -> None:
        """Add a backend to the chain.

        Args:
            name: Backend name
            opener: Opener callable
            first: Put the backend ahead of all existing ones
        """
        if not callable(opener):
            raise InvalidArgumentError(f"opener for backend '{name}' must be callable")
        backend = DatasetBackend(name=name, opener=opener)
        if first:
            self._backends.insert(0, backend)
        else:
            self._backends.append(backend)
        logger.debug("Registered dataset backend '%s'", name)

    def open(self, path: str, mode: str = "r") -> Any:
        """Open ``path`` with the first backend that accepts it.

        Args:
            path: Dataset path or identifier
            mode: ``"r"`` (read-only) or ``"r+"`` (read-update)

        Returns:
            Opaque dataset handle from the backend

        Raises:
            InvalidArgumentError: If path is not a string or mode is invalid
            DatasetOpenError: If no backend could open the path
        """
        if not isinstance(path, str):
            raise InvalidArgumentError(f"path must be a string, got {type(path).__name__}")
        access = validate_open_mode(mode)

        for backend in self._backends:
            logger.debug("Trying backend '%s' for %s (%s)", backend.name, path, access.value)
            handle = backend.opener(path, access)
            if handle is not None:
                logger.info("Opened %s with backend '%s'", path, backend.name)
                return handle

        attempted = ", ".join(b.name for b in self._backends) or "none registered"
        raise DatasetOpenError(f"Error opening dataset: {path} (backends tried: {attempted})")
