"""CLI module for geobinding tools.

Provides a unified `geob` command-line interface for geotransform and
DMS angle utilities.
"""

from geobinding.cli.main import app

__all__ = ["app"]
