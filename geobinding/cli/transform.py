"""Geotransform CLI commands."""

import json
from typing import NoReturn

import typer

from geobinding.cli.main import transform_app
from geobinding.exceptions import GeoBindingError, InvalidArgumentError
from geobinding.geotransform import GeoTransform


def _parse_geotransform(text: str) -> GeoTransform:
    """
    Parse a comma-separated geotransform such as "100,2,0,50,0,-2".

    Args:
        text: Six comma-separated numbers in GDAL order

    Returns:
        GeoTransform built from the numbers

    Raises:
        InvalidArgumentError: If the text does not hold six finite numbers
    """
    parts = [part.strip() for part in text.split(",") if part.strip()]
    try:
        values = [float(part) for part in parts]
    except ValueError:
        raise InvalidArgumentError(f"geotransform must be comma-separated numbers: {text}") from None
    return GeoTransform.from_sequence(values)


def _fail(error: Exception) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1) from error


@transform_app.command("apply")
def apply_command(
    gt: str = typer.Option(..., "--gt", help='Geotransform, e.g. "737575.05,0.15,0,4391595.45,0,-0.15"'),
    col: float = typer.Option(..., "--col", help="Pixel column (fractional allowed)"),
    row: float = typer.Option(..., "--row", help="Pixel row (fractional allowed)"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """
    Map a pixel position to georeferenced coordinates.

    Example:
        geob transform apply --gt=737575.05,0.15,0,4391595.45,0,-0.15 --col 10 --row 20
    """
    try:
        point = _parse_geotransform(gt).apply(col, row)
    except GeoBindingError as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps(point.to_dict()))
    else:
        typer.echo(f"x={point.x} y={point.y}")


@transform_app.command("invert")
def invert_command(
    ctx: typer.Context,
    gt: str = typer.Option(..., "--gt", help="Geotransform to invert"),
    tolerance: float | None = typer.Option(
        None, help="Largest |determinant| treated as singular (default from settings)"
    ),
) -> None:
    """
    Print the inverse geotransform (georeferenced -> pixel).

    Exits with status 1 when the transform is singular.

    Example:
        geob transform invert --gt=100,2,0,50,0,-2
    """
    if tolerance is None:
        tolerance = ctx.obj.singular_tolerance if ctx.obj else 0.0
    try:
        inverse = _parse_geotransform(gt).invert(tolerance)
    except GeoBindingError as e:
        _fail(e)

    typer.echo(",".join(repr(c) for c in inverse.to_tuple()))


@transform_app.command("locate")
def locate_command(
    ctx: typer.Context,
    gt: str = typer.Option(..., "--gt", help="Geotransform of the raster"),
    x: float = typer.Option(..., "--x", help="Georeferenced X (easting/longitude)"),
    y: float = typer.Option(..., "--y", help="Georeferenced Y (northing/latitude)"),
) -> None:
    """
    Find the pixel position of a georeferenced coordinate.

    Example:
        geob transform locate --gt=100,2,0,50,0,-2 --x 120 --y 40
    """
    tolerance = ctx.obj.singular_tolerance if ctx.obj else 0.0
    try:
        pixel = _parse_geotransform(gt).geo_to_pixel(x, y, tolerance)
    except GeoBindingError as e:
        _fail(e)

    px, py = pixel.to_pixel
    typer.echo(f"col={pixel.x} row={pixel.y} (pixel {px}, {py})")
