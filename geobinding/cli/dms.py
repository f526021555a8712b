"""DMS angle CLI commands."""

import typer

from geobinding.cli.main import dms_app
from geobinding.coordinates import dec_to_dms, dms_to_dd
from geobinding.exceptions import GeoBindingError


@dms_app.command("format")
def format_command(
    ctx: typer.Context,
    angle: float = typer.Argument(..., help="Angle in decimal degrees (use -- before negatives)"),
    axis: str = typer.Option("lat", "--axis", "-a", help="'lat' or 'long'"),
    precision: int | None = typer.Option(
        None, "--precision", "-p", help="Fractional digits for seconds (default from settings)"
    ),
) -> None:
    """
    Format decimal degrees as a DMS string.

    Example:
        geob dms format --axis long -- -45.5
    """
    if precision is None:
        precision = ctx.obj.dms_precision if ctx.obj else 2
    try:
        text = dec_to_dms(angle, axis, precision)
    except GeoBindingError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(text)


@dms_app.command("parse")
def parse_command(
    text: str = typer.Argument(..., help="DMS string, e.g. 39d38'25.72\"N"),
) -> None:
    """
    Convert a DMS string to signed decimal degrees.

    Example:
        geob dms parse "0°13'48.63\\"W"
    """
    try:
        value = dms_to_dd(text)
    except GeoBindingError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(repr(value))
