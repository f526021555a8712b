"""Main Typer CLI application for geobinding tools."""

import logging
from pathlib import Path

import typer

from geobinding.settings import GeoBindingSettings, get_default_settings

app = typer.Typer(
    help="Geotransform and DMS angle tools for georeferenced rasters",
    no_args_is_help=True,
)

# Subcommand groups
transform_app = typer.Typer(help="Affine geotransform commands")
dms_app = typer.Typer(help="Degrees/minutes/seconds angle commands")

app.add_typer(transform_app, name="transform")
app.add_typer(dms_app, name="dms")


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to geobinding settings YAML file"
    ),
) -> None:
    """Configure logging and load settings shared by all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings: GeoBindingSettings = get_default_settings()
    if config is not None:
        try:
            settings = GeoBindingSettings.from_yaml(str(config))
        except (FileNotFoundError, ValueError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from e
    ctx.obj = settings


def _register_commands() -> None:
    """
    Import command modules to register commands with their respective apps.

    Commands use decorators like @transform_app.command() which register
    themselves when the module is imported.
    """
    from geobinding.cli import dms, transform

    # Avoid "imported but unused" warnings by explicitly using the module
    _ = dms
    _ = transform


_register_commands()


if __name__ == "__main__":
    app()
