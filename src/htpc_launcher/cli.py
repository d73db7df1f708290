"""CLI for the HTPC launcher.

Provides commands to run the launcher and to inspect the configured grid.
"""

import asyncio
import logging
import sys

import click

from .config import load_apps, load_settings
from .errors import ExitCode, LauncherError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

apps_option = click.option(
    "--apps",
    "apps_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Apps JSON file (default: ~/.config/htpc_app_manager/apps.json)",
)
settings_option = click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Settings YAML file (default: ~/.config/htpc_app_manager/settings.yaml)",
)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    help="Logging level",
)
def cli(log_level):
    """HTPC App Manager."""
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)


@cli.command()
@apps_option
@settings_option
@click.option("--windowed", is_flag=True, help="Run in a window instead of fullscreen")
def run(apps_path, settings_path, windowed):
    """Start the launcher."""
    # pygame is only needed for the window, keep `list` usable without a display
    from .home_screen.launcher import HomeScreenLauncher

    try:
        settings = load_settings(settings_path)
        if windowed:
            settings = settings.model_copy(update={"fullscreen": False})
        apps = load_apps(apps_path)
        launcher = HomeScreenLauncher(apps, settings)
        asyncio.run(launcher.start())

    except LauncherError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")

    sys.exit(ExitCode.SUCCESS)


@cli.command(name="list")
@apps_option
@settings_option
def list_apps(apps_path, settings_path):
    """Show configured apps and their grid positions."""
    try:
        settings = load_settings(settings_path)
        apps = load_apps(apps_path)
    except LauncherError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)

    for index, entry in enumerate(apps):
        if index < settings.capacity:
            row, col = divmod(index, settings.cols)
            position = f"({row}, {col})"
        else:
            position = "hidden"
        click.echo(f"{index:>2} {position:<8} {entry.identifier}: {entry.launch_command}")


def main():
    """Console script entry point."""
    cli()
