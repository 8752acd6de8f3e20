"""
AniTorrent command line.

Builds the Typer application: global options, logging and settings
bootstrap in the callback, and registration of the command modules.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.traceback import install as install_rich_traceback

from anitorrent import __version__
from anitorrent.core import ConfigManager
from anitorrent.cli.context import get_config_manager, set_config_manager
from anitorrent.ui import get_console, handle_error


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
NOISY_LOGGERS = ("aiohttp", "asyncio")

app = typer.Typer(
    name="anitorrent",
    help="🧲 Normalized anime torrent search from release feeds",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _print_version(value: bool) -> None:
    if not value:
        return
    get_console().print(f"[bold blue]AniTorrent[/bold blue] version [green]{__version__}[/green]")
    raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Print the version and exit",
        callback=_print_version,
        is_eager=True,
    ),
    config_dir: Optional[Path] = typer.Option(
        None, "--config-dir",
        envvar="ANITORRENT_CONFIG_DIR",
        help="Directory holding settings.json (default: ./config)",
        file_okay=False,
    ),
    debug: bool = typer.Option(
        False, "--debug",
        help="Log at DEBUG level and show tracebacks",
    ),
) -> None:
    """
    🧲 AniTorrent - normalized anime torrent search.

    Query release feeds and get uniform torrent records with info-hash,
    size, resolution and episode number.
    """
    try:
        config_manager = ConfigManager(config_dir or Path("config"))
    except Exception as e:
        configure_logging(debug)
        handle_error(e, "While loading settings", show_traceback=debug)
        raise typer.Exit(1)

    set_config_manager(config_manager)
    configure_logging(debug, config_manager.settings.logging.level)
    install_rich_traceback(show_locals=debug)


def configure_logging(debug: bool = False, level_name: str = "WARNING") -> None:
    """
    Send log records to stderr at the configured level.

    Args:
        debug: Force DEBUG regardless of the configured level
        level_name: Level from ``LoggingSettings``
    """
    level = logging.DEBUG if debug else getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler(sys.stderr)])
    logging.getLogger().setLevel(level)

    if not debug:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _register_commands() -> None:
    # Command modules import the app's context, so load them late
    from anitorrent.cli.commands import config, torrents

    for name, command in (
        ("latest", torrents.latest),
        ("search", torrents.search),
        ("smart", torrents.smart),
        ("magnet", torrents.magnet),
        ("capabilities", torrents.capabilities),
    ):
        app.command(name=name)(command)

    app.add_typer(config.app, name="config")


_register_commands()


def cli_main() -> None:
    """Console-script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


__all__ = ["app", "cli_main", "configure_logging", "get_config_manager"]
