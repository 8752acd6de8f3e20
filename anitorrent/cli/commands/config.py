"""
config sub-commands: inspect, change and reset settings.json.
"""

import json
from typing import Any, Optional

import typer

from anitorrent.cli.context import get_config_manager
from anitorrent.core.exceptions import ConfigurationError
from anitorrent.ui import display_info, get_console, handle_error

app = typer.Typer(
    name="config",
    help="⚙️  Show, change or reset settings",
    no_args_is_help=True,
)


def _parse_value(raw: str) -> Any:
    """Interpret CLI input as JSON when possible ('30', 'true'), else as text."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command(name="show")
def show_config(
    section: Optional[str] = typer.Argument(
        None,
        help="Configuration section to display (network, search, logging, ui)"
    ),
) -> None:
    """📋 Display current configuration."""
    config_manager = get_config_manager()
    data = config_manager.settings.model_dump()

    if section:
        if section not in data:
            handle_error(ConfigurationError(f"Unknown configuration section: {section}"))
            raise typer.Exit(1)
        data = {section: data[section]}

    get_console().print_json(data=data)


@app.command(name="set")
def set_config(
    key: str = typer.Argument(..., help="Dotted setting path, e.g. search.default_resolution"),
    value: str = typer.Argument(..., help="Value; parsed as JSON when possible"),
) -> None:
    """
    🔧 Set a configuration value.

    Example: anitorrent config set network.timeout 15
    """
    try:
        get_config_manager().update_setting(key, _parse_value(value))
    except ConfigurationError as e:
        handle_error(e, f"Failed to set configuration value '{key}'")
        raise typer.Exit(1)

    display_info(f"{key} = {value}", "✅ Configuration Updated")


@app.command(name="reset")
def reset_config(
    confirm: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
) -> None:
    """🔄 Reset configuration to defaults."""
    if not confirm and not typer.confirm("Reset ALL configuration to defaults?", default=False):
        display_info("Configuration reset cancelled.", "ℹ️  Cancelled")
        return

    try:
        get_config_manager().reset_to_defaults()
    except ConfigurationError as e:
        handle_error(e, "Failed to reset configuration")
        raise typer.Exit(1)

    display_info("Configuration reset to defaults.", "✅ Configuration Reset")
