"""
Torrent Commands - Query provider plugins from the command line.

This module implements the latest, search, smart, magnet and capabilities
commands. Results print as a Rich table, or as host-format JSON with
``--json``.
"""

import asyncio
import json
import logging
from typing import Awaitable, Callable, List, Optional, TypeVar

import typer

from anitorrent.cli.context import get_config_manager
from anitorrent.core.exceptions import AniTorrentError, PluginError, SearchError
from anitorrent.core.models import AnimeMedia, AnimeTorrent, SmartSearchOptions
from anitorrent.plugins import PLUGINS, BasePlugin
from anitorrent.ui import UIComponents, display_warning, get_console, handle_error


logger = logging.getLogger(__name__)

T = TypeVar("T")

SOURCE_OPTION = typer.Option("subsplease", "--source", "-s", help="Provider to query")
JSON_OPTION = typer.Option(False, "--json", help="Print host-format JSON instead of a table")
LIMIT_OPTION = typer.Option(None, "--limit", "-l", min=1, help="Maximum number of rows to display")


def build_plugin(source: str) -> BasePlugin:
    """Instantiate a provider configured from the network settings."""
    plugin_class = PLUGINS.get(source.lower())
    if plugin_class is None:
        available = ", ".join(sorted(PLUGINS))
        raise PluginError(f"Unknown source '{source}' (available: {available})", plugin_name=source)

    network = get_config_manager().settings.network
    return plugin_class(config={
        "timeout": network.timeout,
        "max_retries": network.max_retries,
        "retry_delay": network.retry_delay,
        "user_agent": network.user_agent,
    })


async def _with_plugin(source: str, operation: Callable[[BasePlugin], Awaitable[T]]) -> T:
    async with build_plugin(source) as plugin:
        return await operation(plugin)


def _run(source: str, operation: Callable[[BasePlugin], Awaitable[T]], context: str) -> T:
    try:
        return asyncio.run(_with_plugin(source, operation))
    except Exception as e:
        if not isinstance(e, AniTorrentError):
            logger.debug("Unexpected error", exc_info=True)
        handle_error(e, context, show_traceback=logger.isEnabledFor(logging.DEBUG))
        raise typer.Exit(1)


def _render(torrents: List[AnimeTorrent], title: str, as_json: bool, limit: Optional[int]) -> None:
    if as_json:
        typer.echo(json.dumps([t.to_host_dict() for t in torrents], indent=2, ensure_ascii=False))
        return

    if not torrents:
        display_warning("No torrents matched.", "🔍 No Results Found")
        return

    settings = get_config_manager().settings
    max_rows = min(limit or settings.search.max_display_results, settings.search.max_display_results)

    ui = UIComponents(table_style=settings.ui.table_style)
    console = get_console()
    console.print(ui.create_torrent_table(
        torrents[:max_rows],
        title=title,
        show_magnets=settings.ui.show_magnets,
    ))
    if len(torrents) > max_rows:
        console.print(f"[dim]Showing {max_rows} of {len(torrents)} torrents[/dim]")


def latest(
    source: str = SOURCE_OPTION,
    as_json: bool = JSON_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
) -> None:
    """🆕 Show the latest releases."""
    torrents = _run(source, lambda plugin: plugin.get_latest(), "While fetching latest releases")
    _render(torrents, "🆕 Latest Releases", as_json, limit)


def search(
    query: str = typer.Argument(..., help="Free-text query"),
    source: str = SOURCE_OPTION,
    as_json: bool = JSON_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
) -> None:
    """
    🔍 Search releases by title.

    Examples:

        anitorrent search "frieren"

        anitorrent search "one piece" --json
    """
    torrents = _run(source, lambda plugin: plugin.search(query), f"Search failed for query '{query}'")
    _render(torrents, f"🔍 Results for '{query}'", as_json, limit)


def smart(
    query: str = typer.Option("", "--query", "-q", help="Explicit query (overrides titles)"),
    romaji: Optional[str] = typer.Option(None, "--romaji", help="Romaji title of the show"),
    english: Optional[str] = typer.Option(None, "--english", help="English title of the show"),
    episode: int = typer.Option(0, "--episode", "-e", min=0, help="Episode number, 0 for any"),
    offset: int = typer.Option(0, "--offset", help="Absolute episode offset of the season"),
    resolution: Optional[str] = typer.Option(None, "--resolution", "-r", help="Resolution such as 1080p"),
    batch: bool = typer.Option(False, "--batch", help="Look for a batch release"),
    source: str = SOURCE_OPTION,
    as_json: bool = JSON_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
) -> None:
    """
    🎯 Search for a specific episode and resolution.

    Examples:

        anitorrent smart --romaji "Sousou no Frieren" --episode 5 --resolution 1080p

        anitorrent smart -q "Dandadan" -e 3 --offset 12
    """
    if resolution is None:
        resolution = get_config_manager().settings.search.default_resolution

    options = SmartSearchOptions(
        media=AnimeMedia(romaji_title=romaji, english_title=english, absolute_season_offset=offset),
        query=query,
        batch=batch,
        episode_number=episode,
        resolution=resolution,
    )
    if not options.effective_query() and not as_json:
        display_warning("No query or title given; searching all recent releases.", "⚠️  Empty Query")

    torrents = _run(
        source,
        lambda plugin: plugin.smart_search(options),
        f"Smart search failed for '{options.effective_query()}'",
    )
    _render(torrents, f"🎯 Smart results for '{options.effective_query()}'", as_json, limit)


def magnet(
    query: str = typer.Argument(..., help="Free-text query"),
    index: int = typer.Argument(1, min=1, help="1-based row of the search results"),
    source: str = SOURCE_OPTION,
) -> None:
    """🧲 Print the magnet link of a search result."""

    async def resolve(plugin: BasePlugin) -> str:
        torrents = await plugin.search(query)
        if index > len(torrents):
            raise SearchError(
                f"Result {index} requested but only {len(torrents)} found",
                query=query,
                source=source,
            )
        return await plugin.get_magnet_link(torrents[index - 1])

    link = _run(source, resolve, f"Magnet lookup failed for query '{query}'")
    typer.echo(link)


def capabilities(
    source: str = SOURCE_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """🔌 Show what a provider supports."""
    try:
        plugin = build_plugin(source)
    except AniTorrentError as e:
        handle_error(e, "While loading provider")
        raise typer.Exit(1)

    settings = plugin.get_settings()
    if as_json:
        typer.echo(json.dumps(settings.to_host_dict(), indent=2))
    else:
        get_console().print(UIComponents().create_settings_panel(str(plugin), settings))


__all__ = ["build_plugin", "latest", "search", "smart", "magnet", "capabilities"]
