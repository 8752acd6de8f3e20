"""
UI Components - Rich renderables for torrents and provider capabilities.

This module provides the tables and panels the CLI prints, with consistent
styling across commands.
"""

from typing import List, Optional

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from anitorrent.core.models import AnimeTorrent, ProviderSettings


_TABLE_BOXES = {
    "rounded": box.ROUNDED,
    "simple": box.SIMPLE,
    "minimal": box.MINIMAL,
}


class UIComponents:
    """Collection of standardized UI components with consistent styling."""

    def __init__(self, table_style: str = "rounded"):
        self.table_box = _TABLE_BOXES.get(table_style, box.ROUNDED)

    def create_torrent_table(
        self,
        torrents: List[AnimeTorrent],
        title: Optional[str] = None,
        show_magnets: bool = False,
    ) -> Table:
        """
        Create a table listing torrents with their derived fields.

        Args:
            torrents: Torrents to list, in display order
            title: Table title
            show_magnets: Whether to add a magnet link column

        Returns:
            Styled Table object
        """
        table = Table(
            title=title,
            box=self.table_box,
            show_header=True,
            header_style="bold blue",
            expand=True,
        )

        table.add_column("#", justify="right", style="dim", width=4)
        table.add_column("Name", style="bold", ratio=3)
        table.add_column("Ep", justify="right", width=5)
        table.add_column("Res", justify="center", style="cyan", width=7)
        table.add_column("Size", justify="right", width=11)
        table.add_column("Released", style="dim", width=20)
        table.add_column("Info-hash", style="dim", overflow="fold", ratio=1)
        if show_magnets:
            table.add_column("Magnet", overflow="fold", ratio=2)

        for index, torrent in enumerate(torrents, start=1):
            episode = str(torrent.episode) if torrent.episode is not None else "?"
            row = [
                str(index),
                escape(torrent.name),
                episode,
                torrent.resolution,
                torrent.formatted_size,
                torrent.date[:19].replace("T", " "),
                torrent.info_hash or "-",
            ]
            if show_magnets:
                row.append(escape(torrent.magnet_link))
            table.add_row(*row)

        return table

    def create_settings_panel(self, name: str, settings: ProviderSettings) -> Panel:
        """Create a panel describing a provider's capability descriptor."""
        filters = ", ".join(str(f) for f in settings.smart_search_filters) or "none"
        lines = [
            f"[dim]Smart search:[/dim] {'yes' if settings.can_smart_search else 'no'}",
            f"[dim]Smart search filters:[/dim] {filters}",
            f"[dim]Adult content:[/dim] {'yes' if settings.supports_adult else 'no'}",
            f"[dim]Provider type:[/dim] {settings.type}",
        ]
        return Panel(
            "\n".join(lines),
            title=f"🔌 {escape(name)}",
            border_style="blue",
            padding=(1, 2),
        )


__all__ = ["UIComponents"]
