"""
Error Handler - Error panels with context and suggestions.

This module provides consistent error display across the CLI with helpful
context and actionable suggestions per error type.
"""

import traceback
from typing import List, Optional, Tuple

from rich.markup import escape
from rich.panel import Panel

from anitorrent.core.exceptions import (
    AniTorrentError,
    ConfigurationError,
    FetchFailure,
    NetworkError,
    PluginError,
    SearchError,
)
from anitorrent.ui.console import get_console


class ErrorHandler:
    """Handles error display with consistent formatting and helpful context."""

    def __init__(self):
        self.console = get_console()

    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Handle and display an error with appropriate formatting.

        Args:
            error: Exception to handle
            context: Additional context about where the error occurred
            show_traceback: Whether to show the full traceback
        """
        if isinstance(error, AniTorrentError):
            title, lines, suggestions = self._describe(error)
            details = error.details
        else:
            title = "💥 Unexpected Error"
            lines = [f"[dim]Type:[/dim] {type(error).__name__}"]
            suggestions = ["Run again with [cyan]--debug[/cyan] for detailed logs"]
            details = traceback.format_exc() if show_traceback else None

        content_parts = [f"[red]{escape(str(error))}[/red]"]
        content_parts.extend(f"\n{line}" for line in lines)

        if context:
            content_parts.append(f"\n[dim]Context:[/dim] {context}")

        if suggestions:
            content_parts.append("\n\n[blue]💡 Suggestions:[/blue]")
            for suggestion in suggestions:
                content_parts.append(f"• {suggestion}")

        if show_traceback and details:
            content_parts.append(f"\n\n[dim]Details:[/dim]\n{details}")

        self.console.print(Panel(
            "\n".join(content_parts),
            title=title,
            border_style="red",
            padding=(1, 2)
        ))

    def _describe(self, error: AniTorrentError) -> Tuple[str, List[str], List[str]]:
        if isinstance(error, ConfigurationError):
            lines = [f"[dim]Configuration file:[/dim] [cyan]{error.config_path}[/cyan]"] if error.config_path else []
            return "⚙️  Configuration Error", lines, [
                "Check configuration file syntax and format",
                "Reset to defaults with [cyan]anitorrent config reset[/cyan]",
            ]

        if isinstance(error, NetworkError):
            lines = []
            if error.url:
                lines.append(f"[dim]URL:[/dim] [blue]{error.url}[/blue]")
            if error.status_code:
                lines.append(f"[dim]Status Code:[/dim] {error.status_code}")

            suggestions = [
                "Check your internet connection",
                "Try again in a few moments",
            ]
            if isinstance(error, FetchFailure):
                if error.status_code in (403, 429):
                    suggestions.insert(0, "The source may be rate limiting or blocking requests")
                elif error.status_code >= 500:
                    suggestions.insert(0, "The source server is experiencing issues")
            return "🌐 Network Error", lines, suggestions

        if isinstance(error, PluginError):
            lines = [f"[dim]Plugin:[/dim] [cyan]{error.plugin_name}[/cyan]"] if error.plugin_name else []
            return "🔌 Plugin Error", lines, [
                "The source may have changed its response format",
                "Run again with [cyan]--debug[/cyan] to see the raw response",
            ]

        if isinstance(error, SearchError):
            lines = [f"[dim]Query:[/dim] {error.query}"] if error.query else []
            return "🔍 Search Error", lines, ["Try a different or broader query"]

        return "❌ Error", [], []

    def display_warning(self, message: str, title: str = "⚠️  Warning") -> None:
        """Display a warning panel."""
        self.console.print(Panel(message, title=title, border_style="yellow", padding=(1, 2)))

    def display_info(self, message: str, title: str = "ℹ️  Information") -> None:
        """Display an information panel."""
        self.console.print(Panel(message, title=title, border_style="blue", padding=(1, 2)))


_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """Handle an error using the global error handler."""
    get_error_handler().handle_error(error, context, show_traceback)


def display_warning(message: str, title: str = "⚠️  Warning") -> None:
    get_error_handler().display_warning(message, title)


def display_info(message: str, title: str = "ℹ️  Information") -> None:
    get_error_handler().display_info(message, title)


__all__ = [
    "ErrorHandler",
    "get_error_handler",
    "handle_error",
    "display_warning",
    "display_info",
]
