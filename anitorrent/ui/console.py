"""
Shared Rich console for every CLI command.

Output goes to stdout; the console is created on first use so tests and
redirected runs pick up the stream in effect at that point.
"""

from typing import Optional

from rich.console import Console


_console: Optional[Console] = None


def setup_console(force_terminal: Optional[bool] = None, width: Optional[int] = None) -> Console:
    """(Re)create the shared console, e.g. to pin the width for scripted output."""
    global _console

    _console = Console(
        stderr=False,
        force_terminal=force_terminal,
        width=width,
        legacy_windows=False,
    )
    return _console


def get_console() -> Console:
    """Shared console, created with defaults on first call."""
    return _console if _console is not None else setup_console()


__all__ = ["setup_console", "get_console"]
