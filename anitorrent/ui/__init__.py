"""
UI Layer - Rich console, error panels and result tables.

This module contains the Rich components that give every CLI command a
consistent look.
"""

from anitorrent.ui.components import UIComponents
from anitorrent.ui.console import get_console, setup_console
from anitorrent.ui.error_handler import (
    ErrorHandler,
    display_info,
    display_warning,
    handle_error,
)

__all__ = [
    "UIComponents",
    "get_console",
    "setup_console",
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
]
