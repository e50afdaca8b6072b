"""Themed console with semantic color methods."""

import os
from typing import Dict
from rich.console import Console as RichConsole

THEMES: Dict[str, Dict[str, str]] = {
    "dark": {"success": "green", "error": "red", "warning": "yellow", "info": "cyan", "dim": "dim"},
    "light": {"success": "green", "error": "red", "warning": "dark_orange", "info": "blue", "dim": "dim"},
    "plain": {"success": "none", "error": "none", "warning": "none", "info": "none", "dim": "none"},
}


class ThemedConsole(RichConsole):
    """Console with theme support and semantic color methods.

    The theme is taken from ``ODS_PACKAGE_IMAGE_THEME`` and falls back to
    "dark", which reads well in most CI log viewers.
    """

    def __init__(self, theme_name: str = "", **kwargs):
        super().__init__(**kwargs)
        self.current_theme_name = theme_name or os.environ.get("ODS_PACKAGE_IMAGE_THEME", "dark")
        self.theme = THEMES.get(self.current_theme_name, THEMES["dark"])

    def _colorized_print(self, text: str, style_key: str) -> None:
        """Print text with color from current theme."""
        self.print(self.get_styled(text, style_key))

    # Semantic color methods
    def success(self, text: str) -> None:
        """Print success message."""
        self._colorized_print(text, 'success')

    def error(self, text: str) -> None:
        """Print error message."""
        self._colorized_print(text, 'error')

    def warning(self, text: str) -> None:
        """Print warning message."""
        self._colorized_print(text, 'warning')

    def info(self, text: str) -> None:
        """Print info message."""
        self._colorized_print(text, 'info')

    def dim(self, text: str) -> None:
        """Print dimmed text."""
        self._colorized_print(text, 'dim')

    def get_styled(self, text: str, style_key: str) -> str:
        """Get styled text without printing."""
        color = self.theme.get(style_key, self.theme.get('dim', 'dim'))
        return f"[{color}]{text}[/{color}]"
