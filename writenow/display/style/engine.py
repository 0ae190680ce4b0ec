# style/engine.py

import os
import sys
from typing import Dict, Optional
from rich.console import Console, COLOR_SYSTEMS
from rich.color import ColorSystem
from rich.style import Style
from .definitions import StyleDefinitions

AUTO = "auto"

class StyleEngine:
    """
    Turns plain text into coloured terminal output.

    Rendering goes through rich so the colour depth follows whatever the
    attached terminal supports. When no colour system can be determined the
    engine emits text untouched.
    """
    def __init__(self, definitions: StyleDefinitions, stream=None,
                 color_system: Optional[str] = AUTO):
        self.definitions = definitions
        self.color_system = self._resolve_color_system(stream, color_system)
        self.rich_style: Dict[str, Style] = {
            name: Style(color=rich_color)
            for name, rich_color in self.definitions.colors.items()
        }

    @staticmethod
    def _resolve_color_system(stream, color_system: Optional[str]) -> Optional[ColorSystem]:
        if color_system is None:
            return None
        if color_system != AUTO:
            return COLOR_SYSTEMS.get(color_system)
        if os.environ.get("NO_COLOR"):
            return None
        try:
            detected = Console(file=stream if stream is not None else sys.stdout).color_system
        except Exception:
            # capability query failed, fall back to plain text
            return None
        return COLOR_SYSTEMS.get(detected) if detected else None

    def get_format(self, name: str) -> str:
        """Return format code by name, empty when colour is disabled."""
        if self.color_system is None:
            return ''
        return self.definitions.get_format(name)

    def get_rich_style(self, name: Optional[str]) -> Style:
        """Return Rich style by name."""
        if not name:
            return Style()
        return self.rich_style.get(name.upper(), Style())

    def format(self, text: str, color: Optional[str] = None) -> str:
        """Return text wrapped in the escape codes for the named colour."""
        if not text or self.color_system is None or not color:
            return text
        return self.get_rich_style(color).render(text, color_system=self.color_system)
