# display/__init__.py

import sys

from .terminal import DisplayTerminal, HANDLED_SIGNALS
from .style import DisplayStyle, AUTO
from .window import WindowRenderer, visible_range

class Display:
    """
    Coordinates terminal display components in a hierarchical structure.

    Component Hierarchy:
    DisplayStyle → DisplayTerminal → WindowRenderer
    """
    def __init__(self, prompt: str = "> ", max_rows: int = 3,
                 primary: str = 'GREEN', secondary: str = 'GRAY',
                 stream=None, input_fd=None, color_system=AUTO, logger=None):
        """Initialize components in dependency order."""
        # colour detection has to look at the stream we actually draw on
        stream = stream if stream is not None else sys.stdout
        self.style = DisplayStyle(primary=primary, secondary=secondary,
                                  stream=stream, color_system=color_system)
        self.terminal = DisplayTerminal(style=self.style, stream=stream, input_fd=input_fd)
        self.window = WindowRenderer(self.terminal, prompt=prompt,
                                     max_rows=max_rows, logger=logger)

__all__ = ['Display', 'DisplayTerminal', 'DisplayStyle', 'HANDLED_SIGNALS',
           'WindowRenderer', 'visible_range']
