# display/style/definitions.py

from typing import Dict, Optional

class StyleDefinitions:
    """
    Colour and format definitions shared by the style engine.
    Has no external dependencies.
    """

    # ANSI format utility
    FMT = staticmethod(lambda x: f'\033[{x}m')

    def __init__(
        self,
        formats: Optional[Dict[str, str]] = None,
        colors: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize style definitions with optional custom configurations.
        """
        self._default_formats = {
            'RESET': self.FMT('0'),
        }

        # display name -> rich colour name
        self._default_colors = {
            'GREEN': 'green3',
            'PINK': 'pink1',
            'BLUE': 'blue1',
            'GRAY': 'gray50',
            'YELLOW': 'yellow1',
            'WHITE': 'white'
        }

        self.formats = formats if formats is not None else self._default_formats.copy()
        self.colors = colors if colors is not None else self._default_colors.copy()

    def get_format(self, name: str) -> str:
        """Return format code by name, or an empty string if unknown."""
        return self.formats.get(name, '')

    def get_color(self, name: str) -> str:
        """Return the rich colour for a name (case-insensitive), or an empty string."""
        return self.colors.get(name.upper(), '') if name else ''

    def has_color(self, name: str) -> bool:
        return bool(self.get_color(name))
