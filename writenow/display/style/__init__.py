# display/style/__init__.py

from typing import Optional
from .definitions import StyleDefinitions
from .engine import StyleEngine as BaseStyleEngine, AUTO

class DisplayStyle:
    """
    Style coordination layer used by the terminal adapter.

    Holds the two display colours: ``primary`` for the live prompt row and
    ``secondary`` for history rows.

    Component Hierarchy:
    DisplayStyle → BaseStyleEngine → StyleDefinitions
    """
    def __init__(self, primary: str = 'GREEN', secondary: str = 'GRAY',
                 stream=None, color_system: Optional[str] = AUTO):
        self.definitions = StyleDefinitions()
        for name in (primary, secondary):
            if not self.definitions.has_color(name):
                raise ValueError(f"unknown colour: {name}")
        self.primary = primary.upper()
        self.secondary = secondary.upper()
        self._engine = BaseStyleEngine(
            definitions=self.definitions,
            stream=stream,
            color_system=color_system
        )

    def __getattr__(self, name):
        """Delegate unknown attribute access to the style engine instance."""
        return getattr(self._engine, name)

__all__ = ['DisplayStyle', 'StyleDefinitions', 'AUTO']
