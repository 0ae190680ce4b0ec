# __init__.py

__version__ = "0.1.0"

from .logger import Logger
from .interface import Config, Interface

__all__ = ["Interface", "Config", "Logger", "__version__"]
