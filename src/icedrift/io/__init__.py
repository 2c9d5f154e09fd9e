"""Input/output handlers for icedrift."""

from .config_manager import ConfigManager
from .data_handler import DataHandler

__all__ = ["ConfigManager", "DataHandler"]
