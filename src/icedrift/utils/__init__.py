"""Utility modules for icedrift."""

from .logger import AnalysisLogger
from .timer import Timer

__all__ = ["AnalysisLogger", "Timer"]
