"""
Elevator System Analyzer

Records broker traffic during a run and reports per-elevator figures.
"""

__version__ = "0.1.0"

from .statistics import Statistics

__all__ = ['Statistics']
