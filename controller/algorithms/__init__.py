"""Allocation strategy implementations"""

from .directional_cost import DirectionalCostStrategy
from .nearest_car import NearestCarStrategy

__all__ = ['DirectionalCostStrategy', 'NearestCarStrategy']
