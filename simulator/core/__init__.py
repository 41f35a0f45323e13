"""Core simulation entities"""

from .direction import Direction
from .entity import Entity
from .elevator import Elevator, ElevatorStatus, MIN_FLOOR, MAX_FLOOR

__all__ = [
    'Direction',
    'Entity',
    'Elevator',
    'ElevatorStatus',
    'MIN_FLOOR',
    'MAX_FLOOR',
]
