"""
Elevator Simulator - Core simulation engine

This package provides the elevator state machine and the tick-driven
simulation infrastructure.
"""

__version__ = "0.1.0"

from .core.direction import Direction
from .core.elevator import Elevator, ElevatorStatus
from .core.entity import Entity

from .infrastructure.message_broker import MessageBroker

__all__ = [
    'Direction',
    'Elevator',
    'ElevatorStatus',
    'Entity',
    'MessageBroker',
]
