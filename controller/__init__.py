"""
Elevator Dispatch Controller

This package provides the dispatcher and the allocation strategies
used to assign hall calls to elevators.
"""

__version__ = "0.1.0"

from .dispatcher import Dispatcher, create_allocation_strategy
from .errors import ElevatorNotFoundError, EmptyFleetError

__all__ = ['Dispatcher', 'create_allocation_strategy', 'ElevatorNotFoundError', 'EmptyFleetError']
