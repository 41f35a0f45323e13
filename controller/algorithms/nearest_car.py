"""
Nearest Car Strategy

Travel-distance-based elevator allocation that follows the car's sweep.
"""

from simulator.core.direction import Direction
from simulator.core.elevator import ElevatorStatus, MIN_FLOOR, MAX_FLOOR
from ..interfaces.allocation_strategy import IAllocationStrategy


class NearestCarStrategy(IAllocationStrategy):
    """
    Nearest car allocation strategy

    Selection Logic:
    - Idle cars: simple distance
    - Moving cars: consider circular movement
      * UP: goes to the top floor, then reverses to DOWN
      * DOWN: goes to the bottom floor, then reverses to UP

    Usage:
        strategy = NearestCarStrategy(min_floor=1, max_floor=10)
        selected = strategy.select_elevator(floor, Direction.DOWN, statuses)
    """

    def __init__(self, min_floor: int = MIN_FLOOR, max_floor: int = MAX_FLOOR):
        """
        Initialize strategy

        Args:
            min_floor: Lowest floor of the shaft
            max_floor: Highest floor of the shaft
        """
        self.min_floor = min_floor
        self.max_floor = max_floor

    def score(self, status: ElevatorStatus, floor: int, direction: Direction) -> float:
        """
        Travel distance in floors considering circular movement
        """
        car_floor = status.floor

        if status.direction == Direction.NONE:
            return abs(floor - car_floor)

        if status.direction == Direction.UP:
            if direction == Direction.UP and floor > car_floor:
                # Same direction, call is AHEAD of elevator
                return floor - car_floor
            # Call is behind or opposite: current -> top -> call floor
            return (self.max_floor - car_floor) + (self.max_floor - floor)

        # DOWN
        if direction == Direction.DOWN and floor < car_floor:
            return car_floor - floor
        return (car_floor - self.min_floor) + (floor - self.min_floor)

    def get_strategy_name(self) -> str:
        """Return strategy name"""
        return "Nearest Car (Circular Distance-based)"
