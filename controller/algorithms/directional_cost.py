"""
Directional Cost Strategy

Distance-dominated scoring with direction-aware bonuses and penalties.
"""

from typing import Any, Dict

from simulator.core.direction import Direction
from simulator.core.elevator import ElevatorStatus
from ..interfaces.allocation_strategy import IAllocationStrategy


class DirectionalCostStrategy(IAllocationStrategy):
    """
    Directional cost allocation strategy

    Score Logic:
    - Base: distance_weight per floor between car and call
    - Idle car: idle_bonus subtracted (it can commit to any direction)
    - Same direction, call ahead: ahead_bonus subtracted (picked up en route)
    - Same direction, call behind: behind_penalty added (finish sweep, reverse, return)
    - Opposite direction: opposite_penalty added (full reversal needed)

    Greedy and memoryless: every call is scored from scratch.

    Usage:
        strategy = DirectionalCostStrategy()
        selected = strategy.select_elevator(floor, Direction.UP, statuses)
    """

    DEFAULT_PARAMETERS = {
        'distance_weight': 100,
        'idle_bonus': 50,
        'ahead_bonus': 10,
        'behind_penalty': 500,
        'opposite_penalty': 1000,
    }

    def __init__(self, parameters: Dict[str, Any] = None):
        """
        Initialize strategy

        Args:
            parameters: Overrides for any of DEFAULT_PARAMETERS
        """
        params = dict(self.DEFAULT_PARAMETERS)
        if parameters:
            unknown = set(parameters) - set(self.DEFAULT_PARAMETERS)
            if unknown:
                raise ValueError(f"Unknown DirectionalCost parameters: {sorted(unknown)}")
            params.update(parameters)

        self.distance_weight = params['distance_weight']
        self.idle_bonus = params['idle_bonus']
        self.ahead_bonus = params['ahead_bonus']
        self.behind_penalty = params['behind_penalty']
        self.opposite_penalty = params['opposite_penalty']

    def score(self, status: ElevatorStatus, floor: int, direction: Direction) -> float:
        score = self.distance_weight * abs(status.floor - floor)

        if status.direction == Direction.NONE:
            score -= self.idle_bonus
        elif status.direction == direction:
            ahead = ((direction == Direction.UP and floor > status.floor) or
                     (direction == Direction.DOWN and floor < status.floor))
            if ahead:
                score -= self.ahead_bonus
            else:
                score += self.behind_penalty
        else:
            score += self.opposite_penalty

        return score

    def get_strategy_name(self) -> str:
        """Return strategy name"""
        return "Directional Cost (Distance + Direction Penalties)"
