"""
Allocation Strategy Interface

Defines how elevators are selected for hall calls.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from simulator.core.direction import Direction
from simulator.core.elevator import ElevatorStatus


class IAllocationStrategy(ABC):
    """
    Interface for elevator allocation strategies

    A strategy assigns a cost to every elevator for a given hall call;
    the elevator with the lowest cost receives the call.

    Usage Examples:
    - DirectionalCost: distance plus direction bonuses and penalties
    - NearestCar: travel distance along the current sweep
    """

    @abstractmethod
    def score(self, status: ElevatorStatus, floor: int, direction: Direction) -> float:
        """
        Cost of sending this elevator to the hall call

        Args:
            status: Snapshot of the elevator being evaluated
            floor: Hall call floor
            direction: Hall call direction (UP or DOWN)

        Returns:
            Cost; lower is better
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """
        Get the name of this strategy

        Returns:
            str: Strategy name (for logging and debugging)
        """
        pass

    def select_elevator(self, floor: int, direction: Direction,
                        statuses: Sequence[ElevatorStatus]) -> int:
        """
        Select the elevator with the lowest score

        Elevators are evaluated in the given order. The first elevator sets
        the baseline and a later one only wins with a strictly lower score.

        Args:
            floor: Hall call floor
            direction: Hall call direction
            statuses: Elevator snapshots in fleet order

        Returns:
            elevator_id of the selected elevator
        """
        best_elevator = None
        best_score = None

        for status in statuses:
            score = self.score(status, floor, direction)
            print(f"[Dispatcher] {status.name}: Floor={status.floor}, Direction={status.direction}, Score={score}")
            if best_score is None or score < best_score:
                best_score = score
                best_elevator = status.elevator_id

        if best_elevator is None:
            raise ValueError("No elevator statuses to select from")

        print(f"[Dispatcher] Selected Elevator_{best_elevator} with score={best_score}")
        return best_elevator
