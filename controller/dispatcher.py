from typing import Dict, Iterable, List, Optional

from simulator.core.direction import Direction
from simulator.core.elevator import Elevator, ElevatorStatus, MIN_FLOOR, MAX_FLOOR
from simulator.infrastructure.message_broker import MessageBroker
from .interfaces.allocation_strategy import IAllocationStrategy
from .algorithms.directional_cost import DirectionalCostStrategy
from .algorithms.nearest_car import NearestCarStrategy
from .errors import ElevatorNotFoundError, EmptyFleetError

NEAREST_CAR_PARAMETERS = ("min_floor", "max_floor")


def create_allocation_strategy(name: str, parameters: dict = None,
                               min_floor: int = MIN_FLOOR, max_floor: int = MAX_FLOOR) -> IAllocationStrategy:
    """
    Build an allocation strategy from its configured name

    Raises:
        ValueError: If the name or one of its parameters is unknown
    """
    parameters = parameters or {}
    if name == "DirectionalCost":
        return DirectionalCostStrategy(parameters)
    if name == "NearestCar":
        unknown = set(parameters) - set(NEAREST_CAR_PARAMETERS)
        if unknown:
            raise ValueError(f"Unknown NearestCar parameters: {sorted(unknown)}")
        return NearestCarStrategy(
            min_floor=parameters.get('min_floor', min_floor),
            max_floor=parameters.get('max_floor', max_floor),
        )
    raise ValueError(f"Unknown allocation strategy: {name}")


class Dispatcher:
    """
    Dispatcher that owns the fleet and routes every request to one elevator

    This is a controller, not a simulated entity. Hall calls are assigned
    with a pluggable allocation strategy; cab calls go straight to the
    named elevator. Requests are never queued here.
    """
    def __init__(self, elevators: Iterable[Elevator],
                 strategy: IAllocationStrategy = None,
                 broker: Optional[MessageBroker] = None,
                 name: str = "Dispatcher"):
        self.name = name
        self.broker = broker
        self.strategy = strategy or DirectionalCostStrategy()

        # Insertion order is fleet order
        self.elevators: Dict[int, Elevator] = {}
        for elevator in elevators:
            if elevator.elevator_id in self.elevators:
                raise ValueError(f"Duplicate elevator id {elevator.elevator_id} in fleet")
            self.elevators[elevator.elevator_id] = elevator

        if not self.elevators:
            raise EmptyFleetError()

        self._log(f"Using strategy: {self.strategy.get_strategy_name()}")
        self._log(f"Fleet: {', '.join(e.name for e in self.elevators.values())}")

    def _now(self) -> float:
        return self.broker.get_current_time() if self.broker is not None else 0.0

    def _log(self, message: str):
        print(f"{self._now():.2f} [{self.name}] {message}")

    def submit_external_request(self, floor: int, direction) -> int:
        """
        Assign a hall call to the best elevator

        Args:
            floor: Floor the call was made from
            direction: Direction.UP or Direction.DOWN (or "UP"/"DOWN")

        Returns:
            elevator_id of the elevator that received the stop

        Raises:
            ValueError: If direction is not UP or DOWN
        """
        direction = Direction.parse(direction)
        if direction == Direction.NONE:
            raise ValueError("Hall call direction must be UP or DOWN")

        self._log(f"New Request: Floor {floor}, Direction {direction}")
        selected_id = self.strategy.select_elevator(floor, direction, self.get_statuses())
        self.elevators[selected_id].add_stop_request(floor)

        self._log(f"Assigned hall call to Elevator_{selected_id}: Floor {floor} {direction}")
        if self.broker is not None:
            self.broker.put('dispatcher/assignment', {
                "timestamp": self._now(),
                "call_type": "HALL",
                "floor": floor,
                "direction": direction.value,
                "assigned_elevator": selected_id,
            })
        return selected_id

    def submit_internal_request(self, elevator_id: int, destination_floor: int):
        """
        Add a cab call to the named elevator, bypassing scoring

        Raises:
            ElevatorNotFoundError: If elevator_id is not part of the fleet
        """
        elevator = self.get_elevator(elevator_id)
        self._log(f"Internal Request for Elevator {elevator_id} to Floor {destination_floor}")
        elevator.add_stop_request(destination_floor)

        if self.broker is not None:
            self.broker.put('dispatcher/assignment', {
                "timestamp": self._now(),
                "call_type": "CAR",
                "floor": destination_floor,
                "direction": None,
                "assigned_elevator": elevator_id,
            })

    def advance_all(self):
        """Step every elevator once, in fleet order"""
        for elevator in self.elevators.values():
            elevator.step()

    def get_statuses(self) -> List[ElevatorStatus]:
        return [elevator.get_status() for elevator in self.elevators.values()]

    def get_elevator(self, elevator_id: int) -> Elevator:
        try:
            return self.elevators[elevator_id]
        except KeyError:
            self._log(f"ERROR: Elevator {elevator_id} not found")
            raise ElevatorNotFoundError(elevator_id) from None

    def is_idle(self) -> bool:
        """True when every elevator is idle with no pending stops"""
        return all(status.is_idle for status in self.get_statuses())
