from dataclasses import dataclass, field
from typing import List, Optional

from .entity import Entity
from .direction import Direction
from ..infrastructure.message_broker import MessageBroker

# Default shaft bounds (inclusive)
MIN_FLOOR = 1
MAX_FLOOR = 10


@dataclass(frozen=True)
class ElevatorStatus:
    """Read-only snapshot of one elevator"""
    elevator_id: int
    name: str
    floor: int
    direction: Direction
    up_stops: List[int] = field(default_factory=list)    # ascending
    down_stops: List[int] = field(default_factory=list)  # descending

    @property
    def is_idle(self) -> bool:
        return self.direction == Direction.NONE and not self.up_stops and not self.down_stops

    def to_dict(self) -> dict:
        return {
            "elevator_id": self.elevator_id,
            "name": self.name,
            "floor": self.floor,
            "direction": self.direction.value,
            "up_stops": list(self.up_stops),
            "down_stops": list(self.down_stops),
        }

    def __str__(self):
        return (f"ID: {self.elevator_id} | Floor: {self.floor} | Dir: {self.direction.value} | "
                f"Up Stops: {self.up_stops} | Down Stops: {self.down_stops}")


class Elevator(Entity):
    """
    One elevator car driven by a sweep (continue-until-exhausted) state machine.

    The entity state is the current Direction. Pending stops are kept in two
    sets: floors at or above the car when requested go to up_stops, floors
    below go to down_stops. A stop is never reclassified after insertion.
    """

    def __init__(self, elevator_id: int, starting_floor: int = MIN_FLOOR,
                 min_floor: int = MIN_FLOOR, max_floor: int = MAX_FLOOR,
                 broker: Optional[MessageBroker] = None, name: str = None):
        if max_floor <= min_floor:
            raise ValueError(f"max_floor ({max_floor}) must be greater than min_floor ({min_floor})")
        if not (min_floor <= starting_floor <= max_floor):
            raise ValueError(f"starting_floor {starting_floor} for elevator {elevator_id} "
                             f"must be between {min_floor} and {max_floor}")

        super().__init__(name or f"Elevator_{elevator_id}", broker, initial_state=Direction.NONE)
        self.elevator_id = elevator_id
        self.min_floor = min_floor
        self.max_floor = max_floor
        self.current_floor = starting_floor

        self.up_stops = set()
        self.down_stops = set()

        self.status_topic = f"elevator/{self.name}/status"
        self.stop_topic = f"elevator/{self.name}/stop"

    @property
    def direction(self) -> Direction:
        return self.state

    def _on_state_changed(self, old_state, new_state):
        self.log(f"Direction: {old_state} -> {new_state}")

    def is_serviceable(self, floor: int) -> bool:
        return self.min_floor <= floor <= self.max_floor

    def add_stop_request(self, floor: int):
        """
        Register a floor this elevator must stop at.

        Floors outside the shaft are dropped without error. An idle car
        picks its direction right away.
        """
        if not self.is_serviceable(floor):
            self.log(f"Ignoring stop request for floor {floor} (outside {self.min_floor}-{self.max_floor})")
            return

        if floor >= self.current_floor:
            self.up_stops.add(floor)
        else:
            self.down_stops.add(floor)
        self.log(f"Stop request for floor {floor} registered")

        if self.direction == Direction.NONE:
            self._determine_new_direction()
        self._report_status()

    def step(self):
        """Advance one tick: serve a stop, or move at most one floor"""
        floor = self.current_floor
        if floor in self.up_stops or floor in self.down_stops:
            self.up_stops.discard(floor)
            self.down_stops.discard(floor)
            self.log(f"STOPPING at Floor {floor}")
            self.publish(self.stop_topic, {
                "timestamp": self.now(),
                "elevator_id": self.elevator_id,
                "floor": floor,
            })
            self._determine_new_direction()
            self._report_status()
            return

        if self.direction == Direction.UP:
            self.current_floor += 1
        elif self.direction == Direction.DOWN:
            self.current_floor -= 1

        # Hit the top or bottom of the shaft
        if self.current_floor > self.max_floor:
            self.current_floor = self.max_floor
            self._determine_new_direction()
        if self.current_floor < self.min_floor:
            self.current_floor = self.min_floor
            self._determine_new_direction()

        if self.direction == Direction.NONE:
            self._determine_new_direction()
        self._report_status()

    def _determine_new_direction(self):
        """
        Keep sweeping while work remains ahead, otherwise reverse, otherwise idle.
        """
        if self.direction == Direction.UP and self.up_stops and min(self.up_stops) >= self.current_floor:
            return
        if self.direction == Direction.DOWN and self.down_stops and max(self.down_stops) <= self.current_floor:
            return

        if self.up_stops:
            self.set_state(Direction.UP)
        elif self.down_stops:
            self.set_state(Direction.DOWN)
        else:
            self.set_state(Direction.NONE)

    def get_status(self) -> ElevatorStatus:
        return ElevatorStatus(
            elevator_id=self.elevator_id,
            name=self.name,
            floor=self.current_floor,
            direction=self.direction,
            up_stops=sorted(self.up_stops),
            down_stops=sorted(self.down_stops, reverse=True),
        )

    def has_pending_stops(self) -> bool:
        return bool(self.up_stops or self.down_stops)

    def _report_status(self):
        if self.broker is None:
            return
        status_message = self.get_status().to_dict()
        status_message["timestamp"] = self.now()
        self.publish(self.status_topic, status_message)
