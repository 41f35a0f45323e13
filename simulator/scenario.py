"""
Scripted request scenarios

A scenario is a list of calls, each tagged with the tick it is submitted
on. Calls for tick t are submitted before the fleet advances on tick t.
"""

import random
from dataclasses import dataclass
from typing import List, Optional

from .core.direction import Direction

HALL = "hall"
CAR = "car"


@dataclass(frozen=True)
class ScriptedCall:
    """One hall or car call scheduled on a tick"""
    tick: int
    kind: str  # 'hall' or 'car'
    floor: int
    direction: Optional[Direction] = None  # hall calls only
    elevator_id: Optional[int] = None      # car calls only

    def __post_init__(self):
        if self.kind not in (HALL, CAR):
            raise ValueError(f"Unknown call kind: {self.kind!r}")
        if self.kind == HALL and self.direction not in (Direction.UP, Direction.DOWN):
            raise ValueError("Hall calls need an UP or DOWN direction")
        if self.kind == CAR and self.elevator_id is None:
            raise ValueError("Car calls need an elevator_id")

    @classmethod
    def hall(cls, tick: int, floor: int, direction) -> 'ScriptedCall':
        return cls(tick=tick, kind=HALL, floor=floor, direction=Direction.parse(direction))

    @classmethod
    def car(cls, tick: int, elevator_id: int, floor: int) -> 'ScriptedCall':
        return cls(tick=tick, kind=CAR, floor=floor, elevator_id=elevator_id)

    @classmethod
    def from_dict(cls, data: dict) -> 'ScriptedCall':
        """Build a call from its config form, e.g. {'tick': 0, 'type': 'hall', 'floor': 5, 'direction': 'UP'}"""
        tick = data.get('tick', 0)
        if data['type'] == HALL:
            return cls.hall(tick, data['floor'], data['direction'])
        return cls.car(tick, data['elevator'], data['floor'])

    def to_dict(self) -> dict:
        if self.kind == HALL:
            return {'tick': self.tick, 'type': HALL, 'floor': self.floor, 'direction': self.direction.value}
        return {'tick': self.tick, 'type': CAR, 'elevator': self.elevator_id, 'floor': self.floor}


def default_script() -> List[ScriptedCall]:
    """
    Classic two-car demonstration run (nine ticks)
    """
    return [
        ScriptedCall.hall(0, 5, Direction.UP),
        ScriptedCall.hall(0, 2, Direction.UP),
        ScriptedCall.hall(1, 10, Direction.DOWN),
        ScriptedCall.car(3, 1, 8),
        ScriptedCall.car(6, 2, 1),
    ]


def random_script(num_calls: int, num_ticks: int, num_elevators: int,
                  min_floor: int, max_floor: int, seed: Optional[int] = None) -> List[ScriptedCall]:
    """
    Generate random hall and car calls spread over the run

    Roughly two thirds of the calls are hall calls. The top floor only
    calls DOWN and the bottom floor only calls UP. The same seed always
    yields the same script.
    """
    if num_ticks <= 0:
        return []

    rng = random.Random(seed)
    last_tick = num_ticks - 1
    calls = []

    for _ in range(num_calls):
        tick = rng.randint(0, last_tick)
        floor = rng.randint(min_floor, max_floor)
        if rng.random() < 2 / 3:
            if floor == max_floor:
                direction = Direction.DOWN
            elif floor == min_floor:
                direction = Direction.UP
            else:
                direction = rng.choice([Direction.UP, Direction.DOWN])
            calls.append(ScriptedCall.hall(tick, floor, direction))
        else:
            calls.append(ScriptedCall.car(tick, rng.randint(1, num_elevators), floor))

    # Stable sort keeps generation order within a tick
    calls.sort(key=lambda call: call.tick)
    return calls
