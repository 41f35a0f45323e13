"""
Simulation Configuration

Building bounds, fleet layout and the request scenario to play back.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

SCENARIO_SOURCES = ("default", "custom", "random")
CALL_TYPES = ("hall", "car")


@dataclass
class BuildingConfig:
    """Building specifications"""
    min_floor: int = 1
    max_floor: int = 10

    def __post_init__(self):
        if self.max_floor <= self.min_floor:
            raise ValueError("max_floor must be greater than min_floor")

    @property
    def num_floors(self) -> int:
        return self.max_floor - self.min_floor + 1


@dataclass
class ElevatorConfig:
    """Fleet specifications"""
    num_elevators: int = 2
    starting_floor: int = 1
    starting_floors: Optional[List[int]] = None  # Per-elevator starting floor

    def __post_init__(self):
        if self.num_elevators < 1:
            raise ValueError("num_elevators must be at least 1")

        if self.starting_floors is not None:
            if len(self.starting_floors) != self.num_elevators:
                raise ValueError(f"starting_floors list length ({len(self.starting_floors)}) must match num_elevators ({self.num_elevators})")

    def starting_floor_for(self, elevator_id: int) -> int:
        """Starting floor of the 1-based elevator id"""
        if self.starting_floors is not None:
            return self.starting_floors[elevator_id - 1]
        return self.starting_floor


@dataclass
class ScenarioConfig:
    """Request scenario played back tick by tick"""
    source: str = "default"  # default, custom, random
    num_ticks: int = 9
    tick_duration: float = 1.0  # simulated time units per tick
    calls: List[Dict[str, Any]] = field(default_factory=list)
    random_calls: int = 20  # number of generated calls when source is random

    def __post_init__(self):
        if self.source not in SCENARIO_SOURCES:
            raise ValueError(f"scenario.source must be one of {', '.join(SCENARIO_SOURCES)}")
        if self.num_ticks < 0:
            raise ValueError("num_ticks cannot be negative")
        if self.tick_duration <= 0:
            raise ValueError("tick_duration must be positive")
        if self.random_calls < 0:
            raise ValueError("random_calls cannot be negative")
        if self.source == "custom" and not self.calls:
            raise ValueError("scenario.calls is required when source is custom")

        for call in self.calls:
            call_type = call.get('type')
            if call_type not in CALL_TYPES:
                raise ValueError(f"call type must be 'hall' or 'car', got {call_type!r}")
            if 'floor' not in call:
                raise ValueError(f"call is missing 'floor': {call}")
            if call.get('tick', 0) < 0:
                raise ValueError(f"call tick cannot be negative: {call}")
            if call.get('tick', 0) >= self.num_ticks:
                raise ValueError(f"call tick must be below num_ticks ({self.num_ticks}): {call}")
            if call_type == "hall" and str(call.get('direction', '')).upper() not in ("UP", "DOWN"):
                raise ValueError(f"hall call direction must be 'UP' or 'DOWN': {call}")
            if call_type == "car" and 'elevator' not in call:
                raise ValueError(f"car call is missing 'elevator': {call}")


@dataclass
class SimulationConfig:
    """
    Complete simulation configuration

    Combines building, fleet and scenario settings.
    """
    building: BuildingConfig = field(default_factory=BuildingConfig)
    elevator: ElevatorConfig = field(default_factory=ElevatorConfig)
    scenario: ScenarioConfig = field(default_factory=ScenarioConfig)

    random_seed: Optional[int] = None
    verbose_broker: bool = False  # print every broker message

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = (data or {}).get('simulation', data) or {}

        building_data = sim_data.get('building') or {}
        building = BuildingConfig(
            min_floor=building_data.get('min_floor', 1),
            max_floor=building_data.get('max_floor', 10)
        )

        elevator_data = sim_data.get('elevator') or {}
        elevator = ElevatorConfig(
            num_elevators=elevator_data.get('num_elevators', 2),
            starting_floor=elevator_data.get('starting_floor', 1),
            starting_floors=elevator_data.get('starting_floors')
        )

        scenario_data = sim_data.get('scenario') or {}
        scenario = ScenarioConfig(
            source=scenario_data.get('source', 'default'),
            num_ticks=scenario_data.get('num_ticks', 9),
            tick_duration=scenario_data.get('tick_duration', 1.0),
            calls=scenario_data.get('calls', []) or [],
            random_calls=scenario_data.get('random_calls', 20)
        )

        return cls(
            building=building,
            elevator=elevator,
            scenario=scenario,
            random_seed=sim_data.get('random_seed'),
            verbose_broker=sim_data.get('verbose_broker', False)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result = {
            'simulation': {
                'building': {
                    'min_floor': self.building.min_floor,
                    'max_floor': self.building.max_floor
                },
                'elevator': {
                    'num_elevators': self.elevator.num_elevators,
                    'starting_floor': self.elevator.starting_floor
                },
                'scenario': {
                    'source': self.scenario.source,
                    'num_ticks': self.scenario.num_ticks,
                    'tick_duration': self.scenario.tick_duration,
                    'calls': [dict(call) for call in self.scenario.calls],
                    'random_calls': self.scenario.random_calls
                },
                'verbose_broker': self.verbose_broker
            }
        }

        if self.elevator.starting_floors is not None:
            result['simulation']['elevator']['starting_floors'] = list(self.elevator.starting_floors)
        if self.random_seed is not None:
            result['simulation']['random_seed'] = self.random_seed

        return result

    def validate(self):
        """Validate configuration consistency"""
        floors = [self.elevator.starting_floor_for(i) for i in range(1, self.elevator.num_elevators + 1)]
        for elevator_id, floor in enumerate(floors, start=1):
            if not (self.building.min_floor <= floor <= self.building.max_floor):
                raise ValueError(f"starting floor {floor} of elevator {elevator_id} is outside "
                                 f"building floors {self.building.min_floor}-{self.building.max_floor}")

        # Car calls must name a fleet member
        for call in self.scenario.calls:
            if call['type'] == 'car' and not (1 <= call['elevator'] <= self.elevator.num_elevators):
                raise ValueError(f"car call names elevator {call['elevator']}, fleet has {self.elevator.num_elevators}")
