"""
Simulation runner

Builds the fleet, dispatcher and statistics recorder from configuration
and plays a scripted scenario back on a SimPy clock, one tick at a time.
"""

from collections import defaultdict
from typing import List, Optional

import simpy

from config.simulation import SimulationConfig
from config.dispatch import DispatchConfig
from controller.dispatcher import Dispatcher, create_allocation_strategy
from analyzer.statistics import Statistics
from .core.elevator import Elevator, ElevatorStatus
from .infrastructure.message_broker import MessageBroker
from .scenario import ScriptedCall, HALL, default_script, random_script


class SimulationRunner:
    """
    Owns one simulation run

    A single SimPy process drives the run: on every tick it submits the
    calls scheduled for that tick, advances every elevator once, publishes
    the fleet status, then waits tick_duration.
    """
    def __init__(self, sim_config: SimulationConfig = None, dispatch_config: DispatchConfig = None):
        self.sim_config = sim_config or SimulationConfig()
        self.dispatch_config = dispatch_config or DispatchConfig()
        self.sim_config.validate()
        self.dispatch_config.validate()

        building = self.sim_config.building
        fleet = self.sim_config.elevator

        self.env = simpy.Environment()
        self.broker = MessageBroker(self.env, verbose=self.sim_config.verbose_broker)
        self.statistics = Statistics(self.env, self.broker.get_broadcast_pipe())

        self.elevators = [
            Elevator(
                elevator_id,
                starting_floor=fleet.starting_floor_for(elevator_id),
                min_floor=building.min_floor,
                max_floor=building.max_floor,
                broker=self.broker,
            )
            for elevator_id in range(1, fleet.num_elevators + 1)
        ]

        alloc = self.dispatch_config.allocation_strategy
        strategy = create_allocation_strategy(alloc.name, alloc.parameters,
                                              min_floor=building.min_floor,
                                              max_floor=building.max_floor)
        self.dispatcher = Dispatcher(self.elevators, strategy, broker=self.broker)

        self.statistics.set_simulation_metadata({
            'min_floor': building.min_floor,
            'max_floor': building.max_floor,
            'num_elevators': fleet.num_elevators,
            'allocation_strategy': alloc.name,
            'num_ticks': self.sim_config.scenario.num_ticks,
            'random_seed': self.sim_config.random_seed,
        })
        self.ticks_run = 0

    def build_script(self) -> List[ScriptedCall]:
        """Scenario calls as selected by scenario.source"""
        scenario = self.sim_config.scenario
        if scenario.source == "custom":
            return [ScriptedCall.from_dict(call) for call in scenario.calls]
        if scenario.source == "random":
            return random_script(
                scenario.random_calls, scenario.num_ticks, self.sim_config.elevator.num_elevators,
                self.sim_config.building.min_floor, self.sim_config.building.max_floor,
                seed=self.sim_config.random_seed,
            )
        return default_script()

    def _submit(self, call: ScriptedCall):
        if call.kind == HALL:
            self.dispatcher.submit_external_request(call.floor, call.direction)
        else:
            self.dispatcher.submit_internal_request(call.elevator_id, call.floor)

    def _publish_tick(self, tick: int):
        self.broker.put('simulation/tick', {
            'timestamp': self.env.now,
            'tick': tick,
            'statuses': [status.to_dict() for status in self.dispatcher.get_statuses()],
        })

    def _drive(self, script: List[ScriptedCall], num_ticks: int):
        calls_by_tick = defaultdict(list)
        for call in script:
            calls_by_tick[call.tick].append(call)

        tick_duration = self.sim_config.scenario.tick_duration
        self._publish_tick(0)
        for tick in range(num_ticks):
            for call in calls_by_tick.get(tick, []):
                self._submit(call)
            print(f"{self.env.now:.2f} [Simulation] One Step Simulated (tick {tick + 1})")
            self.dispatcher.advance_all()
            self.ticks_run += 1
            yield self.env.timeout(tick_duration)
            self._publish_tick(tick + 1)

    def run(self, script: Optional[List[ScriptedCall]] = None, num_ticks: Optional[int] = None) -> List[ElevatorStatus]:
        """
        Play a scenario back and return the final statuses

        Args:
            script: Calls to submit (defaults to build_script())
            num_ticks: Number of ticks to run (defaults to scenario.num_ticks)

        Raises:
            ValueError: If a call is scheduled at or after num_ticks
        """
        script = self.build_script() if script is None else script
        num_ticks = self.sim_config.scenario.num_ticks if num_ticks is None else num_ticks

        late_calls = [call for call in script if call.tick >= num_ticks]
        if late_calls:
            raise ValueError(f"{len(late_calls)} call(s) scheduled at or after tick {num_ticks} "
                             f"would never be submitted (first: {late_calls[0]})")

        print("Initial State:")
        self.print_statuses()

        self.env.process(self.statistics.start_listening())
        self.env.process(self._drive(script, num_ticks))
        self.env.run()

        print("\nFinal State:")
        self.print_statuses()
        return self.dispatcher.get_statuses()

    def print_statuses(self):
        for status in self.dispatcher.get_statuses():
            print(status)
