"""
Statistics Tests

Recording of broker traffic, summary figures, plots and the event log.
"""

import json
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import simpy

from analyzer.statistics import Statistics
from controller import Dispatcher
from simulator.core.direction import Direction
from simulator.core.elevator import Elevator
from simulator.infrastructure.message_broker import MessageBroker


def run_small_fleet(ticks=4):
    env = simpy.Environment()
    broker = MessageBroker(env)
    stats = Statistics(env, broker.get_broadcast_pipe())
    dispatcher = Dispatcher([Elevator(1, broker=broker), Elevator(2, starting_floor=4, broker=broker)],
                            broker=broker)

    def drive():
        dispatcher.submit_external_request(3, Direction.UP)
        for tick in range(ticks + 1):
            broker.put('simulation/tick', {
                'timestamp': env.now,
                'tick': tick,
                'statuses': [s.to_dict() for s in dispatcher.get_statuses()],
            })
            if tick < ticks:
                dispatcher.advance_all()
                yield env.timeout(1)

    env.process(stats.start_listening())
    env.process(drive())
    env.run()
    return stats


def test_trajectories_and_stops_are_recorded():
    stats = run_small_fleet()
    # Elevator 1 (floor 1): 200 - 50 = 150, Elevator 2 (floor 4): 100 - 50 = 50
    assert stats.elevator_trajectories['Elevator_2'] == [(0, 4), (1, 3), (2, 3), (3, 3), (4, 3)]
    assert stats.stop_history['Elevator_2'] == [(1, 3)]
    assert len(stats.assignment_history) == 1


def test_summary_figures():
    summary = run_small_fleet().summary()
    assert summary['Elevator_2'] == {
        'floors_travelled': 1,
        'stops_served': 1,
        'idle_ticks': 3,
        'hall_calls': 1,
        'car_calls': 0,
    }
    assert summary['Elevator_1']['floors_travelled'] == 0
    assert summary['Elevator_1']['idle_ticks'] == 4


def test_print_summary(capsys):
    run_small_fleet().print_summary()
    out = capsys.readouterr().out
    assert "ELEVATOR SUMMARY" in out
    assert "Elevator_2" in out


def test_plot_trajectories_writes_png(tmp_path):
    stats = run_small_fleet()
    output = tmp_path / "trajectories.png"
    stats.plot_trajectories(str(output))
    assert output.exists()
    assert output.stat().st_size > 0


def test_event_log_is_json_lines(tmp_path):
    stats = run_small_fleet()
    stats.set_simulation_metadata({'num_elevators': 2})
    output = tmp_path / "events.jsonl"
    stats.save_event_log(str(output))

    lines = output.read_text(encoding='utf-8').splitlines()
    records = [json.loads(line) for line in lines]
    assert records[0]['type'] == 'metadata'
    assert records[0]['data']['config'] == {'num_elevators': 2}
    types = {record['type'] for record in records[1:]}
    assert {'tick', 'stop', 'assignment', 'elevator_status'} <= types
