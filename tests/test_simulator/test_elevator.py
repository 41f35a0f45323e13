"""
Elevator State Machine Tests

Covers stop registration, direction determination, the per-tick
stop/move/clamp sequence and status snapshots.
"""

import random
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
import simpy

from config.simulation import BuildingConfig
from simulator.core.direction import Direction
from simulator.core.elevator import Elevator, ElevatorStatus, MIN_FLOOR, MAX_FLOOR
from simulator.infrastructure.message_broker import MessageBroker


def test_new_elevator_is_idle_with_no_stops():
    elevator = Elevator(1, starting_floor=3)
    assert elevator.current_floor == 3
    assert elevator.direction == Direction.NONE
    assert elevator.up_stops == set()
    assert elevator.down_stops == set()
    assert elevator.name == "Elevator_1"


def test_invalid_starting_floor_is_rejected():
    with pytest.raises(ValueError):
        Elevator(1, starting_floor=MAX_FLOOR + 1)
    with pytest.raises(ValueError):
        Elevator(1, min_floor=5, max_floor=4, starting_floor=5)


def test_single_floor_shaft_is_rejected_like_building_config():
    with pytest.raises(ValueError):
        Elevator(1, min_floor=5, max_floor=5, starting_floor=5)
    with pytest.raises(ValueError):
        BuildingConfig(min_floor=5, max_floor=5)
    # The smallest shaft both accept
    Elevator(1, min_floor=5, max_floor=6, starting_floor=5)
    BuildingConfig(min_floor=5, max_floor=6)


def test_status_is_idle_only_without_direction_or_stops():
    elevator = Elevator(1, starting_floor=3)
    assert elevator.get_status().is_idle
    elevator.add_stop_request(5)
    assert not elevator.get_status().is_idle
    for _ in range(3):
        elevator.step()
    assert elevator.current_floor == 5
    assert elevator.get_status().is_idle
    assert not ElevatorStatus(1, "Elevator_1", 3, Direction.NONE, up_stops=[4]).is_idle


def test_stop_at_or_above_current_floor_goes_to_up_stops():
    elevator = Elevator(1, starting_floor=4)
    elevator.add_stop_request(4)
    elevator.add_stop_request(9)
    assert elevator.up_stops == {4, 9}
    assert elevator.down_stops == set()


def test_stop_below_current_floor_goes_to_down_stops():
    elevator = Elevator(1, starting_floor=6)
    elevator.add_stop_request(2)
    assert elevator.down_stops == {2}
    assert elevator.direction == Direction.DOWN


def test_out_of_range_stop_is_silently_ignored():
    elevator = Elevator(1, starting_floor=1)
    elevator.add_stop_request(MAX_FLOOR + 1)
    elevator.add_stop_request(MIN_FLOOR - 1)
    assert not elevator.has_pending_stops()
    assert elevator.direction == Direction.NONE


def test_duplicate_stop_is_kept_once():
    elevator = Elevator(1, starting_floor=1)
    elevator.add_stop_request(5)
    elevator.add_stop_request(5)
    assert elevator.get_status().up_stops == [5]


def test_idle_elevator_picks_direction_from_new_stop():
    up = Elevator(1, starting_floor=5)
    up.add_stop_request(7)
    assert up.direction == Direction.UP

    down = Elevator(2, starting_floor=5)
    down.add_stop_request(3)
    assert down.direction == Direction.DOWN

    here = Elevator(3, starting_floor=5)
    here.add_stop_request(5)
    assert here.direction == Direction.UP


def test_classification_is_fixed_at_insertion():
    elevator = Elevator(1, starting_floor=1)
    elevator.add_stop_request(3)
    elevator.add_stop_request(6)
    for _ in range(2):
        elevator.step()
    assert elevator.current_floor == 3
    # Stop at 6 stays an up stop whatever happens next
    assert 6 in elevator.up_stops


def test_step_moves_one_floor_in_current_direction():
    elevator = Elevator(1, starting_floor=1)
    elevator.add_stop_request(4)
    elevator.step()
    assert elevator.current_floor == 2
    elevator.step()
    assert elevator.current_floor == 3


def test_stop_tick_serves_floor_without_moving():
    elevator = Elevator(1, starting_floor=1)
    elevator.add_stop_request(2)
    elevator.step()
    assert elevator.current_floor == 2
    elevator.step()
    assert elevator.current_floor == 2
    assert not elevator.has_pending_stops()
    assert elevator.direction == Direction.NONE


def test_stop_tick_removes_floor_from_both_sets():
    elevator = Elevator(1, starting_floor=5)
    elevator.add_stop_request(3)  # down stop, heads DOWN
    elevator.up_stops.add(3)      # same floor in the other set as well
    elevator.step()
    elevator.step()
    assert elevator.current_floor == 3
    elevator.step()
    assert 3 not in elevator.up_stops
    assert 3 not in elevator.down_stops


def test_sweep_continues_before_reversing():
    elevator = Elevator(1, starting_floor=5)
    elevator.add_stop_request(8)
    elevator.step()  # 6
    elevator.add_stop_request(2)  # below: down stop
    elevator.add_stop_request(9)  # above: up stop
    floors = []
    for _ in range(13):
        elevator.step()
        floors.append(elevator.current_floor)
    # Up to 8 (stop), 9 (stop), then down to 2
    assert floors[:5] == [7, 8, 8, 9, 9]
    assert floors[-1] == 2
    assert max(floors) == 9
    assert elevator.direction == Direction.NONE


def test_reverses_when_work_remains_only_behind():
    elevator = Elevator(1, starting_floor=5)
    elevator.add_stop_request(6)
    elevator.add_stop_request(3)
    assert elevator.direction == Direction.UP
    elevator.step()  # 6
    elevator.step()  # serve 6
    assert elevator.direction == Direction.DOWN


def test_boundary_clamp_recomputes_direction():
    elevator = Elevator(1, starting_floor=MAX_FLOOR)
    elevator.set_state(Direction.UP)
    elevator.step()
    assert elevator.current_floor == MAX_FLOOR
    assert elevator.direction == Direction.NONE

    elevator = Elevator(2, starting_floor=MIN_FLOOR)
    elevator.set_state(Direction.DOWN)
    elevator.step()
    assert elevator.current_floor == MIN_FLOOR
    assert elevator.direction == Direction.NONE


def test_idle_elevator_does_not_move():
    elevator = Elevator(1, starting_floor=4)
    for _ in range(3):
        elevator.step()
    assert elevator.current_floor == 4
    assert elevator.direction == Direction.NONE


def test_floor_stays_in_bounds_under_random_requests():
    rng = random.Random(7)
    elevator = Elevator(1, starting_floor=1)
    for _ in range(500):
        if rng.random() < 0.3:
            elevator.add_stop_request(rng.randint(MIN_FLOOR - 2, MAX_FLOOR + 2))
        elevator.step()
        assert MIN_FLOOR <= elevator.current_floor <= MAX_FLOOR


def test_sweep_is_never_abandoned_with_work_ahead():
    rng = random.Random(11)
    elevator = Elevator(1, starting_floor=1)
    for _ in range(500):
        if rng.random() < 0.3:
            elevator.add_stop_request(rng.randint(MIN_FLOOR, MAX_FLOOR))
        going_up_with_work = (elevator.direction == Direction.UP and
                              any(f > elevator.current_floor for f in elevator.up_stops))
        going_down_with_work = (elevator.direction == Direction.DOWN and
                                any(f < elevator.current_floor for f in elevator.down_stops))
        elevator.step()
        if going_up_with_work:
            assert elevator.direction == Direction.UP
        if going_down_with_work:
            assert elevator.direction == Direction.DOWN


def test_served_floor_is_absent_until_requested_again():
    elevator = Elevator(1, starting_floor=1)
    elevator.add_stop_request(3)
    for _ in range(3):
        elevator.step()
    assert 3 not in elevator.up_stops and 3 not in elevator.down_stops
    elevator.step()
    assert 3 not in elevator.up_stops and 3 not in elevator.down_stops
    elevator.add_stop_request(3)
    assert 3 in elevator.up_stops


def test_status_snapshot_orders_stops():
    elevator = Elevator(1, starting_floor=5)
    for floor in (9, 6, 2, 4, 7):
        elevator.add_stop_request(floor)
    status = elevator.get_status()
    assert isinstance(status, ElevatorStatus)
    assert status.up_stops == [6, 7, 9]
    assert status.down_stops == [4, 2]
    assert str(status) == "ID: 1 | Floor: 5 | Dir: UP | Up Stops: [6, 7, 9] | Down Stops: [4, 2]"


def test_status_snapshot_has_no_side_effects():
    elevator = Elevator(1, starting_floor=5)
    elevator.add_stop_request(8)
    status = elevator.get_status()
    status.up_stops.append(99)
    assert elevator.up_stops == {8}
    assert elevator.get_status() == elevator.get_status()


def published(broker, topic):
    return [item['message'] for item in broker.get_broadcast_pipe().items if item['topic'] == topic]


def test_elevator_publishes_status_and_stops():
    env = simpy.Environment()
    broker = MessageBroker(env)
    elevator = Elevator(1, starting_floor=1, broker=broker)
    elevator.add_stop_request(2)
    elevator.step()
    elevator.step()

    stops = published(broker, "elevator/Elevator_1/stop")
    assert [message["floor"] for message in stops] == [2]
    statuses = published(broker, "elevator/Elevator_1/status")
    assert statuses[-1]["floor"] == 2
    assert statuses[-1]["direction"] == "NONE"


def test_each_message_is_held_once_until_consumed():
    env = simpy.Environment()
    broker = MessageBroker(env)
    elevator = Elevator(1, starting_floor=1, broker=broker)
    elevator.add_stop_request(2)
    elevator.step()
    elevator.step()

    # One status per add_stop_request and per step, plus the stop
    pipe = broker.get_broadcast_pipe()
    assert len(pipe.items) == 4

    def drain():
        while pipe.items:
            yield pipe.get()

    env.process(drain())
    env.run()
    assert pipe.items == []


def test_direction_changes_are_logged(capsys):
    elevator = Elevator(1, starting_floor=1)
    elevator.add_stop_request(3)
    out = capsys.readouterr().out
    assert "[Elevator_1] Direction: NONE -> UP" in out
