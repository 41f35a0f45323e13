import re
import json
from datetime import datetime

import numpy as np
import matplotlib.pyplot as plt


class Statistics:
    """
    Receives all broker communications and records what is needed
    as an independent "recorder".
    Collects all events in JSON Lines format for offline playback.
    """
    def __init__(self, env, broadcast_pipe):
        self.env = env
        self.broadcast_pipe = broadcast_pipe
        self.elevator_trajectories = {}  # {elevator_name: [(time, floor), ...]} one sample per tick
        self.direction_history = {}      # {elevator_name: [direction, ...]} aligned with trajectories
        self.stop_history = {}           # {elevator_name: [(time, floor), ...]}
        self.assignment_history = []     # dispatcher/assignment messages

        # JSON Lines event log for offline playback
        self.event_log = []
        self.simulation_metadata = {}

    def _add_event_log(self, event_type, event_data):
        """
        Add an event to the JSON Lines log.

        Args:
            event_type (str): Type of event (e.g., 'tick', 'stop', 'assignment')
            event_data (dict): Event-specific data
        """
        event = {
            "time": self.env.now,
            "type": event_type,
            "data": event_data
        }
        self.event_log.append(event)

    def set_simulation_metadata(self, metadata):
        """
        Set simulation metadata (called before simulation starts).

        Args:
            metadata (dict): Simulation configuration (floors, elevators, strategy, etc.)
        """
        self.simulation_metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }

    def start_listening(self):
        """
        Main process to start intercepting global broadcasts.
        """
        while True:
            data = yield self.broadcast_pipe.get()
            self.record(data.get('topic', ''), data.get('message', {}))

    def record(self, topic, message):
        """Record a single broadcast message"""
        if topic == 'simulation/tick':
            for status in message.get('statuses', []):
                name = status['name']
                self.elevator_trajectories.setdefault(name, []).append((message['timestamp'], status['floor']))
                self.direction_history.setdefault(name, []).append(status['direction'])
            self._add_event_log('tick', message)
            return

        if topic == 'dispatcher/assignment':
            self.assignment_history.append(message)
            self._add_event_log('assignment', message)
            return

        stop_match = re.search(r'elevator/(.*?)/stop', topic)
        if stop_match:
            elevator_name = stop_match.group(1)
            self.stop_history.setdefault(elevator_name, []).append((message.get('timestamp'), message.get('floor')))
            self._add_event_log('stop', dict(message, elevator=elevator_name))
            return

        status_match = re.search(r'elevator/(.*?)/status', topic)
        if status_match:
            self._add_event_log('elevator_status', dict(message, elevator=status_match.group(1)))

    def summary(self):
        """
        Per-elevator performance figures.

        Returns:
            dict: {elevator_name: {'floors_travelled', 'stops_served',
                   'idle_ticks', 'hall_calls', 'car_calls'}}
        """
        result = {}
        for name in sorted(set(self.elevator_trajectories) | set(self.stop_history)):
            floors = np.array([floor for _, floor in self.elevator_trajectories.get(name, [])])
            # The first sample is the initial position, not a tick
            directions = np.array(self.direction_history.get(name, [])[1:])
            travelled = int(np.abs(np.diff(floors)).sum()) if floors.size > 1 else 0

            assigned = [a for a in self.assignment_history if f"Elevator_{a['assigned_elevator']}" == name]
            result[name] = {
                'floors_travelled': travelled,
                'stops_served': len(self.stop_history.get(name, [])),
                'idle_ticks': int(np.sum(directions == 'NONE')) if directions.size else 0,
                'hall_calls': sum(1 for a in assigned if a['call_type'] == 'HALL'),
                'car_calls': sum(1 for a in assigned if a['call_type'] == 'CAR'),
            }
        return result

    def print_summary(self):
        """Print the per-elevator summary table"""
        summary = self.summary()
        print("\n" + "=" * 72)
        print("   ELEVATOR SUMMARY")
        print("=" * 72)
        print(f"{'Elevator':<14}{'Travelled':>11}{'Stops':>8}{'Idle ticks':>12}{'Hall calls':>12}{'Car calls':>11}")
        for name, figures in summary.items():
            print(f"{name:<14}{figures['floors_travelled']:>11}{figures['stops_served']:>8}"
                  f"{figures['idle_ticks']:>12}{figures['hall_calls']:>12}{figures['car_calls']:>11}")
        print("=" * 72)

    def plot_trajectories(self, output_filename='elevator_trajectories.png', show=False):
        """
        Draw the trajectory diagram (floor over time) with stop markers.

        Args:
            output_filename: PNG file to write
            show: Also open an interactive window
        """
        print("\n--- Plotting: Elevator Trajectory Diagram ---")
        fig = plt.figure(figsize=(12, 7))

        elevator_colors = ['#1f77b4', '#ff7f0e', '#2ca02c', '#d62728', '#9467bd', '#8c564b']
        for idx, name in enumerate(sorted(self.elevator_trajectories)):
            trajectory = self.elevator_trajectories[name]
            if not trajectory:
                continue
            times, floors = zip(*trajectory)
            color = elevator_colors[idx % len(elevator_colors)]
            plt.step(times, floors, where='post', label=name, linewidth=2.5, color=color, alpha=0.8)

            stops = self.stop_history.get(name, [])
            if stops:
                stop_times, stop_floors = zip(*stops)
                plt.scatter(stop_times, stop_floors, marker='o', s=80, color=color,
                            edgecolors='black', zorder=5)

        plt.title("Elevator Trajectory Diagram")
        plt.xlabel("Time (ticks)")
        plt.ylabel("Floor")
        plt.grid(True, which='both', linestyle='--', alpha=0.7)

        all_floors = [floor for trajectory in self.elevator_trajectories.values() for _, floor in trajectory]
        if all_floors:
            plt.yticks(range(int(min(all_floors)), int(max(all_floors)) + 1))

        if self.elevator_trajectories:
            plt.legend(loc='upper right', fontsize=10)

        plt.savefig(output_filename, dpi=150, bbox_inches='tight')
        print(f"Trajectory diagram saved to: {output_filename}")

        if show:
            plt.show()
        plt.close(fig)
        return output_filename

    def save_event_log(self, filename='simulation_log.jsonl'):
        """
        Save the event log to a JSON Lines file.

        Args:
            filename (str): Name of the output file (default: 'simulation_log.jsonl')
        """
        print(f"\nSaving event log to {filename}...")

        with open(filename, 'w', encoding='utf-8') as f:
            # Write metadata as first line
            if self.simulation_metadata:
                f.write(json.dumps({
                    "type": "metadata",
                    "data": self.simulation_metadata
                }) + '\n')

            for event in self.event_log:
                f.write(json.dumps(event, ensure_ascii=False) + '\n')

        print(f"Event log saved: {len(self.event_log)} events written to {filename}")
        return filename
