import sys

# Configuration
from config import SimulationConfig, DispatchConfig, load_dispatch_config, load_simulation_config

# Simulator
from simulator.runner import SimulationRunner


def run_simulation(sim_config_path=None, dispatch_config_path=None,
                   plot_filename=None, event_log_filename=None):
    """
    Set up and run the entire simulation

    Args:
        sim_config_path: Path to simulation configuration YAML file (built-in defaults if None)
        dispatch_config_path: Path to dispatch configuration YAML file (built-in defaults if None)
        plot_filename: Write a trajectory diagram to this PNG file
        event_log_filename: Write the JSON Lines event log to this file
    """
    print("--- Loading Configuration ---")

    sim_config = load_simulation_config(sim_config_path) if sim_config_path else SimulationConfig()
    dispatch_config = load_dispatch_config(dispatch_config_path) if dispatch_config_path else DispatchConfig()

    print(f"Simulation Config: {sim_config_path or '(defaults)'}")
    print(f"Dispatch Config: {dispatch_config_path or '(defaults)'}")

    print("\n--- Simulation Setup ---")
    runner = SimulationRunner(sim_config, dispatch_config)

    print("\n--- Simulation Start ---")
    final_statuses = runner.run()

    runner.statistics.print_summary()
    if plot_filename:
        runner.statistics.plot_trajectories(plot_filename)
    if event_log_filename:
        runner.statistics.save_event_log(event_log_filename)

    return final_statuses


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    sim_config_path = argv[0] if len(argv) > 0 else None
    dispatch_config_path = argv[1] if len(argv) > 1 else None
    plot_filename = argv[2] if len(argv) > 2 else None
    event_log_filename = argv[3] if len(argv) > 3 else None
    run_simulation(sim_config_path, dispatch_config_path, plot_filename, event_log_filename)


if __name__ == '__main__':
    # Usage: python main.py [simulation.yaml] [dispatch.yaml] [trajectory.png] [events.jsonl]
    main()
