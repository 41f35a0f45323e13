import simpy

class MessageBroker:
    """
    Mediates communication between components within the simulation.
    Every published message lands on a single broadcast pipe, tagged with
    its topic; Statistics is the consumer of that pipe.
    """
    def __init__(self, env: simpy.Environment, verbose: bool = False):
        """
        Initialize the message broker

        Args:
            env (simpy.Environment): SimPy environment
            verbose (bool): Print every published message
        """
        self.env = env
        self.verbose = verbose
        self.broadcast_pipe = simpy.Store(self.env)

    def put(self, topic: str, message):
        """
        Publish (put) a message under the specified topic
        """
        if self.verbose:
            print(f"{self.env.now:.2f} [Broker] Publish on '{topic}': {message}")
        return self.broadcast_pipe.put({'topic': topic, 'message': message})

    def get_broadcast_pipe(self) -> simpy.Store:
        """
        Returns the global broadcast pipe (consumed by Statistics)
        """
        return self.broadcast_pipe

    def get_current_time(self) -> float:
        """
        Get current simulation time

        Elevators and the Dispatcher read the clock through the broker,
        so they never hold a reference to the SimPy environment.

        Returns:
            Current simulation time
        """
        return self.env.now
