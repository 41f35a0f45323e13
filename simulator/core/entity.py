from abc import ABC, abstractmethod
from typing import Optional

from ..infrastructure.message_broker import MessageBroker


class Entity(ABC):
    """
    Abstract base class for entities in the tick-driven simulation.

    An entity has a name and a current state. The state is advanced by
    calling step() once per simulated tick; entities never schedule
    themselves. When a MessageBroker is attached, log lines carry the
    broker's simulation time and the entity can publish messages.
    """

    def __init__(self, name: str, broker: Optional[MessageBroker] = None, initial_state=None):
        """
        Initialize the entity.

        Args:
            name: Entity name, used as the log tag and in topic names.
            broker: MessageBroker used for publishing and as the clock. Optional.
            initial_state: State value the entity starts in.
        """
        self.broker = broker
        self.name: str = name
        self.state = initial_state

    @abstractmethod
    def step(self):
        """
        Advance the entity by exactly one simulated tick (abstract method).

        Must be implemented in subclasses. Must complete synchronously.
        """
        pass

    # --- Common utility methods ---

    def now(self) -> float:
        """Current simulation time (0.0 when no broker is attached)"""
        if self.broker is None:
            return 0.0
        return self.broker.get_current_time()

    def log(self, message: str):
        """Print a trace line tagged with simulation time and entity name"""
        print(f"{self.now():.2f} [{self.name}] {message}")

    def publish(self, topic: str, message: dict):
        """Publish to the broker if one is attached"""
        if self.broker is not None:
            self.broker.put(topic, message)

    def set_state(self, new_state):
        """
        Transition the entity's state.

        Args:
            new_state: Target state for transition.
        """
        if self.state != new_state:
            old_state = self.state
            self.state = new_state
            self._on_state_changed(old_state, new_state)

    def _on_state_changed(self, old_state, new_state):
        """
        Hook called after a state transition. Subclasses may extend it.
        """
        self.log(f"State: {old_state} -> {new_state}")
