"""
Dispatcher error types
"""


class ElevatorNotFoundError(KeyError):
    """Raised when a cab call names an elevator id that is not in the fleet"""

    def __init__(self, elevator_id):
        super().__init__(elevator_id)
        self.elevator_id = elevator_id

    def __str__(self):
        return f"Elevator {self.elevator_id} not found in fleet"


class EmptyFleetError(ValueError):
    """Raised when a Dispatcher is constructed without any elevator"""

    def __init__(self, message: str = "Dispatcher requires at least one elevator"):
        super().__init__(message)
