from enum import Enum


class Direction(Enum):
    """
    Travel direction of an elevator or a hall call.

    NONE means the elevator is idle and has no pending commitment.
    Hall calls are always UP or DOWN.
    """
    UP = "UP"
    DOWN = "DOWN"
    NONE = "NONE"

    @classmethod
    def parse(cls, value) -> 'Direction':
        """Accept a Direction or its string name ("UP", "down", ...)"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"Unknown direction: {value!r}. Must be one of UP, DOWN, NONE") from None

    def __str__(self):
        return self.value
