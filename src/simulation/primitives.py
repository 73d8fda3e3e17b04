from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Travel direction of an elevator or the implied direction of a call."""

    UP = "up"
    DOWN = "down"
    IDLE = "idle"

    @classmethod
    def between(cls, origin: int, destination: int) -> "Direction":
        if destination > origin:
            return cls.UP
        if destination < origin:
            return cls.DOWN
        return cls.IDLE

    @property
    def step(self) -> int:
        """Return +1 for up, -1 for down, 0 for idle."""
        if self is Direction.UP:
            return 1
        if self is Direction.DOWN:
            return -1
        return 0


class ElevatorStatus(str, Enum):
    IDLE = "idle"
    MOVING_UP = "movingUp"
    MOVING_DOWN = "movingDown"
    # Transitional: marked to stop on the next tick, doors not yet open.
    STOPPED = "stopped"
    DOORS_OPEN = "doorsOpen"

    @classmethod
    def moving(cls, direction: Direction) -> "ElevatorStatus":
        if direction is Direction.UP:
            return cls.MOVING_UP
        if direction is Direction.DOWN:
            return cls.MOVING_DOWN
        return cls.IDLE


class PassengerStatus(str, Enum):
    WAITING = "waiting"
    IN_ELEVATOR = "inElevator"
    COMPLETED = "completed"
