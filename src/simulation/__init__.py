"""Elevator dispatch and motion simulation for LiftDispatch."""

from .calls import CallRegistry, FloorCall
from .config import ConfigurationError, SimulationConfig
from .elevator import Elevator
from .events import EventLog, LogEntry
from .generator import PassengerGenerator
from .metrics import MetricsSnapshot, MetricsTracker
from .passenger import Passenger
from .primitives import Direction, ElevatorStatus, PassengerStatus
from .simulation import Simulation, SimulationResult, run_simulation
from .state import SimulationState

__all__ = [
    "CallRegistry",
    "ConfigurationError",
    "Direction",
    "Elevator",
    "ElevatorStatus",
    "EventLog",
    "FloorCall",
    "LogEntry",
    "MetricsSnapshot",
    "MetricsTracker",
    "Passenger",
    "PassengerGenerator",
    "PassengerStatus",
    "Simulation",
    "SimulationConfig",
    "SimulationResult",
    "SimulationState",
    "run_simulation",
]
