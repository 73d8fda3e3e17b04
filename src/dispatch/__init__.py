from __future__ import annotations

from typing import Dict, Type

from .basic import BasicDispatcher
from .cost import CostDispatcher
from .interface import Dispatcher, ElevatorSnapshot, PendingRequest, Score

__all__ = [
    "BasicDispatcher",
    "CostDispatcher",
    "Dispatcher",
    "ElevatorSnapshot",
    "PendingRequest",
    "Score",
    "available_dispatchers",
    "get_dispatcher",
]


DISPATCHER_REGISTRY: Dict[str, Type[Dispatcher]] = {
    "cost": CostDispatcher,
    "basic": BasicDispatcher,
}


def available_dispatchers() -> list:
    return list(DISPATCHER_REGISTRY)


def get_dispatcher(name: str, **kwargs) -> Dispatcher:
    cls = DISPATCHER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown dispatcher '{name}'. Available: {', '.join(DISPATCHER_REGISTRY)}")
    return cls(**kwargs)
