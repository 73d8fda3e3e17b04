from __future__ import annotations

from typing import Iterable, Optional

from .interface import ElevatorSnapshot, Score


def floor_distance(origin: int, destination: int) -> int:
    return abs(origin - destination)


def is_ahead(elevator: ElevatorSnapshot, floor: int) -> bool:
    """Return True if ``floor`` lies on the elevator's current sweep."""

    if elevator.direction > 0:
        return floor >= elevator.position
    if elevator.direction < 0:
        return floor <= elevator.position
    return True


def furthest_target(elevator: ElevatorSnapshot) -> int:
    """Floor where the elevator will turn around on its current sweep.

    Committed targets and on-board destinations both count. A car with
    nothing left ahead of it turns around where it is.
    """

    ahead = [floor for floor in elevator.pending_floors if is_ahead(elevator, floor)]
    if not ahead or elevator.direction == 0:
        return elevator.position
    return max(ahead) if elevator.direction > 0 else min(ahead)


def choose_lowest(scores: Iterable[Optional[Score]]) -> Optional[Score]:
    best: Optional[Score] = None
    for score in scores:
        if score is None:
            continue
        if best is None or score.total < best.total:
            best = score
    return best
