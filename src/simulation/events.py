from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

DetailValue = Any


@dataclass(frozen=True)
class LogEntry:
    """One time-stamped line of the simulation trace."""

    time: int
    message: str
    elevator_id: Optional[int] = None
    passenger_id: Optional[int] = None
    floor: Optional[int] = None
    details: Optional[Dict[str, DetailValue]] = None
    level: int = logging.DEBUG

    def line(self) -> str:
        return f"[{self.time}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"time": self.time, "message": self.message}
        if self.elevator_id is not None:
            payload["elevator_id"] = self.elevator_id
        if self.passenger_id is not None:
            payload["passenger_id"] = self.passenger_id
        if self.floor is not None:
            payload["floor"] = self.floor
        if self.details:
            payload["details"] = dict(self.details)
        return payload


class EventLog:
    """Append-only trace shared by every phase of a run.

    Entries are mirrored to the ``simulation.events`` logger; deferrals and
    failures keep their higher level so they stand out in a console sink.
    """

    def __init__(self) -> None:
        self.entries: List[LogEntry] = []
        self._listeners: List[Callable[[LogEntry], None]] = []

    def record(
        self,
        time: int,
        message: str,
        *,
        elevator_id: Optional[int] = None,
        passenger_id: Optional[int] = None,
        floor: Optional[int] = None,
        details: Optional[Dict[str, DetailValue]] = None,
        level: int = logging.DEBUG,
    ) -> LogEntry:
        entry = LogEntry(
            time=time,
            message=message,
            elevator_id=elevator_id,
            passenger_id=passenger_id,
            floor=floor,
            details=details,
            level=level,
        )
        self.entries.append(entry)
        logger.log(level, entry.line())
        for listener in self._listeners:
            listener(entry)
        return entry

    def subscribe(self, listener: Callable[[LogEntry], None]) -> None:
        self._listeners.append(listener)

    @property
    def last(self) -> Optional[LogEntry]:
        return self.entries[-1] if self.entries else None

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
