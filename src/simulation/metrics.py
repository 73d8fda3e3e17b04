from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from .passenger import Passenger


@dataclass
class MetricsSnapshot:
    time_step: int
    average_wait: float
    wait_p95: float
    average_ride: float
    ride_p95: float
    average_journey: float
    journey_p95: float
    throughput: int


class MetricsTracker:
    def __init__(self) -> None:
        self.wait_times: List[int] = []
        self.ride_times: List[int] = []
        self.journey_times: List[int] = []
        self.throughput: int = 0

    def record_wait_time(self, passenger: Passenger) -> None:
        if passenger.wait_time is not None:
            self.wait_times.append(passenger.wait_time)

    def record_ride_time(self, passenger: Passenger) -> None:
        if passenger.ride_time is not None:
            self.ride_times.append(passenger.ride_time)
            self.throughput += 1
        if passenger.journey_time is not None:
            self.journey_times.append(passenger.journey_time)

    @staticmethod
    def _average(values: List[int]) -> float:
        return sum(values) / len(values) if values else 0.0

    @staticmethod
    def _percentile(values: List[int], fraction: float) -> float:
        """Linearly interpolated percentile; 0.0 before anyone has finished."""
        if not values:
            return 0.0
        ordered = sorted(values)
        rank = (len(ordered) - 1) * fraction
        low, high = math.floor(rank), math.ceil(rank)
        return ordered[low] + (ordered[high] - ordered[low]) * (rank - low)

    def snapshot(self, time_step: int) -> MetricsSnapshot:
        return MetricsSnapshot(
            time_step=time_step,
            average_wait=self._average(self.wait_times),
            wait_p95=self._percentile(self.wait_times, 0.95),
            average_ride=self._average(self.ride_times),
            ride_p95=self._percentile(self.ride_times, 0.95),
            average_journey=self._average(self.journey_times),
            journey_p95=self._percentile(self.journey_times, 0.95),
            throughput=self.throughput,
        )
