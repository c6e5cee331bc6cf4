"""
Simulated data source.

Replays the seed data with random noise so the dashboard can run without the
traffic API. Every fetch_roundabouts() call advances the simulation one tick.
"""
import math
import random
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional

from ....common.exceptions import SourceUnavailable
from ....common.logging import setup_logger
from ...domain.entities import (
    Alert,
    CarDetection,
    CarPosition,
    District,
    HealthStatus,
    HistoryPoint,
    Roundabout,
    RoundaboutCarsSnapshot,
    TimeRange,
)
from ...domain.metrics import derive_roundabout, summarize_cars
from ..seed import seed_alerts, seed_districts, seed_roundabouts

logger = setup_logger(__name__)

CAR_TYPES = ["car", "truck", "bus", "motorcycle"]
MAX_CARS_IN_VIEW = 15


class SimulatedDataSource:
    """
    DataSource backed by an in-memory copy of the seed data.

    Args:
        seed: Seed for the random generator, for reproducible runs
        clock: Callable returning the current time
    """

    def __init__(self, seed: Optional[int] = None, clock: Callable[[], datetime] = datetime.now):
        self._rng = random.Random(seed)
        self._clock = clock
        now = clock()
        self._districts: List[District] = seed_districts()
        self._roundabouts: List[Roundabout] = seed_roundabouts(now)
        self._alerts: List[Alert] = seed_alerts(now)
        self.ticks = 0

    def _delta(self, spread: int) -> int:
        # Uniform integer in [-spread/2, spread/2 - 1]
        return math.floor(self._rng.random() * spread - spread / 2)

    def advance(self) -> List[Roundabout]:
        """Applies one tick of noise to every roundabout."""
        now = self._clock()
        self._roundabouts = [
            derive_roundabout(
                r,
                entry_delta=self._delta(40),
                exit_delta=self._delta(40),
                utilization_delta=self._delta(6),
                now=now,
            )
            for r in self._roundabouts
        ]
        self.ticks += 1
        logger.debug(f"Simulation advanced to tick {self.ticks}")
        return list(self._roundabouts)

    def fetch_roundabouts(self) -> List[Roundabout]:
        return self.advance()

    def fetch_districts(self) -> List[District]:
        return [replace(d) for d in self._districts]

    def fetch_alerts(self) -> List[Alert]:
        return [replace(a) for a in self._alerts]

    def fetch_roundabout(self, roundabout_id: str) -> Roundabout:
        for r in self._roundabouts:
            if r.id == roundabout_id:
                return replace(r)
        raise SourceUnavailable(f"Roundabout {roundabout_id} not found")

    def fetch_roundabout_cars(self, roundabout_id: str) -> RoundaboutCarsSnapshot:
        now = self._clock()
        cars = []
        for _ in range(self._rng.randint(0, MAX_CARS_IN_VIEW)):
            in_first = self._rng.random() < 0.5
            in_second = self._rng.random() < 0.3
            cars.append(CarDetection(
                id=uuid.UUID(int=self._rng.getrandbits(128)).hex[:8],
                type=self._rng.choice(CAR_TYPES),
                confidence=round(self._rng.uniform(0.5, 0.99), 2),
                position=CarPosition(x=round(self._rng.random(), 3), y=round(self._rng.random(), 3)),
                in_first_zone=in_first,
                in_second_zone=in_second,
                # Crossing both zones means the car cut through the roundabout
                is_penalty=in_first and in_second,
                timestamp=now,
            ))
        return RoundaboutCarsSnapshot(
            roundabout_id=roundabout_id,
            timestamp=now,
            summary=summarize_cars(cars),
            cars=cars,
        )

    def health_check(self) -> HealthStatus:
        return HealthStatus(status="ok", timestamp=self._clock())

    def generate_history(self, roundabout: Roundabout, time_range: TimeRange) -> List[HistoryPoint]:
        return generate_history(roundabout, time_range, self._rng)


def generate_history(
    roundabout: Roundabout,
    time_range: TimeRange,
    rng: Optional[random.Random] = None
) -> List[HistoryPoint]:
    """
    Fabricates a chart series around the roundabout's current counters.
    Oldest sample first.
    """
    rng = rng or random.Random()
    points = time_range.points
    history = []
    for i in range(points - 1, -1, -1):
        variation = rng.random() * 0.3 - 0.15
        if time_range is TimeRange.WEEK:
            label = f"Day {points - i}"
        else:
            label = f"{(24 - i) % 24}:00"
        history.append(HistoryPoint(
            label=label,
            entry=math.floor(roundabout.vehicle_entry * (1 + variation)),
            exit=math.floor(roundabout.vehicle_entry * (1 + variation - 0.05)),
            utilization=math.floor(roundabout.lane_utilization * (1 + variation * 0.5)),
        ))
    return history
