"""
Domain protocols for the roundabout monitoring module.
"""
from typing import List, Protocol
from .entities import Alert, District, HealthStatus, Roundabout, RoundaboutCarsSnapshot

class DataSource(Protocol):
    """
    Protocol for dashboard data sources.
    Every method raises SourceUnavailable instead of returning partial data.
    """
    def fetch_roundabouts(self) -> List[Roundabout]:
        ...

    def fetch_districts(self) -> List[District]:
        ...

    def fetch_alerts(self) -> List[Alert]:
        ...

    def fetch_roundabout(self, roundabout_id: str) -> Roundabout:
        ...

    def fetch_roundabout_cars(self, roundabout_id: str) -> RoundaboutCarsSnapshot:
        ...

    def health_check(self) -> HealthStatus:
        ...
