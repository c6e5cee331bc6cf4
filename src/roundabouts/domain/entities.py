"""
Domain entities for the roundabout monitoring module.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Tuple

class TrendDirection(Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"

class CongestionLevel(Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"

class SeverityLevel(Enum):
    OPTIMAL = "optimal"
    ATTENTION = "attention"
    CONCERN = "concern"
    CRITICAL = "critical"

class AlertType(Enum):
    CONGESTION = "congestion"
    RISKY_BEHAVIOR = "risky_behavior"
    EQUIPMENT = "equipment"
    ACCIDENT = "accident"

@dataclass
class RiskyBehavior:
    """
    Risky-behavior counters observed at a roundabout.
    """
    wrong_way: int = 0
    illegal_u_turn: int = 0
    speeding: int = 0

    @property
    def total(self) -> int:
        return self.wrong_way + self.illegal_u_turn + self.speeding

@dataclass
class District:
    """
    Administrative grouping of roundabouts with aggregate metrics.
    """
    id: str
    name: str
    name_ar: str
    total_roundabouts: int
    active_alerts: int
    congestion_score: int  # 0-100, mean lane utilization of members
    severity: SeverityLevel
    latitude: float
    longitude: float

@dataclass
class Roundabout:
    """
    A monitored traffic node with entry/exit counters and derived metrics.
    """
    id: str
    name: str
    district_id: str
    vehicle_entry: int
    vehicle_exit: int
    entry_trend: TrendDirection
    exit_trend: TrendDirection
    lane_utilization: int
    congestion_level: CongestionLevel
    risky_behaviors: RiskyBehavior
    last_updated: datetime
    severity_score: int
    latitude: float
    longitude: float

@dataclass
class Alert:
    """
    Prioritized alert raised for a roundabout.
    """
    id: str
    roundabout_id: str
    roundabout_name: str
    district_id: str
    district_name: str
    severity: SeverityLevel
    type: AlertType
    message: str
    estimated_impact: str
    timestamp: datetime
    acknowledged: bool
    severity_score: int

@dataclass
class DispatchRequest:
    """
    Request to send a field team to the roundabout behind an alert.
    """
    alert_id: str
    roundabout_id: str
    district_id: str
    requested_at: datetime

@dataclass
class CarPosition:
    x: float
    y: float

@dataclass
class CarDetection:
    """
    A single vehicle seen by the live detector at a roundabout.
    """
    id: str
    type: str  # car, bus, truck, motorcycle
    confidence: float  # 0.0 - 1.0
    position: CarPosition
    in_first_zone: bool
    in_second_zone: bool
    is_penalty: bool
    timestamp: datetime

@dataclass
class CarsSummary:
    total_cars: int
    penalty_count: int
    first_zone_count: int
    second_zone_count: int
    car_types: Dict[str, int] = field(default_factory=dict)

@dataclass
class RoundaboutCarsSnapshot:
    """
    Live-detection snapshot for one roundabout.
    """
    roundabout_id: str
    timestamp: datetime
    summary: CarsSummary
    cars: List[CarDetection] = field(default_factory=list)

@dataclass
class HealthStatus:
    status: str
    timestamp: datetime

@dataclass(frozen=True)
class DashboardSnapshot:
    """
    Canonical state of the dashboard. Replaced wholesale, never edited in place.
    """
    districts: Tuple[District, ...]
    roundabouts: Tuple[Roundabout, ...]
    alerts: Tuple[Alert, ...]
    taken_at: datetime

class TimeRange(Enum):
    HOUR = "hour"
    FOUR_HOURS = "four_hours"
    DAY = "day"
    WEEK = "week"

    @property
    def points(self) -> int:
        """Number of samples in a history series for this range."""
        return {"hour": 12, "four_hours": 24, "day": 24, "week": 48}[self.value]

@dataclass
class HistoryPoint:
    """
    One sample of a roundabout's entry/exit/utilization history.
    """
    label: str
    entry: int
    exit: int
    utilization: int
