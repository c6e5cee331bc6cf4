"""
Static seed data for the dashboard.

Served while no live fetch has succeeded, and used as the starting state of
the simulated source. Timestamps are relative to the `now` passed in.
"""
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from ..domain.entities import (
    Alert,
    AlertType,
    CongestionLevel,
    DashboardSnapshot,
    District,
    RiskyBehavior,
    Roundabout,
    SeverityLevel,
    TrendDirection,
)

UP = TrendDirection.UP
DOWN = TrendDirection.DOWN
STABLE = TrendDirection.STABLE


def seed_districts() -> List[District]:
    return [
        District("north", "Northern District", "المنطقة الشمالية", 12, 3, 72, SeverityLevel.CONCERN, 24.8, 46.7),
        District("south", "Southern District", "المنطقة الجنوبية", 8, 1, 45, SeverityLevel.ATTENTION, 24.6, 46.7),
        District("east", "Eastern District", "المنطقة الشرقية", 11, 5, 88, SeverityLevel.CRITICAL, 24.7, 46.8),
        District("west", "Western District", "المنطقة الغربية", 9, 0, 28, SeverityLevel.OPTIMAL, 24.7, 46.6),
        District("central", "Central District", "المنطقة الوسطى", 5, 2, 65, SeverityLevel.CONCERN, 24.7, 46.7),
    ]


def seed_roundabouts(now: datetime) -> List[Roundabout]:
    def ago(seconds: int) -> datetime:
        return now - timedelta(seconds=seconds)

    return [
        # Northern district
        Roundabout("n-001", "King Fahd Rd & Olaya St", "north", 1245, 1189, UP, STABLE, 78,
                   CongestionLevel.HIGH, RiskyBehavior(3, 7, 12), ago(45), 75, 24.81, 46.7),
        Roundabout("n-002", "Northern Ring Rd & Exit 9", "north", 892, 905, DOWN, DOWN, 65,
                   CongestionLevel.MODERATE, RiskyBehavior(1, 3, 8), ago(32), 52, 24.82, 46.68),
        Roundabout("n-003", "Al Takhassusi & King Abdul Aziz", "north", 1567, 1523, UP, UP, 92,
                   CongestionLevel.CRITICAL, RiskyBehavior(5, 11, 18), ago(28), 95, 24.79, 46.69),
        # Eastern district
        Roundabout("e-001", "Khurais Rd & Airport Rd", "east", 2103, 1987, UP, STABLE, 95,
                   CongestionLevel.CRITICAL, RiskyBehavior(8, 15, 22), ago(51), 98, 24.71, 46.82),
        Roundabout("e-002", "Dammam Hwy & Industrial Area", "east", 1678, 1702, STABLE, UP, 87,
                   CongestionLevel.HIGH, RiskyBehavior(4, 9, 14), ago(39), 82, 24.69, 46.81),
        # Southern district
        Roundabout("s-001", "Makkah Rd & Southern Ring", "south", 734, 756, STABLE, STABLE, 54,
                   CongestionLevel.MODERATE, RiskyBehavior(2, 4, 6), ago(41), 48, 24.61, 46.71),
        Roundabout("s-002", "Wadi Hanifa & Al Hayer", "south", 456, 478, DOWN, DOWN, 42,
                   CongestionLevel.LOW, RiskyBehavior(0, 1, 3), ago(55), 25, 24.59, 46.69),
        # Western district
        Roundabout("w-001", "Madinah Rd & Exit 12", "west", 623, 601, STABLE, STABLE, 48,
                   CongestionLevel.LOW, RiskyBehavior(1, 2, 4), ago(35), 32, 24.71, 46.61),
        Roundabout("w-002", "King Khalid Rd & Industrial", "west", 512, 534, DOWN, STABLE, 39,
                   CongestionLevel.LOW, RiskyBehavior(0, 1, 2), ago(47), 22, 24.69, 46.62),
        # Central district
        Roundabout("c-001", "King Fahd & Olaya Intersection", "central", 1432, 1398, UP, STABLE, 73,
                   CongestionLevel.HIGH, RiskyBehavior(3, 8, 11), ago(29), 71, 24.71, 46.69),
        Roundabout("c-002", "Al Malaz & King Abdullah", "central", 987, 1012, STABLE, UP, 61,
                   CongestionLevel.MODERATE, RiskyBehavior(1, 4, 7), ago(38), 55, 24.69, 46.71),
    ]


def seed_alerts(now: datetime) -> List[Alert]:
    def ago(seconds: int) -> datetime:
        return now - timedelta(seconds=seconds)

    return [
        Alert("a-001", "e-001", "Khurais Rd & Airport Rd", "east", "Eastern District",
              SeverityLevel.CRITICAL, AlertType.CONGESTION,
              "Critical congestion detected - 95% lane utilization", "20-minute average delay",
              ago(120), False, 98),
        Alert("a-002", "n-003", "Al Takhassusi & King Abdul Aziz", "north", "Northern District",
              SeverityLevel.CRITICAL, AlertType.RISKY_BEHAVIOR,
              "High risky behavior count - 34 violations detected", "Accident risk elevated",
              ago(180), False, 95),
        Alert("a-003", "e-002", "Dammam Hwy & Industrial Area", "east", "Eastern District",
              SeverityLevel.CONCERN, AlertType.CONGESTION,
              "High congestion - 87% lane utilization", "12-minute average delay",
              ago(240), False, 82),
        Alert("a-004", "n-001", "King Fahd Rd & Olaya St", "north", "Northern District",
              SeverityLevel.CONCERN, AlertType.CONGESTION,
              "Increasing traffic volume with 22 violations", "8-minute average delay",
              ago(300), False, 75),
        Alert("a-005", "c-001", "King Fahd & Olaya Intersection", "central", "Central District",
              SeverityLevel.CONCERN, AlertType.RISKY_BEHAVIOR,
              "Multiple violations detected - 22 total incidents", "Monitor for escalation",
              ago(360), False, 71),
        Alert("a-006", "s-001", "Makkah Rd & Southern Ring", "south", "Southern District",
              SeverityLevel.ATTENTION, AlertType.CONGESTION,
              "Moderate congestion - monitor closely", "5-minute average delay",
              ago(420), True, 48),
    ]


def build_seed_snapshot(now: Optional[datetime] = None) -> DashboardSnapshot:
    now = now or datetime.now()
    return DashboardSnapshot(
        districts=tuple(seed_districts()),
        roundabouts=tuple(seed_roundabouts(now)),
        alerts=tuple(seed_alerts(now)),
        taken_at=now,
    )


# Weekly congestion heatmap: day -> time slot -> average utilization
WEEKLY_HEATMAP: List[Dict[str, object]] = [
    {"day": "Mon", "6-9": 78, "9-12": 65, "12-15": 58, "15-18": 82, "18-21": 71, "21-24": 45},
    {"day": "Tue", "6-9": 75, "9-12": 62, "12-15": 55, "15-18": 85, "18-21": 73, "21-24": 42},
    {"day": "Wed", "6-9": 80, "9-12": 68, "12-15": 60, "15-18": 88, "18-21": 75, "21-24": 48},
    {"day": "Thu", "6-9": 82, "9-12": 70, "12-15": 62, "15-18": 90, "18-21": 78, "21-24": 50},
    {"day": "Fri", "6-9": 70, "9-12": 55, "12-15": 48, "15-18": 65, "18-21": 82, "21-24": 75},
    {"day": "Sat", "6-9": 55, "9-12": 72, "12-15": 85, "15-18": 80, "18-21": 88, "21-24": 70},
    {"day": "Sun", "6-9": 52, "9-12": 68, "12-15": 78, "15-18": 75, "18-21": 85, "21-24": 65},
]

RECURRING_ISSUES: List[Dict[str, str]] = [
    {"issue": "High congestion during evening rush (15:00-18:00)", "frequency": "5 days/week", "severity": "High"},
    {"issue": "Illegal U-turns from eastern entry lane", "frequency": "12 times/day", "severity": "Moderate"},
    {"issue": "Lane utilization imbalance (outer > inner)", "frequency": "Continuous", "severity": "Moderate"},
]
