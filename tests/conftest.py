import pytest
from datetime import datetime
from src.roundabouts.domain.entities import (
    Alert, AlertType, CongestionLevel, District, RiskyBehavior, Roundabout,
    SeverityLevel, TrendDirection
)
from src.roundabouts.infrastructure.seed import build_seed_snapshot

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0)

@pytest.fixture
def now():
    return FIXED_NOW

@pytest.fixture
def seed_snapshot():
    return build_seed_snapshot(FIXED_NOW)

@pytest.fixture
def make_roundabout():
    def _make(id="r-1", district_id="north", utilization=60, risky=None, entry=1000, exit=1000):
        return Roundabout(
            id=id,
            name=f"Roundabout {id}",
            district_id=district_id,
            vehicle_entry=entry,
            vehicle_exit=exit,
            entry_trend=TrendDirection.STABLE,
            exit_trend=TrendDirection.STABLE,
            lane_utilization=utilization,
            congestion_level=CongestionLevel.MODERATE,
            risky_behaviors=risky or RiskyBehavior(0, 0, 0),
            last_updated=FIXED_NOW,
            severity_score=40,
            latitude=24.7,
            longitude=46.7
        )
    return _make

@pytest.fixture
def make_district():
    def _make(id="north", name="Northern District", congestion=50, roundabouts=3, alerts=1):
        return District(
            id=id,
            name=name,
            name_ar="",
            total_roundabouts=roundabouts,
            active_alerts=alerts,
            congestion_score=congestion,
            severity=SeverityLevel.ATTENTION,
            latitude=24.7,
            longitude=46.7
        )
    return _make

@pytest.fixture
def make_alert():
    def _make(id="a-1", score=50, district_name="Northern District", acknowledged=False):
        return Alert(
            id=id,
            roundabout_id="r-1",
            roundabout_name="Roundabout r-1",
            district_id="north",
            district_name=district_name,
            severity=SeverityLevel.ATTENTION,
            type=AlertType.CONGESTION,
            message="Congestion",
            estimated_impact="5-minute average delay",
            timestamp=FIXED_NOW,
            acknowledged=acknowledged,
            severity_score=score
        )
    return _make
