import pytest
from src.common.exceptions import ConfigurationError, SourceUnavailable
from src.roundabouts.domain.entities import TimeRange
from src.roundabouts.domain.metrics import classify_congestion, compute_severity_score
from src.roundabouts.infrastructure.seed import seed_roundabouts
from src.roundabouts.infrastructure.sources import create_source, HttpDataSource, SimulatedDataSource

@pytest.fixture
def source(now):
    return SimulatedDataSource(seed=7, clock=lambda: now)

def test_advance_keeps_identity_and_invariants(source, now):
    seeded = {r.id: r for r in seed_roundabouts(now)}

    for _ in range(50):
        roundabouts = source.fetch_roundabouts()

    assert source.ticks == 50
    assert {r.id for r in roundabouts} == set(seeded)
    for r in roundabouts:
        assert 20 <= r.lane_utilization <= 100
        assert r.vehicle_entry >= 200
        assert r.vehicle_exit >= 200
        assert r.congestion_level == classify_congestion(r.lane_utilization)
        assert r.severity_score == compute_severity_score(r.lane_utilization, r.risky_behaviors)
        assert r.district_id == seeded[r.id].district_id
        assert r.risky_behaviors == seeded[r.id].risky_behaviors

def test_single_tick_moves_within_noise_bounds(source, now):
    seeded = {r.id: r for r in seed_roundabouts(now)}
    for r in source.fetch_roundabouts():
        prior = seeded[r.id]
        assert -20 <= r.vehicle_entry - prior.vehicle_entry <= 19
        assert abs(r.lane_utilization - prior.lane_utilization) <= 3

def test_same_seed_is_reproducible(now):
    a = SimulatedDataSource(seed=3, clock=lambda: now)
    b = SimulatedDataSource(seed=3, clock=lambda: now)
    assert a.fetch_roundabouts() == b.fetch_roundabouts()

def test_districts_and_alerts_are_copies(source):
    districts = source.fetch_districts()
    districts[0].congestion_score = 0
    assert source.fetch_districts()[0].congestion_score != 0
    assert len(source.fetch_alerts()) == 6

def test_fetch_roundabout(source):
    assert source.fetch_roundabout("e-001").name == "Khurais Rd & Airport Rd"
    with pytest.raises(SourceUnavailable):
        source.fetch_roundabout("nope")

def test_cars_snapshot_summary_matches_cars(source):
    for _ in range(10):
        snapshot = source.fetch_roundabout_cars("test-001")
        assert snapshot.roundabout_id == "test-001"
        assert snapshot.summary.total_cars == len(snapshot.cars)
        assert snapshot.summary.penalty_count == sum(c.is_penalty for c in snapshot.cars)
        assert sum(snapshot.summary.car_types.values()) == len(snapshot.cars)
        for car in snapshot.cars:
            assert 0.5 <= car.confidence <= 0.99

def test_health_check(source, now):
    status = source.health_check()
    assert status.status == "ok"
    assert status.timestamp == now

@pytest.mark.parametrize("time_range,points", [
    (TimeRange.HOUR, 12),
    (TimeRange.FOUR_HOURS, 24),
    (TimeRange.DAY, 24),
    (TimeRange.WEEK, 48),
])
def test_history_length(source, time_range, points):
    roundabout = source.fetch_roundabout("n-001")
    assert len(source.generate_history(roundabout, time_range)) == points

def test_history_labels_and_bounds(source):
    roundabout = source.fetch_roundabout("n-001")
    day = source.generate_history(roundabout, TimeRange.DAY)
    assert day[0].label == "1:00"
    assert day[-1].label == "0:00"
    week = source.generate_history(roundabout, TimeRange.WEEK)
    assert week[0].label == "Day 1"
    assert week[-1].label == "Day 48"
    for point in day:
        assert roundabout.vehicle_entry * 0.85 - 1 <= point.entry <= roundabout.vehicle_entry * 1.15

def test_registry_creates_sources():
    assert isinstance(create_source("simulated", seed=1), SimulatedDataSource)
    http = create_source("http", base_url="http://example/api", timeout_seconds=1.0)
    assert isinstance(http, HttpDataSource)
    assert http.base_url == "http://example/api"

def test_registry_rejects_unknown_type():
    with pytest.raises(ConfigurationError):
        create_source("carrier-pigeon")

def test_registry_accepts_only_configurable_types():
    # Only the types ConfigManager allows
    with pytest.raises(ConfigurationError):
        create_source("mock")
