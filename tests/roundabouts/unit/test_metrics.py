import pytest
from src.common.exceptions import EmptyAggregateInput
from src.roundabouts.domain.entities import (
    CarDetection, CarPosition, CongestionLevel, RiskyBehavior, SeverityLevel, TrendDirection
)
from src.roundabouts.domain.metrics import (
    classify_congestion,
    classify_severity_display,
    classify_severity_level,
    classify_trend,
    clamp_utilization,
    compute_district_congestion_score,
    compute_severity_score,
    derive_roundabout,
    recompute_district,
    recompute_district_aggregates,
    summarize_cars,
)

CONGESTION_ORDER = [
    CongestionLevel.LOW, CongestionLevel.MODERATE, CongestionLevel.HIGH, CongestionLevel.CRITICAL
]

# --- Trend ---
@pytest.mark.parametrize("delta,expected", [
    (6, TrendDirection.UP),
    (5, TrendDirection.STABLE),
    (0, TrendDirection.STABLE),
    (-5, TrendDirection.STABLE),
    (-6, TrendDirection.DOWN),
    (19, TrendDirection.UP),
    (-20, TrendDirection.DOWN),
])
def test_classify_trend(delta, expected):
    assert classify_trend(delta) == expected

# --- Congestion ---
@pytest.mark.parametrize("utilization,expected", [
    (0, CongestionLevel.LOW),
    (54, CongestionLevel.LOW),
    (55, CongestionLevel.MODERATE),
    (74, CongestionLevel.MODERATE),
    (75, CongestionLevel.HIGH),
    (89, CongestionLevel.HIGH),
    (90, CongestionLevel.CRITICAL),
    (100, CongestionLevel.CRITICAL),
])
def test_classify_congestion_boundaries(utilization, expected):
    assert classify_congestion(utilization) == expected

def test_classify_congestion_clamps_out_of_range():
    assert classify_congestion(-10) == CongestionLevel.LOW
    assert classify_congestion(130) == CongestionLevel.CRITICAL

def test_classify_congestion_is_monotonic():
    ranks = [CONGESTION_ORDER.index(classify_congestion(u)) for u in range(-5, 106)]
    assert ranks == sorted(ranks)

# --- Severity scales ---
@pytest.mark.parametrize("score,expected", [
    (49, SeverityLevel.OPTIMAL),
    (50, SeverityLevel.ATTENTION),
    (69, SeverityLevel.ATTENTION),
    (70, SeverityLevel.CONCERN),
    (84, SeverityLevel.CONCERN),
    (85, SeverityLevel.CRITICAL),
])
def test_classify_severity_level(score, expected):
    assert classify_severity_level(score) == expected

def test_display_scale_differs_from_district_scale():
    # 85-89 is critical for districts but only concern on the display scale
    assert classify_severity_level(87) == SeverityLevel.CRITICAL
    assert classify_severity_display(87) == SeverityLevel.CONCERN
    assert classify_severity_display(90) == SeverityLevel.CRITICAL
    assert classify_severity_display(50) == SeverityLevel.ATTENTION
    assert classify_severity_display(49) == SeverityLevel.OPTIMAL

# --- Severity score ---
def test_compute_severity_score_formula():
    # floor(78*0.6 + (3*2 + 7 + 12)*0.4) = floor(46.8 + 10.0) = 56
    assert compute_severity_score(78, RiskyBehavior(3, 7, 12)) == 56

def test_compute_severity_score_clamped_to_100():
    assert compute_severity_score(100, RiskyBehavior(50, 50, 50)) == 100

def test_wrong_way_weighs_twice_speeding():
    base = compute_severity_score(50, RiskyBehavior(0, 0, 0))
    # 5 incidents of speeding add 2 points, wrong-way adds 4
    assert compute_severity_score(50, RiskyBehavior(0, 0, 5)) - base == 2
    assert compute_severity_score(50, RiskyBehavior(5, 0, 0)) - base == 4

def test_compute_severity_score_is_monotonic():
    previous = -1
    for u in range(0, 101):
        score = compute_severity_score(u, RiskyBehavior(1, 1, 1))
        assert score >= previous
        previous = score

    previous = -1
    for n in range(0, 60):
        score = compute_severity_score(60, RiskyBehavior(n, 2, 3))
        assert score >= previous
        previous = score

# --- District aggregates ---
def test_district_congestion_score_is_floored_mean(make_roundabout):
    roundabouts = [
        make_roundabout("n-001", utilization=78),
        make_roundabout("n-002", utilization=65),
        make_roundabout("n-003", utilization=92),
    ]
    assert compute_district_congestion_score(roundabouts) == 78

def test_district_congestion_score_empty_raises():
    with pytest.raises(EmptyAggregateInput):
        compute_district_congestion_score([])

def test_recompute_district_uses_members_only(make_district, make_roundabout):
    district = make_district("north", congestion=10)
    roundabouts = [
        make_roundabout("n-1", "north", utilization=90),
        make_roundabout("n-2", "north", utilization=81),
        make_roundabout("e-1", "east", utilization=20),
    ]
    updated = recompute_district(district, roundabouts)
    assert updated.congestion_score == 85
    assert updated.severity == SeverityLevel.CRITICAL
    assert updated.id == district.id
    assert district.congestion_score == 10

def test_recompute_district_without_members_keeps_values(make_district, make_roundabout):
    district = make_district("west", congestion=28)
    updated = recompute_district(district, [make_roundabout("n-1", "north", utilization=90)])
    assert updated == district

def test_recompute_district_aggregates(make_district, make_roundabout):
    districts = [make_district("north"), make_district("east")]
    roundabouts = [make_roundabout("n-1", "north", 40), make_roundabout("e-1", "east", 72)]
    result = recompute_district_aggregates(districts, roundabouts)
    assert [d.congestion_score for d in result] == [40, 72]
    assert [d.severity for d in result] == [SeverityLevel.OPTIMAL, SeverityLevel.CONCERN]

# --- Roundabout derivation ---
def test_clamp_utilization():
    assert clamp_utilization(10) == 20
    assert clamp_utilization(105) == 100
    assert clamp_utilization(64) == 64

def test_derive_roundabout(make_roundabout, now):
    prior = make_roundabout(utilization=88, risky=RiskyBehavior(3, 7, 12), entry=1245, exit=1189)
    later = now.replace(minute=5)
    derived = derive_roundabout(prior, entry_delta=12, exit_delta=-3, utilization_delta=2, now=later)

    assert derived.id == prior.id
    assert derived.vehicle_entry == 1257
    assert derived.vehicle_exit == 1186
    assert derived.entry_trend == TrendDirection.UP
    assert derived.exit_trend == TrendDirection.STABLE
    assert derived.lane_utilization == 90
    assert derived.congestion_level == CongestionLevel.CRITICAL
    assert derived.severity_score == compute_severity_score(90, prior.risky_behaviors)
    assert derived.last_updated == later
    # Prior record untouched
    assert prior.lane_utilization == 88

def test_derive_roundabout_clamps(make_roundabout, now):
    prior = make_roundabout(utilization=21, entry=205, exit=210)
    derived = derive_roundabout(prior, entry_delta=-20, exit_delta=-20, utilization_delta=-3, now=now)
    assert derived.vehicle_entry == 200
    assert derived.vehicle_exit == 200
    assert derived.lane_utilization == 20
    assert derived.entry_trend == TrendDirection.DOWN

def test_derive_roundabout_pulls_seed_overflow_into_range(make_roundabout, now):
    prior = make_roundabout(utilization=110)
    derived = derive_roundabout(prior, 0, 0, 0, now)
    assert derived.lane_utilization == 100

# --- Cars ---
def test_summarize_cars(now):
    def car(id, type, first, second):
        return CarDetection(id, type, 0.9, CarPosition(0.1, 0.2), first, second, first and second, now)

    summary = summarize_cars([
        car("1", "car", True, False),
        car("2", "car", True, True),
        car("3", "bus", False, True),
    ])
    assert summary.total_cars == 3
    assert summary.penalty_count == 1
    assert summary.first_zone_count == 2
    assert summary.second_zone_count == 2
    assert summary.car_types == {"car": 2, "bus": 1}

def test_summarize_no_cars():
    summary = summarize_cars([])
    assert summary.total_cars == 0
    assert summary.car_types == {}
