"""
Derived traffic metrics.

Pure functions: the same inputs always give the same outputs. Random noise for
simulated updates is supplied by the caller as plain deltas.
"""
import math
from collections import Counter
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Sequence

from ...common.exceptions import EmptyAggregateInput
from .entities import (
    CarDetection,
    CarsSummary,
    CongestionLevel,
    District,
    RiskyBehavior,
    Roundabout,
    SeverityLevel,
    TrendDirection,
)

TREND_DEAD_BAND = 5

MIN_UTILIZATION = 20
MAX_UTILIZATION = 100
MIN_VEHICLE_COUNT = 200

UTILIZATION_WEIGHT = 0.6
RISKY_BEHAVIOR_WEIGHT = 0.4
WRONG_WAY_MULTIPLIER = 2


def classify_trend(delta: int) -> TrendDirection:
    if delta > TREND_DEAD_BAND:
        return TrendDirection.UP
    if delta < -TREND_DEAD_BAND:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def classify_congestion(utilization: int) -> CongestionLevel:
    """
    Four-tier congestion level. Tiers are inclusive on their lower edge.
    """
    utilization = min(100, max(0, utilization))
    if utilization >= 90:
        return CongestionLevel.CRITICAL
    if utilization >= 75:
        return CongestionLevel.HIGH
    if utilization >= 55:
        return CongestionLevel.MODERATE
    return CongestionLevel.LOW


def classify_severity_level(score: int) -> SeverityLevel:
    """
    District severity from an aggregate congestion score.
    """
    if score >= 85:
        return SeverityLevel.CRITICAL
    if score >= 70:
        return SeverityLevel.CONCERN
    if score >= 50:
        return SeverityLevel.ATTENTION
    return SeverityLevel.OPTIMAL


def classify_severity_display(score: int) -> SeverityLevel:
    """
    Display tier for a roundabout severity score.

    Uses 90/70/50 boundaries, not the 85/70/50 of classify_severity_level.
    Both scales are kept as they are until product decides which one wins.
    """
    if score >= 90:
        return SeverityLevel.CRITICAL
    if score >= 70:
        return SeverityLevel.CONCERN
    if score >= 50:
        return SeverityLevel.ATTENTION
    return SeverityLevel.OPTIMAL


def compute_severity_score(utilization: int, risky: RiskyBehavior) -> int:
    weighted_incidents = (
        risky.wrong_way * WRONG_WAY_MULTIPLIER + risky.illegal_u_turn + risky.speeding
    )
    score = math.floor(utilization * UTILIZATION_WEIGHT + weighted_incidents * RISKY_BEHAVIOR_WEIGHT)
    return min(100, score)


def compute_district_congestion_score(roundabouts: Sequence[Roundabout]) -> int:
    if not roundabouts:
        raise EmptyAggregateInput("Cannot compute congestion score over zero roundabouts")
    total = sum(r.lane_utilization for r in roundabouts)
    return total // len(roundabouts)


def clamp_utilization(value: int) -> int:
    return min(MAX_UTILIZATION, max(MIN_UTILIZATION, value))


def derive_roundabout(
    prior: Roundabout,
    entry_delta: int,
    exit_delta: int,
    utilization_delta: int,
    now: datetime
) -> Roundabout:
    """
    Applies one update tick to a roundabout and re-derives every dependent field.
    The returned record keeps the id and all non-derived fields of `prior`.
    """
    utilization = clamp_utilization(prior.lane_utilization + utilization_delta)
    return replace(
        prior,
        vehicle_entry=max(MIN_VEHICLE_COUNT, prior.vehicle_entry + entry_delta),
        vehicle_exit=max(MIN_VEHICLE_COUNT, prior.vehicle_exit + exit_delta),
        entry_trend=classify_trend(entry_delta),
        exit_trend=classify_trend(exit_delta),
        lane_utilization=utilization,
        congestion_level=classify_congestion(utilization),
        severity_score=compute_severity_score(utilization, prior.risky_behaviors),
        last_updated=now,
    )


def recompute_district(district: District, roundabouts: Iterable[Roundabout]) -> District:
    """
    Re-derives congestion score and severity of a district from its members.
    A district with no member roundabouts keeps its current values.
    """
    members = [r for r in roundabouts if r.district_id == district.id]
    try:
        score = compute_district_congestion_score(members)
    except EmptyAggregateInput:
        return district
    return replace(
        district,
        congestion_score=score,
        severity=classify_severity_level(score),
    )


def recompute_district_aggregates(
    districts: Iterable[District],
    roundabouts: Sequence[Roundabout]
) -> List[District]:
    return [recompute_district(d, roundabouts) for d in districts]


def summarize_cars(cars: Sequence[CarDetection]) -> CarsSummary:
    return CarsSummary(
        total_cars=len(cars),
        penalty_count=sum(1 for c in cars if c.is_penalty),
        first_zone_count=sum(1 for c in cars if c.in_first_zone),
        second_zone_count=sum(1 for c in cars if c.in_second_zone),
        car_types=dict(Counter(c.type for c in cars)),
    )
