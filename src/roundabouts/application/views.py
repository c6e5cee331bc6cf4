"""
Read-only projections of the dashboard snapshot.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from ..domain.entities import Alert, District, HistoryPoint, Roundabout, SeverityLevel
from ..domain.metrics import classify_severity_display

DISTRICT_SORT_FIELDS = ("name", "roundabouts", "alerts", "congestion")
SORT_ORDERS = ("asc", "desc")


@dataclass
class CitySummary:
    total_roundabouts: int
    active_alerts: int
    average_congestion: int
    critical_districts: int


@dataclass
class RoundaboutDetail:
    roundabout: Roundabout
    total_risky_behaviors: int
    severity_tier: SeverityLevel
    last_updated_ago: str = ""
    history: List[HistoryPoint] = field(default_factory=list)
    heatmap: List[Dict[str, object]] = field(default_factory=list)
    recurring_issues: List[Dict[str, str]] = field(default_factory=list)


def sort_alerts_by_severity(alerts: Iterable[Alert]) -> List[Alert]:
    # sorted() is stable: equal scores keep their input order
    return sorted(alerts, key=lambda a: a.severity_score, reverse=True)


def group_alerts_by_district(alerts: Iterable[Alert]) -> Dict[str, List[Alert]]:
    grouped: Dict[str, List[Alert]] = {}
    for alert in alerts:
        grouped.setdefault(alert.district_name, []).append(alert)
    return grouped


def count_active_alerts(alerts: Iterable[Alert]) -> int:
    return sum(1 for a in alerts if not a.acknowledged)


def sort_districts(
    districts: Iterable[District],
    sort_field: str = "congestion",
    order: str = "desc"
) -> List[District]:
    """
    Sorts districts for the district list.

    :param sort_field: One of name, roundabouts, alerts, congestion
    :param order: asc or desc
    """
    keys = {
        "name": lambda d: d.name,
        "roundabouts": lambda d: d.total_roundabouts,
        "alerts": lambda d: d.active_alerts,
        "congestion": lambda d: d.congestion_score,
    }
    if sort_field not in keys:
        raise ValueError(f"Unknown sort field: {sort_field}")
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {order}")
    return sorted(districts, key=keys[sort_field], reverse=(order == "desc"))


def roundabouts_in_district(roundabouts: Iterable[Roundabout], district_id: str) -> List[Roundabout]:
    return [r for r in roundabouts if r.district_id == district_id]


def summarize_city(districts: Sequence[District]) -> CitySummary:
    if not districts:
        return CitySummary(0, 0, 0, 0)
    mean = sum(d.congestion_score for d in districts) / len(districts)
    return CitySummary(
        total_roundabouts=sum(d.total_roundabouts for d in districts),
        active_alerts=sum(d.active_alerts for d in districts),
        # Half-up rounding, not banker's rounding
        average_congestion=math.floor(mean + 0.5),
        critical_districts=sum(1 for d in districts if d.severity is SeverityLevel.CRITICAL),
    )


def format_time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    seconds = math.floor((now - moment).total_seconds())

    if seconds < 60:
        return f"{seconds}s ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def build_roundabout_detail(
    roundabout: Roundabout,
    history: Optional[List[HistoryPoint]] = None,
    heatmap: Optional[List[Dict[str, object]]] = None,
    recurring_issues: Optional[List[Dict[str, str]]] = None,
    now: Optional[datetime] = None
) -> RoundaboutDetail:
    return RoundaboutDetail(
        roundabout=roundabout,
        total_risky_behaviors=roundabout.risky_behaviors.total,
        severity_tier=classify_severity_display(roundabout.severity_score),
        last_updated_ago=format_time_ago(roundabout.last_updated, now),
        history=list(history or []),
        heatmap=list(heatmap or []),
        recurring_issues=list(recurring_issues or []),
    )
