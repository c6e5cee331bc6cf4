"""
Endpoints serving read-only views of the dashboard snapshot.
"""
import asyncio
from typing import Optional

from fastapi import FastAPI, HTTPException

from .....common.exceptions import SourceUnavailable
from .....common.schemas import AlertSchema, DistrictSchema, RoundaboutCarsSchema, RoundaboutSchema
from ....application.refresh_controller import RefreshController
from ....application.views import (
    DISTRICT_SORT_FIELDS,
    SORT_ORDERS,
    build_roundabout_detail,
    count_active_alerts,
    group_alerts_by_district,
    roundabouts_in_district,
    sort_alerts_by_severity,
    sort_districts,
    summarize_city,
)
from ....domain.entities import TimeRange
from ....infrastructure.seed import RECURRING_ISSUES, WEEKLY_HEATMAP
from ....infrastructure.sources.simulated_source import generate_history

app = FastAPI()

# Singleton
_controller: Optional[RefreshController] = None

def init_controller(controller: RefreshController):
    global _controller
    _controller = controller

def get_controller() -> RefreshController:
    if _controller is None:
        raise HTTPException(503, "Refresh controller not initialized")
    return _controller


def _dump(model) -> dict:
    return model.model_dump(by_alias=True, mode="json")


@app.get("/status")
async def get_status():
    """Live/degraded indicator for the dashboard header."""
    controller = get_controller()
    return {
        "mode": controller.mode.value,
        "online": controller.is_online,
        "lastError": controller.last_error,
        "lastSuccess": controller.last_success.isoformat() if controller.last_success else None,
        "running": controller.is_running,
        "takenAt": controller.snapshot.taken_at.isoformat(),
    }

@app.get("/districts")
async def list_districts(sort: str = "congestion", order: str = "desc"):
    if sort not in DISTRICT_SORT_FIELDS or order not in SORT_ORDERS:
        raise HTTPException(422, f"Invalid sort: {sort} {order}")
    controller = get_controller()
    districts = sort_districts(controller.snapshot.districts, sort, order)
    return [_dump(DistrictSchema.from_entity(d)) for d in districts]

@app.get("/districts/{district_id}/roundabouts")
async def list_district_roundabouts(district_id: str):
    controller = get_controller()
    if controller.get_district(district_id) is None:
        raise HTTPException(404, "District not found")
    members = roundabouts_in_district(controller.snapshot.roundabouts, district_id)
    return [_dump(RoundaboutSchema.from_entity(r)) for r in members]

@app.get("/roundabouts")
async def list_roundabouts():
    controller = get_controller()
    return [_dump(RoundaboutSchema.from_entity(r)) for r in controller.snapshot.roundabouts]

@app.get("/roundabouts/{roundabout_id}")
async def get_roundabout(roundabout_id: str):
    roundabout = get_controller().get_roundabout(roundabout_id)
    if roundabout is None:
        raise HTTPException(404, "Roundabout not found")
    return _dump(RoundaboutSchema.from_entity(roundabout))

@app.get("/roundabouts/{roundabout_id}/detail")
async def get_roundabout_detail(roundabout_id: str, time_range: TimeRange = TimeRange.DAY):
    """Detail view: counters, display severity tier, history series, heatmap."""
    controller = get_controller()
    roundabout = controller.get_roundabout(roundabout_id)
    if roundabout is None:
        raise HTTPException(404, "Roundabout not found")

    detail = build_roundabout_detail(
        roundabout,
        history=generate_history(roundabout, time_range),
        heatmap=WEEKLY_HEATMAP,
        recurring_issues=RECURRING_ISSUES,
        now=controller.now(),
    )
    return {
        "roundabout": _dump(RoundaboutSchema.from_entity(detail.roundabout)),
        "lastUpdatedAgo": detail.last_updated_ago,
        "totalRiskyBehaviors": detail.total_risky_behaviors,
        "severityTier": detail.severity_tier.value,
        "timeRange": time_range.value,
        "history": [
            {"time": p.label, "entry": p.entry, "exit": p.exit, "utilization": p.utilization}
            for p in detail.history
        ],
        "heatmap": detail.heatmap,
        "recurringIssues": detail.recurring_issues,
    }

@app.get("/roundabouts/{roundabout_id}/cars")
async def get_roundabout_cars(roundabout_id: str):
    """Live-detection snapshot, fetched from the source on demand."""
    controller = get_controller()
    try:
        snapshot = await asyncio.to_thread(controller.source.fetch_roundabout_cars, roundabout_id)
    except SourceUnavailable as e:
        raise HTTPException(503, str(e))
    return _dump(RoundaboutCarsSchema.from_entity(snapshot))

@app.get("/alerts")
async def list_alerts():
    """Alerts sorted by severity score and grouped by district."""
    alerts = sort_alerts_by_severity(get_controller().snapshot.alerts)
    return {
        "activeCount": count_active_alerts(alerts),
        "alerts": [_dump(AlertSchema.from_entity(a)) for a in alerts],
        "byDistrict": {
            name: [a.id for a in group]
            for name, group in group_alerts_by_district(alerts).items()
        },
    }

@app.post("/alerts/{alert_id}/acknowledge")
async def acknowledge_alert(alert_id: str):
    controller = get_controller()
    if not controller.acknowledge_alert(alert_id):
        raise HTTPException(404, "Alert not found")
    await controller.publish()
    return {"status": "acknowledged", "alert_id": alert_id}

@app.post("/alerts/{alert_id}/dispatch")
async def dispatch_team(alert_id: str):
    try:
        request = get_controller().dispatch_team(alert_id)
    except KeyError:
        raise HTTPException(404, "Alert not found")
    return {
        "status": "dispatched",
        "alert_id": request.alert_id,
        "roundabout_id": request.roundabout_id,
        "requested_at": request.requested_at.isoformat(),
    }

@app.get("/summary")
async def get_summary():
    summary = summarize_city(get_controller().snapshot.districts)
    return {
        "totalRoundabouts": summary.total_roundabouts,
        "activeAlerts": summary.active_alerts,
        "averageCongestion": summary.average_congestion,
        "criticalDistricts": summary.critical_districts,
    }

@app.get("/metrics")
async def get_metrics():
    controller = get_controller()
    if controller.metrics_collector:
        return controller.metrics_collector.get_metrics().to_dict()
    return {"error": "Metrics not available"}
