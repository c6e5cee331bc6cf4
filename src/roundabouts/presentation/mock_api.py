"""
Mock traffic API.

Serves the upstream `/api` endpoints from a SimulatedDataSource so the HTTP
source can be run end to end without the real backend.
"""
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException

from ...common.exceptions import SourceUnavailable
from ...common.schemas import (
    AlertSchema,
    DistrictSchema,
    RoundaboutCarsSchema,
    RoundaboutSchema,
)
from ..infrastructure.sources.simulated_source import SimulatedDataSource

router = APIRouter(prefix="/api")

# Singleton
_source: Optional[SimulatedDataSource] = None

def init_source(source: SimulatedDataSource):
    global _source
    _source = source

def get_source() -> SimulatedDataSource:
    global _source
    if _source is None:
        _source = SimulatedDataSource()
    return _source


def _dump(model) -> dict:
    return model.model_dump(by_alias=True, mode="json")


@router.get("/roundabouts")
def list_roundabouts():
    return [_dump(RoundaboutSchema.from_entity(r)) for r in get_source().fetch_roundabouts()]

@router.get("/districts")
def list_districts():
    return [_dump(DistrictSchema.from_entity(d)) for d in get_source().fetch_districts()]

@router.get("/alerts")
def list_alerts():
    return [_dump(AlertSchema.from_entity(a)) for a in get_source().fetch_alerts()]

@router.get("/roundabout/{roundabout_id}")
def get_roundabout(roundabout_id: str):
    try:
        roundabout = get_source().fetch_roundabout(roundabout_id)
    except SourceUnavailable:
        raise HTTPException(404, "Roundabout not found")
    return _dump(RoundaboutSchema.from_entity(roundabout))

@router.get("/roundabout/{roundabout_id}/cars")
def get_roundabout_cars(roundabout_id: str):
    return _dump(RoundaboutCarsSchema.from_entity(get_source().fetch_roundabout_cars(roundabout_id)))

@router.get("/health")
def health():
    status = get_source().health_check()
    return {"status": status.status, "timestamp": status.timestamp.isoformat()}


app = FastAPI(title="Mock Traffic API")
app.include_router(router)
