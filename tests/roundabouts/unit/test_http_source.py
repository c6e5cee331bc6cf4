import pytest
import requests
from datetime import datetime
from unittest.mock import MagicMock
from src.common.exceptions import SourceUnavailable
from src.roundabouts.domain.entities import AlertType, CongestionLevel, SeverityLevel, TrendDirection
from src.roundabouts.infrastructure.sources.http_source import HttpDataSource

ROUNDABOUT_PAYLOAD = {
    "id": "n-001",
    "name": "King Fahd Rd & Olaya St",
    "districtId": "north",
    "vehicleEntry": 1245,
    "vehicleExit": 1189,
    "entryTrend": "up",
    "exitTrend": "stable",
    "laneUtilization": 78,
    "congestionLevel": "High",
    "riskyBehaviors": {"wrongWay": 3, "illegalUTurn": 7, "speeding": 12},
    "lastUpdated": "2024-05-01T11:59:15",
    "severityScore": 75,
    "latitude": 24.81,
    "longitude": 46.7,
}

DISTRICT_PAYLOAD = {
    "id": "north",
    "name": "Northern District",
    "nameAr": "المنطقة الشمالية",
    "totalRoundabouts": 12,
    "activeAlerts": 3,
    "congestionScore": 72,
    "severity": "concern",
    "latitude": 24.8,
    "longitude": 46.7,
}

ALERT_PAYLOAD = {
    "id": "a-001",
    "roundaboutId": "e-001",
    "roundaboutName": "Khurais Rd & Airport Rd",
    "districtId": "east",
    "districtName": "Eastern District",
    "severity": "critical",
    "type": "congestion",
    "message": "Critical congestion detected - 95% lane utilization",
    "estimatedImpact": "20-minute average delay",
    "timestamp": "2024-05-01T11:58:00Z",
    "acknowledged": False,
    "severityScore": 98,
}

def make_response(payload=None, status=200, json_error=None):
    response = MagicMock()
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Error")
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response

@pytest.fixture
def session():
    return MagicMock()

@pytest.fixture
def source(session):
    return HttpDataSource("http://traffic.local/api/", timeout_seconds=2.0, session=session)

def test_fetch_roundabouts(source, session):
    session.get.return_value = make_response([ROUNDABOUT_PAYLOAD])

    roundabouts = source.fetch_roundabouts()

    session.get.assert_called_once_with("http://traffic.local/api/roundabouts", timeout=2.0)
    assert len(roundabouts) == 1
    r = roundabouts[0]
    assert r.district_id == "north"
    assert r.entry_trend == TrendDirection.UP
    assert r.congestion_level == CongestionLevel.HIGH
    assert r.risky_behaviors.wrong_way == 3
    assert r.last_updated == datetime(2024, 5, 1, 11, 59, 15)

def test_fetch_districts(source, session):
    session.get.return_value = make_response([DISTRICT_PAYLOAD])
    districts = source.fetch_districts()
    assert districts[0].name_ar == "المنطقة الشمالية"
    assert districts[0].severity == SeverityLevel.CONCERN

def test_fetch_alerts_parses_timestamp(source, session):
    session.get.return_value = make_response([ALERT_PAYLOAD])
    alerts = source.fetch_alerts()
    assert alerts[0].type == AlertType.CONGESTION
    assert alerts[0].timestamp.year == 2024
    assert alerts[0].timestamp.tzinfo is not None

def test_connection_error_is_source_unavailable(source, session):
    session.get.side_effect = requests.exceptions.ConnectionError("refused")
    with pytest.raises(SourceUnavailable):
        source.fetch_roundabouts()

def test_timeout_is_source_unavailable(source, session):
    session.get.side_effect = requests.exceptions.Timeout("slow")
    with pytest.raises(SourceUnavailable):
        source.fetch_alerts()

def test_http_error_status_is_source_unavailable(source, session):
    session.get.return_value = make_response(status=500)
    with pytest.raises(SourceUnavailable):
        source.fetch_districts()

def test_invalid_json_is_source_unavailable(source, session):
    session.get.return_value = make_response(json_error=ValueError("Expecting value"))
    with pytest.raises(SourceUnavailable):
        source.fetch_roundabouts()

def test_non_list_payload_is_source_unavailable(source, session):
    session.get.return_value = make_response({"roundabouts": []})
    with pytest.raises(SourceUnavailable):
        source.fetch_roundabouts()

def test_bad_timestamp_fails_whole_fetch(source, session):
    broken = dict(ROUNDABOUT_PAYLOAD, id="n-002", lastUpdated="yesterday-ish")
    session.get.return_value = make_response([ROUNDABOUT_PAYLOAD, broken])
    with pytest.raises(SourceUnavailable):
        source.fetch_roundabouts()

def test_missing_field_fails_whole_fetch(source, session):
    broken = {k: v for k, v in ALERT_PAYLOAD.items() if k != "severityScore"}
    session.get.return_value = make_response([ALERT_PAYLOAD, broken])
    with pytest.raises(SourceUnavailable):
        source.fetch_alerts()

def test_fetch_roundabout_cars(source, session):
    session.get.return_value = make_response({
        "roundaboutId": "test-001",
        "timestamp": "2024-05-01T12:00:00",
        "summary": {
            "totalCars": 1, "penaltyCount": 1, "firstZoneCount": 1,
            "secondZoneCount": 1, "carTypes": {"car": 1}
        },
        "cars": [{
            "id": "c1", "type": "car", "confidence": 0.87,
            "position": {"x": 0.4, "y": 0.6},
            "inFirstZone": True, "inSecondZone": True, "isPenalty": True,
            "timestamp": "2024-05-01T12:00:00"
        }]
    })

    snapshot = source.fetch_roundabout_cars("test-001")

    session.get.assert_called_once_with("http://traffic.local/api/roundabout/test-001/cars", timeout=2.0)
    assert snapshot.summary.penalty_count == 1
    assert snapshot.cars[0].position.x == 0.4
    assert snapshot.cars[0].is_penalty

def test_fetch_single_roundabout(source, session):
    session.get.return_value = make_response(ROUNDABOUT_PAYLOAD)
    assert source.fetch_roundabout("n-001").id == "n-001"
    session.get.assert_called_once_with("http://traffic.local/api/roundabout/n-001", timeout=2.0)

def test_health_check(source, session):
    session.get.return_value = make_response({"status": "ok", "timestamp": "2024-05-01T12:00:00"})
    assert source.health_check().status == "ok"
