"""API tests: /get-events, /get-sessions, /get-logs."""
import uuid

import pytest

from charging_core.gateway import PersistenceGateway

pytestmark = pytest.mark.api


@pytest.fixture
def charger_id():
    return f"C-HIST-{uuid.uuid4().hex[:8]}"


@pytest.fixture
def gateway(db_session):
    return PersistenceGateway(db_session)


def test_get_events_limit_and_order(client, gateway, charger_id):
    """Never more than limit events, sorted newest-first."""
    for event_type in ("start", "status_update", "error", "stop", "status_update"):
        gateway.log_event(charger_id=charger_id, station_name="S1", event_type=event_type)
    r = client.get("/api/get-events", params={"chargerId": charger_id, "limit": 3})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 3
    assert len(data["events"]) == 3
    timestamps = [e["timestamp"] for e in data["events"]]
    assert timestamps == sorted(timestamps, reverse=True)


def test_get_events_normalizes_event_type(client, gateway, charger_id):
    for event_type in ("start", "stop", "status_update", "error"):
        gateway.log_event(charger_id=charger_id, station_name="S1", event_type=event_type)
    events = client.get("/api/get-events", params={"chargerId": charger_id}).json()["events"]
    assert sorted(e["eventType"] for e in events) == ["start", "status", "status", "stop"]
    assert all(e["chargerId"] == charger_id for e in events)


def test_get_events_default_limit(client):
    r = client.get("/api/get-events")
    assert r.status_code == 200
    assert r.json()["count"] <= 100


@pytest.mark.parametrize("limit", ["abc", "0", "-5"])
def test_get_events_bad_limit_is_400(client, limit):
    r = client.get("/api/get-events", params={"limit": limit})
    assert r.status_code == 400


def test_get_sessions(client, gateway, charger_id):
    gateway.create_session(charger_id=charger_id, station_name="S1", payment_method="card")
    r = client.get("/api/get-sessions", params={"chargerId": charger_id})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 1
    session = data["sessions"][0]
    assert session["chargerId"] == charger_id
    assert session["status"] == "active"
    assert session["paymentMethod"] == "card"
    assert session["startTime"].endswith("Z") or "+00:00" in session["startTime"]


def test_get_logs_filtered_by_level(client, gateway):
    gateway.log_activity("warning", "charger offline", "test")
    gateway.log_activity("debug", "poll", "test")
    r = client.get("/api/get-logs", params={"level": "warning"})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] >= 1
    assert all(log["level"] == "warning" for log in data["logs"])
    assert any(log["message"] == "charger offline" for log in data["logs"])


def test_get_logs_limit(client, gateway):
    for i in range(5):
        gateway.log_activity("info", f"entry {i}", "test")
    r = client.get("/api/get-logs", params={"limit": 2})
    assert r.json()["count"] == 2
