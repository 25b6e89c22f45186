"""API tests: POST /api/esp32-response."""
import uuid

import pytest

from charging_core.gateway import PersistenceGateway
from repositories.command_repository import get_command

pytestmark = pytest.mark.api


@pytest.fixture
def charger_id():
    return f"C-ESP-{uuid.uuid4().hex[:8]}"


@pytest.mark.parametrize(
    "missing",
    ["chargerId", "stationName", "status"],
)
def test_missing_required_field_is_400_and_persists_nothing(client, charger_id, missing):
    body = {"chargerId": charger_id, "stationName": "S1", "status": "stopped", "duration": 10}
    body.pop(missing)
    r = client.post("/api/esp32-response", json=body)
    assert r.status_code == 400
    assert missing in r.json()["detail"]
    events = client.get("/api/get-events", params={"chargerId": charger_id}).json()
    assert events["count"] == 0


def test_wrong_type_is_400(client, charger_id):
    r = client.post(
        "/api/esp32-response",
        json={"chargerId": charger_id, "stationName": "S1", "status": "stopped", "duration": "long"},
    )
    assert r.status_code == 400


def test_status_update_echoes_normalized_report(client, charger_id):
    r = client.post("/api/esp32-response", json={"chargerId": charger_id, "stationName": "S1", "status": "charging"})
    assert r.status_code == 200
    data = r.json()
    assert data["message"] == "ESP32 response processed successfully"
    received = data["received"]
    assert received["chargerId"] == charger_id
    assert received["status"] == "charging"
    assert received["duration"] is None
    assert isinstance(received["timestamp"], int)


def test_stopped_report_completes_session_and_executes_command(client, db_session, charger_id):
    """Stopped report with commandId: session completed, command executed with the report as response."""
    r = client.post("/api/set-command", json={"command": "start", "chargerId": charger_id, "stationName": "S1"})
    assert r.status_code == 200
    PersistenceGateway(db_session).save_command(
        charger_id=charger_id, station_name="S1", command="stop", command_id="abc"
    )

    r = client.post(
        "/api/esp32-response",
        json={
            "chargerId": charger_id,
            "stationName": "S1",
            "status": "stopped",
            "duration": 300,
            "totalCost": 40,
            "commandId": "abc",
        },
    )
    assert r.status_code == 200

    sessions = client.get("/api/get-sessions", params={"chargerId": charger_id}).json()["sessions"]
    assert sessions[0]["status"] == "completed"
    assert sessions[0]["duration"] == 300
    assert sessions[0]["totalCost"] == 40
    assert sessions[0]["endTime"] is not None

    command = get_command(db_session, "abc")
    assert command.executed is True
    assert command.response["status"] == "stopped"

    status = client.get("/api/charging-status", params={"chargerId": charger_id}).json()
    assert status["status"] == "Stopped"


def test_duplicate_stopped_report_keeps_first_completion(client, charger_id):
    client.post("/api/set-command", json={"command": "start", "chargerId": charger_id, "stationName": "S1"})
    body = {"chargerId": charger_id, "stationName": "S1", "status": "stopped", "duration": 120}
    assert client.post("/api/esp32-response", json=body).status_code == 200
    assert client.post("/api/esp32-response", json={**body, "duration": 500}).status_code == 200
    sessions = client.get("/api/get-sessions", params={"chargerId": charger_id}).json()["sessions"]
    assert sessions[0]["status"] == "completed"
    assert sessions[0]["duration"] == 120


def test_numeric_charger_id_accepted(client):
    r = client.post("/api/esp32-response", json={"chargerId": 7, "stationName": "S1", "status": "charging"})
    assert r.status_code == 200
    assert r.json()["received"]["chargerId"] == "7"
    events = client.get("/api/get-events", params={"chargerId": "7"}).json()["events"]
    assert events[0]["chargerId"] == "7"


def test_stopped_without_duration_stops_live_status(client, charger_id):
    client.post("/api/set-command", json={"command": "start", "chargerId": charger_id, "stationName": "S1"})
    r = client.post("/api/esp32-response", json={"chargerId": charger_id, "stationName": "S1", "status": "stopped"})
    assert r.status_code == 200
    status = client.get("/api/charging-status", params={"chargerId": charger_id}).json()
    assert status["status"] == "Stopped"
    assert status["power"] == 0.0
    sessions = client.get("/api/get-sessions", params={"chargerId": charger_id}).json()["sessions"]
    assert sessions[0]["status"] == "active"
