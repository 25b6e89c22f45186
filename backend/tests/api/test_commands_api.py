"""API tests: /command, /set-command and /get-command."""
import uuid

import pytest

from repositories.command_repository import get_command

pytestmark = pytest.mark.api


@pytest.fixture
def charger_id():
    return f"C-API-{uuid.uuid4().hex[:8]}"


# ---------------------------------------------------------------------------
# /command (charger-agnostic)
# ---------------------------------------------------------------------------


def test_simple_command_empty(client):
    r = client.get("/api/command")
    assert r.status_code == 200
    assert r.json()["command"] is None


def test_simple_command_store_and_read(client):
    r = client.post("/api/command", json={"command": "start"})
    assert r.status_code == 200
    assert r.json()["message"] == "Command 'start' received and stored."
    r = client.get("/api/command")
    data = r.json()
    assert data["command"] == "start"
    assert isinstance(data["timestamp"], int)


@pytest.mark.parametrize("body", [{"command": "reset"}, {"command": "go"}, {}])
def test_simple_command_invalid(client, body):
    r = client.post("/api/command", json=body)
    assert r.status_code == 400
    assert client.get("/api/command").json()["command"] is None


# ---------------------------------------------------------------------------
# /set-command
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("command", ["start", "stop", "status", "reset"])
def test_set_command_valid(client, db_session, charger_id, command):
    """Valid commands are persisted pending and return a commandId."""
    r = client.post(
        "/api/set-command",
        json={"command": command, "chargerId": charger_id, "stationName": "Mumbai Central Station"},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["commandId"]
    assert data["message"] == f"Command '{command}' sent to charger {charger_id} at Mumbai Central Station"
    row = get_command(db_session, data["commandId"])
    assert row is not None
    assert row.executed is False


def test_set_command_invalid_persists_nothing(client, charger_id):
    r = client.post(
        "/api/set-command",
        json={"command": "explode", "chargerId": charger_id, "stationName": "S1"},
    )
    assert r.status_code == 400
    r = client.get("/api/set-command", params={"chargerId": charger_id})
    assert r.json() == {"message": "No commands found for this charger"}


@pytest.mark.parametrize(
    "body",
    [
        {"chargerId": "C1", "stationName": "S1"},
        {"command": "start", "stationName": "S1"},
        {"command": "start", "chargerId": "C1"},
    ],
)
def test_set_command_missing_fields(client, body):
    r = client.post("/api/set-command", json=body)
    assert r.status_code == 400
    assert "Missing required fields" in r.json()["detail"]


def test_get_set_command_returns_latest_pending(client, charger_id):
    client.post("/api/set-command", json={"command": "status", "chargerId": charger_id, "stationName": "S1"})
    r2 = client.post("/api/set-command", json={"command": "reset", "chargerId": charger_id, "stationName": "S1"})
    r = client.get("/api/set-command", params={"chargerId": charger_id})
    assert r.status_code == 200
    data = r.json()
    assert data["chargerId"] == charger_id
    assert data["stationName"] == "S1"
    assert data["command"] in ("status", "reset")
    assert data["commandId"]
    assert isinstance(data["timestamp"], int)
    if data["command"] == "reset":
        assert data["commandId"] == r2.json()["commandId"]


def test_get_set_command_requires_charger_id(client):
    r = client.get("/api/set-command")
    assert r.status_code == 400


def test_set_command_start_opens_session_and_simulator(client, charger_id):
    """start opens an active session and starts that charger's simulator."""
    r = client.post("/api/set-command", json={"command": "start", "chargerId": charger_id, "stationName": "S1"})
    assert r.status_code == 200
    sessions = client.get("/api/get-sessions", params={"chargerId": charger_id}).json()["sessions"]
    assert len(sessions) == 1
    assert sessions[0]["status"] == "active"
    status = client.get("/api/charging-status", params={"chargerId": charger_id}).json()
    assert status["status"] == "Charging"
    assert 0.5 <= status["power"] <= 7.5

    client.post("/api/set-command", json={"command": "stop", "chargerId": charger_id, "stationName": "S1"})
    status = client.get("/api/charging-status", params={"chargerId": charger_id}).json()
    assert status["status"] == "Stopped"
    assert status["power"] == 0.0


# ---------------------------------------------------------------------------
# /get-command
# ---------------------------------------------------------------------------


def test_get_command_requires_charger_id(client):
    r = client.get("/api/get-command")
    assert r.status_code == 400


def test_get_command_none_pending(client, charger_id):
    r = client.get("/api/get-command", params={"chargerId": charger_id})
    assert r.status_code == 200
    data = r.json()
    assert data["chargerId"] == charger_id
    assert data["command"] == "none"
    assert isinstance(data["timestamp"], int)
    assert "commandId" not in data


def test_get_command_returns_pending_with_no_cache_headers(client, charger_id):
    created = client.post(
        "/api/set-command", json={"command": "reset", "chargerId": charger_id, "stationName": "S1"}
    ).json()
    r = client.get("/api/get-command", params={"chargerId": charger_id})
    assert r.status_code == 200
    data = r.json()
    assert data["command"] == "reset"
    assert data["commandId"] == created["commandId"]
    assert r.headers["cache-control"] == "no-cache, no-store, must-revalidate"
    assert r.headers["pragma"] == "no-cache"
    assert r.headers["expires"] == "0"


def test_get_command_falls_back_to_cache(client, charger_id):
    """With nothing pending in the database the in-process cache answers."""
    from main import app

    app.state.command_cache.put(charger_id, "stop", station_name="S1")
    r = client.get("/api/get-command", params={"chargerId": charger_id})
    assert r.json()["command"] == "stop"
