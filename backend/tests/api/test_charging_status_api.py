"""API tests: GET /api/charging-status (simulator snapshot)."""
import pytest

from main import app

pytestmark = pytest.mark.api


def test_charging_status_requires_charger_id(client):
    assert client.get("/api/charging-status").status_code == 400


def test_charging_status_idle_for_unknown_charger(client):
    r = client.get("/api/charging-status", params={"chargerId": "never-started"})
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "Idle"
    assert data["power"] == 0.0
    assert data["energy"] == 0.0
    assert data["amountPaid"] == 0.0
    assert data["duration"] == 0
    assert data["ratePerKwh"] == app.state.simulators.rate_per_kwh


def test_charging_status_after_error(client):
    """A charger reporting error moves its simulator to Error at 0 kW."""
    client.post("/api/set-command", json={"command": "start", "chargerId": "C-STATUS-1", "stationName": "S1"})
    client.post("/api/esp32-response", json={"chargerId": "C-STATUS-1", "stationName": "S1", "status": "error"})
    data = client.get("/api/charging-status", params={"chargerId": "C-STATUS-1"}).json()
    assert data["status"] == "Error"
    assert data["power"] == 0.0
    assert data["errorMessage"] == "Charger reported error"
