"""Integration tests: PersistenceGateway against the test DB session."""
import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from charging_core.gateway import PersistenceGateway
from models.charging_session import ChargingSession
from repositories.command_repository import get_command
from repositories.session_repository import get_session

pytestmark = pytest.mark.integration


@pytest.fixture
def gateway(db_session):
    return PersistenceGateway(db_session)


@pytest.fixture
def charger_id():
    return f"C-GW-{uuid.uuid4().hex[:8]}"


def test_log_event_and_get_events_newest_first(gateway, charger_id):
    """Events come back newest-first and filtered by charger."""
    ids = [
        gateway.log_event(charger_id=charger_id, station_name="S1", event_type="status_update", data={"status": "charging"})
        for _ in range(3)
    ]
    gateway.log_event(charger_id="C-OTHER", station_name="S2", event_type="start")
    events = gateway.get_events(charger_id, limit=10)
    assert {e.event_id for e in events} == set(ids)
    timestamps = [e.timestamp for e in events]
    assert timestamps == sorted(timestamps, reverse=True)
    assert events[0].data == {"status": "charging"}


def test_get_events_respects_limit(gateway, charger_id):
    for _ in range(5):
        gateway.log_event(charger_id=charger_id, station_name="S1", event_type="status_update")
    assert len(gateway.get_events(charger_id, limit=2)) == 2


def test_mutations_write_audit_logs(gateway, charger_id):
    """Each mutating call appends an info log from source 'database'."""
    gateway.log_event(charger_id=charger_id, station_name="S1", event_type="start")
    gateway.save_command(charger_id=charger_id, station_name="S1", command="start")
    messages = [log.message for log in gateway.get_logs("info", limit=50) if log.source == "database"]
    assert f"Event logged: start for charger {charger_id} at S1" in messages
    assert f"Command saved: start for charger {charger_id} at S1" in messages


def test_create_session_is_active_with_timestamps(gateway, db_session, charger_id):
    session_id = gateway.create_session(charger_id=charger_id, station_name="S1", payment_method="upi")
    row = get_session(db_session, session_id)
    assert row.status == "active"
    assert row.start_time is not None
    assert row.last_updated is not None
    assert row.payment_method == "upi"


def test_create_session_cancels_previous_active(gateway, db_session, charger_id):
    """Only one active session per charger: the earlier one becomes cancelled."""
    first = gateway.create_session(charger_id=charger_id, station_name="S1")
    second = gateway.create_session(charger_id=charger_id, station_name="S1")
    assert get_session(db_session, first).status == "cancelled"
    assert get_session(db_session, first).end_time is not None
    assert get_session(db_session, second).status == "active"
    sessions = gateway.get_sessions(charger_id)
    assert [s.session_id for s in sessions if s.status == "active"] == [second]


def test_unique_index_rejects_second_active_session(db_session, charger_id):
    """The partial unique index enforces a single active session per charger."""
    db_session.add(ChargingSession(charger_id=charger_id, station_name="S1", status="active"))
    db_session.flush()
    db_session.add(ChargingSession(charger_id=charger_id, station_name="S1", status="active"))
    with pytest.raises(IntegrityError):
        db_session.flush()


def test_update_session_stamps_last_updated(gateway, db_session, charger_id):
    session_id = gateway.create_session(charger_id=charger_id, station_name="S1")
    before = get_session(db_session, session_id).last_updated
    gateway.update_session(session_id, {"total_energy": 4.2})
    row = get_session(db_session, session_id)
    assert row.total_energy == 4.2
    assert row.last_updated >= before


def test_update_session_unknown_field_rejected(gateway, charger_id):
    session_id = gateway.create_session(charger_id=charger_id, station_name="S1")
    with pytest.raises(ValueError):
        gateway.update_session(session_id, {"charger_id": "other"})


def test_update_unknown_session_is_noop(gateway):
    gateway.update_session("no-such-session", {"status": "completed"})


def test_save_and_get_latest_command_round_trip(gateway, charger_id):
    """A saved command is returned by get_latest_command until executed."""
    command_id = gateway.save_command(charger_id=charger_id, station_name="S1", command="stop")
    latest = gateway.get_latest_command(charger_id)
    assert latest is not None
    assert latest.command_id == command_id
    assert latest.command == "stop"
    assert latest.charger_id == charger_id
    assert latest.executed is False


def test_mark_command_executed_once(gateway, db_session, charger_id):
    command_id = gateway.save_command(charger_id=charger_id, station_name="S1", command="start")
    gateway.mark_command_executed(command_id, {"status": "charging"})
    row = get_command(db_session, command_id)
    assert row.executed is True
    assert row.response == {"status": "charging"}
    assert row.executed_at is not None
    assert gateway.get_latest_command(charger_id) is None
    # A second completion leaves the first response in place.
    gateway.mark_command_executed(command_id, {"status": "stopped"})
    db_session.expire_all()
    assert get_command(db_session, command_id).response == {"status": "charging"}


def test_log_activity_and_filter_by_level(gateway):
    gateway.log_activity("warning", "low voltage", "test", {"voltage": 180})
    warnings = gateway.get_logs("warning", limit=10)
    assert any(log.message == "low voltage" and log.data == {"voltage": 180} for log in warnings)
    assert all(log.level == "warning" for log in warnings)
