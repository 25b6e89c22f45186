"""Telemetry ingest: turn a charger's status report into events, session updates and command completions."""
import logging
from typing import Any, Optional

from charging_core.command_cache import CommandCache
from charging_core.errors import MissingFieldsError
from charging_core.gateway import PersistenceGateway
from charging_core.simulator_registry import SimulatorRegistry
from utils.clock import now_ms, utcnow

LOG = logging.getLogger(__name__)

SOURCE = "esp32"
REQUIRED_FIELDS = ("chargerId", "stationName", "status")


def normalize_report(report: dict[str, Any]) -> dict[str, Any]:
    """Validate required fields and return the report with a millisecond timestamp.

    Raises MissingFieldsError when chargerId, stationName or status is absent or blank.
    """
    missing = [
        name
        for name in REQUIRED_FIELDS
        if report.get(name) is None or not str(report.get(name)).strip()
    ]
    if missing:
        raise MissingFieldsError(missing)
    # Firmware may send numeric ids; they are stored as text.
    return {
        "chargerId": str(report["chargerId"]),
        "stationName": str(report["stationName"]),
        "status": str(report["status"]),
        "duration": report.get("duration"),
        "costPerUnit": report.get("costPerUnit"),
        "costPerMinute": report.get("costPerMinute"),
        "totalCost": report.get("totalCost"),
        "commandId": report.get("commandId"),
        "timestamp": now_ms(),
    }


def event_type_for_status(status: str) -> str:
    """'stopped' -> 'stop', 'error' -> 'error', anything else -> 'status_update'."""
    if status == "stopped":
        return "stop"
    if status == "error":
        return "error"
    return "status_update"


def process_status_report(
    gateway: PersistenceGateway,
    report: dict[str, Any],
    cache: Optional[CommandCache] = None,
    simulators: Optional[SimulatorRegistry] = None,
) -> dict[str, Any]:
    """Record a status report and return the normalized payload.

    1. Always logs a ChargingEvent.
    2. On 'stopped' stops the simulator and, with a duration, completes the charger's
       active session, if any.
    3. With a commandId, marks that command executed with the report as its response.

    Validation happens before any write. Duplicate reports are not detected; a repeated
    'stopped' finds no active session and leaves sessions untouched.
    """
    received = normalize_report(report)
    charger_id = received["chargerId"]
    status = received["status"]

    sessions = gateway.get_sessions(charger_id, limit=1)
    active = sessions[0] if sessions and sessions[0].status == "active" else None
    gateway.log_event(
        charger_id=charger_id,
        station_name=received["stationName"],
        event_type=event_type_for_status(status),
        data={
            "status": status,
            "duration": received["duration"],
            "costPerUnit": received["costPerUnit"],
            "costPerMinute": received["costPerMinute"],
            "totalCost": received["totalCost"],
        },
        session_id=active.session_id if active is not None else None,
    )

    if status == "stopped":
        if received["duration"] is not None:
            _complete_session(gateway, active, received)
        if simulators is not None:
            simulators.stop(charger_id)
    elif status == "error" and simulators is not None:
        simulators.fail(charger_id, "Charger reported error")

    command_id = received["commandId"]
    if command_id:
        gateway.mark_command_executed(
            command_id,
            {
                "status": status,
                "duration": received["duration"],
                "costPerUnit": received["costPerUnit"],
                "costPerMinute": received["costPerMinute"],
                "totalCost": received["totalCost"],
                "message": "Command executed successfully",
            },
        )
        if cache is not None:
            cache.discard(charger_id, command_id)

    gateway.log_activity("info", f"ESP32 response processed for charger {charger_id}", SOURCE, received)
    return received


def _complete_session(gateway: PersistenceGateway, active: Any, received: dict[str, Any]) -> None:
    """Complete the charger's most recent session when it is still active."""
    if active is None:
        LOG.info("No active session to complete for charger %s", received["chargerId"])
        return
    gateway.update_session(
        active.session_id,
        {
            "status": "completed",
            "end_time": utcnow(),
            "duration": received["duration"],
            "total_cost": received["totalCost"],
            "cost_per_unit": received["costPerUnit"],
            "cost_per_minute": received["costPerMinute"],
        },
    )
