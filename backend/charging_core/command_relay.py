"""Command relay: record start/stop/status/reset intents for a polling charger consumer.

Commands are persisted through the gateway and mirrored into a CommandCache so a poller
still gets the latest command when the database has nothing pending. Repeated polls are
not de-duplicated: a pending command is returned until something marks it executed.
"""
from dataclasses import dataclass
import logging
from typing import Optional

from charging_core.command_cache import CommandCache
from charging_core.errors import InvalidCommandError, MissingFieldsError
from charging_core.gateway import PersistenceGateway
from charging_core.simulator_registry import SimulatorRegistry
from models.command import VALID_COMMANDS
from utils.clock import to_millis

LOG = logging.getLogger(__name__)

# Commands accepted by the simple (charger-agnostic) relay.
SIMPLE_COMMANDS = ("start", "stop")
SIMPLE_COMMAND_KEY = "*"


@dataclass(frozen=True)
class PendingCommand:
    """Command handed to a poller, from the database or the cache."""

    charger_id: str
    command: str
    timestamp: int  # epoch ms
    station_name: Optional[str] = None
    command_id: Optional[str] = None
    source: str = "database"  # "database" | "cache"


def _require(**fields: Optional[str]) -> None:
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise MissingFieldsError(missing)


def relay_command(
    gateway: PersistenceGateway,
    cache: CommandCache,
    command: Optional[str],
    charger_id: Optional[str],
    station_name: Optional[str],
    simulators: Optional[SimulatorRegistry] = None,
) -> str:
    """Validate, persist and cache a command. Returns the new command_id.

    ``start`` first opens an active session for the charger (nothing is saved or cached
    when that fails), then starts its simulator;
    ``stop`` stops the simulator. Raises MissingFieldsError or InvalidCommandError
    before anything is written.
    """
    _require(command=command, chargerId=charger_id, stationName=station_name)
    if command not in VALID_COMMANDS:
        raise InvalidCommandError(command)
    if command == "start":
        # A start whose session cannot be opened must not reach the charger.
        gateway.create_session(charger_id=charger_id, station_name=station_name)
    command_id = gateway.save_command(charger_id=charger_id, station_name=station_name, command=command)
    cache.put(charger_id, command, station_name=station_name, command_id=command_id)
    if command == "start" and simulators is not None:
        simulators.start(charger_id)
    elif command == "stop" and simulators is not None:
        simulators.stop(charger_id)
    gateway.log_activity(
        "info",
        f"Command '{command}' sent to charger {charger_id} at {station_name}",
        "api",
    )
    LOG.info("Relayed command %s to charger %s (%s)", command, charger_id, command_id)
    return command_id


def latest_command(
    gateway: PersistenceGateway,
    cache: CommandCache,
    charger_id: str,
) -> Optional[PendingCommand]:
    """Latest pending command for a charger: database first, then cache, else None."""
    row = gateway.get_latest_command(charger_id)
    if row is not None:
        return PendingCommand(
            charger_id=row.charger_id,
            command=row.command,
            timestamp=to_millis(row.timestamp),
            station_name=row.station_name,
            command_id=row.command_id,
        )
    cached = cache.get(charger_id)
    if cached is not None:
        return PendingCommand(
            charger_id=cached.charger_id,
            command=cached.command,
            timestamp=cached.timestamp,
            station_name=cached.station_name,
            command_id=cached.command_id,
            source="cache",
        )
    return None


def set_simple_command(cache: CommandCache, command: Optional[str]) -> PendingCommand:
    """Store the latest charger-agnostic start/stop command."""
    if command not in SIMPLE_COMMANDS:
        raise InvalidCommandError(command)
    entry = cache.put(SIMPLE_COMMAND_KEY, command)
    LOG.info("Received simple command: %s", command)
    return PendingCommand(charger_id=SIMPLE_COMMAND_KEY, command=entry.command, timestamp=entry.timestamp, source="cache")


def get_simple_command(cache: CommandCache) -> Optional[PendingCommand]:
    """Latest charger-agnostic command, or None."""
    entry = cache.get(SIMPLE_COMMAND_KEY)
    if entry is None:
        return None
    return PendingCommand(charger_id=SIMPLE_COMMAND_KEY, command=entry.command, timestamp=entry.timestamp, source="cache")
