# Charging core: persistence gateway, command relay, telemetry ingest, session simulator
from charging_core.command_cache import CachedCommand, CommandCache
from charging_core.gateway import PersistenceGateway
from charging_core.session_simulator import SessionSimulator, SimulatorState
from charging_core.simulator_registry import SimulatorRegistry

__all__ = [
    "CachedCommand",
    "CommandCache",
    "PersistenceGateway",
    "SessionSimulator",
    "SimulatorRegistry",
    "SimulatorState",
]
