"""Charging session simulator: synthetic power, energy, cost and duration on a fixed tick.

State machine: Idle -> Charging -> {Stopped, Error}. Stopped and Error may start again,
which resets the counters. Each tick advances one simulated second.
"""
import asyncio
import logging
import random
from enum import Enum
from typing import Any, Optional

LOG = logging.getLogger(__name__)

# Power is seeded uniformly in [POWER_SEED_MIN_W, POWER_SEED_MAX_W] and walks within [POWER_MIN_W, POWER_MAX_W].
POWER_SEED_MIN_W = 1000
POWER_SEED_MAX_W = 7000
POWER_MIN_W = 500.0
POWER_MAX_W = 7500.0
POWER_STEP_W = 100
DEFAULT_RATE_PER_KWH = 8.0


class SimulatorState(str, Enum):
    """Simulated session states."""
    Idle = "Idle"
    Charging = "Charging"
    Stopped = "Stopped"
    Error = "Error"


class SessionSimulator:
    """Numeric model of one charger's session. Not thread-safe; driven from a single tick loop."""

    def __init__(
        self,
        charger_id: str,
        rate_per_kwh: float = DEFAULT_RATE_PER_KWH,
        rng: Optional[random.Random] = None,
        power_step_W: int = POWER_STEP_W,
    ) -> None:
        self.charger_id = charger_id
        self.rate_per_kwh = rate_per_kwh
        self.power_step_W = power_step_W
        self._rng = rng or random.Random()
        self.state = SimulatorState.Idle
        self.power_W = 0.0
        self.energy_kWh = 0.0
        self.cost = 0.0
        self.duration_s = 0
        self.error_message: Optional[str] = None

    @property
    def is_charging(self) -> bool:
        return self.state == SimulatorState.Charging

    def start(self) -> None:
        """Enter Charging with fresh counters and a seeded power level."""
        self.energy_kWh = 0.0
        self.cost = 0.0
        self.duration_s = 0
        self.error_message = None
        self.power_W = float(self._rng.randint(POWER_SEED_MIN_W, POWER_SEED_MAX_W))
        self.state = SimulatorState.Charging

    def tick(self) -> None:
        """Advance one simulated second. No-op unless Charging.

        Energy accrues at the power held during the tick; the random walk is applied afterwards.
        """
        if self.state != SimulatorState.Charging:
            return
        self.duration_s += 1
        self.energy_kWh += (self.power_W / 1000.0) * (1.0 / 3600.0)
        self.cost = self.energy_kWh * self.rate_per_kwh
        if self.power_step_W:
            step = self._rng.randint(-self.power_step_W, self.power_step_W)
            self.power_W = max(POWER_MIN_W, min(POWER_MAX_W, self.power_W + step))

    def stop(self) -> None:
        """Enter Stopped; power drops to 0, totals are kept."""
        self.state = SimulatorState.Stopped
        self.power_W = 0.0

    def fail(self, message: str = "") -> None:
        """Enter Error; power drops to 0, totals are kept."""
        self.state = SimulatorState.Error
        self.error_message = message or None
        self.power_W = 0.0

    def snapshot(self) -> dict[str, Any]:
        """Current values in the shape served by GET /charging-status."""
        return {
            "charger_id": self.charger_id,
            "status": self.state.value,
            "power": round(self.power_W / 1000.0, 3),  # kW
            "energy": round(self.energy_kWh, 6),  # kWh
            "amount_paid": round(self.cost, 2),
            "duration": self.duration_s,
            "rate_per_kwh": self.rate_per_kwh,
            "error_message": self.error_message,
        }


async def _tick_loop(sim: SessionSimulator, interval_s: float, stop_event: asyncio.Event) -> None:
    """Tick every interval_s while Charging. Exits when stop_event is set or the state changes.

    An exception raised by tick moves the simulator to Error.
    """
    while not stop_event.is_set() and sim.is_charging:
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval_s)
        except asyncio.TimeoutError:
            try:
                sim.tick()
            except Exception as e:
                LOG.exception("Simulator tick failed for charger %s", sim.charger_id)
                sim.fail(str(e))


def start_tick_loop(sim: SessionSimulator, interval_s: float = 1.0) -> tuple[asyncio.Task, asyncio.Event]:
    """Start the tick task on the running loop. Returns (task, stop_event)."""
    stop_event = asyncio.Event()
    task = asyncio.create_task(_tick_loop(sim, interval_s, stop_event))
    return task, stop_event
