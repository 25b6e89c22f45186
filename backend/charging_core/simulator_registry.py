"""Registry of session simulators keyed by charger id, one tick task each.

Tasks are cancelled on stop, on error, on restart and on shutdown. Methods that start a
tick loop must be called from a running event loop.
"""
import asyncio
import logging
import random
from typing import Any, Optional

from charging_core.session_simulator import (
    DEFAULT_RATE_PER_KWH,
    SessionSimulator,
    SimulatorState,
    start_tick_loop,
)

LOG = logging.getLogger(__name__)


class SimulatorRegistry:
    """Owns simulators and their tick tasks."""

    def __init__(
        self,
        tick_interval_s: float = 1.0,
        rate_per_kwh: float = DEFAULT_RATE_PER_KWH,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.tick_interval_s = tick_interval_s
        self.rate_per_kwh = rate_per_kwh
        self._rng = rng
        self._simulators: dict[str, SessionSimulator] = {}
        self._tasks: dict[str, tuple[asyncio.Task, asyncio.Event]] = {}

    def get(self, charger_id: str) -> Optional[SessionSimulator]:
        """Simulator for a charger or None."""
        return self._simulators.get(charger_id)

    def get_all(self) -> list[SessionSimulator]:
        return list(self._simulators.values())

    def start(self, charger_id: str) -> SessionSimulator:
        """(Re)start charging for a charger; any previous tick task is cancelled first."""
        self._cancel_task(charger_id)
        sim = self._simulators.get(charger_id)
        if sim is None:
            sim = SessionSimulator(charger_id, rate_per_kwh=self.rate_per_kwh, rng=self._rng)
            self._simulators[charger_id] = sim
        sim.start()
        self._tasks[charger_id] = start_tick_loop(sim, self.tick_interval_s)
        LOG.info("Simulator started for charger %s at %.0f W", charger_id, sim.power_W)
        return sim

    def stop(self, charger_id: str) -> bool:
        """Stop the charger's simulator. Returns False if none exists."""
        sim = self._simulators.get(charger_id)
        if sim is None:
            return False
        self._cancel_task(charger_id)
        if sim.state == SimulatorState.Charging:
            sim.stop()
            LOG.info("Simulator stopped for charger %s", charger_id)
        return True

    def fail(self, charger_id: str, message: str = "") -> bool:
        """Move the charger's simulator to Error. Returns False if none exists."""
        sim = self._simulators.get(charger_id)
        if sim is None:
            return False
        self._cancel_task(charger_id)
        sim.fail(message)
        LOG.warning("Simulator error for charger %s: %s", charger_id, message)
        return True

    def snapshot(self, charger_id: str) -> dict[str, Any]:
        """Current values; an Idle zero snapshot when the charger has no simulator."""
        sim = self._simulators.get(charger_id)
        if sim is None:
            return SessionSimulator(charger_id, rate_per_kwh=self.rate_per_kwh).snapshot()
        return sim.snapshot()

    def _cancel_task(self, charger_id: str) -> None:
        item = self._tasks.pop(charger_id, None)
        if item is None:
            return
        task, stop_event = item
        stop_event.set()
        task.cancel()

    async def shutdown(self) -> None:
        """Cancel every tick task and wait for them to finish."""
        items = list(self._tasks.values())
        self._tasks.clear()
        for task, stop_event in items:
            stop_event.set()
            task.cancel()
        if items:
            await asyncio.gather(*(task for task, _ in items), return_exceptions=True)

    def clear(self) -> None:
        """Forget all simulators (tests). Tick tasks are cancelled."""
        for charger_id in list(self._tasks):
            self._cancel_task(charger_id)
        self._simulators.clear()
