"""Process-local fallback cache of the latest command per charger.

Entries expire ``ttl_s`` seconds after they are stored (checked lazily on read) and the
oldest entry is evicted once ``max_entries`` is exceeded. Contents are lost on restart.
"""
from collections import OrderedDict
from dataclasses import dataclass
import threading
import time
from typing import Callable, Optional

from utils.clock import now_ms


@dataclass(frozen=True)
class CachedCommand:
    """Latest command relayed to a charger."""

    charger_id: str
    command: str
    station_name: Optional[str]
    timestamp: int  # epoch ms
    command_id: Optional[str] = None


class CommandCache:
    """Thread-safe TTL + size bounded map of charger_id -> CachedCommand."""

    def __init__(
        self,
        ttl_s: float = 300.0,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._ttl_s = ttl_s
        self._max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, tuple[float, CachedCommand]]" = OrderedDict()
        self._lock = threading.Lock()

    def put(
        self,
        charger_id: str,
        command: str,
        station_name: Optional[str] = None,
        command_id: Optional[str] = None,
    ) -> CachedCommand:
        """Store (or replace) the latest command for a charger and return it."""
        entry = CachedCommand(
            charger_id=charger_id,
            command=command,
            station_name=station_name,
            timestamp=now_ms(),
            command_id=command_id,
        )
        with self._lock:
            self._entries.pop(charger_id, None)
            self._entries[charger_id] = (self._clock() + self._ttl_s, entry)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
        return entry

    def get(self, charger_id: str) -> Optional[CachedCommand]:
        """Return the cached command or None when missing or expired."""
        with self._lock:
            item = self._entries.get(charger_id)
            if item is None:
                return None
            expires_at, entry = item
            if self._clock() >= expires_at:
                del self._entries[charger_id]
                return None
            return entry

    def discard(self, charger_id: str, command_id: Optional[str] = None) -> bool:
        """Drop the entry for a charger. With command_id, only when it matches. Returns True if removed."""
        with self._lock:
            item = self._entries.get(charger_id)
            if item is None:
                return False
            if command_id is not None and item[1].command_id != command_id:
                return False
            del self._entries[charger_id]
            return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
