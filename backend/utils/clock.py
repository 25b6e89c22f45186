"""Time helpers shared by models, repositories and API responses."""
from datetime import datetime, timezone
import time


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def as_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_millis(dt: datetime | None) -> int | None:
    """Epoch milliseconds for a datetime, or None."""
    if dt is None:
        return None
    return int(as_utc(dt).timestamp() * 1000)
