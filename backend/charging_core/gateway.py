"""Persistence gateway: collection-level access to events, sessions, logs and commands.

One gateway wraps one SQLAlchemy session and is injected into each handler.

Failure semantics:
- Reads roll back, record an error log (best-effort) and return an empty result.
- Writes roll back, record an error log (best-effort) and re-raise.
- log_activity never raises; failures only reach the Python logger.

Every successful write also appends an ``info`` SystemLog row with source ``database``.
"""
import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.charging_event import ChargingEvent
from models.charging_session import ChargingSession
from models.command import Command
from models.system_log import LOG_LEVELS, SystemLog
from repositories import command_repository, event_repository, log_repository, session_repository

LOG = logging.getLogger(__name__)

AUDIT_SOURCE = "database"


class PersistenceGateway:
    """CRUD facade over the charging tables with an audit trail."""

    def __init__(self, db: Session) -> None:
        self._db = db

    @property
    def db(self) -> Session:
        return self._db

    def _rollback(self) -> None:
        try:
            self._db.rollback()
        except SQLAlchemyError:
            LOG.exception("Rollback failed")

    # ------------------------------------------------------------------
    # System logs
    # ------------------------------------------------------------------

    def log_activity(self, level: str, message: str, source: str, data: Any = None) -> None:
        """Append a SystemLog row. Never raises."""
        if level not in LOG_LEVELS:
            level = "info"
        try:
            log_repository.create_log(self._db, level=level, message=message, source=source, data=data)
        except Exception:
            LOG.exception("Failed to log activity: %s", message)
            self._rollback()

    def get_logs(self, level: Optional[str] = None, limit: int = 100) -> list[SystemLog]:
        try:
            return log_repository.list_logs(self._db, level=level, limit=limit)
        except SQLAlchemyError:
            LOG.exception("Failed to get logs")
            self._rollback()
            return []

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def log_event(
        self,
        *,
        charger_id: str,
        station_name: str,
        event_type: str,
        data: Optional[dict[str, Any]] = None,
        session_id: Optional[str] = None,
        event_id: Optional[str] = None,
    ) -> str:
        """Append a charging event and return its event_id."""
        try:
            row = event_repository.create_event(
                self._db,
                charger_id=charger_id,
                station_name=station_name,
                event_type=event_type,
                data=data,
                session_id=session_id,
                event_id=event_id,
            )
        except SQLAlchemyError as e:
            self._rollback()
            self.log_activity("error", f"Failed to log event: {e}", AUDIT_SOURCE)
            raise
        self.log_activity(
            "info",
            f"Event logged: {event_type} for charger {charger_id} at {station_name}",
            AUDIT_SOURCE,
        )
        return row.event_id

    def get_events(self, charger_id: Optional[str] = None, limit: int = 100) -> list[ChargingEvent]:
        """Events newest-first."""
        try:
            return event_repository.list_events(self._db, charger_id=charger_id, limit=limit)
        except SQLAlchemyError as e:
            LOG.exception("Failed to get events")
            self._rollback()
            self.log_activity("error", f"Failed to get events: {e}", AUDIT_SOURCE)
            return []

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def create_session(
        self,
        *,
        charger_id: str,
        station_name: str,
        user_id: Optional[str] = None,
        payment_method: Optional[str] = None,
        cost_per_unit: Optional[float] = None,
        cost_per_minute: Optional[float] = None,
        session_id: Optional[str] = None,
    ) -> str:
        """Start an active session (any previous active one is cancelled). Returns session_id."""
        try:
            row = session_repository.create_session(
                self._db,
                charger_id=charger_id,
                station_name=station_name,
                user_id=user_id,
                payment_method=payment_method,
                cost_per_unit=cost_per_unit,
                cost_per_minute=cost_per_minute,
                session_id=session_id,
            )
        except SQLAlchemyError as e:
            self._rollback()
            self.log_activity("error", f"Failed to create session: {e}", AUDIT_SOURCE)
            raise
        self.log_activity(
            "info",
            f"Session created: {row.session_id} for charger {charger_id}",
            AUDIT_SOURCE,
        )
        return row.session_id

    def update_session(self, session_id: str, updates: dict[str, Any]) -> None:
        """Apply partial updates; last_updated is always stamped. Unknown session ids are a no-op."""
        try:
            session_repository.update_session(self._db, session_id, updates)
        except SQLAlchemyError as e:
            self._rollback()
            self.log_activity("error", f"Failed to update session: {e}", AUDIT_SOURCE)
            raise
        self.log_activity("info", f"Session updated: {session_id}", AUDIT_SOURCE)

    def get_sessions(self, charger_id: Optional[str] = None, limit: int = 50) -> list[ChargingSession]:
        """Sessions newest-first by start_time."""
        try:
            return session_repository.list_sessions(self._db, charger_id=charger_id, limit=limit)
        except SQLAlchemyError as e:
            LOG.exception("Failed to get sessions")
            self._rollback()
            self.log_activity("error", f"Failed to get sessions: {e}", AUDIT_SOURCE)
            return []

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def save_command(
        self,
        *,
        charger_id: str,
        station_name: str,
        command: str,
        command_id: Optional[str] = None,
    ) -> str:
        """Persist a pending command and return its command_id."""
        try:
            row = command_repository.create_command(
                self._db,
                charger_id=charger_id,
                station_name=station_name,
                command=command,
                command_id=command_id,
            )
        except SQLAlchemyError as e:
            self._rollback()
            self.log_activity("error", f"Failed to save command: {e}", AUDIT_SOURCE)
            raise
        self.log_activity(
            "info",
            f"Command saved: {command} for charger {charger_id} at {station_name}",
            AUDIT_SOURCE,
        )
        return row.command_id

    def get_latest_command(self, charger_id: str) -> Optional[Command]:
        """Newest not-yet-executed command for the charger, or None."""
        try:
            return command_repository.get_latest_pending_command(self._db, charger_id)
        except SQLAlchemyError as e:
            LOG.exception("Failed to get latest command")
            self._rollback()
            self.log_activity("error", f"Failed to get latest command: {e}", AUDIT_SOURCE)
            return None

    def mark_command_executed(self, command_id: str, response: Optional[dict[str, Any]] = None) -> None:
        """Flip executed to True once and attach the response. Already-executed commands are left alone."""
        try:
            updated = command_repository.mark_command_executed(self._db, command_id, response)
        except SQLAlchemyError as e:
            self._rollback()
            self.log_activity("error", f"Failed to mark command executed: {e}", AUDIT_SOURCE)
            raise
        if updated:
            self.log_activity("info", f"Command executed: {command_id}", AUDIT_SOURCE)
        else:
            self.log_activity(
                "warning",
                f"Command {command_id} not found or already executed",
                AUDIT_SOURCE,
            )
