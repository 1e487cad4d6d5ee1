"""SQLite-backed repository for sessions, participants and log entries."""

import sqlite3
from dataclasses import dataclass

from netctl.adapters.sqlite_store import SqliteStore
from netctl.domain.errors import StorageError
from netctl.domain.sessions import LogEntry, NetSession, Participant
from netctl.services.records import RecordRepository


@dataclass
class SqliteRecordRepository(RecordRepository):
    """SQLite implementation of the record repository."""

    store: SqliteStore

    def save_session(self, session: NetSession) -> None:
        """Insert or replace a session row."""
        with self.store.transaction() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO sessions (
                    id, name, frequency, net_control_op, net_control_name,
                    date_time, end_time, status
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    session.id,
                    session.name,
                    session.frequency,
                    session.net_control_op,
                    session.net_control_name,
                    session.date_time,
                    session.end_time,
                    session.status,
                ),
            )

    def save_participant(self, session_id: str, participant: Participant) -> None:
        """Insert or replace a participant row."""
        with self.store.transaction() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO participants (
                    id, session_id, callsign, tactical_call, name, location,
                    check_in_time, check_in_number
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    participant.id,
                    session_id,
                    participant.callsign,
                    participant.tactical_call,
                    participant.name,
                    participant.location,
                    participant.check_in_time,
                    participant.check_in_number,
                ),
            )

    def save_log_entry(self, session_id: str, entry: LogEntry) -> None:
        """Insert or replace a log entry row."""
        with self.store.transaction() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO log_entries (
                    id, session_id, entry_number, time, from_callsign,
                    to_callsign, message
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    session_id,
                    entry.entry_number,
                    entry.time,
                    entry.from_callsign,
                    entry.to_callsign,
                    entry.message,
                ),
            )

    def get_session(self, session_id: str) -> NetSession | None:
        """Return a session by id, if present."""
        with self.store.transaction() as conn:
            row = conn.execute(
                """
                SELECT id, name, frequency, net_control_op, net_control_name,
                       date_time, end_time, status
                FROM sessions WHERE id = ?
                """,
                (session_id,),
            ).fetchone()
        if row is None:
            return None
        return _session_from_row(row)

    def list_participants(self, session_id: str) -> list[Participant]:
        """Return participants of a session by check-in number."""
        with self.store.transaction() as conn:
            rows = conn.execute(
                """
                SELECT id, callsign, tactical_call, name, location,
                       check_in_time, check_in_number
                FROM participants WHERE session_id = ?
                ORDER BY check_in_number
                """,
                (session_id,),
            ).fetchall()
        return [_participant_from_row(row) for row in rows]

    def list_log_entries(self, session_id: str) -> list[LogEntry]:
        """Return log entries of a session by entry number."""
        with self.store.transaction() as conn:
            rows = conn.execute(
                """
                SELECT id, entry_number, time, from_callsign, to_callsign, message
                FROM log_entries WHERE session_id = ?
                ORDER BY entry_number
                """,
                (session_id,),
            ).fetchall()
        return [_log_entry_from_row(row) for row in rows]


def _session_from_row(row: sqlite3.Row) -> NetSession:
    try:
        return NetSession(
            id=_required_text(row["id"]),
            name=_required_text(row["name"]),
            frequency=row["frequency"] or "",
            net_control_op=_required_text(row["net_control_op"]),
            net_control_name=row["net_control_name"],
            date_time=_required_text(row["date_time"]),
            end_time=row["end_time"],
            status=_required_text(row["status"]),
        )
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Malformed session row: {exc}") from exc


def _participant_from_row(row: sqlite3.Row) -> Participant:
    try:
        return Participant(
            id=_required_text(row["id"]),
            callsign=_required_text(row["callsign"]),
            tactical_call=row["tactical_call"],
            name=row["name"],
            location=row["location"],
            check_in_time=_required_text(row["check_in_time"]),
            check_in_number=int(row["check_in_number"]),
        )
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Malformed participant row: {exc}") from exc


def _log_entry_from_row(row: sqlite3.Row) -> LogEntry:
    try:
        return LogEntry(
            id=_required_text(row["id"]),
            entry_number=int(row["entry_number"]),
            time=_required_text(row["time"]),
            from_callsign=_required_text(row["from_callsign"]),
            to_callsign=_required_text(row["to_callsign"]),
            message=row["message"],
        )
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Malformed log entry row: {exc}") from exc


def _required_text(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected text, got {type(value).__name__}")
    return value
