"""Persistence of sessions, check-ins and log entries."""

import logging
from dataclasses import dataclass
from typing import Protocol

from netctl.domain.errors import NotFoundError
from netctl.domain.sessions import LogEntry, NetSession, Participant, SessionBundle

_logger = logging.getLogger(__name__)


class RecordRepository(Protocol):
    """Persistence interface for net control records."""

    def save_session(self, session: NetSession) -> None:
        """Insert or fully replace a session."""

    def save_participant(self, session_id: str, participant: Participant) -> None:
        """Insert or fully replace a participant of a session."""

    def save_log_entry(self, session_id: str, entry: LogEntry) -> None:
        """Insert or fully replace a log entry of a session."""

    def get_session(self, session_id: str) -> NetSession | None:
        """Return a session by id, if present."""

    def list_participants(self, session_id: str) -> list[Participant]:
        """Return a session's participants ordered by check-in number."""

    def list_log_entries(self, session_id: str) -> list[LogEntry]:
        """Return a session's log entries ordered by entry number."""


@dataclass
class RecordService:
    """Application service for saving and replaying net records.

    Every save is an independent full-record upsert. Saving a session, its
    participants and its log entries are separate durable writes.
    """

    repository: RecordRepository

    def save_session(self, session: NetSession) -> None:
        """Persist a session."""
        self.repository.save_session(session)
        _logger.debug("Saved session %s (%s)", session.id, session.status)

    def save_participant(self, session_id: str, participant: Participant) -> None:
        """Persist a participant under a session."""
        self.repository.save_participant(session_id, participant)
        _logger.debug(
            "Saved participant %s #%s for session %s",
            participant.callsign,
            participant.check_in_number,
            session_id,
        )

    def save_log_entry(self, session_id: str, entry: LogEntry) -> None:
        """Persist a log entry under a session."""
        self.repository.save_log_entry(session_id, entry)
        _logger.debug(
            "Saved log entry #%s for session %s", entry.entry_number, session_id
        )

    def load_session(self, session_id: str) -> NetSession | None:
        """Return a session by id, or None when it does not exist."""
        return self.repository.get_session(session_id)

    def load_participants(self, session_id: str) -> list[Participant]:
        """Return all participants of a session."""
        return self.repository.list_participants(session_id)

    def load_log_entries(self, session_id: str) -> list[LogEntry]:
        """Return all log entries of a session."""
        return self.repository.list_log_entries(session_id)

    def load_session_bundle(self, session_id: str) -> SessionBundle:
        """Return a session with its participants and log entries."""
        session = self.repository.get_session(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        return SessionBundle(
            session=session,
            participants=self.repository.list_participants(session_id),
            log_entries=self.repository.list_log_entries(session_id),
        )
