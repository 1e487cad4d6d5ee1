"""Net control workflow: sessions, check-ins and traffic."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

from netctl.domain.errors import InvalidInputError, NotFoundError
from netctl.domain.sessions import (
    STATUS_ACTIVE,
    STATUS_CLOSED,
    STATUS_PENDING,
    LogEntry,
    NetSession,
    Participant,
    SessionBundle,
)
from netctl.services import ics309
from netctl.services.records import RecordService

NET_CONTROL_TACTICAL_CALL = "NET"
NET_CONTROL_STATION = "NC"
CHECK_IN_MESSAGE = "check in"

_logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class NetControlService:
    """Runs a net on top of the record service.

    Identities are generated here, before anything reaches the store, and
    check-in and entry numbers are assigned as the next number after the
    highest one already saved for the session.
    """

    records: RecordService
    new_id: Callable[[], str] = field(default=_new_id)
    clock: Callable[[], datetime] = field(default=_utcnow)

    def create_session(
        self,
        name: str,
        frequency: str,
        net_control_op: str,
        net_control_name: str | None = None,
    ) -> SessionBundle:
        """Create a pending session with net control checked in as #1."""
        now = self._timestamp()
        operator = _require_callsign(net_control_op)
        session = NetSession(
            id=self.new_id(),
            name=name.strip(),
            frequency=frequency.strip(),
            net_control_op=operator,
            net_control_name=net_control_name,
            date_time=now,
            end_time=None,
            status=STATUS_PENDING,
        )
        net_control = Participant(
            id=self.new_id(),
            callsign=operator,
            tactical_call=NET_CONTROL_TACTICAL_CALL,
            name=net_control_name,
            location=None,
            check_in_time=now,
            check_in_number=1,
        )
        self.records.save_session(session)
        self.records.save_participant(session.id, net_control)
        _logger.info("Created net %s (%s) for %s", session.name, session.id, operator)
        return SessionBundle(session=session, participants=[net_control], log_entries=[])

    def open_session(self, session_id: str) -> NetSession:
        """Move a pending session to active."""
        session = self._require_session(session_id)
        if session.status != STATUS_PENDING:
            return session
        opened = replace(session, status=STATUS_ACTIVE, end_time=None)
        self.records.save_session(opened)
        _logger.info("Opened net %s", session_id)
        return opened

    def close_session(self, session_id: str) -> NetSession:
        """Close a session and stamp its end time."""
        session = self._require_session(session_id)
        closed = replace(session, status=STATUS_CLOSED, end_time=self._timestamp())
        self.records.save_session(closed)
        _logger.info("Closed net %s", session_id)
        return closed

    def check_in(
        self,
        session_id: str,
        callsign: str,
        tactical_call: str | None = None,
        name: str | None = None,
        location: str | None = None,
    ) -> Participant:
        """Check a station in; logs the check-in while the net is active."""
        station = _require_callsign(callsign)
        session = self._require_session(session_id)
        existing = self.records.load_participants(session_id)
        participant = Participant(
            id=self.new_id(),
            callsign=station,
            tactical_call=_clean(tactical_call),
            name=_clean(name),
            location=_clean(location),
            check_in_time=self._timestamp(),
            check_in_number=max((p.check_in_number for p in existing), default=0) + 1,
        )
        self.records.save_participant(session_id, participant)
        if session.status == STATUS_ACTIVE:
            self.add_log_entry(
                session_id,
                from_callsign=participant.callsign,
                to_callsign=NET_CONTROL_STATION,
                message=CHECK_IN_MESSAGE,
            )
        return participant

    def add_log_entry(
        self,
        session_id: str,
        from_callsign: str,
        to_callsign: str,
        message: str | None = None,
    ) -> LogEntry:
        """Append a line of traffic to the session log."""
        self._require_session(session_id)
        existing = self.records.load_log_entries(session_id)
        entry = LogEntry(
            id=self.new_id(),
            entry_number=max((e.entry_number for e in existing), default=0) + 1,
            time=self._timestamp(),
            from_callsign=from_callsign.strip(),
            to_callsign=to_callsign.strip(),
            message=_clean(message),
        )
        self.records.save_log_entry(session_id, entry)
        return entry

    def import_csv(self, text: str) -> SessionBundle:
        """Create a new session from an ICS 309 CSV document."""
        bundle = ics309.parse_csv(text, new_id=self.new_id, now=self._timestamp())
        self.records.save_session(bundle.session)
        for participant in bundle.participants:
            self.records.save_participant(bundle.session.id, participant)
        for entry in bundle.log_entries:
            self.records.save_log_entry(bundle.session.id, entry)
        _logger.info(
            "Imported net %s with %s check-ins and %s log entries",
            bundle.session.id,
            len(bundle.participants),
            len(bundle.log_entries),
        )
        return bundle

    def _require_session(self, session_id: str) -> NetSession:
        session = self.records.load_session(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        return session

    def _timestamp(self) -> str:
        return self.clock().astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def display_callsign(participants: list[Participant], callsign: str) -> str:
    """Return ``TACTICAL (CALLSIGN)`` when the station uses a tactical call."""
    for participant in participants:
        if participant.callsign == callsign and participant.tactical_call:
            return f"{participant.tactical_call} ({callsign})"
    return callsign


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _require_callsign(callsign: str) -> str:
    normalized = callsign.strip().upper()
    if not normalized:
        raise InvalidInputError("Callsign is required")
    return normalized
