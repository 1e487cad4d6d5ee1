"""Domain models for net control sessions."""

from dataclasses import dataclass

STATUS_PENDING = "pending"
STATUS_ACTIVE = "active"
STATUS_CLOSED = "closed"


@dataclass(frozen=True)
class NetSession:
    """A single radio net run by one net control operator."""

    id: str
    name: str
    frequency: str
    net_control_op: str
    net_control_name: str | None
    date_time: str
    end_time: str | None
    status: str


@dataclass(frozen=True)
class Participant:
    """A station checked in to a session."""

    id: str
    callsign: str
    tactical_call: str | None
    name: str | None
    location: str | None
    check_in_time: str
    check_in_number: int


@dataclass(frozen=True)
class LogEntry:
    """A single line of traffic in the communications log."""

    id: str
    entry_number: int
    time: str
    from_callsign: str
    to_callsign: str
    message: str | None


@dataclass(frozen=True)
class SessionBundle:
    """A session with its check-ins and log entries."""

    session: NetSession
    participants: list[Participant]
    log_entries: list[LogEntry]
