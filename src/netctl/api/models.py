"""Pydantic models for the command API payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from netctl.domain.callsigns import CallsignLookupResult
from netctl.domain.sessions import LogEntry, NetSession, Participant, SessionBundle


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SessionFields(_CamelModel):
    """Session body; the id comes from the URL."""

    name: str
    frequency: str = ""
    net_control_op: str
    net_control_name: str | None = None
    date_time: str
    end_time: str | None = None
    status: str

    def to_domain(self, session_id: str) -> NetSession:
        return NetSession(id=session_id, **self.model_dump())


class SessionPayload(SessionFields):
    """Session as returned to callers."""

    id: str

    @classmethod
    def from_domain(cls, session: NetSession) -> "SessionPayload":
        return cls(
            id=session.id,
            name=session.name,
            frequency=session.frequency,
            net_control_op=session.net_control_op,
            net_control_name=session.net_control_name,
            date_time=session.date_time,
            end_time=session.end_time,
            status=session.status,
        )


class ParticipantFields(_CamelModel):
    """Participant body; the id comes from the URL."""

    callsign: str
    tactical_call: str | None = None
    name: str | None = None
    location: str | None = None
    check_in_time: str
    check_in_number: int

    def to_domain(self, participant_id: str) -> Participant:
        return Participant(id=participant_id, **self.model_dump())


class ParticipantPayload(ParticipantFields):
    """Participant as returned to callers."""

    id: str

    @classmethod
    def from_domain(cls, participant: Participant) -> "ParticipantPayload":
        return cls(
            id=participant.id,
            callsign=participant.callsign,
            tactical_call=participant.tactical_call,
            name=participant.name,
            location=participant.location,
            check_in_time=participant.check_in_time,
            check_in_number=participant.check_in_number,
        )


class LogEntryFields(_CamelModel):
    """Log entry body; the id comes from the URL."""

    entry_number: int
    time: str
    from_callsign: str
    to_callsign: str
    message: str | None = None

    def to_domain(self, entry_id: str) -> LogEntry:
        return LogEntry(id=entry_id, **self.model_dump())


class LogEntryPayload(LogEntryFields):
    """Log entry as returned to callers."""

    id: str

    @classmethod
    def from_domain(cls, entry: LogEntry) -> "LogEntryPayload":
        return cls(
            id=entry.id,
            entry_number=entry.entry_number,
            time=entry.time,
            from_callsign=entry.from_callsign,
            to_callsign=entry.to_callsign,
            message=entry.message,
        )


class SessionBundlePayload(_CamelModel):
    """Session with its participants and log entries."""

    session: SessionPayload
    participants: list[ParticipantPayload]
    log_entries: list[LogEntryPayload]

    @classmethod
    def from_domain(cls, bundle: SessionBundle) -> "SessionBundlePayload":
        return cls(
            session=SessionPayload.from_domain(bundle.session),
            participants=[ParticipantPayload.from_domain(p) for p in bundle.participants],
            log_entries=[LogEntryPayload.from_domain(e) for e in bundle.log_entries],
        )


class CallsignPayload(_CamelModel):
    """Callsign directory record."""

    callsign: str
    name: str
    city: str
    state: str
    country: str
    grid: str

    @classmethod
    def from_domain(cls, result: CallsignLookupResult) -> "CallsignPayload":
        return cls(
            callsign=result.callsign,
            name=result.name,
            city=result.city,
            state=result.state,
            country=result.country,
            grid=result.grid,
        )


class CreateSessionRequest(_CamelModel):
    """Request to start a new net."""

    name: str
    frequency: str = ""
    net_control_op: str
    net_control_name: str | None = None


class CheckInRequest(_CamelModel):
    """Request to check a station in."""

    callsign: str
    tactical_call: str | None = None
    name: str | None = None
    location: str | None = None


class NewLogEntryRequest(_CamelModel):
    """Request to append a line of traffic."""

    from_callsign: str
    to_callsign: str
    message: str | None = None
