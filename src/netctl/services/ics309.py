"""ICS 309 communications log CSV export and import."""

import csv
import io
from collections.abc import Callable

from netctl.domain.sessions import (
    STATUS_ACTIVE,
    LogEntry,
    NetSession,
    Participant,
    SessionBundle,
)

TITLE = "ICS 309 Communications Log"
PARTICIPANTS_SECTION = "Participants"
LOG_SECTION = "Communications Log"
PARTICIPANT_HEADER = ["Check-In #", "Callsign", "Tactical", "Name", "Location", "Time"]
LOG_HEADER = ["Entry #", "Time", "From", "To", "Message"]

_NET_TACTICAL_CALL = "NET"
_DEFAULT_NET_NAME = "Imported Net"


def export_csv(bundle: SessionBundle) -> str:
    """Render a session as an ICS 309 CSV document."""
    session = bundle.session
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([TITLE])
    writer.writerow(["Net Name", session.name])
    writer.writerow(["Frequency", session.frequency])
    writer.writerow(["Net Control", _format_net_control(session)])
    writer.writerow(["Date/Time", session.date_time])
    writer.writerow([])
    writer.writerow([PARTICIPANTS_SECTION])
    writer.writerow(PARTICIPANT_HEADER)
    for participant in bundle.participants:
        writer.writerow(
            [
                participant.check_in_number,
                participant.callsign,
                participant.tactical_call or "",
                participant.name or "",
                participant.location or "",
                participant.check_in_time,
            ]
        )
    writer.writerow([])
    writer.writerow([LOG_SECTION])
    writer.writerow(LOG_HEADER)
    for entry in bundle.log_entries:
        writer.writerow(
            [
                entry.entry_number,
                entry.time,
                entry.from_callsign,
                entry.to_callsign,
                entry.message or "",
            ]
        )
    return buffer.getvalue()


def parse_csv(text: str, new_id: Callable[[], str], now: str) -> SessionBundle:
    """Read an ICS 309 CSV document into a new, active session.

    Every record gets a fresh id from ``new_id``; ``now`` is used for missing
    timestamps. The net control operator is added as a ``NET`` check-in when
    the participant list does not already contain them.
    """
    rows = list(csv.reader(io.StringIO(text, newline="")))
    labels = _read_labels(rows)

    date_time = labels.get("Date/Time") or now
    op_raw, _, name_raw = labels.get("Net Control", "").partition(" - ")
    net_control_op = op_raw.strip().upper() or _NET_TACTICAL_CALL
    net_control_name = name_raw.strip() or None

    participants: list[Participant] = []
    log_entries: list[LogEntry] = []
    section: str | None = None
    for row in rows:
        if not any(field.strip() for field in row):
            continue
        first = row[0]
        if first in {PARTICIPANTS_SECTION, LOG_SECTION}:
            section = first
            continue
        if first in {PARTICIPANT_HEADER[0], LOG_HEADER[0]} or section is None:
            continue
        if section == PARTICIPANTS_SECTION:
            participant = _parse_participant(row, new_id, date_time, len(participants))
            if participant is not None:
                participants.append(participant)
        else:
            entry = _parse_log_entry(row, new_id, date_time, len(log_entries))
            if entry is not None:
                log_entries.append(entry)

    if not any(p.callsign == net_control_op for p in participants):
        next_number = max((p.check_in_number for p in participants), default=0) + 1
        participants.insert(
            0,
            Participant(
                id=new_id(),
                callsign=net_control_op,
                tactical_call=_NET_TACTICAL_CALL,
                name=net_control_name,
                location=None,
                check_in_time=date_time,
                check_in_number=next_number,
            ),
        )

    session = NetSession(
        id=new_id(),
        name=labels.get("Net Name") or _DEFAULT_NET_NAME,
        frequency=labels.get("Frequency", ""),
        net_control_op=net_control_op,
        net_control_name=net_control_name,
        date_time=date_time,
        end_time=None,
        status=STATUS_ACTIVE,
    )
    return SessionBundle(
        session=session, participants=participants, log_entries=log_entries
    )


def _format_net_control(session: NetSession) -> str:
    if session.net_control_name:
        return f"{session.net_control_op} - {session.net_control_name}"
    return session.net_control_op


def _read_labels(rows: list[list[str]]) -> dict[str, str]:
    labels: dict[str, str] = {}
    for row in rows:
        if len(row) < 2:  # noqa: PLR2004
            continue
        label = row[0]
        if label in {"Net Name", "Frequency", "Net Control", "Date/Time"}:
            labels.setdefault(label, ",".join(row[1:]).strip())
    return labels


def _parse_participant(
    row: list[str], new_id: Callable[[], str], default_time: str, position: int
) -> Participant | None:
    number, callsign, tactical, name, location, check_in_time = _pad(row, 6)
    if not callsign.strip():
        return None
    return Participant(
        id=new_id(),
        callsign=callsign.strip().upper(),
        tactical_call=tactical.strip() or None,
        name=name.strip() or None,
        location=location.strip() or None,
        check_in_time=check_in_time.strip() or default_time,
        check_in_number=_parse_number(number, position + 1),
    )


def _parse_log_entry(
    row: list[str], new_id: Callable[[], str], default_time: str, position: int
) -> LogEntry | None:
    number, time, from_callsign, to_callsign, message = _pad(row, 5)
    if not (from_callsign.strip() or to_callsign.strip() or message.strip()):
        return None
    return LogEntry(
        id=new_id(),
        entry_number=_parse_number(number, position + 1),
        time=time.strip() or default_time,
        from_callsign=from_callsign.strip(),
        to_callsign=to_callsign.strip(),
        message=message.strip() or None,
    )


def _pad(row: list[str], width: int) -> list[str]:
    return (row + [""] * width)[:width]


def _parse_number(raw: str, fallback: int) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        return fallback
