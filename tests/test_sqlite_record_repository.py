"""Tests for the SQLite record repository through the record service."""

import pytest

from netctl.adapters.sqlite_record_repository import SqliteRecordRepository
from netctl.adapters.sqlite_store import SqliteStore
from netctl.domain.errors import NotFoundError, StorageError
from netctl.services.records import RecordService
from tests.conftest import make_log_entry, make_participant, make_session


@pytest.fixture
def service(store: SqliteStore) -> RecordService:
    return RecordService(SqliteRecordRepository(store))


def _count(store: SqliteStore, table: str) -> int:
    return store.connection.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


def test_session_round_trip(service: RecordService) -> None:
    session = make_session(status="closed", end_time="2024-01-01T10:00:00Z")

    service.save_session(session)
    bundle = service.load_session_bundle(session.id)

    assert bundle.session == session
    assert bundle.participants == []
    assert bundle.log_entries == []


def test_session_round_trip_keeps_optional_fields_empty(service: RecordService) -> None:
    session = make_session(net_control_name=None, end_time=None, frequency="")

    service.save_session(session)

    assert service.load_session(session.id) == session


def test_save_session_twice_replaces_record(
    service: RecordService, store: SqliteStore
) -> None:
    service.save_session(make_session(name="Old name", status="active"))
    service.save_session(
        make_session(name="New name", status="closed", net_control_name=None)
    )

    loaded = service.load_session("session-1")

    assert _count(store, "sessions") == 1
    assert loaded is not None
    assert loaded.name == "New name"
    assert loaded.status == "closed"
    assert loaded.net_control_name is None


def test_save_participant_twice_replaces_record(
    service: RecordService, store: SqliteStore
) -> None:
    service.save_session(make_session())
    service.save_participant(
        "session-1", make_participant("p1", 1, tactical_call="RELAY", location="A")
    )
    service.save_participant(
        "session-1", make_participant("p1", 1, callsign="K1XYZ", location=None)
    )

    participants = service.load_participants("session-1")

    assert _count(store, "participants") == 1
    assert participants == [
        make_participant("p1", 1, callsign="K1XYZ", location=None)
    ]


def test_save_log_entry_twice_replaces_record(
    service: RecordService, store: SqliteStore
) -> None:
    service.save_log_entry("session-1", make_log_entry("e1", 1, message="first"))
    service.save_log_entry("session-1", make_log_entry("e1", 1, message=None))

    entries = service.load_log_entries("session-1")

    assert _count(store, "log_entries") == 1
    assert entries[0].message is None


def test_log_entries_ordered_by_entry_number(service: RecordService) -> None:
    service.save_session(make_session())
    for entry_id, number in (("e3", 3), ("e1", 1), ("e2", 2)):
        service.save_log_entry("session-1", make_log_entry(entry_id, number))

    entries = service.load_log_entries("session-1")

    assert [entry.entry_number for entry in entries] == [1, 2, 3]
    assert [entry.id for entry in entries] == ["e1", "e2", "e3"]


def test_participants_ordered_by_check_in_number(service: RecordService) -> None:
    service.save_session(make_session())
    for participant_id, number in (("p3", 3), ("p1", 1), ("p2", 2)):
        service.save_participant("session-1", make_participant(participant_id, number))

    bundle = service.load_session_bundle("session-1")

    assert [p.check_in_number for p in bundle.participants] == [1, 2, 3]


def test_records_are_scoped_to_their_session(service: RecordService) -> None:
    service.save_session(make_session("session-1"))
    service.save_session(make_session("session-2"))
    service.save_participant("session-1", make_participant("p1", 1))
    service.save_participant("session-2", make_participant("p2", 1))
    service.save_log_entry("session-2", make_log_entry("e1", 1))

    first = service.load_session_bundle("session-1")
    second = service.load_session_bundle("session-2")

    assert [p.id for p in first.participants] == ["p1"]
    assert first.log_entries == []
    assert [p.id for p in second.participants] == ["p2"]
    assert [e.id for e in second.log_entries] == ["e1"]


def test_child_records_do_not_require_parent_session(service: RecordService) -> None:
    service.save_participant("missing-session", make_participant("p1", 1))

    assert [p.id for p in service.load_participants("missing-session")] == ["p1"]


def test_unknown_session(service: RecordService) -> None:
    assert service.load_session("nonexistent-id") is None
    with pytest.raises(NotFoundError):
        service.load_session_bundle("nonexistent-id")


def test_constraint_violation_raises_storage_error(service: RecordService) -> None:
    with pytest.raises(StorageError):
        service.save_session(make_session(name=None))


def test_malformed_row_raises_storage_error(
    service: RecordService, store: SqliteStore
) -> None:
    store.connection.execute(
        "INSERT INTO log_entries VALUES "
        "('e1', 'session-1', 'not-a-number', '2024-01-01T09:10:00Z', 'K1ABC', 'NC', NULL)"
    )
    store.connection.commit()

    with pytest.raises(StorageError, match="Malformed log entry row"):
        service.load_log_entries("session-1")


def test_closed_store_raises_storage_error(store: SqliteStore) -> None:
    service = RecordService(SqliteRecordRepository(store))
    store.connection.close()

    with pytest.raises(StorageError):
        service.load_session("session-1")
