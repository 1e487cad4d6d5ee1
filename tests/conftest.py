"""Shared test fixtures."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from netctl.adapters.hamdb_client import HamDbClient
from netctl.adapters.sqlite_schema import ensure_schema
from netctl.adapters.sqlite_store import SqliteStore
from netctl.config import Settings
from netctl.containers import AppContainer
from netctl.domain.callsigns import CallsignCacheRecord, CallsignLookupResult
from netctl.domain.sessions import LogEntry, NetSession, Participant
from netctl.services.cache import CallsignCache, normalize_callsign
from netctl.services.callsigns import CallsignLookupService
from netctl.services.nets import NetControlService
from netctl.services.records import RecordRepository, RecordService

FIXED_NOW = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


@dataclass
class InMemoryRecordRepository(RecordRepository):
    """In-memory record repository for tests."""

    sessions: dict[str, NetSession] = field(default_factory=dict)
    participants: dict[str, tuple[str, Participant]] = field(default_factory=dict)
    log_entries: dict[str, tuple[str, LogEntry]] = field(default_factory=dict)

    def save_session(self, session: NetSession) -> None:
        self.sessions[session.id] = session

    def save_participant(self, session_id: str, participant: Participant) -> None:
        self.participants[participant.id] = (session_id, participant)

    def save_log_entry(self, session_id: str, entry: LogEntry) -> None:
        self.log_entries[entry.id] = (session_id, entry)

    def get_session(self, session_id: str) -> NetSession | None:
        return self.sessions.get(session_id)

    def list_participants(self, session_id: str) -> list[Participant]:
        found = [p for owner, p in self.participants.values() if owner == session_id]
        return sorted(found, key=lambda p: p.check_in_number)

    def list_log_entries(self, session_id: str) -> list[LogEntry]:
        found = [e for owner, e in self.log_entries.values() if owner == session_id]
        return sorted(found, key=lambda e: e.entry_number)


@dataclass
class InMemoryCallsignCache(CallsignCache):
    """In-memory callsign cache for tests."""

    records: dict[str, CallsignCacheRecord] = field(default_factory=dict)

    def get(self, callsign: str) -> CallsignCacheRecord | None:
        return self.records.get(normalize_callsign(callsign))

    def put(self, result: CallsignLookupResult) -> CallsignCacheRecord:
        record = CallsignCacheRecord(
            callsign=normalize_callsign(result.callsign),
            name=result.name,
            city=result.city,
            state=result.state,
            country=result.country,
            grid=result.grid,
            cached_at=FIXED_NOW,
        )
        self.records[record.callsign] = record
        return record


@dataclass
class StubHamDbClient(HamDbClient):
    """Directory client returning canned results and counting calls."""

    results: dict[str, CallsignLookupResult] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def fetch(self, callsign: str) -> CallsignLookupResult | None:
        self.calls.append(callsign)
        return self.results.get(callsign.upper())


class Sequence:
    """Deterministic id factory."""

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


def make_session(session_id: str = "session-1", **overrides: object) -> NetSession:
    values: dict[str, object] = {
        "id": session_id,
        "name": "Sunday Evening Net",
        "frequency": "146.520 MHz",
        "net_control_op": "W1AW",
        "net_control_name": "Hiram Maxim",
        "date_time": "2024-01-01T09:00:00Z",
        "end_time": None,
        "status": "active",
    }
    values.update(overrides)
    return NetSession(**values)  # type: ignore[arg-type]


def make_participant(
    participant_id: str, check_in_number: int, **overrides: object
) -> Participant:
    values: dict[str, object] = {
        "id": participant_id,
        "callsign": "K1ABC",
        "tactical_call": None,
        "name": "Alice",
        "location": "Newington",
        "check_in_time": "2024-01-01T09:05:00Z",
        "check_in_number": check_in_number,
    }
    values.update(overrides)
    return Participant(**values)  # type: ignore[arg-type]


def make_log_entry(entry_id: str, entry_number: int, **overrides: object) -> LogEntry:
    values: dict[str, object] = {
        "id": entry_id,
        "entry_number": entry_number,
        "time": "2024-01-01T09:10:00Z",
        "from_callsign": "K1ABC",
        "to_callsign": "NC",
        "message": "check in",
    }
    values.update(overrides)
    return LogEntry(**values)  # type: ignore[arg-type]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        data_dir=tmp_path / "data",
        hamdb_base_url="https://hamdb.test",
        environment="test",
    )


@pytest.fixture
def store(tmp_path: Path) -> Iterator[SqliteStore]:
    sqlite_store = SqliteStore.open(tmp_path / "netctl.db")
    ensure_schema(sqlite_store)
    yield sqlite_store
    sqlite_store.close()


@pytest.fixture
def record_repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def callsign_cache() -> InMemoryCallsignCache:
    return InMemoryCallsignCache()


@pytest.fixture
def hamdb_client() -> StubHamDbClient:
    return StubHamDbClient(
        results={
            "K1ABC": CallsignLookupResult(
                callsign="K1ABC",
                name="Alice Baker",
                city="Newington",
                state="CT",
                country="United States",
                grid="FN31",
            )
        }
    )


@pytest.fixture
def container(
    settings: Settings,
    record_repository: InMemoryRecordRepository,
    callsign_cache: InMemoryCallsignCache,
    hamdb_client: StubHamDbClient,
) -> AppContainer:
    record_service = RecordService(record_repository)
    net_control_service = NetControlService(
        record_service, new_id=Sequence(), clock=lambda: FIXED_NOW
    )
    callsign_service = CallsignLookupService(client=hamdb_client, cache=callsign_cache)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        record_service=record_service,
        net_control_service=net_control_service,
        callsign_service=callsign_service,
        close_resources=close_resources,
    )
