"""SQLite-backed callsign cache."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from netctl.adapters.sqlite_store import SqliteStore
from netctl.domain.callsigns import CallsignCacheRecord, CallsignLookupResult
from netctl.domain.errors import StorageError
from netctl.services.cache import CallsignCache, normalize_callsign


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SqliteCallsignCache(CallsignCache):
    """Callsign cache stored in the ``callsign_cache`` table."""

    store: SqliteStore
    clock: Callable[[], datetime] = field(default=_utcnow)

    def get(self, callsign: str) -> CallsignCacheRecord | None:
        """Return the cached record for a callsign, if present."""
        with self.store.transaction() as conn:
            row = conn.execute(
                """
                SELECT callsign, name, city, state, country, grid, cached_at
                FROM callsign_cache WHERE callsign = ?
                """,
                (normalize_callsign(callsign),),
            ).fetchone()
        if row is None:
            return None
        try:
            return CallsignCacheRecord(
                callsign=row["callsign"],
                name=row["name"] or "",
                city=row["city"] or "",
                state=row["state"] or "",
                country=row["country"] or "",
                grid=row["grid"] or "",
                cached_at=datetime.fromisoformat(row["cached_at"]),
            )
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Malformed callsign cache row: {exc}") from exc

    def put(self, result: CallsignLookupResult) -> CallsignCacheRecord:
        """Insert or replace the cached record for ``result.callsign``."""
        record = CallsignCacheRecord(
            callsign=normalize_callsign(result.callsign),
            name=result.name,
            city=result.city,
            state=result.state,
            country=result.country,
            grid=result.grid,
            cached_at=self.clock(),
        )
        with self.store.transaction() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO callsign_cache (
                    callsign, name, city, state, country, grid, cached_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.callsign,
                    record.name,
                    record.city,
                    record.state,
                    record.country,
                    record.grid,
                    record.cached_at.isoformat(),
                ),
            )
        return record
