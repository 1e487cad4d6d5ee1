"""Schema creation and additive migrations for the local database."""

import logging
import sqlite3

from netctl.adapters.sqlite_store import SqliteStore

_logger = logging.getLogger(__name__)

_TABLES = (
    """
    CREATE TABLE IF NOT EXISTS sessions (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        frequency TEXT,
        net_control_op TEXT NOT NULL,
        net_control_name TEXT,
        date_time TEXT NOT NULL,
        end_time TEXT,
        status TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS participants (
        id TEXT PRIMARY KEY,
        session_id TEXT NOT NULL,
        callsign TEXT NOT NULL,
        tactical_call TEXT,
        name TEXT,
        location TEXT,
        check_in_time TEXT NOT NULL,
        check_in_number INTEGER NOT NULL,
        FOREIGN KEY (session_id) REFERENCES sessions(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS log_entries (
        id TEXT PRIMARY KEY,
        session_id TEXT NOT NULL,
        entry_number INTEGER NOT NULL,
        time TEXT NOT NULL,
        from_callsign TEXT NOT NULL,
        to_callsign TEXT NOT NULL,
        message TEXT,
        FOREIGN KEY (session_id) REFERENCES sessions(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS callsign_cache (
        callsign TEXT PRIMARY KEY,
        name TEXT,
        city TEXT,
        state TEXT,
        country TEXT,
        grid TEXT,
        cached_at TEXT NOT NULL
    )
    """,
)

_INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_participants_session "
    "ON participants(session_id, check_in_number)",
    "CREATE INDEX IF NOT EXISTS idx_log_entries_session "
    "ON log_entries(session_id, entry_number)",
)

# Columns added after the first release. Each entry is (table, column, ddl).
_ADDED_COLUMNS = (
    ("participants", "tactical_call", "TEXT"),
    ("sessions", "end_time", "TEXT"),
)


def ensure_schema(store: SqliteStore) -> None:
    """Create missing tables and apply additive column migrations.

    Safe to call on every startup. Table creation failures raise
    ``StorageError``; a migration that fails because the column already
    exists is ignored.
    """
    with store.transaction() as conn:
        for ddl in _TABLES:
            conn.execute(ddl)

    for table, column, ddl in _ADDED_COLUMNS:
        _add_column(store, table, column, ddl)

    with store.transaction() as conn:
        for ddl in _INDEXES:
            conn.execute(ddl)
    _logger.info("Database schema ready at %s", store.path)


def _add_column(store: SqliteStore, table: str, column: str, ddl: str) -> None:
    """Add a column, ignoring the error raised when it is already present."""
    try:
        with store.lock, store.connection as conn:
            conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}")
    except sqlite3.OperationalError as exc:
        _logger.debug("Skipping migration %s.%s: %s", table, column, exc)
        return
    _logger.info("Added column %s.%s", table, column)
