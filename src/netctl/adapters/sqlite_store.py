"""Shared SQLite database handle."""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from netctl.domain.errors import StorageError

_logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


@dataclass
class SqliteStore:
    """Single SQLite connection guarded by a lock.

    Every storage operation runs inside ``transaction()``, which holds the lock
    for the duration of the operation and commits or rolls back on exit. Any
    ``sqlite3.Error`` raised inside is re-raised as ``StorageError``.
    """

    connection: sqlite3.Connection
    path: str = MEMORY_DATABASE
    lock: threading.Lock = field(default_factory=threading.Lock)

    @classmethod
    def open(cls, path: Path | str) -> "SqliteStore":
        """Open (creating if needed) the database file at ``path``."""
        location = str(path)
        try:
            if location != MEMORY_DATABASE:
                Path(location).parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(location, check_same_thread=False)
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Failed to open database {location}: {exc}") from exc
        connection.row_factory = sqlite3.Row
        _logger.info("Opened database %s", location)
        return cls(connection=connection, path=location)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Hold the lock and yield the connection for one operation."""
        with self.lock:
            try:
                with self.connection:
                    yield self.connection
            except sqlite3.Error as exc:
                raise StorageError(f"Database error: {exc}") from exc

    def close(self) -> None:
        """Close the underlying connection."""
        with self.lock:
            self.connection.close()
        _logger.info("Closed database %s", self.path)
