"""Callsign directory domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CallsignLookupResult:
    """Normalized directory record for a callsign."""

    callsign: str
    name: str
    city: str
    state: str
    country: str
    grid: str


@dataclass(frozen=True)
class CallsignCacheRecord:
    """A cached directory record and when it was written."""

    callsign: str
    name: str
    city: str
    state: str
    country: str
    grid: str
    cached_at: datetime

    def to_result(self) -> CallsignLookupResult:
        """Return the cached record without its cache metadata."""
        return CallsignLookupResult(
            callsign=self.callsign,
            name=self.name,
            city=self.city,
            state=self.state,
            country=self.country,
            grid=self.grid,
        )
