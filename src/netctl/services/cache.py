"""Callsign cache abstractions."""

from typing import Protocol

from netctl.domain.callsigns import CallsignCacheRecord, CallsignLookupResult


def normalize_callsign(callsign: str) -> str:
    """Return the cache key form of a callsign."""
    return callsign.strip().upper()


class CallsignCache(Protocol):
    """Key-value store of the last known directory record per callsign.

    Entries never expire; a cached record stays authoritative until it is
    overwritten by another ``put`` for the same callsign.
    """

    def get(self, callsign: str) -> CallsignCacheRecord | None:
        """Return the cached record for a callsign, if present."""

    def put(self, result: CallsignLookupResult) -> CallsignCacheRecord:
        """Store a directory record, replacing any previous one."""
