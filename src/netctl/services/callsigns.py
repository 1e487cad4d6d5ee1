"""Callsign lookup with a local read-through cache."""

import logging
from dataclasses import dataclass, replace

from netctl.adapters.hamdb_client import HamDbClient
from netctl.domain.callsigns import CallsignLookupResult
from netctl.domain.errors import StorageError
from netctl.services.cache import CallsignCache, normalize_callsign

_logger = logging.getLogger(__name__)


@dataclass
class CallsignLookupService:
    """Cache-first callsign lookups backed by the directory client."""

    client: HamDbClient
    cache: CallsignCache
    debug: bool = False

    async def lookup(self, callsign: str) -> CallsignLookupResult | None:
        """Return a callsign record from the cache or the directory.

        A cache hit is returned as-is. On a miss the directory is queried once
        and a result is written back to the cache under the directory's
        callsign and, when it differs, under the queried one. ``None`` means
        the directory had nothing or could not be reached. Cache failures are
        logged and treated as misses.
        """
        normalized = normalize_callsign(callsign)
        if not normalized:
            return None

        try:
            cached = self.cache.get(normalized)
        except StorageError:
            _logger.warning(
                "Failed to read cached callsign %s", normalized, exc_info=True
            )
            cached = None
        if cached is not None:
            if self.debug:
                _logger.info("Callsign cache hit: %s", normalized)
            return cached.to_result()

        result = await self.client.fetch(normalized)
        if result is None:
            if self.debug:
                _logger.info("Callsign lookup returned nothing: %s", normalized)
            return None

        entries = [result]
        if normalize_callsign(result.callsign) != normalized:
            entries.append(replace(result, callsign=normalized))
        for entry in entries:
            try:
                self.cache.put(entry)
            except StorageError:
                _logger.warning(
                    "Failed to cache callsign %s", entry.callsign, exc_info=True
                )
        return result
