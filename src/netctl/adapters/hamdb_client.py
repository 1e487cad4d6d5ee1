"""HamDB callsign directory client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from netctl.domain.callsigns import CallsignLookupResult

_DEFAULT_COUNTRY = "USA"

_logger = logging.getLogger(__name__)


class HamDbClient(Protocol):
    """Interface for callsign directory lookups."""

    async def fetch(self, callsign: str) -> CallsignLookupResult | None:
        """Return the directory record for a callsign, or None."""


@dataclass
class HttpxHamDbClient(HamDbClient):
    """HTTPX-backed HamDB client.

    Lookups never raise: transport errors, non-2xx responses and unexpected
    payloads all produce ``None`` so a failed lookup cannot interrupt logging.
    """

    base_url: str
    http_client: httpx.AsyncClient
    app_name: str = "netctl"
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls,
        base_url: str,
        app_name: str = "netctl",
        timeout_seconds: float = 10.0,
    ) -> "HttpxHamDbClient":
        """Create a HamDB client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            app_name=app_name,
            timeout_seconds=timeout_seconds,
        )

    async def fetch(self, callsign: str) -> CallsignLookupResult | None:
        """Look up a callsign in HamDB."""
        normalized = callsign.strip().upper()
        if not normalized:
            return None
        url = f"{self.base_url.rstrip('/')}/v1/{normalized}/json/{self.app_name}"
        try:
            response = await self.http_client.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            _logger.warning("HamDB lookup failed for %s: %s", normalized, exc)
            return None
        except ValueError as exc:
            _logger.warning("HamDB returned invalid JSON for %s: %s", normalized, exc)
            return None
        return parse_hamdb_payload(payload, normalized)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def parse_hamdb_payload(
    payload: object, callsign: str
) -> CallsignLookupResult | None:
    """Map a HamDB JSON body onto a lookup result."""
    hamdb = payload.get("hamdb") if isinstance(payload, dict) else None
    record = hamdb.get("callsign") if isinstance(hamdb, dict) else None
    if not isinstance(record, dict):
        return None

    first_name = _text(record, "fname")
    last_name = _text(record, "name")
    return CallsignLookupResult(
        callsign=_text(record, "call") or callsign.upper(),
        name=" ".join(part for part in (first_name, last_name) if part),
        city=_text(record, "addr2"),
        state=_text(record, "state"),
        country=_text(record, "country") or _DEFAULT_COUNTRY,
        grid=_text(record, "grid"),
    )


def _text(record: dict[str, object], key: str) -> str:
    value = record.get(key)
    if isinstance(value, str):
        return value.strip()
    return ""
