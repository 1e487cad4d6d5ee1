"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from netctl.adapters.hamdb_client import HttpxHamDbClient
from netctl.adapters.sqlite_callsign_cache import SqliteCallsignCache
from netctl.adapters.sqlite_record_repository import SqliteRecordRepository
from netctl.adapters.sqlite_schema import ensure_schema
from netctl.adapters.sqlite_store import SqliteStore
from netctl.config import Settings
from netctl.services.callsigns import CallsignLookupService
from netctl.services.nets import NetControlService
from netctl.services.records import RecordService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    record_service: RecordService
    net_control_service: NetControlService
    callsign_service: CallsignLookupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Open the database and create the default dependency container."""
    resolved_settings = settings or Settings()
    store = SqliteStore.open(resolved_settings.database_path)
    ensure_schema(store)

    record_service = RecordService(SqliteRecordRepository(store))
    net_control_service = NetControlService(record_service)
    hamdb_client = HttpxHamDbClient.create(
        base_url=resolved_settings.hamdb_base_url,
        app_name=resolved_settings.hamdb_app_name,
        timeout_seconds=resolved_settings.hamdb_timeout_seconds,
    )
    callsign_service = CallsignLookupService(
        client=hamdb_client,
        cache=SqliteCallsignCache(store),
        debug=resolved_settings.environment == "local",
    )

    async def close_resources() -> None:
        await hamdb_client.close()
        store.close()

    return AppContainer(
        settings=resolved_settings,
        record_service=record_service,
        net_control_service=net_control_service,
        callsign_service=callsign_service,
        close_resources=close_resources,
    )
