"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from netctl.api.models import (
    CallsignPayload,
    CheckInRequest,
    CreateSessionRequest,
    LogEntryFields,
    LogEntryPayload,
    NewLogEntryRequest,
    ParticipantFields,
    ParticipantPayload,
    SessionBundlePayload,
    SessionFields,
    SessionPayload,
)
from netctl.app_logging import configure_logging
from netctl.containers import AppContainer
from netctl.domain.errors import InvalidInputError, NotFoundError, StorageError
from netctl.services import ics309


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app exposing the net control commands."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(
        request: Request, exc: InvalidInputError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.put("/sessions/{session_id}")
    async def save_session(
        session_id: str, body: SessionFields, request: Request
    ) -> dict[str, str]:
        """Insert or replace a session."""
        state_container: AppContainer = request.app.state.container
        state_container.record_service.save_session(body.to_domain(session_id))
        return {"status": "ok"}

    @app.put("/sessions/{session_id}/participants/{participant_id}")
    async def save_participant(
        session_id: str, participant_id: str, body: ParticipantFields, request: Request
    ) -> dict[str, str]:
        """Insert or replace a participant of a session."""
        state_container: AppContainer = request.app.state.container
        state_container.record_service.save_participant(
            session_id, body.to_domain(participant_id)
        )
        return {"status": "ok"}

    @app.put("/sessions/{session_id}/log-entries/{entry_id}")
    async def save_log_entry(
        session_id: str, entry_id: str, body: LogEntryFields, request: Request
    ) -> dict[str, str]:
        """Insert or replace a log entry of a session."""
        state_container: AppContainer = request.app.state.container
        state_container.record_service.save_log_entry(
            session_id, body.to_domain(entry_id)
        )
        return {"status": "ok"}

    @app.get("/sessions/{session_id}")
    async def load_session(session_id: str, request: Request) -> SessionBundlePayload:
        """Return a session with its participants and log entries."""
        state_container: AppContainer = request.app.state.container
        bundle = state_container.record_service.load_session_bundle(session_id)
        return SessionBundlePayload.from_domain(bundle)

    @app.get("/callsigns/{callsign}")
    async def lookup_callsign(callsign: str, request: Request) -> CallsignPayload | None:
        """Return directory data for a callsign, or null when unavailable."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.callsign_service.lookup(callsign)
        if result is None:
            return None
        return CallsignPayload.from_domain(result)

    @app.post("/sessions", status_code=status.HTTP_201_CREATED)
    async def create_session(
        body: CreateSessionRequest, request: Request
    ) -> SessionBundlePayload:
        """Start a new pending net with net control checked in."""
        state_container: AppContainer = request.app.state.container
        bundle = state_container.net_control_service.create_session(
            name=body.name,
            frequency=body.frequency,
            net_control_op=body.net_control_op,
            net_control_name=body.net_control_name,
        )
        return SessionBundlePayload.from_domain(bundle)

    @app.post("/sessions/import", status_code=status.HTTP_201_CREATED)
    async def import_session(request: Request) -> SessionBundlePayload:
        """Create a session from an uploaded ICS 309 CSV document."""
        state_container: AppContainer = request.app.state.container
        raw = await request.body()
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="CSV must be UTF-8 encoded",
            ) from exc
        bundle = state_container.net_control_service.import_csv(text)
        return SessionBundlePayload.from_domain(bundle)

    @app.post("/sessions/{session_id}/open")
    async def open_session(session_id: str, request: Request) -> SessionPayload:
        """Open a pending net."""
        state_container: AppContainer = request.app.state.container
        session = state_container.net_control_service.open_session(session_id)
        return SessionPayload.from_domain(session)

    @app.post("/sessions/{session_id}/close")
    async def close_session(session_id: str, request: Request) -> SessionPayload:
        """Close a net."""
        state_container: AppContainer = request.app.state.container
        session = state_container.net_control_service.close_session(session_id)
        return SessionPayload.from_domain(session)

    @app.post("/sessions/{session_id}/check-ins", status_code=status.HTTP_201_CREATED)
    async def check_in(
        session_id: str, body: CheckInRequest, request: Request
    ) -> ParticipantPayload:
        """Check a station in to a net."""
        state_container: AppContainer = request.app.state.container
        participant = state_container.net_control_service.check_in(
            session_id,
            callsign=body.callsign,
            tactical_call=body.tactical_call,
            name=body.name,
            location=body.location,
        )
        return ParticipantPayload.from_domain(participant)

    @app.post("/sessions/{session_id}/log-entries", status_code=status.HTTP_201_CREATED)
    async def add_log_entry(
        session_id: str, body: NewLogEntryRequest, request: Request
    ) -> LogEntryPayload:
        """Append a line of traffic to a net log."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.net_control_service.add_log_entry(
            session_id,
            from_callsign=body.from_callsign,
            to_callsign=body.to_callsign,
            message=body.message,
        )
        return LogEntryPayload.from_domain(entry)

    @app.get("/sessions/{session_id}/ics309.csv")
    async def export_session(session_id: str, request: Request) -> Response:
        """Download a net as an ICS 309 CSV document."""
        state_container: AppContainer = request.app.state.container
        bundle = state_container.record_service.load_session_bundle(session_id)
        filename = _export_filename(bundle.session.name, bundle.session.date_time)
        return Response(
            content=ics309.export_csv(bundle),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app


def _export_filename(name: str, date_time: str) -> str:
    """Build a download filename like ``Sunday_Net_2024-01-01.csv``."""
    stem = "_".join(name.split()) or "net"
    return f"{stem}_{date_time[:10]}.csv"
