from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from app.config import settings
from app.core.dependencies import get_current_session, get_websocket_session
from app.core.session import Session
from app.modules.client_database import prober
from app.modules.client_database.monitor import ConnectionMonitor
from app.modules.client_database.prober import ProbeResult
from app.modules.client_database.schemas import ClientDatabaseInput
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/client-database", tags=["client-database"])


@router.post("/probe", response_model=ProbeResult)
async def probe_client_database(
    data: ClientDatabaseInput,
    session: Session = Depends(get_current_session)
):
    """One-shot connection test. Nothing is written."""
    return prober.probe_connection(data.url, data.key)


@router.websocket("/live")
async def live_client_database_status(
    websocket: WebSocket,
    session: Session = Depends(get_websocket_session)
):
    """Stream {url, key} edits in, connection status changes out"""
    await websocket.accept()

    async def send_status(result: ProbeResult):
        await websocket.send_json(result.model_dump(mode="json"))

    monitor = ConnectionMonitor(send_status, quiet_period=settings.probe_debounce_seconds)
    await send_status(monitor.state)
    try:
        while True:
            payload = await websocket.receive_json()
            try:
                data = ClientDatabaseInput(**payload)
            except (TypeError, ValidationError):
                await websocket.send_json({"status": "error", "message": "Expected {\"url\": ..., \"key\": ...}"})
                continue
            await monitor.update(data.url, data.key)
    except WebSocketDisconnect:
        logger.debug(f"Live status socket closed for user {session.user_id}")
    finally:
        monitor.close()
