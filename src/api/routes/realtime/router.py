"""Canal em tempo real do ciclo de vida da sessão (WebSocket).

Servidor → observador: frames `{"event", "data"}` com eventos
`message`, `qr`, `ready` e `authenticated`. O cliente apenas conecta;
frames enviados por ele são ignorados.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

if TYPE_CHECKING:
    from app.lifecycle import ObserverHandle

logger = logging.getLogger(__name__)

router = APIRouter()


async def _pump_frames(websocket: WebSocket, handle: ObserverHandle) -> None:
    """Entrega os frames do observador na ordem de publicação."""
    while True:
        frame = await handle.next_frame()
        try:
            await websocket.send_json(frame.to_dict())
        except (WebSocketDisconnect, RuntimeError):
            return


@router.websocket("/ws")
async def realtime_channel(websocket: WebSocket) -> None:
    """Conecta um observador ao registro de ciclo de vida."""
    registry = websocket.app.state.runtime.registry
    await websocket.accept()
    handle = registry.attach()
    pump = asyncio.create_task(_pump_frames(websocket, handle))

    try:
        while True:
            message = await websocket.receive()
            if message.get("type") == "websocket.disconnect":
                break
    except WebSocketDisconnect:
        pass
    finally:
        registry.detach(handle)
        pump.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await pump
        logger.info("realtime_channel_closed", extra={"observer_id": handle.observer_id})
