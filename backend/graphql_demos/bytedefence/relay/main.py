"""ByteDefence Relay — WebSocket hub plus the broadcast endpoint the API posts to.

Invariants:
    - GET /health returns "ok"
    - WebSocket /hubs/notifications accepts {"action": "join"|"leave", "orderId": ...}
    - POST /api/broadcast {method, group, data} fans out to the group → {"status": "sent"}
    - Frames that are not a JSON join/leave object get an "Error" frame; the socket stays open
    - A disconnect removes the connection from every group
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from graphql_demos.bytedefence.relay.config import get_settings
from graphql_demos.bytedefence.relay.hub import ConnectionGroups
from graphql_demos.common.error_handlers import register_error_handlers
from graphql_demos.common.observability import setup_logging

logger = logging.getLogger(__name__)

groups = ConnectionGroups()


class BroadcastEnvelope(BaseModel):
    method: str
    group: str
    data: Any = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("ByteDefence relay started")
    yield
    logger.info("ByteDefence relay shutting down")


app = FastAPI(title="ByteDefence Notification Relay", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.get("/health", response_class=PlainTextResponse)
async def health():
    return "ok"


@app.post("/api/broadcast")
async def broadcast(envelope: BroadcastEnvelope):
    delivered = await groups.send(envelope.group, envelope.method, envelope.data)
    logger.info(
        f"Broadcast delivered to {delivered} connection(s)",
        extra={"method": envelope.method, "group": envelope.group},
    )
    return {"status": "sent"}


@app.websocket("/hubs/notifications")
async def notifications(websocket: WebSocket):
    await websocket.accept()
    try:
        while True:
            message = _parse_message(await websocket.receive_text())
            action = str(message.get("action", "")).lower()
            order_id = message.get("orderId")
            if action not in ("join", "leave") or not order_id:
                await websocket.send_json(
                    {"method": "Error", "data": {"message": "Expected {action: join|leave, orderId}"}},
                )
                continue
            if action == "join":
                group = await groups.join(websocket, str(order_id))
                ack = "Joined"
            else:
                group = await groups.leave(websocket, str(order_id))
                ack = "Left"
            await websocket.send_json({"method": ack, "data": {"group": group}})
    except WebSocketDisconnect:
        logger.debug("WebSocket client disconnected")
    finally:
        await groups.disconnect(websocket)


def _parse_message(text: str) -> dict:
    """Decode one client frame; anything but a JSON object becomes {}."""
    try:
        message = json.loads(text)
    except ValueError:
        return {}
    return message if isinstance(message, dict) else {}
