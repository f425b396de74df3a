"""WebSocket endpoint for per-video live rooms."""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..constants import ROOM_PREFIX
from ..services.realtime import room_broadcaster, room_for_video

router = APIRouter()
logger = logging.getLogger(__name__)


def _requested_room(payload: dict) -> str | None:
    room_id = payload.get("roomId")
    if isinstance(room_id, str) and room_id.startswith(ROOM_PREFIX) and len(room_id) > len(ROOM_PREFIX):
        return room_id
    video_id = payload.get("videoId")
    if isinstance(video_id, str) and video_id:
        return room_for_video(video_id)
    return None


@router.websocket("/ws")
async def video_rooms(websocket: WebSocket) -> None:
    """Keep a socket open and route join/leave/ping control messages."""

    await websocket.accept()
    logger.info("Room socket connected from %s", websocket.client)
    try:
        while True:
            try:
                raw = await websocket.receive_text()
            except WebSocketDisconnect:
                break

            try:
                payload = json.loads(raw)
            except json.JSONDecodeError:
                payload = {"type": raw}
            if not isinstance(payload, dict):
                continue

            message_type = str(payload.get("type") or "").lower()
            if message_type == "ping":
                await websocket.send_text(json.dumps({"type": "pong"}))
            elif message_type == "join-room":
                room_id = _requested_room(payload)
                if room_id is None:
                    await websocket.send_text(json.dumps({"type": "error", "detail": "Unknown room"}))
                    continue
                await room_broadcaster.join(websocket, room_id)
                await websocket.send_text(json.dumps({"type": "room-joined", "roomId": room_id}))
            elif message_type == "leave-room":
                room_id = await room_broadcaster.leave(websocket)
                await websocket.send_text(json.dumps({"type": "room-left", "roomId": room_id}))
            # Anything else is ignored but keeps the connection alive.
    finally:
        await room_broadcaster.leave(websocket)
        logger.info("Room socket disconnected from %s", websocket.client)


__all__ = ["router"]
