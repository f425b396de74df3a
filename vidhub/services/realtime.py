"""Room-scoped WebSocket fan-out for live video events."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

from starlette.websockets import WebSocketState

from ..constants import ROOM_PREFIX

logger = logging.getLogger(__name__)


class RoomConnection(Protocol):
    async def send_text(self, data: str) -> None: ...


def room_for_video(video_id: str) -> str:
    return f"{ROOM_PREFIX}{video_id}"


def _is_closed(connection: RoomConnection) -> bool:
    for attr in ("client_state", "application_state"):
        if getattr(connection, attr, None) == WebSocketState.DISCONNECTED:
            return True
    return False


class RoomBroadcaster:
    """Tracks which connection watches which room and delivers room events.

    A connection belongs to at most one room; joining another room moves it.
    Rooms disappear as soon as their last member leaves.
    """

    def __init__(self, send_timeout: float = 2.0) -> None:
        self._rooms: dict[str, set[RoomConnection]] = {}
        self._membership: dict[RoomConnection, str] = {}
        self._lock = asyncio.Lock()
        self.send_timeout = send_timeout

    def _discard(self, connection: RoomConnection) -> str | None:
        room_id = self._membership.pop(connection, None)
        if room_id is None:
            return None
        members = self._rooms.get(room_id)
        if members is not None:
            members.discard(connection)
            if not members:
                self._rooms.pop(room_id, None)
        return room_id

    async def join(self, connection: RoomConnection, room_id: str) -> None:
        async with self._lock:
            if self._membership.get(connection) == room_id:
                return
            self._discard(connection)
            self._rooms.setdefault(room_id, set()).add(connection)
            self._membership[connection] = room_id
        logger.debug("Connection joined room %s", room_id)

    async def leave(self, connection: RoomConnection) -> str | None:
        async with self._lock:
            room_id = self._discard(connection)
        if room_id is not None:
            logger.debug("Connection left room %s", room_id)
        return room_id

    async def broadcast(self, room_id: str, event: dict[str, Any]) -> int:
        """Send ``event`` to every open member of ``room_id``.

        Members that are closed, fail or exceed the send timeout are removed;
        delivery to the rest continues. Returns the number of successful sends.
        """

        payload = json.dumps(event, default=str)
        async with self._lock:
            targets = list(self._rooms.get(room_id, ()))

        delivered = 0
        stale: list[RoomConnection] = []
        for connection in targets:
            if _is_closed(connection):
                stale.append(connection)
                continue
            try:
                await asyncio.wait_for(connection.send_text(payload), timeout=self.send_timeout)
            except asyncio.TimeoutError:
                logger.warning("Dropping slow connection from room %s", room_id)
                stale.append(connection)
            except Exception:
                logger.warning("Dropping unreachable connection from room %s", room_id, exc_info=True)
                stale.append(connection)
            else:
                delivered += 1

        if stale:
            async with self._lock:
                for connection in stale:
                    if self._membership.get(connection) == room_id:
                        self._discard(connection)
        return delivered

    def members(self, room_id: str) -> int:
        return len(self._rooms.get(room_id, ()))

    def room_of(self, connection: RoomConnection) -> str | None:
        return self._membership.get(connection)

    @property
    def room_ids(self) -> list[str]:
        return list(self._rooms)


room_broadcaster = RoomBroadcaster()


async def join_room(connection: RoomConnection, video_id: str, *, broadcaster: RoomBroadcaster | None = None) -> str:
    room_id = room_for_video(video_id)
    await (broadcaster or room_broadcaster).join(connection, room_id)
    return room_id


async def leave_room(connection: RoomConnection, *, broadcaster: RoomBroadcaster | None = None) -> str | None:
    return await (broadcaster or room_broadcaster).leave(connection)


async def notify_new_comment(
    video_id: str,
    comment: dict[str, Any],
    *,
    broadcaster: RoomBroadcaster | None = None,
) -> int:
    """Push a freshly created comment to everyone watching the video."""

    return await (broadcaster or room_broadcaster).broadcast(
        room_for_video(video_id),
        {"type": "new-comment", "comment": comment},
    )


async def notify_reaction_updated(
    video_id: str,
    counts: dict[str, Any],
    *,
    broadcaster: RoomBroadcaster | None = None,
) -> int:
    return await (broadcaster or room_broadcaster).broadcast(
        room_for_video(video_id),
        {"type": "reaction-updated", **counts},
    )


__all__ = [
    "RoomBroadcaster",
    "RoomConnection",
    "join_room",
    "leave_room",
    "notify_new_comment",
    "notify_reaction_updated",
    "room_broadcaster",
    "room_for_video",
]
