"""Room broadcaster isolation and failure handling."""
from __future__ import annotations

import asyncio
import json

from starlette.websockets import WebSocketState

from vidhub.services.realtime import (
    RoomBroadcaster,
    join_room,
    leave_room,
    notify_new_comment,
    notify_reaction_updated,
    room_for_video,
)


class FakeConnection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.sent: list[dict] = []
        self.client_state = WebSocketState.CONNECTED

    async def send_text(self, data: str) -> None:
        self.sent.append(json.loads(data))


class BrokenConnection(FakeConnection):
    async def send_text(self, data: str) -> None:
        raise RuntimeError("socket gone")


class StalledConnection(FakeConnection):
    async def send_text(self, data: str) -> None:
        await asyncio.sleep(5)


def test_new_comment_reaches_only_its_room() -> None:
    async def scenario() -> None:
        broadcaster = RoomBroadcaster()
        watcher_a, watcher_b, other = FakeConnection("a"), FakeConnection("b"), FakeConnection("c")
        await join_room(watcher_a, "v1", broadcaster=broadcaster)
        await join_room(watcher_b, "v1", broadcaster=broadcaster)
        await join_room(other, "v2", broadcaster=broadcaster)

        delivered = await notify_new_comment("v1", {"id": "c1", "content": "hi"}, broadcaster=broadcaster)

        assert delivered == 2
        assert watcher_a.sent == [{"type": "new-comment", "comment": {"id": "c1", "content": "hi"}}]
        assert watcher_b.sent == watcher_a.sent
        assert other.sent == []

    asyncio.run(scenario())


def test_empty_rooms_are_removed() -> None:
    async def scenario() -> None:
        broadcaster = RoomBroadcaster()
        conn = FakeConnection("a")
        room = await join_room(conn, "v1", broadcaster=broadcaster)
        assert room == room_for_video("v1") == "video-v1"
        assert broadcaster.members(room) == 1

        assert await leave_room(conn, broadcaster=broadcaster) == room
        assert broadcaster.room_ids == []
        assert await leave_room(conn, broadcaster=broadcaster) is None
        assert await broadcaster.broadcast(room, {"type": "noop"}) == 0

    asyncio.run(scenario())


def test_joining_another_room_moves_the_connection() -> None:
    async def scenario() -> None:
        broadcaster = RoomBroadcaster()
        conn = FakeConnection("a")
        await join_room(conn, "v1", broadcaster=broadcaster)
        await join_room(conn, "v1", broadcaster=broadcaster)
        await join_room(conn, "v2", broadcaster=broadcaster)

        assert broadcaster.room_of(conn) == "video-v2"
        assert broadcaster.room_ids == ["video-v2"]
        assert await notify_new_comment("v1", {"id": "x"}, broadcaster=broadcaster) == 0
        assert conn.sent == []

    asyncio.run(scenario())


def test_failing_and_closed_connections_are_dropped() -> None:
    async def scenario() -> None:
        broadcaster = RoomBroadcaster()
        healthy = FakeConnection("ok")
        broken = BrokenConnection("broken")
        closed = FakeConnection("closed")
        closed.client_state = WebSocketState.DISCONNECTED
        for conn in (healthy, broken, closed):
            await join_room(conn, "v1", broadcaster=broadcaster)

        delivered = await notify_reaction_updated("v1", {"likes": 3, "dislikes": 1}, broadcaster=broadcaster)

        assert delivered == 1
        assert healthy.sent == [{"type": "reaction-updated", "likes": 3, "dislikes": 1}]
        assert closed.sent == []
        assert broadcaster.members("video-v1") == 1
        assert broadcaster.room_of(broken) is None

    asyncio.run(scenario())


def test_slow_connection_does_not_block_the_room() -> None:
    async def scenario() -> None:
        broadcaster = RoomBroadcaster(send_timeout=0.05)
        stalled = StalledConnection("slow")
        healthy = FakeConnection("ok")
        await join_room(stalled, "v1", broadcaster=broadcaster)
        await join_room(healthy, "v1", broadcaster=broadcaster)

        delivered = await notify_new_comment("v1", {"id": "c1"}, broadcaster=broadcaster)

        assert delivered == 1
        assert len(healthy.sent) == 1
        assert broadcaster.room_of(stalled) is None

    asyncio.run(scenario())
