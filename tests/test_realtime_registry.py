"""Tests for the realtime session registry and publisher."""

from __future__ import annotations

import asyncio

from socialnet.infrastructure.realtime import (
    RealtimePublisher,
    RealtimeSessionRegistry,
    SessionState,
)


class FakeWebSocket:
    def __init__(self, *, fail_on_send: bool = False) -> None:
        self.accepted = False
        self.sent: list[dict] = []
        self.closed_with: int | None = None
        self.fail_on_send = fail_on_send

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.fail_on_send:
            raise RuntimeError("connection reset")
        self.sent.append(message)

    async def close(self, code: int = 1000) -> None:
        self.closed_with = code


def test_connect_then_authenticate_binds_the_user() -> None:
    registry = RealtimeSessionRegistry()
    websocket = FakeWebSocket()

    async def scenario():
        session = await registry.connect(websocket)
        assert session.state is SessionState.CONNECTED
        assert not registry.is_online("alice")

        registry.authenticate(session.id, "alice")
        assert session.state is SessionState.AUTHENTICATED
        assert registry.session_for_user("alice") is session

        assert await registry.send_to_user("alice", {"type": "ping"}) is True
        assert await registry.send_to_user("bob", {"type": "ping"}) is False

    asyncio.run(scenario())
    assert websocket.accepted
    assert websocket.sent == [{"type": "ping"}]


def test_second_login_takes_over_and_stale_disconnect_keeps_mapping() -> None:
    registry = RealtimeSessionRegistry()
    first_ws, second_ws = FakeWebSocket(), FakeWebSocket()

    async def scenario():
        first = await registry.connect(first_ws)
        second = await registry.connect(second_ws)
        registry.authenticate(first.id, "alice")
        registry.authenticate(second.id, "alice")

        await registry.send_to_user("alice", {"type": "notification"})
        registry.disconnect(first.id)
        assert registry.session_for_user("alice") is second

        registry.disconnect(second.id)
        assert not registry.is_online("alice")
        assert second.state is SessionState.CLOSED

    asyncio.run(scenario())
    assert first_ws.sent == []
    assert second_ws.sent == [{"type": "notification"}]


def test_broadcast_reaches_every_session_or_only_selected_users() -> None:
    registry = RealtimeSessionRegistry()
    anonymous, alice_ws, bob_ws = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()

    async def scenario():
        await registry.connect(anonymous)
        alice = await registry.connect(alice_ws)
        bob = await registry.connect(bob_ws)
        registry.authenticate(alice.id, "alice")
        registry.authenticate(bob.id, "bob")

        assert await registry.broadcast({"type": "new_post"}) == 3
        assert await registry.broadcast({"type": "only_bob"}, user_ids={"bob", "carol"}) == 1

    asyncio.run(scenario())
    assert anonymous.sent == [{"type": "new_post"}]
    assert alice_ws.sent == [{"type": "new_post"}]
    assert bob_ws.sent == [{"type": "new_post"}, {"type": "only_bob"}]


def test_failed_send_drops_the_session_without_raising() -> None:
    registry = RealtimeSessionRegistry()
    broken, healthy = FakeWebSocket(fail_on_send=True), FakeWebSocket()

    async def scenario():
        broken_session = await registry.connect(broken)
        await registry.connect(healthy)
        registry.authenticate(broken_session.id, "alice")

        assert await registry.broadcast({"type": "new_post"}) == 1
        assert registry.get(broken_session.id) is None
        assert not registry.is_online("alice")

    asyncio.run(scenario())
    assert healthy.sent == [{"type": "new_post"}]


def test_close_sends_the_close_code() -> None:
    registry = RealtimeSessionRegistry()
    websocket = FakeWebSocket()

    async def scenario():
        session = await registry.connect(websocket)
        await registry.close(session.id, code=1008)
        assert registry.get(session.id) is None

    asyncio.run(scenario())
    assert websocket.closed_with == 1008


def test_publisher_wraps_messages_and_skips_offline_users() -> None:
    registry = RealtimeSessionRegistry()
    publisher = RealtimePublisher(registry)
    websocket = FakeWebSocket()

    async def scenario():
        session = await registry.connect(websocket)
        registry.authenticate(session.id, "alice")

        assert publisher.publish_to_user("bob", event_type="notification", payload={}) is False
        assert publisher.publish_to_user(
            "alice", event_type="notification", payload={"id": "n1"}
        ) is True
        publisher.broadcast(event_type="new_post", payload={"id": "p1"})
        # Deliveries are scheduled as tasks on the running loop and held until done.
        assert publisher.pending_count() == 2
        for _ in range(3):
            await asyncio.sleep(0)
        assert publisher.pending_count() == 0

    asyncio.run(scenario())
    assert websocket.sent == [
        {"type": "notification", "data": {"id": "n1"}},
        {"type": "new_post", "data": {"id": "p1"}},
    ]


def test_publisher_without_event_loop_is_a_no_op() -> None:
    registry = RealtimeSessionRegistry()
    publisher = RealtimePublisher(registry)

    publisher.broadcast(event_type="new_post", payload={"id": "p1"})
    assert publisher.publish_to_user("alice", event_type="notification", payload={}) is False
