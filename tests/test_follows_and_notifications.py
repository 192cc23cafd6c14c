"""Tests for the follow graph and the notification dispatcher."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from socialnet.application.use_cases.follows import (
    get_followers,
    get_following,
    toggle_follow,
)
from socialnet.application.use_cases.notifications import (
    NOTIFICATION_EVENT,
    list_notifications,
    mark_all_read,
    notify,
    resolve_fanout_recipients,
)
from socialnet.application.use_cases.users import register_user
from socialnet.domain.entities import (
    FOLLOW_STATUS_FOLLOWED,
    FOLLOW_STATUS_UNFOLLOWED,
    AllSessions,
    FollowersOf,
)
from socialnet.domain.exceptions import NotFoundError, ValidationError
from socialnet.infrastructure.database import SessionLocal
from socialnet.infrastructure.store import SqlStore


def _user(store, handle: str):
    return register_user(
        store,
        name=handle.capitalize(),
        username=handle,
        email=f"{handle}@example.com",
        password="password123",
    )


def test_toggle_follow_twice_restores_the_graph(store, publisher) -> None:
    alice = _user(store, "alice")
    bob = _user(store, "bobby")

    first = toggle_follow(store, follower_id=alice.id, followee_id=bob.id, publisher=publisher)
    assert first == FOLLOW_STATUS_FOLLOWED
    assert get_following(store, alice.id) == {bob.id}
    assert get_followers(store, bob.id) == {alice.id}

    second = toggle_follow(store, follower_id=alice.id, followee_id=bob.id, publisher=publisher)
    assert second == FOLLOW_STATUS_UNFOLLOWED
    assert get_following(store, alice.id) == set()
    assert get_followers(store, bob.id) == set()


def test_only_new_follows_notify_the_followee(store, publisher) -> None:
    alice = _user(store, "alice")
    bob = _user(store, "bobby")

    toggle_follow(store, follower_id=alice.id, followee_id=bob.id, publisher=publisher)
    toggle_follow(store, follower_id=alice.id, followee_id=bob.id, publisher=publisher)

    inbox = list_notifications(store, bob.id)
    assert len(inbox) == 1
    assert inbox[0].event_type == "follow"
    assert inbox[0].payload == {"follower_id": alice.id}


def test_self_follow_is_rejected(store) -> None:
    alice = _user(store, "alice")

    with pytest.raises(ValidationError):
        toggle_follow(store, follower_id=alice.id, followee_id=alice.id)
    assert get_following(store, alice.id) == set()


def test_following_unknown_user_is_rejected(store) -> None:
    alice = _user(store, "alice")

    with pytest.raises(NotFoundError):
        toggle_follow(store, follower_id=alice.id, followee_id="missing")


def test_follow_relations_are_not_symmetric(store) -> None:
    alice = _user(store, "alice")
    bob = _user(store, "bobby")

    toggle_follow(store, follower_id=alice.id, followee_id=bob.id)

    assert get_following(store, bob.id) == set()
    assert get_followers(store, alice.id) == set()


def test_notify_persists_once_and_skips_offline_push(store, publisher) -> None:
    alice = _user(store, "alice")

    saved = notify(
        store,
        user_id=alice.id,
        event_type="follow",
        message="Hola",
        payload={"follower_id": "x"},
        publisher=publisher,
    )

    stored = list_notifications(store, alice.id)
    assert [n.id for n in stored] == [saved.id]
    assert stored[0].is_read is False
    assert publisher.direct == []


def test_notify_pushes_to_online_user(store, publisher) -> None:
    alice = _user(store, "alice")
    publisher.online.add(alice.id)

    saved = notify(store, user_id=alice.id, event_type="reaction", message="Hola", publisher=publisher)

    assert len(list_notifications(store, alice.id)) == 1
    user_id, event_type, payload = publisher.direct[0]
    assert user_id == alice.id
    assert event_type == NOTIFICATION_EVENT
    assert payload["id"] == saved.id
    assert payload["event_type"] == "reaction"


class _ExplodingPublisher:
    def publish_to_user(self, user_id, *, event_type, payload):
        raise RuntimeError("socket gone")

    def broadcast(self, *, event_type, payload, user_ids=None):
        raise RuntimeError("socket gone")


def test_failed_push_still_keeps_the_stored_notification(store) -> None:
    alice = _user(store, "alice")

    notify(store, user_id=alice.id, event_type="comment", message="Hola", publisher=_ExplodingPublisher())

    assert len(list_notifications(store, alice.id)) == 1


def test_mark_all_read_counts_only_unread(store) -> None:
    alice = _user(store, "alice")
    bob = _user(store, "bobby")
    notify(store, user_id=alice.id, event_type="follow", message="uno")
    notify(store, user_id=alice.id, event_type="follow", message="dos")
    notify(store, user_id=bob.id, event_type="follow", message="otro")

    assert mark_all_read(store, alice.id) == 2
    assert mark_all_read(store, alice.id) == 0
    assert all(n.is_read for n in list_notifications(store, alice.id))
    assert not list_notifications(store, bob.id)[0].is_read


def test_list_notifications_is_newest_first_and_limited(store) -> None:
    alice = _user(store, "alice")
    for index in range(3):
        notify(store, user_id=alice.id, event_type="follow", message=f"n{index}")

    latest = list_notifications(store, alice.id, limit=2)
    assert [n.message for n in latest] == ["n2", "n1"]

    with pytest.raises(ValidationError):
        list_notifications(store, alice.id, limit=0)


def test_resolve_fanout_recipients(store) -> None:
    alice = _user(store, "alice")
    bob = _user(store, "bobby")
    toggle_follow(store, follower_id=bob.id, followee_id=alice.id)

    assert resolve_fanout_recipients(store, AllSessions()) is None
    assert resolve_fanout_recipients(store, FollowersOf(author_id=alice.id)) == {bob.id}
    assert resolve_fanout_recipients(store, FollowersOf(author_id=bob.id)) == set()


def test_sql_follow_written_by_another_session_is_reused() -> None:
    with SessionLocal() as setup_session:
        setup = SqlStore(setup_session)
        alice = _user(setup, "alice")
        bob = _user(setup, "bobby")

    with SessionLocal() as first_session, SessionLocal() as second_session:
        first = SqlStore(first_session)
        second = SqlStore(second_session)
        assert not second.follows.exists(alice.id, bob.id)

        first.follows.create(alice.id, bob.id)
        edge = second.follows.create(alice.id, bob.id)

        assert (edge.follower_id, edge.followee_id) == (alice.id, bob.id)
        assert second.follows.list_following(alice.id) == {bob.id}


def test_concurrent_follow_toggles_never_fail() -> None:
    with SessionLocal() as setup_session:
        setup = SqlStore(setup_session)
        alice = _user(setup, "alice")
        bob = _user(setup, "bobby")

    def toggle(_: int) -> str:
        with SessionLocal() as session:
            return toggle_follow(
                SqlStore(session), follower_id=bob.id, followee_id=alice.id
            )

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(toggle, range(8)))

    assert set(results) <= {FOLLOW_STATUS_FOLLOWED, FOLLOW_STATUS_UNFOLLOWED}
    with SessionLocal() as session:
        following = SqlStore(session).follows.list_following(bob.id)
    assert following in (set(), {alice.id})
