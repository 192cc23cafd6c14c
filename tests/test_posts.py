"""Tests for publishing posts, reactions, comments and feed reads."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import replace
from datetime import timedelta

import pytest
from sqlalchemy import update

from socialnet.application.use_cases.follows import toggle_follow
from socialnet.application.use_cases.posts import (
    NEW_COMMENT_EVENT,
    NEW_POST_EVENT,
    POST_REACTION_EVENT,
    add_comment,
    create_post,
    get_feed,
    get_post,
    get_user_posts,
    toggle_reaction,
)
from socialnet.application.use_cases.users import register_user, update_profile
from socialnet.domain.entities import (
    REACTION_KINDS,
    AllSessions,
    FollowersOf,
    Post,
    apply_reaction,
    empty_reactions,
)
from socialnet.domain.exceptions import NotFoundError, ServerError, ValidationError
from socialnet.infrastructure.database import SessionLocal
from socialnet.infrastructure.memory_store import MemoryStore
from socialnet.infrastructure.models import PostModel
from socialnet.infrastructure.store import SqlStore
from socialnet.utils import now_in_app_timezone


def _user(store, handle: str):
    return register_user(
        store,
        name=handle.capitalize(),
        username=handle,
        email=f"{handle}@example.com",
        password="password123",
    )


def test_apply_reaction_keeps_user_in_a_single_bucket() -> None:
    reactions = empty_reactions()
    reactions = apply_reaction(reactions, "u1", "like")
    reactions = apply_reaction(reactions, "u2", "like")
    reactions = apply_reaction(reactions, "u1", "heart")

    assert reactions["like"] == ["u2"]
    assert reactions["heart"] == ["u1"]
    assert set(reactions) == set(REACTION_KINDS)


def test_apply_reaction_same_kind_twice_is_idempotent() -> None:
    reactions = apply_reaction(empty_reactions(), "u1", "laugh")
    again = apply_reaction(reactions, "u1", "laugh")

    assert again["laugh"] == ["u1"]
    assert sum(len(users) for users in again.values()) == 1


def test_create_post_rejects_blank_content(store, publisher) -> None:
    alice = _user(store, "alice")

    with pytest.raises(ValidationError):
        create_post(store, author_id=alice.id, content="   ", publisher=publisher)
    assert publisher.broadcasts == []


def test_create_post_notifies_followers_and_broadcasts(store, publisher) -> None:
    alice = _user(store, "alice")
    bob = _user(store, "bobby")
    toggle_follow(store, follower_id=bob.id, followee_id=alice.id, publisher=publisher)

    view = create_post(
        store,
        author_id=alice.id,
        content="  Hola mundo  ",
        publisher=publisher,
        broadcast_target=AllSessions(),
    )

    assert view.post.content == "Hola mundo"
    assert view.author.username == "alice"
    assert view.post.reactions == empty_reactions()
    assert view.post.comments == []

    inbox = store.notifications.list_for_user(bob.id)
    assert len(inbox) == 1
    assert inbox[0].event_type == "new_post"
    assert inbox[0].payload == {"post_id": view.post.id}

    event_type, payload, recipients = publisher.broadcasts[-1]
    assert event_type == NEW_POST_EVENT
    assert payload["id"] == view.post.id
    assert payload["author_username"] == "alice"
    assert recipients is None


def test_create_post_followers_policy_targets_followers(store, publisher) -> None:
    alice = _user(store, "alice")
    bob = _user(store, "bobby")
    toggle_follow(store, follower_id=bob.id, followee_id=alice.id)

    create_post(
        store,
        author_id=alice.id,
        content="Solo para seguidores",
        publisher=publisher,
        broadcast_target=FollowersOf(author_id=alice.id),
    )

    event_type, _, recipients = publisher.broadcasts[-1]
    assert event_type == NEW_POST_EVENT
    assert recipients == {bob.id}


def test_reaction_scenario_moves_user_between_kinds(store, publisher) -> None:
    author = _user(store, "author")
    u1 = _user(store, "user1")
    u2 = _user(store, "user2")
    post = create_post(store, author_id=author.id, content="Post").post

    toggle_reaction(store, post_id=post.id, user_id=u1.id, reaction="like", publisher=publisher)
    toggle_reaction(store, post_id=post.id, user_id=u2.id, reaction="like", publisher=publisher)
    reactions = toggle_reaction(
        store, post_id=post.id, user_id=u1.id, reaction="heart", publisher=publisher
    )

    assert reactions["like"] == [u2.id]
    assert reactions["heart"] == [u1.id]
    assert all(not reactions[kind] for kind in ("dislike", "angry", "laugh", "cry"))
    assert get_post(store, post.id).post.reactions == reactions

    event_type, payload, recipients = publisher.broadcasts[-1]
    assert event_type == POST_REACTION_EVENT
    assert payload == {"post_id": post.id, "reactions": reactions}
    assert recipients is None

    inbox = store.notifications.list_for_user(author.id)
    assert [n.event_type for n in inbox] == ["reaction", "reaction", "reaction"]


def test_self_reaction_does_not_notify(store, publisher) -> None:
    author = _user(store, "author")
    post = create_post(store, author_id=author.id, content="Post").post

    toggle_reaction(store, post_id=post.id, user_id=author.id, reaction="cry", publisher=publisher)

    assert store.notifications.list_for_user(author.id) == []


def test_reaction_rejects_unknown_kind_and_unknown_post(store, publisher) -> None:
    author = _user(store, "author")
    post = create_post(store, author_id=author.id, content="Post").post

    with pytest.raises(ValidationError):
        toggle_reaction(store, post_id=post.id, user_id=author.id, reaction="love")
    with pytest.raises(NotFoundError):
        toggle_reaction(store, post_id="missing", user_id=author.id, reaction="like")


def test_add_comment_snapshots_author_and_notifies(store, publisher) -> None:
    author = _user(store, "author")
    fan = _user(store, "fanatic")
    post = create_post(store, author_id=author.id, content="Post").post

    comment = add_comment(
        store, post_id=post.id, user_id=fan.id, text=" Genial ", publisher=publisher
    )
    update_profile(store, user_id=fan.id, name="Renamed")

    stored = get_post(store, post.id).post
    assert len(stored.comments) == 1
    assert stored.comments[0].id == comment.id
    assert stored.comments[0].text == "Genial"
    assert stored.comments[0].author_name == "Fanatic"

    event_type, payload, _ = publisher.broadcasts[-1]
    assert event_type == NEW_COMMENT_EVENT
    assert payload["post_id"] == post.id
    assert payload["comment"]["id"] == comment.id

    inbox = store.notifications.list_for_user(author.id)
    assert [n.event_type for n in inbox] == ["comment"]


def test_add_comment_on_unknown_post_fails(store, publisher) -> None:
    user = _user(store, "commenter")

    with pytest.raises(NotFoundError):
        add_comment(store, post_id="missing", user_id=user.id, text="Hola", publisher=publisher)
    assert publisher.broadcasts == []


def test_add_comment_requires_text(store) -> None:
    author = _user(store, "author")
    post = create_post(store, author_id=author.id, content="Post").post

    with pytest.raises(ValidationError):
        add_comment(store, post_id=post.id, user_id=author.id, text="  ")


def test_comments_are_appended_in_order(store) -> None:
    author = _user(store, "author")
    post = create_post(store, author_id=author.id, content="Post").post

    for index in range(5):
        add_comment(store, post_id=post.id, user_id=author.id, text=f"c{index}")

    texts = [comment.text for comment in get_post(store, post.id).post.comments]
    assert texts == ["c0", "c1", "c2", "c3", "c4"]


def _insert_post(store, author_id: str, content: str, minutes_ago: int) -> Post:
    return store.posts.create(
        Post(
            id=None,
            author_id=author_id,
            content=content,
            created_at=now_in_app_timezone() - timedelta(minutes=minutes_ago),
        )
    )


def test_feed_is_newest_first_and_scoped_to_followed_authors(store) -> None:
    viewer = _user(store, "viewer")
    followed = _user(store, "followed")
    stranger = _user(store, "stranger")
    toggle_follow(store, follower_id=viewer.id, followee_id=followed.id)

    _insert_post(store, followed.id, "old", minutes_ago=30)
    _insert_post(store, viewer.id, "mine", minutes_ago=20)
    _insert_post(store, stranger.id, "hidden", minutes_ago=10)
    _insert_post(store, followed.id, "new", minutes_ago=1)

    feed = get_feed(store, viewer_id=viewer.id, scope="following")
    assert [view.post.content for view in feed] == ["new", "mine", "old"]

    everything = get_feed(store, viewer_id=viewer.id, scope="global")
    assert [view.post.content for view in everything] == ["new", "hidden", "mine", "old"]


def test_feed_pagination(store) -> None:
    viewer = _user(store, "viewer")
    for index in range(5):
        _insert_post(store, viewer.id, f"p{index}", minutes_ago=10 - index)

    first = get_feed(store, viewer_id=viewer.id, limit=2, offset=0)
    second = get_feed(store, viewer_id=viewer.id, limit=2, offset=2)
    last = get_feed(store, viewer_id=viewer.id, limit=2, offset=4)

    assert [v.post.content for v in first] == ["p4", "p3"]
    assert [v.post.content for v in second] == ["p2", "p1"]
    assert [v.post.content for v in last] == ["p0"]


def test_feed_reflects_current_author_profile(store) -> None:
    author = _user(store, "author")
    create_post(store, author_id=author.id, content="Post")
    update_profile(store, user_id=author.id, name="Nuevo Nombre")

    feed = get_feed(store, viewer_id=author.id)
    assert feed[0].author.name == "Nuevo Nombre"


def test_user_posts_requires_existing_user(store) -> None:
    with pytest.raises(NotFoundError):
        get_user_posts(store, user_id="missing")


def test_get_post_unknown_id(store) -> None:
    with pytest.raises(NotFoundError):
        get_post(store, "missing")


@pytest.mark.parametrize("backing", ["memory", "sql"])
def test_concurrent_reactions_and_comments_are_all_kept(backing) -> None:
    shared = MemoryStore() if backing == "memory" else None

    @contextmanager
    def worker_store():
        if shared is not None:
            yield shared
            return
        with SessionLocal() as session:
            yield SqlStore(session)

    with worker_store() as store:
        author = _user(store, "author")
        post_id = create_post(store, author_id=author.id, content="Popular").post.id
        fans = [_user(store, f"fan{index:02d}") for index in range(12)]

    def engage(user_id: str) -> None:
        with worker_store() as store:
            toggle_reaction(store, post_id=post_id, user_id=user_id, reaction="like")
            add_comment(store, post_id=post_id, user_id=user_id, text=f"de {user_id}")

    with ThreadPoolExecutor(max_workers=6) as pool:
        list(pool.map(engage, [fan.id for fan in fans]))

    with worker_store() as store:
        post = get_post(store, post_id).post
    assert sorted(post.reactions["like"]) == sorted(fan.id for fan in fans)
    assert sorted(c.author_id for c in post.comments) == sorted(fan.id for fan in fans)


def test_sql_mutation_gives_up_after_repeated_conflicts() -> None:
    with SessionLocal() as session, SessionLocal() as rival:
        store = SqlStore(session)
        author = _user(store, "author")
        post_id = create_post(store, author_id=author.id, content="Disputada").post.id
        attempts = []

        def always_outrun(post):
            attempts.append(post.version)
            rival.execute(
                update(PostModel)
                .where(PostModel.id == post_id)
                .values(version=PostModel.version + 1)
                .execution_options(synchronize_session=False)
            )
            rival.commit()
            return replace(post, reactions=apply_reaction(post.reactions, author.id, "like"))

        with pytest.raises(ServerError):
            store.posts.mutate(post_id, always_outrun)

        assert len(attempts) == 10
        assert get_post(store, post_id).post.reactions["like"] == []
