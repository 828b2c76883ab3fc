"""
Tests for the user and task stores against an in-memory database.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from database.stores import TaskStore, UserStore
from utils.errors import ConflictError


async def _make_user(session, username):
    return await UserStore(session).create(username, "hash")


class TestUserStore:
    @pytest.mark.asyncio
    async def test_create_and_lookup(self, session):
        users = UserStore(session)
        user = await users.create("alice", "hash-a")
        assert user.id is not None

        assert (await users.get_by_id(user.id)).username == "alice"
        assert (await users.get_by_username("alice")).id == user.id

    @pytest.mark.asyncio
    async def test_missing_user(self, session):
        users = UserStore(session)
        assert await users.get_by_id(999) is None
        assert await users.get_by_username("nobody") is None

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts(self, session):
        users = UserStore(session)
        await users.create("alice", "hash-a")
        await session.commit()

        with pytest.raises(ConflictError):
            await users.create("alice", "hash-b")

        # the session is usable again after the conflict
        assert (await users.get_by_username("alice")).password_hash == "hash-a"


class TestTaskStore:
    @pytest.mark.asyncio
    async def test_create_defaults(self, session):
        alice = await _make_user(session, "alice")
        task = await TaskStore(session).create(alice.id, "Buy milk")
        assert task.id is not None
        assert task.user_id == alice.id
        assert task.description is None
        assert task.is_completed is False

    @pytest.mark.asyncio
    async def test_list_is_owner_scoped_and_ordered(self, session):
        alice = await _make_user(session, "alice")
        bob = await _make_user(session, "bob")
        tasks = TaskStore(session)

        first = await tasks.create(alice.id, "one")
        await tasks.create(bob.id, "bob's")
        second = await tasks.create(alice.id, "two", description="d", is_completed=True)

        listed = await tasks.list_by_owner(alice.id)
        assert [t.id for t in listed] == [first.id, second.id]
        assert listed[1].description == "d"
        assert listed[1].is_completed is True
        assert [t.title for t in await tasks.list_by_owner(bob.id)] == ["bob's"]

    @pytest.mark.asyncio
    async def test_update_applies_only_given_fields(self, session):
        alice = await _make_user(session, "alice")
        tasks = TaskStore(session)
        task = await tasks.create(alice.id, "title", description="desc")

        updated = await tasks.update(task.id, alice.id, {"is_completed": True})
        assert updated.is_completed is True
        assert updated.title == "title"
        assert updated.description == "desc"

        updated = await tasks.update(task.id, alice.id, {"description": None, "user_id": 42})
        assert updated.description is None
        assert updated.user_id == alice.id

    @pytest.mark.asyncio
    async def test_update_empty_fields_returns_task(self, session):
        alice = await _make_user(session, "alice")
        tasks = TaskStore(session)
        task = await tasks.create(alice.id, "title")
        assert (await tasks.update(task.id, alice.id, {})).id == task.id

    @pytest.mark.asyncio
    async def test_cross_user_update_and_delete(self, session):
        alice = await _make_user(session, "alice")
        bob = await _make_user(session, "bob")
        tasks = TaskStore(session)
        task = await tasks.create(alice.id, "private")

        assert await tasks.update(task.id, bob.id, {"title": "pwned"}) is None
        await tasks.delete(task.id, bob.id)

        [still_there] = await tasks.list_by_owner(alice.id)
        assert still_there.title == "private"

    @pytest.mark.asyncio
    async def test_update_missing(self, session):
        alice = await _make_user(session, "alice")
        assert await TaskStore(session).update(12345, alice.id, {"title": "x"}) is None

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, session):
        alice = await _make_user(session, "alice")
        tasks = TaskStore(session)
        task = await tasks.create(alice.id, "gone soon")

        await tasks.delete(task.id, alice.id)
        await tasks.delete(task.id, alice.id)
        await tasks.delete(99999, alice.id)
        assert await tasks.list_by_owner(alice.id) == []

    @pytest.mark.asyncio
    async def test_task_requires_existing_owner(self, session):
        with pytest.raises(IntegrityError):
            await TaskStore(session).create(4242, "orphan")
