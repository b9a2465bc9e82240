"""Unit tests for the in-memory Unit of Work and repositories."""

from uuid import uuid4

import pytest

from core.exceptions import ConcurrentModificationError
from domain.entities.note import Note
from domain.entities.profile import Profile
from domain.entities.recipient_email import RecipientEmail
from domain.entities.tag import Tag
from infrastructure.memory.database import InMemoryDatabase
from infrastructure.memory.memory_uow import InMemoryUnitOfWork


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


async def _create_tag(db: InMemoryDatabase, name: str = "Work") -> Tag:
    tag = Tag(owner_id=uuid4(), name=name)
    async with InMemoryUnitOfWork(db) as uow:
        await uow.tags.create(tag)
        await uow.commit()
    return tag


class TestUnitOfWork:
    def test_repositories_require_context(self, db: InMemoryDatabase):
        uow = InMemoryUnitOfWork(db)

        with pytest.raises(RuntimeError):
            uow.tags

    async def test_writes_invisible_until_commit(self, db: InMemoryDatabase):
        tag = Tag(owner_id=uuid4(), name="Work")

        async with InMemoryUnitOfWork(db) as uow:
            await uow.tags.create(tag)
            assert await uow.tags.get(tag.id) is None
            await uow.commit()

        assert tag.id in db.tags

    async def test_exit_without_commit_discards(self, db: InMemoryDatabase):
        async with InMemoryUnitOfWork(db) as uow:
            await uow.tags.create(Tag(owner_id=uuid4(), name="Work"))

        assert db.tags == {}

    async def test_exception_discards_staged_writes(self, db: InMemoryDatabase):
        with pytest.raises(RuntimeError):
            async with InMemoryUnitOfWork(db) as uow:
                await uow.tags.create(Tag(owner_id=uuid4(), name="Work"))
                raise RuntimeError("boom")

        assert db.tags == {}

    async def test_failed_check_applies_nothing(self, db: InMemoryDatabase):
        existing = await _create_tag(db)

        async with InMemoryUnitOfWork(db) as uow:
            await uow.notes.add(Note(user_id=uuid4(), tag_id=existing.id))
            await uow.tags.create(existing)
            with pytest.raises(ValueError):
                await uow.commit()

        assert db.notes == {}


class TestMemoryTagRepository:
    async def test_loaded_tag_is_a_copy(self, db: InMemoryDatabase):
        tag = await _create_tag(db)

        async with InMemoryUnitOfWork(db) as uow:
            loaded = await uow.tags.get(tag.id)
            loaded.update_name("Changed", loaded.owner_id)

        assert db.tags[tag.id].name == "Work"

    async def test_save_persists_grants_and_bumps_version(self, db: InMemoryDatabase):
        tag = await _create_tag(db)
        recipient = uuid4()

        async with InMemoryUnitOfWork(db) as uow:
            loaded = await uow.tags.get(tag.id)
            loaded.grant_access(recipient, RecipientEmail("bob@example.com"), loaded.owner_id)
            await uow.tags.save(loaded)
            await uow.commit()

        assert loaded.version == 1
        assert db.tags[tag.id].version == 1
        assert db.tags[tag.id].has_access(recipient)

    async def test_stale_save_raises_conflict(self, db: InMemoryDatabase):
        tag = await _create_tag(db)

        async with InMemoryUnitOfWork(db) as first, InMemoryUnitOfWork(db) as second:
            a = await first.tags.get(tag.id)
            b = await second.tags.get(tag.id)
            a.grant_access(uuid4(), RecipientEmail("a@example.com"), a.owner_id)
            b.grant_access(uuid4(), RecipientEmail("b@example.com"), b.owner_id)

            await first.tags.save(a)
            await first.commit()

            await second.tags.save(b)
            with pytest.raises(ConcurrentModificationError) as exc_info:
                await second.commit()

        assert exc_info.value.status_code == 409
        stored = db.tags[tag.id]
        assert [g.recipient_email.value for g in stored.access_list] == ["a@example.com"]

    async def test_get_by_name_ignores_case(self, db: InMemoryDatabase):
        tag = await _create_tag(db, "Recipes")

        async with InMemoryUnitOfWork(db) as uow:
            found = await uow.tags.get_by_name(tag.owner_id, "recipes")
            other_owner = await uow.tags.get_by_name(uuid4(), "recipes")

        assert found is not None and found.id == tag.id
        assert other_owner is None

    async def test_lists_owned_and_shared_sorted_by_name(self, db: InMemoryDatabase):
        owner, friend = uuid4(), uuid4()
        for name in ["beta", "Alpha"]:
            tag = Tag(owner_id=owner, name=name)
            tag.grant_access(friend, RecipientEmail("friend@example.com"), owner)
            db.tags[tag.id] = tag

        async with InMemoryUnitOfWork(db) as uow:
            owned = await uow.tags.get_all_for_user(owner)
            shared = await uow.tags.get_shared_with_user(friend)

        assert [t.name for t in owned] == ["Alpha", "beta"]
        assert [t.name for t in shared] == ["Alpha", "beta"]

    async def test_delete(self, db: InMemoryDatabase):
        tag = await _create_tag(db)

        async with InMemoryUnitOfWork(db) as uow:
            assert await uow.tags.delete(tag.id) is True
            assert await uow.tags.delete(uuid4()) is False
            await uow.commit()

        assert db.tags == {}


class TestMemoryNoteAndProfileRepositories:
    async def test_note_counts(self, db: InMemoryDatabase):
        t1, t2 = uuid4(), uuid4()
        async with InMemoryUnitOfWork(db) as uow:
            for tag_id in (t1, t1, t2):
                await uow.notes.add(Note(user_id=uuid4(), tag_id=tag_id))
            await uow.commit()

        async with InMemoryUnitOfWork(db) as uow:
            assert await uow.notes.count_for_tag(t1) == 2
            assert await uow.notes.get_counts_batch([t1, t2, uuid4()]) == {t1: 2, t2: 1}
            assert await uow.notes.get_counts_batch([]) == {}

    async def test_profile_lookup_by_email_ignores_case(self, db: InMemoryDatabase):
        profile = Profile(email="Bob@Example.com")
        async with InMemoryUnitOfWork(db) as uow:
            await uow.profiles.add(profile)
            await uow.commit()

        async with InMemoryUnitOfWork(db) as uow:
            found = await uow.profiles.get_by_email("  BOB@example.com")
            by_id = await uow.profiles.get(profile.id)

        assert found is not None and found.id == profile.id
        assert by_id is not None and by_id.email == "bob@example.com"

    async def test_profile_save_replaces_stored_profile(self, db: InMemoryDatabase):
        profile = Profile(email="bob@example.com")
        db.profiles[profile.id] = profile

        async with InMemoryUnitOfWork(db) as uow:
            loaded = await uow.profiles.get(profile.id)
            loaded.display_name = "Bob"
            await uow.profiles.save(loaded)
            await uow.commit()

        assert db.profiles[profile.id].display_name == "Bob"

    async def test_profile_save_requires_existing_profile(self, db: InMemoryDatabase):
        async with InMemoryUnitOfWork(db) as uow:
            await uow.profiles.save(Profile(email="ghost@example.com"))
            with pytest.raises(ValueError):
                await uow.commit()

        assert db.profiles == {}
