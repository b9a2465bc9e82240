"""Unit tests for TagService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    TagHasNotesError,
    TagNameAlreadyExistsError,
    TagNotFoundError,
    TagNotOwnedError,
)
from domain.entities.recipient_email import RecipientEmail
from domain.entities.tag import Tag
from domain.services.tag_service import TagService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> TagService:
    return TagService(lambda: uow)


# --- get_tags ---


class TestGetTags:
    @pytest.mark.asyncio
    async def test_returns_owned_then_shared_with_stats(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID, recipient_id: UUID
    ):
        own = Tag(owner_id=owner_id, name="Work")
        own.grant_access(recipient_id, RecipientEmail("bob@example.com"), owner_id)
        foreign_owner = uuid4()
        shared = Tag(owner_id=foreign_owner, name="Recipes")
        shared.grant_access(owner_id, RecipientEmail("me@example.com"), foreign_owner)
        uow.tags.get_all_for_user.return_value = [own]
        uow.tags.get_shared_with_user.return_value = [shared]
        uow.notes.get_counts_batch.return_value = {own.id: 3}

        result = await service.get_tags(owner_id)

        assert [s.tag.name for s in result] == ["Work", "Recipes"]
        assert result[0].is_owner is True
        assert result[0].note_count == 3
        assert result[0].shared_recipients == 1
        assert result[1].is_owner is False
        assert result[1].note_count == 0
        assert result[1].shared_recipients is None
        uow.notes.get_counts_batch.assert_called_once_with([own.id, shared.id])

    @pytest.mark.asyncio
    async def test_excludes_shared_when_requested(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID
    ):
        uow.tags.get_all_for_user.return_value = [Tag(owner_id=owner_id, name="Work")]
        uow.notes.get_counts_batch.return_value = {}

        result = await service.get_tags(owner_id, include_shared=False)

        assert len(result) == 1
        uow.tags.get_shared_with_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_returns_empty_without_counting(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID
    ):
        uow.tags.get_all_for_user.return_value = []
        uow.tags.get_shared_with_user.return_value = []

        result = await service.get_tags(owner_id)

        assert result == []
        uow.notes.get_counts_batch.assert_not_called()


# --- create ---


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_tag_for_user(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID
    ):
        uow.tags.get_by_name.return_value = None
        uow.tags.create.side_effect = lambda tag: tag

        result = await service.create(user_id=owner_id, name="New Tag")

        assert result.name == "New Tag"
        assert result.owner_id == owner_id
        uow.tags.create.assert_called_once()
        assert uow.committed

    @pytest.mark.asyncio
    async def test_rejects_duplicate_name(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID
    ):
        uow.tags.get_by_name.return_value = Tag(owner_id=owner_id, name="work")

        with pytest.raises(TagNameAlreadyExistsError):
            await service.create(user_id=owner_id, name="Work")

        uow.tags.create.assert_not_called()
        assert not uow.committed


# --- update ---


class TestUpdate:
    @pytest.mark.asyncio
    async def test_renames_tag(self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID):
        tag = Tag(owner_id=owner_id, name="Old")
        uow.tags.get.return_value = tag
        uow.tags.get_by_name.return_value = None

        result = await service.update(tag.id, owner_id, "New")

        assert result.name == "New"
        uow.tags.save.assert_called_once_with(tag)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_case_only_rename_skips_uniqueness_check(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID
    ):
        tag = Tag(owner_id=owner_id, name="work")
        uow.tags.get.return_value = tag

        result = await service.update(tag.id, owner_id, "Work")

        assert result.name == "Work"
        uow.tags.get_by_name.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_name_of_another_tag(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID
    ):
        tag = Tag(owner_id=owner_id, name="Old")
        uow.tags.get.return_value = tag
        uow.tags.get_by_name.return_value = Tag(owner_id=owner_id, name="Taken")

        with pytest.raises(TagNameAlreadyExistsError):
            await service.update(tag.id, owner_id, "Taken")

        assert tag.name == "Old"
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_raises_not_found(self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID):
        uow.tags.get.return_value = None

        with pytest.raises(TagNotFoundError):
            await service.update(uuid4(), owner_id, "New")

    @pytest.mark.asyncio
    async def test_non_owner_rejected(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID
    ):
        tag = Tag(owner_id=owner_id, name="Old")
        uow.tags.get.return_value = tag

        with pytest.raises(TagNotOwnedError):
            await service.update(tag.id, uuid4(), "New")

        uow.tags.get_by_name.assert_not_called()
        uow.tags.save.assert_not_called()


# --- delete ---


class TestDelete:
    @pytest.mark.asyncio
    async def test_deletes_empty_tag(self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID):
        tag = Tag(owner_id=owner_id, name="Old")
        uow.tags.get.return_value = tag
        uow.notes.count_for_tag.return_value = 0

        await service.delete(tag.id, owner_id)

        uow.tags.delete.assert_called_once_with(tag.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_refuses_tag_with_notes(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID
    ):
        tag = Tag(owner_id=owner_id, name="Busy")
        uow.tags.get.return_value = tag
        uow.notes.count_for_tag.return_value = 2

        with pytest.raises(TagHasNotesError) as exc_info:
            await service.delete(tag.id, owner_id)

        assert exc_info.value.status_code == 409
        uow.tags.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_owner_sees_not_found(
        self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID
    ):
        tag = Tag(owner_id=owner_id, name="Private")
        uow.tags.get.return_value = tag

        with pytest.raises(TagNotFoundError):
            await service.delete(tag.id, uuid4())

        uow.notes.count_for_tag.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_tag(self, service: TagService, uow: FakeUnitOfWork, owner_id: UUID):
        uow.tags.get.return_value = None

        with pytest.raises(TagNotFoundError):
            await service.delete(uuid4(), owner_id)
