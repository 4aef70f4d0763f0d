"""Unit tests for EntityService."""

from unittest.mock import MagicMock

import pytest

from accessgraph.domains.memberships.exceptions import (
    EntityAlreadyExistsError,
    UnknownEntityError,
)
from accessgraph.domains.memberships.fakes.repository import FakeEntityRepository
from accessgraph.domains.memberships.service import EntityService
from accessgraph.schemas.entity import EntityRef

DB = MagicMock()


class _BlindEntityRepository(FakeEntityRepository):
    """Never sees existing rows, so the duplicate is only caught by the insert."""

    async def get(self, db, entity):
        self._calls.append(("get", db, entity))
        return None


@pytest.mark.asyncio
async def test_create_inserts_and_returns_row_count(fake_entity_repo):
    """create() inserts a new entity and reports one row."""
    svc = EntityService(entity_repo=fake_entity_repo)

    rows = await svc.create(DB, EntityRef.user("alice"))

    assert rows == 1
    assert await fake_entity_repo.get(DB, EntityRef.user("alice")) == EntityRef.user("alice")


@pytest.mark.asyncio
async def test_create_duplicate_raises(fake_entity_repo):
    """create() refuses an entity that already exists."""
    fake_entity_repo.seed(EntityRef.group("ops"))
    svc = EntityService(entity_repo=fake_entity_repo)

    with pytest.raises(EntityAlreadyExistsError):
        await svc.create(DB, EntityRef.group("ops"))

    assert not [c for c in fake_entity_repo._calls if c[0] == "insert"]


@pytest.mark.asyncio
async def test_same_identifier_different_kind_is_not_a_duplicate(fake_entity_repo):
    """Identifiers are unique within a kind only."""
    fake_entity_repo.seed(EntityRef.group("ops"))
    svc = EntityService(entity_repo=fake_entity_repo)

    assert await svc.create(DB, EntityRef.user("ops")) == 1


@pytest.mark.asyncio
async def test_create_race_maps_integrity_error():
    """A concurrent insert surfacing as IntegrityError becomes EntityAlreadyExistsError."""
    repo = _BlindEntityRepository()
    repo.seed(EntityRef.user("alice"))
    svc = EntityService(entity_repo=repo)

    with pytest.raises(EntityAlreadyExistsError) as exc_info:
        await svc.create(DB, EntityRef.user("alice"))

    assert exc_info.value.entity == EntityRef.user("alice")


@pytest.mark.asyncio
async def test_get_existing(fake_entity_repo):
    """get() returns a stored entity."""
    fake_entity_repo.seed(EntityRef.user("alice"))
    svc = EntityService(entity_repo=fake_entity_repo)

    assert await svc.get(DB, EntityRef.user("alice")) == EntityRef.user("alice")


@pytest.mark.asyncio
async def test_get_missing_raises(fake_entity_repo):
    """get() raises UnknownEntityError for a missing entity."""
    svc = EntityService(entity_repo=fake_entity_repo)

    with pytest.raises(UnknownEntityError):
        await svc.get(DB, EntityRef.user("nobody"))
