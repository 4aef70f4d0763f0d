"""Fake entity and membership repositories for testing."""

from typing import Any, Collection, Dict, Optional, Set

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.shared_models import EntityKind
from accessgraph.schemas.entity import EntityRef


class FakeEntityRepository:
    """In-memory fake for EntityRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: Set[EntityRef] = set()
        self._calls: list[tuple[Any, ...]] = []

    def seed(self, *entities: EntityRef) -> None:
        """Seed existing entities."""
        self._store.update(entities)

    async def get(self, db: AsyncSession, entity: EntityRef) -> Optional[EntityRef]:
        """Return the seeded entity, if any."""
        self._calls.append(("get", db, entity))
        return entity if entity in self._store else None

    async def insert(self, db: AsyncSession, entity: EntityRef) -> int:
        """Store the entity. Duplicates raise like a unique constraint would."""
        self._calls.append(("insert", db, entity))
        if entity in self._store:
            raise IntegrityError("INSERT INTO entity", {}, Exception(f"duplicate {entity}"))
        self._store.add(entity)
        return 1


class FakeMembershipRepository:
    """In-memory fake for MembershipRepositoryProtocol.

    Edges are stored as member -> set of group identifiers.
    """

    def __init__(self) -> None:
        """Initialize with no edges."""
        self._edges: Dict[EntityRef, Set[str]] = {}
        self._calls: list[tuple[Any, ...]] = []

    def seed(self, member: EntityRef, *groups: str) -> None:
        """Make ``member`` a direct member of each of ``groups``."""
        self._edges.setdefault(member, set()).update(groups)

    async def get_direct_group_identifiers(self, db: AsyncSession, entity: EntityRef) -> Set[str]:
        """Return the member's direct groups."""
        self._calls.append(("get_direct_group_identifiers", db, entity))
        return set(self._edges.get(entity, set()))

    async def get_parent_group_identifiers(
        self, db: AsyncSession, group_identifiers: Collection[str]
    ) -> Set[str]:
        """Return the union of the given groups' direct parents."""
        self._calls.append(("get_parent_group_identifiers", db, frozenset(group_identifiers)))
        parents: Set[str] = set()
        for group_id in group_identifiers:
            group = EntityRef(identifier=group_id, kind=EntityKind.USER_GROUP)
            parents |= self._edges.get(group, set())
        return parents
