"""Protocols for the memberships domain."""

from typing import Collection, Optional, Protocol, Set

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.schemas.entity import EntityRef


class EntityRepositoryProtocol(Protocol):
    """Data access for entity records."""

    async def get(self, db: AsyncSession, entity: EntityRef) -> Optional[EntityRef]:
        """Get the stored entity matching the reference."""
        ...

    async def insert(self, db: AsyncSession, entity: EntityRef) -> int:
        """Insert the entity, returning rows affected. Fails if it exists."""
        ...


class MembershipRepositoryProtocol(Protocol):
    """Read-only access to direct (non-transitive) membership edges."""

    async def get_direct_group_identifiers(self, db: AsyncSession, entity: EntityRef) -> Set[str]:
        """Get the groups the entity is directly a member of."""
        ...

    async def get_parent_group_identifiers(
        self, db: AsyncSession, group_identifiers: Collection[str]
    ) -> Set[str]:
        """Get the groups any of the given groups is directly a member of."""
        ...


class GroupClosureResolverProtocol(Protocol):
    """Computes effective (transitively closed) group membership."""

    async def require_entity(self, db: AsyncSession, entity: EntityRef) -> EntityRef:
        """Return the stored entity or raise UnknownEntityError."""
        ...

    async def effective_groups(
        self,
        db: AsyncSession,
        entity: EntityRef,
        known_groups: Collection[str] = (),
    ) -> Set[str]:
        """Get every group the entity belongs to, directly or through other groups."""
        ...


class EntityServiceProtocol(Protocol):
    """Entity lifecycle operations exposed by the core."""

    async def create(self, db: AsyncSession, entity: EntityRef) -> int:
        """Insert a new entity."""
        ...

    async def get(self, db: AsyncSession, entity: EntityRef) -> EntityRef:
        """Get an existing entity."""
        ...
