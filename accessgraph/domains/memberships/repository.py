"""Entity and membership repositories wrapping crud."""

from typing import Collection, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph import crud
from accessgraph.domains.memberships.protocols import (
    EntityRepositoryProtocol,
    MembershipRepositoryProtocol,
)
from accessgraph.schemas.entity import EntityRef


class EntityRepository(EntityRepositoryProtocol):
    """Delegates to the crud.entity singleton."""

    async def get(self, db: AsyncSession, entity: EntityRef) -> Optional[EntityRef]:
        """Get the stored entity matching the reference."""
        db_obj = await crud.entity.get(db, entity)
        if db_obj is None:
            return None
        return EntityRef(identifier=db_obj.name, kind=db_obj.type)

    async def insert(self, db: AsyncSession, entity: EntityRef) -> int:
        """Insert the entity."""
        return await crud.entity.insert(db, entity)


class MembershipRepository(MembershipRepositoryProtocol):
    """Delegates to the crud.entity_membership singleton."""

    def __init__(self, chunk_size: int) -> None:
        """Initialize with the max number of group names bound into one statement."""
        self._chunk_size = chunk_size

    async def get_direct_group_identifiers(self, db: AsyncSession, entity: EntityRef) -> Set[str]:
        """Get the groups the entity is directly a member of."""
        return await crud.entity_membership.get_group_names_for_member(db, entity)

    async def get_parent_group_identifiers(
        self, db: AsyncSession, group_identifiers: Collection[str]
    ) -> Set[str]:
        """Get the parents of the given groups."""
        if not group_identifiers:
            return set()
        return await crud.entity_membership.get_parent_group_names(
            db, group_identifiers, chunk_size=self._chunk_size
        )
