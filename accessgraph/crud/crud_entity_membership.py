"""CRUD operations for entity memberships."""

from typing import Collection, Set

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from accessgraph.core.shared_models import EntityKind
from accessgraph.crud._filters import chunked
from accessgraph.models.entity import Entity
from accessgraph.models.entity_membership import EntityMembership
from accessgraph.schemas.entity import EntityRef

GroupEntity = aliased(Entity, name="group_entity")
MemberEntity = aliased(Entity, name="member_entity")


def _parent_groups_query():
    return (
        select(GroupEntity.name)
        .select_from(EntityMembership)
        .join(GroupEntity, EntityMembership.group_entity_id == GroupEntity.id)
        .join(MemberEntity, EntityMembership.member_entity_id == MemberEntity.id)
        .where(GroupEntity.type == EntityKind.USER_GROUP)
    )


class CRUDEntityMembership:
    """Read-only queries over direct membership edges."""

    async def get_group_names_for_member(self, db: AsyncSession, entity: EntityRef) -> Set[str]:
        """Get the names of the groups the entity is directly a member of."""
        stmt = _parent_groups_query().where(
            MemberEntity.name == entity.identifier,
            MemberEntity.type == entity.kind,
        )
        result = await db.execute(stmt)
        return set(result.scalars().all())

    async def get_parent_group_names(
        self, db: AsyncSession, group_names: Collection[str], *, chunk_size: int
    ) -> Set[str]:
        """Get the names of the groups any of the given groups is directly a member of.

        One call may issue several statements when the input exceeds
        ``chunk_size``.
        """
        parents: Set[str] = set()
        for chunk in chunked(sorted(group_names), chunk_size):
            stmt = _parent_groups_query().where(
                MemberEntity.type == EntityKind.USER_GROUP,
                MemberEntity.name.in_(chunk),
            )
            result = await db.execute(stmt)
            parents.update(result.scalars().all())
        return parents


entity_membership = CRUDEntityMembership()
