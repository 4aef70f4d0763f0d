"""CRUD operations for object permissions."""

from typing import AbstractSet, Collection, Dict, List, Optional, Set

from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.shared_models import ObjectKind, ObjectPermissionType
from accessgraph.crud._filters import chunked, holder_filters, is_entity
from accessgraph.models.entity import Entity
from accessgraph.models.object_permission import ObjectPermission
from accessgraph.schemas.entity import EntityRef
from accessgraph.schemas.permission import ObjectPermission as ObjectPermissionSchema


def _to_schema(row) -> ObjectPermissionSchema:
    permission, holder_name, holder_type = row
    return ObjectPermissionSchema(
        entity=EntityRef(identifier=holder_name, kind=holder_type),
        object_kind=permission.object_kind,
        type=permission.permission,
        object_identifier=permission.object_identifier,
    )


class CRUDObjectPermission:
    """Read-only queries over object permissions.

    Group names and candidate identifiers are bound at most ``chunk_size`` at
    a time, so one call may issue several statements.
    """

    async def get_one(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        object_kind: ObjectKind,
        permission_type: ObjectPermissionType,
        object_identifier: str,
        effective_groups: AbstractSet[str],
        inherit: bool,
        chunk_size: int,
    ) -> Optional[ObjectPermissionSchema]:
        """Get one matching permission, preferring a row stored against the entity itself.

        Args:
            db: Database session
            entity: Entity whose permission is checked
            object_kind: Kind of the object
            permission_type: Permission type to look for
            object_identifier: Identifier of the object
            effective_groups: Effective group names of the entity
            inherit: Whether rows stored against effective groups count
            chunk_size: Max group names bound into one statement

        Returns:
            The matching permission, or None
        """
        best: Optional[ObjectPermissionSchema] = None
        for holder in holder_filters(entity, effective_groups, inherit, chunk_size):
            stmt = (
                select(ObjectPermission, Entity.name, Entity.type)
                .join(Entity, ObjectPermission.entity_id == Entity.id)
                .where(
                    holder,
                    ObjectPermission.object_kind == object_kind,
                    ObjectPermission.permission == permission_type,
                    ObjectPermission.object_identifier == object_identifier,
                )
                .order_by(case((is_entity(entity), 0), else_=1), Entity.name)
                .limit(1)
            )
            result = await db.execute(stmt)
            row = result.first()
            if row is None:
                continue
            found = _to_schema(row)
            if found.entity == entity:
                return found
            if best is None or found.entity.identifier < best.entity.identifier:
                best = found
        return best

    async def get_accessible_identifiers(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        object_kind: ObjectKind,
        permission_types: Collection[ObjectPermissionType],
        object_identifiers: Collection[str],
        effective_groups: AbstractSet[str],
        inherit: bool,
        chunk_size: int,
    ) -> Set[str]:
        """Get the subset of identifiers with at least one of the given permissions."""
        if not permission_types or not object_identifiers:
            return set()

        holders = holder_filters(entity, effective_groups, inherit, chunk_size)
        accessible: Set[str] = set()
        for chunk in chunked(sorted(set(object_identifiers)), chunk_size):
            for holder in holders:
                pending = [object_id for object_id in chunk if object_id not in accessible]
                if not pending:
                    break
                stmt = (
                    select(ObjectPermission.object_identifier)
                    .join(Entity, ObjectPermission.entity_id == Entity.id)
                    .where(
                        holder,
                        ObjectPermission.object_kind == object_kind,
                        ObjectPermission.permission.in_(list(permission_types)),
                        ObjectPermission.object_identifier.in_(pending),
                    )
                    .distinct()
                )
                result = await db.execute(stmt)
                accessible.update(result.scalars().all())
        return accessible

    async def get_all(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        object_kind: ObjectKind,
        effective_groups: AbstractSet[str],
        inherit: bool,
        chunk_size: int,
    ) -> List[ObjectPermissionSchema]:
        """Get every permission of the given object kind held by the entity."""
        found: Dict[ObjectPermissionSchema, None] = {}
        for holder in holder_filters(entity, effective_groups, inherit, chunk_size):
            stmt = (
                select(ObjectPermission, Entity.name, Entity.type)
                .join(Entity, ObjectPermission.entity_id == Entity.id)
                .where(holder, ObjectPermission.object_kind == object_kind)
            )
            result = await db.execute(stmt)
            found.update((_to_schema(row), None) for row in result.all())
        return sorted(
            found,
            key=lambda p: (p.object_identifier, p.type.value, p.entity.identifier),
        )


object_permission = CRUDObjectPermission()
