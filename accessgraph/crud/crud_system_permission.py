"""CRUD operations for system permissions."""

from typing import AbstractSet, List, Set

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.shared_models import SystemPermissionType
from accessgraph.crud._filters import holder_filters
from accessgraph.models.entity import Entity
from accessgraph.models.system_permission import SystemPermission
from accessgraph.schemas.entity import EntityRef
from accessgraph.schemas.permission import SystemPermission as SystemPermissionSchema


class CRUDSystemPermission:
    """Read-only queries over system permissions."""

    async def exists(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        permission_type: SystemPermissionType,
        effective_groups: AbstractSet[str],
        inherit: bool,
        chunk_size: int,
    ) -> bool:
        """Whether the entity (or, if inheriting, an effective group) holds the permission."""
        for holder in holder_filters(entity, effective_groups, inherit, chunk_size):
            stmt = select(
                exists(
                    select(SystemPermission.id)
                    .join(Entity, SystemPermission.entity_id == Entity.id)
                    .where(holder, SystemPermission.permission == permission_type)
                )
            )
            result = await db.execute(stmt)
            if result.scalar():
                return True
        return False

    async def get_all(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        effective_groups: AbstractSet[str],
        inherit: bool,
        chunk_size: int,
    ) -> List[SystemPermissionSchema]:
        """Get every system permission held by the entity."""
        found: Set[SystemPermissionSchema] = set()
        for holder in holder_filters(entity, effective_groups, inherit, chunk_size):
            stmt = (
                select(SystemPermission.permission, Entity.name, Entity.type)
                .join(Entity, SystemPermission.entity_id == Entity.id)
                .where(holder)
            )
            result = await db.execute(stmt)
            found.update(
                SystemPermissionSchema(
                    entity=EntityRef(identifier=name, kind=kind),
                    type=permission,
                )
                for permission, name, kind in result.all()
            )
        return sorted(found, key=lambda p: (p.type.value, p.entity.identifier))


system_permission = CRUDSystemPermission()
