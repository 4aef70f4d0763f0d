"""Permission repositories wrapping crud."""

from typing import AbstractSet, Collection, List, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph import crud
from accessgraph.core.shared_models import ObjectKind, ObjectPermissionType, SystemPermissionType
from accessgraph.domains.permissions.protocols import (
    ObjectPermissionRepositoryProtocol,
    SystemPermissionRepositoryProtocol,
)
from accessgraph.schemas.entity import EntityRef
from accessgraph.schemas.permission import ObjectPermission, SystemPermission


class ObjectPermissionRepository(ObjectPermissionRepositoryProtocol):
    """Delegates to the crud.object_permission singleton."""

    def __init__(self, chunk_size: int) -> None:
        """Initialize with the max number of identifiers bound into one statement."""
        self._chunk_size = chunk_size

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
    ) -> Optional[ObjectPermission]:
        """Get one matching permission."""
        return await crud.object_permission.get_one(
            db,
            entity=entity,
            object_kind=object_kind,
            permission_type=permission_type,
            object_identifier=object_identifier,
            effective_groups=effective_groups,
            inherit=inherit,
            chunk_size=self._chunk_size,
        )

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
    ) -> Set[str]:
        """Get the accessible subset of the identifiers."""
        return await crud.object_permission.get_accessible_identifiers(
            db,
            entity=entity,
            object_kind=object_kind,
            permission_types=permission_types,
            object_identifiers=object_identifiers,
            effective_groups=effective_groups,
            inherit=inherit,
            chunk_size=self._chunk_size,
        )

    async def get_all(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        object_kind: ObjectKind,
        effective_groups: AbstractSet[str],
        inherit: bool,
    ) -> List[ObjectPermission]:
        """Get every permission of the object kind."""
        return await crud.object_permission.get_all(
            db,
            entity=entity,
            object_kind=object_kind,
            effective_groups=effective_groups,
            inherit=inherit,
            chunk_size=self._chunk_size,
        )


class SystemPermissionRepository(SystemPermissionRepositoryProtocol):
    """Delegates to the crud.system_permission singleton."""

    def __init__(self, chunk_size: int) -> None:
        """Initialize with the max number of group names bound into one statement."""
        self._chunk_size = chunk_size

    async def exists(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        permission_type: SystemPermissionType,
        effective_groups: AbstractSet[str],
        inherit: bool,
    ) -> bool:
        """Whether the permission is granted."""
        return await crud.system_permission.exists(
            db,
            entity=entity,
            permission_type=permission_type,
            effective_groups=effective_groups,
            inherit=inherit,
            chunk_size=self._chunk_size,
        )

    async def get_all(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        effective_groups: AbstractSet[str],
        inherit: bool,
    ) -> List[SystemPermission]:
        """Get every system permission."""
        return await crud.system_permission.get_all(
            db,
            entity=entity,
            effective_groups=effective_groups,
            inherit=inherit,
            chunk_size=self._chunk_size,
        )
