"""Protocols for the permissions domain."""

from typing import AbstractSet, Collection, List, Optional, Protocol, Sequence, Set

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.shared_models import ObjectKind, ObjectPermissionType, SystemPermissionType
from accessgraph.schemas.entity import EntityRef
from accessgraph.schemas.permission import ObjectPermission, SystemPermission


class ObjectPermissionRepositoryProtocol(Protocol):
    """Read-only access to object permission rows.

    Every method answers in one call for the entity and, when ``inherit`` is
    true, for all of ``effective_groups`` at once.
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
    ) -> Optional[ObjectPermission]:
        """Get one matching permission; a row stored against the entity itself wins."""
        ...

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
        """Get the identifiers for which at least one of the permission types is granted."""
        ...

    async def get_all(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        object_kind: ObjectKind,
        effective_groups: AbstractSet[str],
        inherit: bool,
    ) -> List[ObjectPermission]:
        """Get every permission of the object kind held by the entity."""
        ...


class SystemPermissionRepositoryProtocol(Protocol):
    """Read-only access to system permission rows."""

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
        ...

    async def get_all(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        effective_groups: AbstractSet[str],
        inherit: bool,
    ) -> List[SystemPermission]:
        """Get every system permission held by the entity."""
        ...


class PermissionEvaluatorProtocol(Protocol):
    """Answers permission checks for an acting entity."""

    async def get_permission(
        self,
        db: AsyncSession,
        entity: EntityRef,
        object_kind: ObjectKind,
        permission_type: ObjectPermissionType,
        object_identifier: str,
        *,
        inherit: Optional[bool] = None,
        known_groups: Collection[str] = (),
    ) -> Optional[ObjectPermission]:
        """Get the permission granting access, or None."""
        ...

    async def has_any_permission(
        self,
        db: AsyncSession,
        entity: EntityRef,
        object_kind: ObjectKind,
        permission_types: Collection[ObjectPermissionType],
        object_identifier: str,
        *,
        inherit: Optional[bool] = None,
        known_groups: Collection[str] = (),
    ) -> bool:
        """Whether at least one of the permission types is granted on the object."""
        ...

    async def filter_accessible(
        self,
        db: AsyncSession,
        entity: EntityRef,
        object_kind: ObjectKind,
        permission_types: Collection[ObjectPermissionType],
        object_identifiers: Sequence[str],
        *,
        inherit: Optional[bool] = None,
        known_groups: Collection[str] = (),
    ) -> Set[str]:
        """Get the subset of identifiers the entity may access."""
        ...

    async def get_permissions(
        self,
        db: AsyncSession,
        entity: EntityRef,
        object_kind: ObjectKind,
        *,
        inherit: Optional[bool] = None,
        known_groups: Collection[str] = (),
    ) -> List[ObjectPermission]:
        """Get the entity's object permission set."""
        ...

    async def has_system_permission(
        self,
        db: AsyncSession,
        entity: EntityRef,
        permission_type: SystemPermissionType,
        *,
        inherit: Optional[bool] = None,
        known_groups: Collection[str] = (),
    ) -> bool:
        """Whether the system permission is granted."""
        ...

    async def get_system_permissions(
        self,
        db: AsyncSession,
        entity: EntityRef,
        *,
        inherit: Optional[bool] = None,
        known_groups: Collection[str] = (),
    ) -> List[SystemPermission]:
        """Get the entity's system permission set."""
        ...

    async def is_administrator(
        self,
        db: AsyncSession,
        entity: EntityRef,
        *,
        known_groups: Collection[str] = (),
    ) -> bool:
        """Whether the entity holds the system administrator capability."""
        ...
