"""Fake permission repositories for testing."""

from typing import AbstractSet, Any, Collection, List, Optional, Set

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.shared_models import (
    EntityKind,
    ObjectKind,
    ObjectPermissionType,
    SystemPermissionType,
)
from accessgraph.schemas.entity import EntityRef
from accessgraph.schemas.permission import ObjectPermission, SystemPermission


def _holds(
    holder: EntityRef, entity: EntityRef, effective_groups: AbstractSet[str], inherit: bool
) -> bool:
    if holder == entity:
        return True
    return (
        inherit
        and holder.kind == EntityKind.USER_GROUP
        and holder.identifier in effective_groups
    )


class FakeObjectPermissionRepository:
    """In-memory fake for ObjectPermissionRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with no permissions."""
        self._rows: List[ObjectPermission] = []
        self._calls: list[tuple[Any, ...]] = []

    def seed(
        self,
        entity: EntityRef,
        object_kind: ObjectKind,
        permission_type: ObjectPermissionType,
        object_identifier: str,
    ) -> None:
        """Grant a permission. Exact duplicates are ignored."""
        row = ObjectPermission(
            entity=entity,
            object_kind=object_kind,
            type=permission_type,
            object_identifier=object_identifier,
        )
        if row not in self._rows:
            self._rows.append(row)

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
        """Return the direct match if any, else any inherited match."""
        self._calls.append(
            ("get_one", db, entity, object_kind, permission_type, object_identifier, inherit)
        )
        matches = [
            row
            for row in self._rows
            if row.object_kind == object_kind
            and row.type == permission_type
            and row.object_identifier == object_identifier
            and _holds(row.entity, entity, effective_groups, inherit)
        ]
        matches.sort(key=lambda row: (row.entity != entity, row.entity.identifier))
        return matches[0] if matches else None

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
        """Return the candidates with at least one matching row."""
        self._calls.append(
            (
                "get_accessible_identifiers",
                db,
                entity,
                object_kind,
                frozenset(permission_types),
                frozenset(object_identifiers),
                inherit,
            )
        )
        return {
            row.object_identifier
            for row in self._rows
            if row.object_kind == object_kind
            and row.type in permission_types
            and row.object_identifier in object_identifiers
            and _holds(row.entity, entity, effective_groups, inherit)
        }

    async def get_all(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        object_kind: ObjectKind,
        effective_groups: AbstractSet[str],
        inherit: bool,
    ) -> List[ObjectPermission]:
        """Return every row held by the entity (or its groups when inheriting)."""
        self._calls.append(("get_all", db, entity, object_kind, inherit))
        return [
            row
            for row in self._rows
            if row.object_kind == object_kind
            and _holds(row.entity, entity, effective_groups, inherit)
        ]


class FakeSystemPermissionRepository:
    """In-memory fake for SystemPermissionRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with no permissions."""
        self._rows: Set[SystemPermission] = set()
        self._calls: list[tuple[Any, ...]] = []

    def seed(self, entity: EntityRef, permission_type: SystemPermissionType) -> None:
        """Grant a system permission."""
        self._rows.add(SystemPermission(entity=entity, type=permission_type))

    async def exists(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        permission_type: SystemPermissionType,
        effective_groups: AbstractSet[str],
        inherit: bool,
    ) -> bool:
        """Whether a matching row exists."""
        self._calls.append(("exists", db, entity, permission_type, inherit))
        return any(
            row.type == permission_type and _holds(row.entity, entity, effective_groups, inherit)
            for row in self._rows
        )

    async def get_all(
        self,
        db: AsyncSession,
        *,
        entity: EntityRef,
        effective_groups: AbstractSet[str],
        inherit: bool,
    ) -> List[SystemPermission]:
        """Return every row held by the entity (or its groups when inheriting)."""
        self._calls.append(("get_all", db, entity, inherit))
        return sorted(
            (row for row in self._rows if _holds(row.entity, entity, effective_groups, inherit)),
            key=lambda row: (row.type.value, row.entity.identifier),
        )
