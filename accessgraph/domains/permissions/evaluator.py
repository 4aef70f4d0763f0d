"""Permission evaluator: single-object checks and bulk filtering."""

from typing import Collection, FrozenSet, List, Optional, Sequence, Set, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.config import Settings
from accessgraph.core.logging import logger
from accessgraph.core.shared_models import (
    EntityKind,
    ObjectKind,
    ObjectPermissionType,
    SystemPermissionType,
)
from accessgraph.domains.memberships.protocols import GroupClosureResolverProtocol
from accessgraph.domains.permissions.protocols import (
    ObjectPermissionRepositoryProtocol,
    PermissionEvaluatorProtocol,
    SystemPermissionRepositoryProtocol,
)
from accessgraph.schemas.entity import EntityRef
from accessgraph.schemas.permission import ObjectPermission, SystemPermission

evaluator_logger = logger.with_prefix("PermissionEvaluator: ").with_context(
    component="permission_evaluator"
)


class PermissionEvaluator(PermissionEvaluatorProtocol):
    """Evaluates object and system permissions of an acting entity.

    A permission is granted directly when stored against the entity itself,
    and by inheritance when stored against any group in the entity's
    effective group set. Every check takes an ``inherit`` flag; ``None``
    falls back to ``PERMISSION_INHERITANCE_DEFAULT``. With inheritance off no
    closure is computed, but the entity must still exist.

    Each check costs one closure resolution (when inheriting) plus one
    permission query, regardless of how many groups or candidates are involved.
    """

    def __init__(
        self,
        resolver: GroupClosureResolverProtocol,
        object_permission_repo: ObjectPermissionRepositoryProtocol,
        system_permission_repo: SystemPermissionRepositoryProtocol,
        settings: Settings,
    ) -> None:
        """Initialize with injected dependencies."""
        self._resolver = resolver
        self._object_permission_repo = object_permission_repo
        self._system_permission_repo = system_permission_repo
        self._settings = settings

    async def _holders(
        self,
        db: AsyncSession,
        entity: EntityRef,
        inherit: Optional[bool],
        known_groups: Collection[str],
    ) -> Tuple[bool, FrozenSet[str]]:
        """Resolve whether inheritance applies and, if so, the effective groups."""
        if inherit is None:
            inherit = self._settings.PERMISSION_INHERITANCE_DEFAULT

        if (
            inherit
            and entity.kind == EntityKind.USER_GROUP
            and not self._settings.USER_GROUP_INHERITANCE_ENABLED
        ):
            inherit = False

        if not inherit:
            await self._resolver.require_entity(db, entity)
            return False, frozenset()

        groups = await self._resolver.effective_groups(db, entity, known_groups)
        return True, frozenset(groups)

    # ------------------------------------------------------------------
    # Object permissions
    # ------------------------------------------------------------------

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
        """Get the permission granting ``permission_type`` on the object.

        A row stored directly against the entity takes priority over an
        inherited one; among inherited rows any match will do.

        Returns:
            The granting permission, or None when not granted

        Raises:
            UnknownEntityError: If the entity does not exist.
        """
        inherit_effective, groups = await self._holders(db, entity, inherit, known_groups)
        permission = await self._object_permission_repo.get_one(
            db,
            entity=entity,
            object_kind=object_kind,
            permission_type=permission_type,
            object_identifier=object_identifier,
            effective_groups=groups,
            inherit=inherit_effective,
        )
        evaluator_logger.debug(
            f"{permission_type.value} on {object_kind.value} '{object_identifier}' "
            f"for '{entity}': {'granted' if permission else 'not granted'}"
        )
        return permission

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
        """Whether at least one of ``permission_types`` is granted on the object."""
        accessible = await self.filter_accessible(
            db,
            entity,
            object_kind,
            permission_types,
            [object_identifier],
            inherit=inherit,
            known_groups=known_groups,
        )
        return object_identifier in accessible

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
        """Filter ``object_identifiers`` down to those the entity may access.

        Equivalent to calling ``has_any_permission`` per identifier, but answered
        with a single bulk query. The result is always a subset of the input.

        Raises:
            UnknownEntityError: If the entity does not exist.
        """
        candidates = set(object_identifiers)
        inherit_effective, groups = await self._holders(db, entity, inherit, known_groups)

        if not permission_types or not candidates:
            return set()

        accessible = await self._object_permission_repo.get_accessible_identifiers(
            db,
            entity=entity,
            object_kind=object_kind,
            permission_types=set(permission_types),
            object_identifiers=candidates,
            effective_groups=groups,
            inherit=inherit_effective,
        )

        # Never return an identifier outside the input.
        result = accessible & candidates
        evaluator_logger.debug(
            f"'{entity}' may access {len(result)} of {len(candidates)} {object_kind.value} objects"
        )
        return result

    async def get_permissions(
        self,
        db: AsyncSession,
        entity: EntityRef,
        object_kind: ObjectKind,
        *,
        inherit: Optional[bool] = None,
        known_groups: Collection[str] = (),
    ) -> List[ObjectPermission]:
        """Get the entity's permissions on objects of ``object_kind``.

        Inherited permissions keep the granting group as their ``entity``.
        """
        inherit_effective, groups = await self._holders(db, entity, inherit, known_groups)
        return await self._object_permission_repo.get_all(
            db,
            entity=entity,
            object_kind=object_kind,
            effective_groups=groups,
            inherit=inherit_effective,
        )

    # ------------------------------------------------------------------
    # System permissions
    # ------------------------------------------------------------------

    async def has_system_permission(
        self,
        db: AsyncSession,
        entity: EntityRef,
        permission_type: SystemPermissionType,
        *,
        inherit: Optional[bool] = None,
        known_groups: Collection[str] = (),
    ) -> bool:
        """Whether the system permission is granted, directly or inherited."""
        inherit_effective, groups = await self._holders(db, entity, inherit, known_groups)
        return await self._system_permission_repo.exists(
            db,
            entity=entity,
            permission_type=permission_type,
            effective_groups=groups,
            inherit=inherit_effective,
        )

    async def get_system_permissions(
        self,
        db: AsyncSession,
        entity: EntityRef,
        *,
        inherit: Optional[bool] = None,
        known_groups: Collection[str] = (),
    ) -> List[SystemPermission]:
        """Get the entity's system permissions."""
        inherit_effective, groups = await self._holders(db, entity, inherit, known_groups)
        return await self._system_permission_repo.get_all(
            db, entity=entity, effective_groups=groups, inherit=inherit_effective
        )

    async def is_administrator(
        self,
        db: AsyncSession,
        entity: EntityRef,
        *,
        known_groups: Collection[str] = (),
    ) -> bool:
        """Whether the entity holds ADMINISTER, honouring the inheritance default."""
        return await self.has_system_permission(
            db, entity, SystemPermissionType.ADMINISTER, known_groups=known_groups
        )
