"""Protocols for the access policy domain."""

from typing import Collection, List, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.shared_models import ObjectKind
from accessgraph.domains.access_policy.rules import PolicyDecision
from accessgraph.schemas.entity import EntityRef
from accessgraph.schemas.permission import ObjectPermission, SystemPermission


class AccessPolicyGuardProtocol(Protocol):
    """Guards operations on one entity performed by another."""

    async def evaluate(
        self,
        db: AsyncSession,
        acting: EntityRef,
        target: EntityRef,
        *,
        known_groups: Collection[str] = (),
    ) -> PolicyDecision:
        """Evaluate the rules and report which one matched."""
        ...

    async def can_read_permissions(
        self,
        db: AsyncSession,
        acting: EntityRef,
        target: EntityRef,
        *,
        known_groups: Collection[str] = (),
    ) -> bool:
        """Whether ``acting`` may read the permissions granted to ``target``."""
        ...

    async def assert_can_read_permissions(
        self,
        db: AsyncSession,
        acting: EntityRef,
        target: EntityRef,
        *,
        known_groups: Collection[str] = (),
    ) -> PolicyDecision:
        """Raise PermissionDeniedError unless ``acting`` may read ``target``'s permissions."""
        ...

    async def read_object_permissions(
        self,
        db: AsyncSession,
        acting: EntityRef,
        target: EntityRef,
        object_kind: ObjectKind,
        *,
        inherit: bool = False,
        known_groups: Collection[str] = (),
    ) -> List[ObjectPermission]:
        """Read ``target``'s object permissions on behalf of ``acting``."""
        ...

    async def read_system_permissions(
        self,
        db: AsyncSession,
        acting: EntityRef,
        target: EntityRef,
        *,
        inherit: bool = False,
        known_groups: Collection[str] = (),
    ) -> List[SystemPermission]:
        """Read ``target``'s system permissions on behalf of ``acting``."""
        ...
