"""Access policy guard: override rules on top of the permission evaluator."""

from typing import Collection, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.logging import logger
from accessgraph.core.shared_models import ObjectKind
from accessgraph.domains.access_policy.exceptions import PermissionDeniedError
from accessgraph.domains.access_policy.protocols import AccessPolicyGuardProtocol
from accessgraph.domains.access_policy.rules import (
    PolicyDecision,
    PolicyRequest,
    PolicyRule,
    read_permissions_rules,
)
from accessgraph.domains.permissions.protocols import PermissionEvaluatorProtocol
from accessgraph.schemas.entity import EntityRef
from accessgraph.schemas.permission import ObjectPermission, SystemPermission

guard_logger = logger.with_prefix("AccessPolicyGuard: ").with_context(
    component="access_policy_guard"
)

READ_PERMISSIONS = "read permissions"


class AccessPolicyGuard(AccessPolicyGuardProtocol):
    """Decides whether one entity may read another entity's permission grants.

    Rules are evaluated in order and the first one that allows wins. The
    default order is self-access, then system administrator, then an explicit
    READ grant on the target. If none allows, the request is denied.

    The guard only returns decisions; the guarded ``read_*`` operations and
    ``assert_can_read_permissions`` raise ``PermissionDeniedError``. Whether a
    denial surfaces as "forbidden" or "not found" is the caller's policy.
    """

    def __init__(
        self,
        evaluator: PermissionEvaluatorProtocol,
        rules: Optional[Sequence[PolicyRule]] = None,
    ) -> None:
        """Initialize with the evaluator and, optionally, a custom rule chain."""
        self._evaluator = evaluator
        self._rules: List[PolicyRule] = list(
            rules if rules is not None else read_permissions_rules(evaluator)
        )

    @property
    def rules(self) -> List[PolicyRule]:
        """The rule chain, in evaluation order."""
        return list(self._rules)

    async def evaluate(
        self,
        db: AsyncSession,
        acting: EntityRef,
        target: EntityRef,
        *,
        known_groups: Collection[str] = (),
    ) -> PolicyDecision:
        """Evaluate the rule chain for ``acting`` operating on ``target``.

        Args:
            db: Database session
            acting: Entity performing the operation
            target: Entity the operation is about
            known_groups: Externally asserted groups of ``acting``

        Returns:
            PolicyDecision naming the first rule that allowed, or a denial
        """
        request = PolicyRequest(acting=acting, target=target, known_groups=frozenset(known_groups))

        for rule in self._rules:
            if await rule.check(db, request):
                guard_logger.debug(f"'{acting}' allowed on '{target}' by rule '{rule.name}'")
                return PolicyDecision(allowed=True, rule=rule.name)

        guard_logger.info(f"'{acting}' denied on '{target}': no rule matched")
        return PolicyDecision(allowed=False)

    async def can_read_permissions(
        self,
        db: AsyncSession,
        acting: EntityRef,
        target: EntityRef,
        *,
        known_groups: Collection[str] = (),
    ) -> bool:
        """Whether ``acting`` may read the permissions granted to ``target``."""
        decision = await self.evaluate(db, acting, target, known_groups=known_groups)
        return decision.allowed

    async def assert_can_read_permissions(
        self,
        db: AsyncSession,
        acting: EntityRef,
        target: EntityRef,
        *,
        known_groups: Collection[str] = (),
    ) -> PolicyDecision:
        """Return the allowing decision, or raise.

        Raises:
            PermissionDeniedError: If no rule allows the request.
        """
        decision = await self.evaluate(db, acting, target, known_groups=known_groups)
        if not decision.allowed:
            raise PermissionDeniedError(acting, target, READ_PERMISSIONS)
        return decision

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
        """Read ``target``'s object permissions of one kind on behalf of ``acting``.

        By default only grants stored directly against ``target`` are returned.

        Raises:
            PermissionDeniedError: If ``acting`` may not read them.
            UnknownEntityError: If ``target`` does not exist.
        """
        await self.assert_can_read_permissions(db, acting, target, known_groups=known_groups)
        return await self._evaluator.get_permissions(db, target, object_kind, inherit=inherit)

    async def read_system_permissions(
        self,
        db: AsyncSession,
        acting: EntityRef,
        target: EntityRef,
        *,
        inherit: bool = False,
        known_groups: Collection[str] = (),
    ) -> List[SystemPermission]:
        """Read ``target``'s system permissions on behalf of ``acting``.

        Raises:
            PermissionDeniedError: If ``acting`` may not read them.
            UnknownEntityError: If ``target`` does not exist.
        """
        await self.assert_can_read_permissions(db, acting, target, known_groups=known_groups)
        return await self._evaluator.get_system_permissions(db, target, inherit=inherit)
