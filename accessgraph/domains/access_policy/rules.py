"""Policy rules, evaluated in order with the first match winning.

Precedence for reading another entity's permissions:

1. ``self_access``: an entity may always read its own permissions
2. ``system_administrator``: administrators may read anything
3. ``explicit_read_grant``: READ granted (directly or inherited) on the target

Self-access touches no storage; the administrator rule runs before any
object permission lookup.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, FrozenSet, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.shared_models import EntityKind, ObjectKind, ObjectPermissionType
from accessgraph.domains.permissions.protocols import PermissionEvaluatorProtocol
from accessgraph.schemas.entity import EntityRef

# Objects representing entities are permission targets of the matching kind.
TARGET_OBJECT_KIND = {
    EntityKind.USER: ObjectKind.USER,
    EntityKind.USER_GROUP: ObjectKind.USER_GROUP,
}


@dataclass(frozen=True)
class PolicyRequest:
    """An acting entity asking to operate on a target entity."""

    acting: EntityRef
    target: EntityRef
    known_groups: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class PolicyRule:
    """A named predicate; ``True`` allows the request and stops evaluation."""

    name: str
    check: Callable[[AsyncSession, PolicyRequest], Awaitable[bool]]


@dataclass(frozen=True)
class PolicyDecision:
    """Outcome of a policy evaluation. ``rule`` is None when denied."""

    allowed: bool
    rule: Optional[str] = None


def self_access() -> PolicyRule:
    """Allow when acting and target are the same entity (identifier and kind)."""

    async def check(db: AsyncSession, request: PolicyRequest) -> bool:
        return request.acting == request.target

    return PolicyRule(name="self_access", check=check)


def system_administrator(evaluator: PermissionEvaluatorProtocol) -> PolicyRule:
    """Allow when the acting entity holds the system ADMINISTER permission."""

    async def check(db: AsyncSession, request: PolicyRequest) -> bool:
        return await evaluator.is_administrator(
            db, request.acting, known_groups=request.known_groups
        )

    return PolicyRule(name="system_administrator", check=check)


def explicit_grant(
    evaluator: PermissionEvaluatorProtocol,
    permission_type: ObjectPermissionType = ObjectPermissionType.READ,
) -> PolicyRule:
    """Allow when ``permission_type`` is granted on the target entity object."""

    async def check(db: AsyncSession, request: PolicyRequest) -> bool:
        return await evaluator.has_any_permission(
            db,
            request.acting,
            TARGET_OBJECT_KIND[request.target.kind],
            {permission_type},
            request.target.identifier,
            known_groups=request.known_groups,
        )

    return PolicyRule(name=f"explicit_{permission_type.value}_grant", check=check)


def read_permissions_rules(evaluator: PermissionEvaluatorProtocol) -> List[PolicyRule]:
    """Rules for reading another entity's permission grants, in precedence order."""
    return [
        self_access(),
        system_administrator(evaluator),
        explicit_grant(evaluator, ObjectPermissionType.READ),
    ]
