"""Dependency Injection Container.

The container is an immutable dataclass holding protocol implementations.
It has no construction logic; that belongs in the factory.
"""

from dataclasses import dataclass

from accessgraph.domains.access_policy.protocols import AccessPolicyGuardProtocol
from accessgraph.domains.memberships.protocols import (
    EntityRepositoryProtocol,
    EntityServiceProtocol,
    GroupClosureResolverProtocol,
    MembershipRepositoryProtocol,
)
from accessgraph.domains.permissions.protocols import (
    ObjectPermissionRepositoryProtocol,
    PermissionEvaluatorProtocol,
    SystemPermissionRepositoryProtocol,
)


@dataclass(frozen=True)
class Container:
    """Immutable container holding all protocol implementations."""

    # Storage
    entity_repo: EntityRepositoryProtocol
    membership_repo: MembershipRepositoryProtocol
    object_permission_repo: ObjectPermissionRepositoryProtocol
    system_permission_repo: SystemPermissionRepositoryProtocol

    # Services
    entity_service: EntityServiceProtocol
    group_closure_resolver: GroupClosureResolverProtocol
    permission_evaluator: PermissionEvaluatorProtocol
    access_policy_guard: AccessPolicyGuardProtocol
