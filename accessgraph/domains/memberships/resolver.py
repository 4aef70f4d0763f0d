"""Group closure resolver: effective group membership of an entity."""

from typing import Collection, Set

from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.logging import logger
from accessgraph.domains.memberships.exceptions import UnknownEntityError
from accessgraph.domains.memberships.protocols import (
    EntityRepositoryProtocol,
    GroupClosureResolverProtocol,
    MembershipRepositoryProtocol,
)
from accessgraph.schemas.entity import EntityRef

resolver_logger = logger.with_prefix("GroupClosureResolver: ").with_context(
    component="group_closure_resolver"
)


class GroupClosureResolver(GroupClosureResolverProtocol):
    """Resolves an entity's effective groups by expanding nested memberships.

    Handles both direct member-group and nested group-group relationships,
    plus groups asserted by an external authority ("known" groups) that may
    not exist in storage at all.

    The membership graph may contain cycles. Expansion is breadth-first with a
    visited set local to one call, so each group is expanded at most once and
    every level of the graph costs exactly one storage call.
    """

    def __init__(
        self,
        entity_repo: EntityRepositoryProtocol,
        membership_repo: MembershipRepositoryProtocol,
    ) -> None:
        """Initialize with injected repositories."""
        self._entity_repo = entity_repo
        self._membership_repo = membership_repo

    async def require_entity(self, db: AsyncSession, entity: EntityRef) -> EntityRef:
        """Return the stored entity.

        Raises:
            UnknownEntityError: If the entity does not exist.
        """
        stored = await self._entity_repo.get(db, entity)
        if stored is None:
            resolver_logger.info(f"Unknown entity '{entity}'")
            raise UnknownEntityError(entity)
        return stored

    async def effective_groups(
        self,
        db: AsyncSession,
        entity: EntityRef,
        known_groups: Collection[str] = (),
    ) -> Set[str]:
        """Resolve every group the entity belongs to.

        Steps:
        1. Verify the entity exists
        2. Seed the frontier with its direct groups plus ``known_groups``
        3. Expand the frontier one level at a time until no new group appears

        Args:
            db: Database session
            entity: Entity whose effective groups are resolved
            known_groups: Group identifiers to treat as effective regardless of
                stored edges (e.g. group claims from an identity provider)

        Returns:
            Set of all group identifiers (direct + transitive + known)

        Raises:
            UnknownEntityError: If the entity does not exist.
        """
        await self.require_entity(db, entity)

        known = set(known_groups)
        direct = await self._membership_repo.get_direct_group_identifiers(db, entity)

        visited: Set[str] = set()
        frontier = direct | known
        depth = 0

        while frontier:
            visited |= frontier
            parents = await self._membership_repo.get_parent_group_identifiers(db, frontier)
            frontier = parents - visited
            depth += 1

        resolver_logger.debug(
            f"Resolved {len(visited)} effective groups for '{entity}' "
            f"({len(direct)} direct, {len(known)} known, depth {depth})"
        )
        return visited | known
