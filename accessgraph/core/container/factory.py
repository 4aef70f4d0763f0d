"""Container Factory.

All construction logic lives here: the factory reads settings and builds the
container with the SQLAlchemy-backed repositories.
"""

from accessgraph.core.config import Settings
from accessgraph.core.container.container import Container
from accessgraph.core.logging import logger
from accessgraph.domains.access_policy.guard import AccessPolicyGuard
from accessgraph.domains.memberships.repository import EntityRepository, MembershipRepository
from accessgraph.domains.memberships.resolver import GroupClosureResolver
from accessgraph.domains.memberships.service import EntityService
from accessgraph.domains.permissions.evaluator import PermissionEvaluator
from accessgraph.domains.permissions.repository import (
    ObjectPermissionRepository,
    SystemPermissionRepository,
)


def create_container(settings: Settings) -> Container:
    """Build the container.

    Args:
        settings: Application settings

    Returns:
        Fully wired Container
    """
    chunk_size = settings.BULK_FILTER_CHUNK_SIZE
    entity_repo = EntityRepository()
    membership_repo = MembershipRepository(chunk_size=chunk_size)
    object_permission_repo = ObjectPermissionRepository(chunk_size=chunk_size)
    system_permission_repo = SystemPermissionRepository(chunk_size=chunk_size)

    resolver = GroupClosureResolver(entity_repo=entity_repo, membership_repo=membership_repo)
    evaluator = PermissionEvaluator(
        resolver=resolver,
        object_permission_repo=object_permission_repo,
        system_permission_repo=system_permission_repo,
        settings=settings,
    )

    logger.info(
        f"Container built (environment={settings.ENVIRONMENT.value}, "
        f"inherit_default={settings.PERMISSION_INHERITANCE_DEFAULT}, "
        f"user_group_inheritance={settings.USER_GROUP_INHERITANCE_ENABLED})"
    )

    return Container(
        entity_repo=entity_repo,
        membership_repo=membership_repo,
        object_permission_repo=object_permission_repo,
        system_permission_repo=system_permission_repo,
        entity_service=EntityService(entity_repo=entity_repo),
        group_closure_resolver=resolver,
        permission_evaluator=evaluator,
        access_policy_guard=AccessPolicyGuard(evaluator=evaluator),
    )
