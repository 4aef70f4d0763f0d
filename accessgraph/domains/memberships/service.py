"""Entity service: insert and lookup of users and user groups."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.core.logging import logger
from accessgraph.domains.memberships.exceptions import (
    EntityAlreadyExistsError,
    UnknownEntityError,
)
from accessgraph.domains.memberships.protocols import (
    EntityRepositoryProtocol,
    EntityServiceProtocol,
)
from accessgraph.schemas.entity import EntityRef

entity_logger = logger.with_prefix("EntityService: ").with_context(component="entity_service")


class EntityService(EntityServiceProtocol):
    """Domain service for entity records."""

    def __init__(self, entity_repo: EntityRepositoryProtocol) -> None:
        """Initialize with injected dependencies."""
        self._entity_repo = entity_repo

    async def create(self, db: AsyncSession, entity: EntityRef) -> int:
        """Insert a new entity and return the number of rows inserted.

        Raises:
            EntityAlreadyExistsError: If an entity with the same identifier and
                kind already exists.
        """
        existing = await self._entity_repo.get(db, entity)
        if existing is not None:
            raise EntityAlreadyExistsError(entity)

        try:
            rows = await self._entity_repo.insert(db, entity)
        except IntegrityError as e:
            # Lost a race with a concurrent insert
            raise EntityAlreadyExistsError(entity) from e

        entity_logger.info(f"Created entity '{entity}'")
        return rows

    async def get(self, db: AsyncSession, entity: EntityRef) -> EntityRef:
        """Get an existing entity.

        Raises:
            UnknownEntityError: If the entity does not exist.
        """
        stored = await self._entity_repo.get(db, entity)
        if stored is None:
            raise UnknownEntityError(entity)
        return stored
