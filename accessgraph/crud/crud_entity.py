"""CRUD operations for entities."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from accessgraph.crud._filters import is_entity
from accessgraph.models.entity import Entity
from accessgraph.schemas.entity import EntityRef


class CRUDEntity:
    """CRUD operations for the entity table."""

    async def get(self, db: AsyncSession, entity: EntityRef) -> Optional[Entity]:
        """Get the entity row matching the reference, if any."""
        result = await db.execute(select(Entity).where(is_entity(entity)))
        return result.scalar_one_or_none()

    async def insert(self, db: AsyncSession, entity: EntityRef) -> int:
        """Insert the entity and return the number of rows inserted.

        Runs inside a savepoint, so a failed insert leaves the session usable.

        Raises:
            sqlalchemy.exc.IntegrityError: If the entity already exists.
        """
        async with db.begin_nested():
            result = await db.execute(
                insert(Entity).values(name=entity.identifier, type=entity.kind)
            )
        return result.rowcount


entity = CRUDEntity()
