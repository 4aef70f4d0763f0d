"""Domain exceptions for entities and memberships."""

from accessgraph.core.exceptions import AlreadyExistsException, NotFoundException
from accessgraph.schemas.entity import EntityRef


class UnknownEntityError(NotFoundException):
    """Raised when the entity a query starts from does not exist in storage."""

    def __init__(self, entity: EntityRef):
        """Initialize with the missing entity."""
        self.entity = entity
        super().__init__(f"Entity '{entity}' does not exist")


class EntityAlreadyExistsError(AlreadyExistsException):
    """Raised when inserting an entity that already exists."""

    def __init__(self, entity: EntityRef):
        """Initialize with the duplicate entity."""
        self.entity = entity
        super().__init__(f"Entity '{entity}' already exists")
