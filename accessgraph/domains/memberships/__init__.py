"""Entity storage and effective group resolution."""

from .exceptions import EntityAlreadyExistsError, UnknownEntityError
from .resolver import GroupClosureResolver
from .service import EntityService

__all__ = [
    "EntityAlreadyExistsError",
    "EntityService",
    "GroupClosureResolver",
    "UnknownEntityError",
]
