"""Entity schema module."""

from pydantic import BaseModel, ConfigDict, Field

from accessgraph.core.shared_models import EntityKind


class EntityRef(BaseModel):
    """Reference to a user or user group.

    Identifiers are unique within a kind: a user and a group may share one.
    """

    identifier: str = Field(min_length=1, description="Username or group name")
    kind: EntityKind

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @classmethod
    def user(cls, identifier: str) -> "EntityRef":
        """Reference a user."""
        return cls(identifier=identifier, kind=EntityKind.USER)

    @classmethod
    def group(cls, identifier: str) -> "EntityRef":
        """Reference a user group."""
        return cls(identifier=identifier, kind=EntityKind.USER_GROUP)

    def __str__(self) -> str:
        """Render as ``kind:identifier``."""
        return f"{self.kind.value}:{self.identifier}"
