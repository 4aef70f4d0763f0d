"""Permission schemas."""

from pydantic import BaseModel, ConfigDict

from accessgraph.core.shared_models import ObjectKind, ObjectPermissionType, SystemPermissionType
from accessgraph.schemas.entity import EntityRef


class ObjectPermission(BaseModel):
    """A permission stored against ``entity`` on one object.

    When returned from an inherited lookup, ``entity`` is the group that
    holds the row, not the entity that asked.
    """

    entity: EntityRef
    object_kind: ObjectKind
    type: ObjectPermissionType
    object_identifier: str

    model_config = ConfigDict(frozen=True)


class SystemPermission(BaseModel):
    """A system-wide permission stored against ``entity``."""

    entity: EntityRef
    type: SystemPermissionType

    model_config = ConfigDict(frozen=True)
