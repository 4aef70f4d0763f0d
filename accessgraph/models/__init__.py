"""Models for the application."""

from ._base import Base
from .entity import Entity
from .entity_membership import EntityMembership
from .object_permission import ObjectPermission
from .system_permission import SystemPermission

__all__ = [
    "Base",
    "Entity",
    "EntityMembership",
    "ObjectPermission",
    "SystemPermission",
]
