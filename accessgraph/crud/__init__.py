"""CRUD singletons for accessgraph tables."""

from .crud_entity import entity
from .crud_entity_membership import entity_membership
from .crud_object_permission import object_permission
from .crud_system_permission import system_permission

__all__ = ["entity", "entity_membership", "object_permission", "system_permission"]
