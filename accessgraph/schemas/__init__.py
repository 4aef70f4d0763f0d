"""Schemas crossing the domain boundary."""

from .entity import EntityRef
from .permission import ObjectPermission, SystemPermission

__all__ = ["EntityRef", "ObjectPermission", "SystemPermission"]
