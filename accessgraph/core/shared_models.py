"""Shared enums for the authorization core."""

from enum import Enum


class EntityKind(str, Enum):
    """Kind of entity that can hold permissions or be a group member."""

    USER = "user"
    USER_GROUP = "user_group"


class ObjectKind(str, Enum):
    """Kind of object an object permission targets."""

    CONNECTION = "connection"
    CONNECTION_GROUP = "connection_group"
    SHARING_PROFILE = "sharing_profile"
    USER = "user"
    USER_GROUP = "user_group"


class ObjectPermissionType(str, Enum):
    """Permission granted on a single object."""

    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    ADMINISTER = "administer"


class SystemPermissionType(str, Enum):
    """System-wide permission, not tied to an object."""

    CREATE_CONNECTION = "create_connection"
    CREATE_CONNECTION_GROUP = "create_connection_group"
    CREATE_SHARING_PROFILE = "create_sharing_profile"
    CREATE_USER = "create_user"
    CREATE_USER_GROUP = "create_user_group"
    AUDIT = "audit"
    ADMINISTER = "administer"  # system administrator: bypasses object checks
