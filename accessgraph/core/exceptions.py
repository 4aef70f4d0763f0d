"""Shared exceptions module."""

from typing import Optional


class AccessGraphException(Exception):
    """Base exception for accessgraph services."""

    pass


class PermissionException(AccessGraphException):
    """Exception raised when an entity lacks the permissions an action requires."""

    def __init__(
        self,
        message: Optional[str] = "Entity does not have the right to perform this action",
    ):
        """Create a new PermissionException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class NotFoundException(AccessGraphException):
    """Exception raised when an object is not found."""

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class AlreadyExistsException(AccessGraphException):
    """Exception raised when an object with the same identity already exists."""

    def __init__(self, message: Optional[str] = "Object already exists"):
        """Create a new AlreadyExistsException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)
