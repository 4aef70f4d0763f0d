"""Domain exceptions for access policy checks."""

from accessgraph.core.exceptions import PermissionException
from accessgraph.schemas.entity import EntityRef


class PermissionDeniedError(PermissionException):
    """Raised by a guarded operation when the policy denies the acting entity."""

    def __init__(self, acting: EntityRef, target: EntityRef, action: str):
        """Initialize with who tried what on whom."""
        self.acting = acting
        self.target = target
        self.action = action
        super().__init__(f"'{acting}' is not permitted to {action} of '{target}'")
