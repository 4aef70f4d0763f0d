"""Access policy guard for permission-reading operations."""

from .exceptions import PermissionDeniedError
from .guard import AccessPolicyGuard
from .rules import PolicyDecision, PolicyRequest, PolicyRule

__all__ = [
    "AccessPolicyGuard",
    "PermissionDeniedError",
    "PolicyDecision",
    "PolicyRequest",
    "PolicyRule",
]
