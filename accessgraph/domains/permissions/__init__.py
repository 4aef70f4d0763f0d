"""Permission evaluation over direct and inherited grants."""

from .evaluator import PermissionEvaluator

__all__ = ["PermissionEvaluator"]
