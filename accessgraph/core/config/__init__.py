"""Configuration module for accessgraph.

Provides centralized configuration management with type-safe enums.

Usage:
    from accessgraph.core.config import settings, Environment

    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from accessgraph.core.config.enums import Environment
from accessgraph.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
