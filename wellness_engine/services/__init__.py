"""
Service Layer Package

Business logic between the session service (caller) and the data access
layer (database queries).

- StreakService: streak recomputation, snapshots, milestone checks
- GamificationService: celebrations, badges, levels, completion hook
"""

from wellness_engine.services.container import ServiceContainer, get_container, init_container

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
]
