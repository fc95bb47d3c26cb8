"""
Service Container - Dependency Injection Container

Simple DI container for managing service instances and their dependencies.
Uses lazy loading to only instantiate services when first accessed.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    The database instance is injected so callers own its pool lifecycle.
    """

    db: object  # Database instance

    _streak_service: Optional[object] = field(default=None, init=False, repr=False)
    _gamification_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def streak_service(self):
        """Get StreakService instance (lazy-loaded)"""
        if self._streak_service is None:
            from wellness_engine.services.streak_service import StreakService
            self._streak_service = StreakService()
            logger.debug("StreakService instantiated")
        return self._streak_service

    @property
    def gamification_service(self):
        """Get GamificationService instance (lazy-loaded)"""
        if self._gamification_service is None:
            from wellness_engine.services.gamification_service import GamificationService
            self._gamification_service = GamificationService(self.streak_service)
            logger.debug("GamificationService instantiated")
        return self._gamification_service


# Global container instance (initialized in main.py)
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container.

    Raises:
        RuntimeError: If container not initialized (call init_container first)
    """
    if _container is None:
        raise RuntimeError(
            "Service container not initialized. "
            "Call init_container() before using services."
        )
    return _container


def init_container(db: object) -> ServiceContainer:
    """
    Initialize the global service container.

    Args:
        db: Database instance (pool already initialized)

    Returns:
        ServiceContainer: The initialized container
    """
    global _container

    _container = ServiceContainer(db=db)

    logger.info("Service container initialized")
    return _container
