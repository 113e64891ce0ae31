"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating service instances,
following the Dependency Inversion Principle. Tests override ``get_db`` and
every service built here follows.
"""

from typing import Callable

from sqlalchemy.orm import Session
from fastapi import Depends
from database import get_db
from services.entity_service import EntityService
from services.resources import Resource


def get_entity_service(db: Session, resource: Resource) -> EntityService:
    """
    Factory function for creating EntityService instances.

    Args:
        db: Database session
        resource: Resource the service operates on

    Returns:
        EntityService instance
    """
    return EntityService(db, resource)


def entity_service_provider(resource: Resource) -> Callable[..., EntityService]:
    """
    Build a FastAPI dependency yielding the service of one resource.

    Args:
        resource: Resource descriptor

    Returns:
        Dependency callable for use with Depends()

    Example:
        @router.get("/products/{id}")
        def get_product(service: EntityService = Depends(entity_service_provider(PRODUCTS))):
            ...
    """
    def provide(db: Session = Depends(get_db)) -> EntityService:
        return get_entity_service(db, resource)

    return provide
