"""
Request DTOs

DTOs for incoming API requests. These decouple the API from database models
and provide a clear contract for what data the API expects.

One DTO per entity type; the same class is used for create, replace and
merge-patch bodies.
"""

from .entity_request import (
    EntityDTO,
    ProductCategoryDTO,
    ProductDTO,
    CustomerDetailsDTO,
    ShoppingCartDTO,
    ProductOrderDTO,
)

__all__ = [
    "EntityDTO",
    "ProductCategoryDTO",
    "ProductDTO",
    "CustomerDetailsDTO",
    "ShoppingCartDTO",
    "ProductOrderDTO",
]
