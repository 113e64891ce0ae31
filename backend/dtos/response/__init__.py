"""
Response DTOs

DTOs for outgoing API responses. These decouple the API from database models
and provide a clear contract for what data the API returns.
"""

from .entity_response import (
    ProductCategoryResponse,
    ProductResponse,
    CustomerDetailsResponse,
    ShoppingCartResponse,
    ProductOrderResponse,
)

__all__ = [
    "ProductCategoryResponse",
    "ProductResponse",
    "CustomerDetailsResponse",
    "ShoppingCartResponse",
    "ProductOrderResponse",
]
