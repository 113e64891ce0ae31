"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations.
"""

from sqlalchemy.orm import Session

from models import ProductCategory, Product, CustomerDetails, ShoppingCart, ProductOrder
from .base_repository import BaseRepository
from .category_repository import ProductCategoryRepository
from .product_repository import ProductRepository
from .customer_details_repository import CustomerDetailsRepository
from .shopping_cart_repository import ShoppingCartRepository
from .product_order_repository import ProductOrderRepository

_REPOSITORIES = {
    ProductCategory: ProductCategoryRepository,
    Product: ProductRepository,
    CustomerDetails: CustomerDetailsRepository,
    ShoppingCart: ShoppingCartRepository,
    ProductOrder: ProductOrderRepository,
}


def repository_for(db: Session, model: type) -> BaseRepository:
    """
    Repository instance for a model class.

    Args:
        db: Database session
        model: Mapped model class

    Returns:
        The model's repository bound to ``db``
    """
    return _REPOSITORIES[model](db)


__all__ = [
    "BaseRepository",
    "ProductCategoryRepository",
    "ProductRepository",
    "CustomerDetailsRepository",
    "ShoppingCartRepository",
    "ProductOrderRepository",
    "repository_for",
]
