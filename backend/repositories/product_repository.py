"""
Product repository.
"""

from sqlalchemy.orm import Session

from models import Product
from .base_repository import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Repository for Product model operations."""

    eager_associations = ("product_category",)

    def __init__(self, db: Session):
        super().__init__(db, Product)
