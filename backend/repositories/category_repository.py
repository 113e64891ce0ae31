"""
Product category repository.
"""

from sqlalchemy.orm import Session

from models import ProductCategory
from .base_repository import BaseRepository


class ProductCategoryRepository(BaseRepository[ProductCategory]):
    """Repository for ProductCategory model operations."""

    def __init__(self, db: Session):
        super().__init__(db, ProductCategory)
