"""
Product order repository.
"""

from sqlalchemy.orm import Session

from models import ProductOrder
from .base_repository import BaseRepository


class ProductOrderRepository(BaseRepository[ProductOrder]):
    """Repository for ProductOrder model operations."""

    # Both references are required; list pages render them as summaries
    eager_associations = ("product", "cart")

    def __init__(self, db: Session):
        super().__init__(db, ProductOrder)
