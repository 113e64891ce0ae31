"""
Shopping cart repository.
"""

from sqlalchemy.orm import Session

from models import ShoppingCart
from .base_repository import BaseRepository


class ShoppingCartRepository(BaseRepository[ShoppingCart]):
    """Repository for ShoppingCart model operations."""

    eager_associations = ("customer_details",)

    def __init__(self, db: Session):
        super().__init__(db, ShoppingCart)
