"""
Customer details repository.
"""

from sqlalchemy.orm import Session

from models import CustomerDetails
from .base_repository import BaseRepository


class CustomerDetailsRepository(BaseRepository[CustomerDetails]):
    """Repository for CustomerDetails model operations."""

    def __init__(self, db: Session):
        super().__init__(db, CustomerDetails)
