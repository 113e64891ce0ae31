"""
OrderStatus Value Object

Status of a shopping cart. Any value may be set at create or update time;
no transition order is enforced.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Immutable shopping cart status."""

    COMPLETED = "COMPLETED"
    PAID = "PAID"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
