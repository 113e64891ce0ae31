"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- OrderStatus: Where a shopping cart stands (no enforced workflow)
- PaymentMethod: How a shopping cart is settled
- Size: Product sizing
- Gender: Customer details attribute
"""

from .order_status import OrderStatus
from .payment_method import PaymentMethod
from .product_size import Size
from .gender import Gender

__all__ = ["OrderStatus", "PaymentMethod", "Size", "Gender"]
