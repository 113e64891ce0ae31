"""
PaymentMethod Value Object

Closed set of payment methods a shopping cart can be settled with.
"""

from enum import Enum


class PaymentMethod(str, Enum):
    """Immutable payment method."""

    CREDIT_CARD = "CREDIT_CARD"
    IDEAL = "IDEAL"
    PAYPAL = "PAYPAL"
