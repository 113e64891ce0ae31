"""
Size Value Object
"""

from enum import Enum


class Size(str, Enum):
    """Garment size of a product."""

    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
