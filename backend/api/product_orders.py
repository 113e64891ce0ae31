"""
Product order endpoints under /api/product-orders.
"""

from api.entity_router import entity_router
from services.resources import PRODUCT_ORDERS

router = entity_router(PRODUCT_ORDERS, eager_option=True)
