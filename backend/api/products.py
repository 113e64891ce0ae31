"""
Product endpoints under /api/products.
"""

from api.entity_router import entity_router
from services.resources import PRODUCTS

router = entity_router(PRODUCTS, eager_option=True)
