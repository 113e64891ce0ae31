"""
Product category endpoints under /api/categories.
"""

from api.entity_router import entity_router
from services.resources import CATEGORIES

router = entity_router(CATEGORIES)
