"""
Shopping cart endpoints under /api/shopping-carts, plus the read-only list
of a cart's product orders.
"""

from typing import List

from fastapi import Depends

from api.entity_router import entity_router
from dependencies import entity_service_provider
from domain.aggregates.relationship_manager import children_of
from dtos.response import ProductOrderResponse
from services.entity_service import EntityService
from services.resources import SHOPPING_CARTS
from utils.error_handlers import handle_api_errors

router = entity_router(SHOPPING_CARTS, eager_option=True)


@router.get("/shopping-carts/{id}/product-orders", response_model=List[ProductOrderResponse])
@handle_api_errors("List product orders of ShoppingCart")
def list_cart_orders(
    id: int,
    service: EntityService = Depends(entity_service_provider(SHOPPING_CARTS)),
):
    """Order lines of one shopping cart, ordered by id."""
    cart = service.find_one(id)
    orders = sorted(children_of(cart, "orders"), key=lambda order: order.id)
    return [ProductOrderResponse.model_validate(order) for order in orders]
