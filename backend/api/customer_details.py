"""
Customer details endpoints under /api/customer-details, plus the read-only
list of a customer's shopping carts.
"""

from typing import List

from fastapi import Depends

from api.entity_router import entity_router
from dependencies import entity_service_provider
from domain.aggregates.relationship_manager import children_of
from dtos.response import ShoppingCartResponse
from services.entity_service import EntityService
from services.resources import CUSTOMER_DETAILS
from utils.error_handlers import handle_api_errors

router = entity_router(CUSTOMER_DETAILS)


@router.get("/customer-details/{id}/shopping-carts", response_model=List[ShoppingCartResponse])
@handle_api_errors("List shopping carts of CustomerDetails")
def list_customer_carts(
    id: int,
    service: EntityService = Depends(entity_service_provider(CUSTOMER_DETAILS)),
):
    """Shopping carts owned by one customer, ordered by id."""
    customer = service.find_one(id)
    carts = sorted(children_of(customer, "carts"), key=lambda cart: cart.id)
    return [ShoppingCartResponse.model_validate(cart) for cart in carts]
