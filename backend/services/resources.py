"""
Resource registry.

Binds each exposed resource name to its model, request DTO and response DTO so
the service and API layers can be written once for every entity type.
"""

from dataclasses import dataclass
from typing import Dict

from dtos.request import (
    ProductCategoryDTO,
    ProductDTO,
    CustomerDetailsDTO,
    ShoppingCartDTO,
    ProductOrderDTO,
)
from dtos.response import (
    ProductCategoryResponse,
    ProductResponse,
    CustomerDetailsResponse,
    ShoppingCartResponse,
    ProductOrderResponse,
)
from models import ProductCategory, Product, CustomerDetails, ShoppingCart, ProductOrder


@dataclass(frozen=True)
class Resource:
    """
    One CRUD resource.

    Attributes:
        name: URL segment under /api, e.g. "shopping-carts"
        model: Mapped entity class
        request_dto: DTO accepted by create, replace and partial update
        response_dto: DTO returned to callers
        alert_name: Entity name used in alert headers, e.g. "shoppingCart"
    """

    name: str
    model: type
    request_dto: type
    response_dto: type
    alert_name: str

    @property
    def entity_name(self) -> str:
        return self.model.__name__


CATEGORIES = Resource("categories", ProductCategory, ProductCategoryDTO, ProductCategoryResponse, "productCategory")
PRODUCTS = Resource("products", Product, ProductDTO, ProductResponse, "product")
CUSTOMER_DETAILS = Resource("customer-details", CustomerDetails, CustomerDetailsDTO, CustomerDetailsResponse, "customerDetails")
SHOPPING_CARTS = Resource("shopping-carts", ShoppingCart, ShoppingCartDTO, ShoppingCartResponse, "shoppingCart")
PRODUCT_ORDERS = Resource("product-orders", ProductOrder, ProductOrderDTO, ProductOrderResponse, "productOrder")

RESOURCES: Dict[str, Resource] = {
    resource.name: resource
    for resource in (CATEGORIES, PRODUCTS, CUSTOMER_DETAILS, SHOPPING_CARTS, PRODUCT_ORDERS)
}
