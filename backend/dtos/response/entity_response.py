"""
Entity Response DTOs

Singular associations are rendered as a short nested summary. Child
collections are never rendered; they are reached through their own
resources.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.value_objects import OrderStatus, PaymentMethod, Size, Gender


class ResponseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)  # Allow creation from ORM models


class ProductCategorySummary(ResponseModel):
    id: int
    name: Optional[str] = None


class ProductSummary(ResponseModel):
    id: int
    name: Optional[str] = None


class CustomerDetailsSummary(ResponseModel):
    id: int
    phone: Optional[str] = None


class ShoppingCartSummary(ResponseModel):
    id: int
    status: Optional[OrderStatus] = None


class ProductCategoryResponse(ResponseModel):
    id: int = Field(description="Category ID")
    version: int = Field(description="Current version")
    name: str
    description: Optional[str] = None


class ProductResponse(ResponseModel):
    """Response DTO for a product, with its category summary."""

    id: int = Field(description="Product ID")
    version: int = Field(description="Current version")
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    product_size: Optional[Size] = None
    image: Optional[str] = None
    image_content_type: Optional[str] = None
    product_category: Optional[ProductCategorySummary] = None


class CustomerDetailsResponse(ResponseModel):
    id: int = Field(description="Customer details ID")
    version: int = Field(description="Current version")
    gender: Optional[Gender] = None
    phone: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class ShoppingCartResponse(ResponseModel):
    """Response DTO for a shopping cart, with its customer summary."""

    id: int = Field(description="Shopping cart ID")
    version: int = Field(description="Current version")
    placed_date: datetime
    status: OrderStatus
    total_price: Decimal
    payment_method: PaymentMethod
    payment_reference: Optional[str] = None
    customer_details: Optional[CustomerDetailsSummary] = None


class ProductOrderResponse(ResponseModel):
    """Response DTO for a product order, with product and cart summaries."""

    id: int = Field(description="Product order ID")
    version: int = Field(description="Current version")
    quantity: int
    total_price: Decimal
    product: Optional[ProductSummary] = None
    cart: Optional[ShoppingCartSummary] = None
