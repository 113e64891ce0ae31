"""
Entity Request DTOs

Bodies of POST, PUT and PATCH requests. Every field is optional so one DTO
serves create, full replace and merge-patch; which fields the caller actually
sent is read from ``model_fields_set``. Field names match the model's column
names, foreign keys included.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.value_objects import OrderStatus, PaymentMethod, Size, Gender
from models import ProductCategory, Product, CustomerDetails, ShoppingCart, ProductOrder


class EntityDTO(BaseModel):
    """
    Base request DTO.

    Subclasses register the entity type they describe in ``entity_type``.
    """

    entity_type: ClassVar[type]

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = Field(None, description="Store-assigned identifier")
    version: Optional[int] = Field(None, description="Expected version for optimistic locking")


class ProductCategoryDTO(EntityDTO):
    entity_type: ClassVar[type] = ProductCategory

    name: Optional[str] = Field(None, description="Category name")
    description: Optional[str] = Field(None, description="Category description")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"name": "Shirts", "description": "Tops and shirts"}},
    )


class ProductDTO(EntityDTO):
    entity_type: ClassVar[type] = Product

    name: Optional[str] = Field(None, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Optional[Decimal] = Field(None, ge=0, max_digits=21, decimal_places=2, description="Unit price")
    product_size: Optional[Size] = Field(None, description="Product size")
    image: Optional[str] = Field(None, description="Base64 encoded image")
    image_content_type: Optional[str] = Field(None, description="MIME type of the image")
    product_category_id: Optional[int] = Field(None, description="Owning category ID")


class CustomerDetailsDTO(EntityDTO):
    entity_type: ClassVar[type] = CustomerDetails

    gender: Optional[Gender] = None
    phone: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"phone": "555-0100", "city": "Springfield", "country": "US"}},
    )


class ShoppingCartDTO(EntityDTO):
    entity_type: ClassVar[type] = ShoppingCart

    placed_date: Optional[datetime] = Field(None, description="When the order was placed")
    status: Optional[OrderStatus] = Field(None, description="Order status")
    total_price: Optional[Decimal] = Field(None, ge=0, max_digits=21, decimal_places=2)
    payment_method: Optional[PaymentMethod] = Field(None, description="Payment method")
    payment_reference: Optional[str] = Field(None, description="Payment provider reference")
    customer_details_id: Optional[int] = Field(None, description="Owning customer details ID")


class ProductOrderDTO(EntityDTO):
    entity_type: ClassVar[type] = ProductOrder

    quantity: Optional[int] = Field(None, ge=0, description="Number of items")
    total_price: Optional[Decimal] = Field(None, ge=0, max_digits=21, decimal_places=2)
    product_id: Optional[int] = Field(None, description="Ordered product ID")
    cart_id: Optional[int] = Field(None, description="Owning shopping cart ID")
