from sqlalchemy import Column, String, Integer, Numeric, Text, DateTime, ForeignKey, Enum, CheckConstraint, Index
from sqlalchemy.orm import relationship
from database import Base
from domain.entities.identity import IdentityMixin
from domain.value_objects import OrderStatus, PaymentMethod, Size, Gender

# Money columns: 21 digits, 2 decimals
Money = Numeric(21, 2)


class ProductCategory(IdentityMixin, Base):
    __tablename__ = 'product_categories'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    description = Column(String)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class Product(IdentityMixin, Base):
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String)
    description = Column(String)
    price = Column(Money)
    product_size = Column(Enum(Size, native_enum=False, length=8))
    image = Column(Text)  # base64 payload
    image_content_type = Column(String)
    product_category_id = Column(Integer, ForeignKey('product_categories.id'), nullable=True)
    version = Column(Integer, nullable=False)

    # One-directional: a category does not list its products
    product_category = relationship("ProductCategory")

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("price IS NULL OR price >= 0", name='ck_products_price'),
        Index('idx_products_category', 'product_category_id'),
    )


class CustomerDetails(IdentityMixin, Base):
    """
    Contact and delivery details of a customer.

    Owns the customer's shopping carts. The foreign key on ShoppingCart is the
    source of truth; ``carts`` is the back-populated view of it.
    """
    __tablename__ = 'customer_details'

    id = Column(Integer, primary_key=True, autoincrement=True)
    gender = Column(Enum(Gender, native_enum=False, length=16))
    phone = Column(String)
    address_line1 = Column(String)
    address_line2 = Column(String)
    city = Column(String)
    country = Column(String)
    version = Column(Integer, nullable=False)

    carts = relationship("ShoppingCart", back_populates="customer_details", collection_class=set)

    __mapper_args__ = {"version_id_col": version}


class ShoppingCart(IdentityMixin, Base):
    """
    A placed order of one customer.

    Status values:
    - COMPLETED, PAID, PENDING, CANCELLED, REFUNDED
    Any status may be set at any time; no transition order is enforced.
    """
    __tablename__ = 'shopping_carts'

    id = Column(Integer, primary_key=True, autoincrement=True)
    placed_date = Column(DateTime, nullable=False)
    status = Column(Enum(OrderStatus, native_enum=False, length=16), nullable=False)
    total_price = Column(Money, nullable=False)
    payment_method = Column(Enum(PaymentMethod, native_enum=False, length=16), nullable=False)
    payment_reference = Column(String)
    customer_details_id = Column(Integer, ForeignKey('customer_details.id'), nullable=False)
    version = Column(Integer, nullable=False)

    customer_details = relationship("CustomerDetails", back_populates="carts")
    orders = relationship("ProductOrder", back_populates="cart", collection_class=set)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("total_price >= 0", name='ck_shopping_carts_total_price'),
        Index('idx_shopping_carts_customer', 'customer_details_id'),
    )


class ProductOrder(IdentityMixin, Base):
    """A line of a shopping cart: a quantity of one product."""
    __tablename__ = 'product_orders'

    id = Column(Integer, primary_key=True, autoincrement=True)
    quantity = Column(Integer, nullable=False)
    total_price = Column(Money, nullable=False)
    product_id = Column(Integer, ForeignKey('products.id'), nullable=False)
    cart_id = Column(Integer, ForeignKey('shopping_carts.id'), nullable=False)
    version = Column(Integer, nullable=False)

    product = relationship("Product")
    cart = relationship("ShoppingCart", back_populates="orders")

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("quantity >= 0", name='ck_product_orders_quantity'),
        CheckConstraint("total_price >= 0", name='ck_product_orders_total_price'),
        Index('idx_product_orders_cart', 'cart_id'),
        Index('idx_product_orders_product', 'product_id'),
    )
