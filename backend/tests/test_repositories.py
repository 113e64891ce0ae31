"""Tests for the repository layer and its query specifications."""

import warnings

from sqlalchemy import inspect
from sqlalchemy.exc import SAWarning

from dtos.internal import PageRequest
from models import Product, ShoppingCart
from repositories import repository_for, ProductRepository, ShoppingCartRepository
from repositories.specifications import FieldEquals


class TestRepositoryFor:
    def test_returns_model_repository(self, db_session):
        repository = repository_for(db_session, Product)
        assert isinstance(repository, ProductRepository)
        assert repository.model is Product


class TestBaseRepository:
    def test_count_and_exists(self, db_session, make_product):
        product = make_product()
        make_product(name="Other")
        repository = repository_for(db_session, Product)

        assert repository.count() == 2
        assert repository.exists(product.id)
        assert not repository.exists(product.id + 100)

    def test_find_page_counts_every_row(self, db_session, make_product):
        for i in range(5):
            make_product(name=f"Product {i}")

        items, total = repository_for(db_session, Product).find_page(PageRequest(page=1, size=2))

        assert total == 5
        assert [p.name for p in items] == ["Product 2", "Product 3"]

    def test_eager_page_loads_associations(self, db_session, make_cart):
        make_cart()
        db_session.expire_all()

        items, _ = ShoppingCartRepository(db_session).find_page(PageRequest(), eager=True)

        assert "customer_details" not in inspect(items[0]).unloaded

    def test_find_matching(self, db_session, make_customer, make_cart):
        customer = make_customer()
        first = make_cart(customer=customer)
        second = make_cart(customer=customer)
        make_cart()

        rows = repository_for(db_session, ShoppingCart).find_matching(
            FieldEquals("customer_details_id", customer.id)
        )

        assert rows == [first, second]


class TestFieldEquals:
    def test_in_memory_check(self, make_cart):
        cart = make_cart()
        assert FieldEquals("customer_details_id", cart.customer_details_id).is_satisfied_by(cart)
        assert not FieldEquals("customer_details_id", -1).is_satisfied_by(cart)

    def test_repr(self):
        assert repr(FieldEquals("cart_id", 3)) == "FieldEquals(cart_id=3)"


class TestFactories:
    def test_linked_rows_persist_without_cascade_warnings(self, make_order):
        with warnings.catch_warnings():
            warnings.simplefilter("error", SAWarning)
            order = make_order()

        assert order.cart.orders == {order}
        assert order.cart in order.cart.customer_details.carts
