"""Tests for the generic merge-patch engine."""

from decimal import Decimal

import pytest

from domain.entities.descriptors import fields_of
from domain.merge_patch import merge, snapshot, full_state, apply_state, changed_fields
from domain.value_objects import OrderStatus, PaymentMethod
from dtos.request import (
    ProductCategoryDTO,
    ProductDTO,
    CustomerDetailsDTO,
    ShoppingCartDTO,
    ProductOrderDTO,
)
from exceptions import MergeTypeError
from models import ProductCategory, Product, CustomerDetails, ShoppingCart, ProductOrder


CART_PATCHES = [
    pytest.param({"payment_reference": "NEW456"}, id="one-field"),
    pytest.param({"status": "COMPLETED", "total_price": "75.50"}, id="two-fields"),
    pytest.param({"payment_reference": None}, id="explicit-null"),
    pytest.param({}, id="empty"),
    pytest.param({"id": 999, "version": 42}, id="store-owned-only"),
]


class TestMergeContract:
    @pytest.mark.parametrize("body", CART_PATCHES)
    def test_supplied_fields_win_and_others_are_kept(self, make_cart, body):
        target = make_cart()
        before = snapshot(target)
        patch = ShoppingCartDTO(**body)

        merged = merge(target, patch)

        assert merged["id"] == target.id
        for descriptor in fields_of(ShoppingCart):
            if descriptor.name in patch.model_fields_set:
                assert merged[descriptor.name] == getattr(patch, descriptor.name)
            else:
                assert merged[descriptor.name] == before[descriptor.name]

    def test_scenario_payment_reference_only(self, make_cart):
        target = make_cart(status=OrderStatus.PAID, payment_reference="OLD123", total_price=Decimal("50.00"))

        merged = merge(target, ShoppingCartDTO(payment_reference="NEW456"))

        assert merged["payment_reference"] == "NEW456"
        assert merged["status"] == OrderStatus.PAID
        assert merged["total_price"] == Decimal("50.00")

    def test_explicit_null_differs_from_absent(self, make_cart):
        target = make_cart(payment_reference="OLD123")

        assert merge(target, ShoppingCartDTO())["payment_reference"] == "OLD123"
        assert merge(target, ShoppingCartDTO(payment_reference=None))["payment_reference"] is None

    def test_json_null_is_supplied(self, make_cart):
        target = make_cart(payment_reference="OLD123")
        patch = ShoppingCartDTO.model_validate_json('{"payment_reference": null}')

        assert merge(target, patch)["payment_reference"] is None

    def test_reference_patch_uses_new_id(self, make_cart, make_customer):
        target = make_cart()
        other = make_customer(phone="555-0199")

        merged = merge(target, ShoppingCartDTO(customer_details_id=other.id))

        assert merged["customer_details_id"] == other.id

    def test_target_is_not_modified(self, make_cart):
        target = make_cart(payment_reference="OLD123")
        before = snapshot(target)

        merge(target, ShoppingCartDTO(payment_reference="NEW456", status="CANCELLED"))

        assert snapshot(target) == before

    def test_identifier_comes_from_target(self, make_category):
        target = make_category()

        merged = merge(target, ProductCategoryDTO(id=target.id + 100, name="BBBBBBBBBB"))

        assert merged["id"] == target.id

    def test_collections_are_never_part_of_the_result(self, make_order):
        order = make_order()
        cart = order.cart

        merged = merge(cart, ShoppingCartDTO(status="REFUNDED"))

        assert "orders" not in merged
        apply_state(cart, merged)
        assert cart.orders == {order}


class TestRoundTrip:
    def test_patch_equal_to_target_yields_target(self, make_cart):
        target = make_cart()
        state = snapshot(target)
        patch = ShoppingCartDTO(**state)

        assert merge(target, patch) == state

    @pytest.mark.parametrize(
        "fixture_name, dto_class",
        [
            ("make_category", ProductCategoryDTO),
            ("make_product", ProductDTO),
            ("make_customer", CustomerDetailsDTO),
            ("make_order", ProductOrderDTO),
        ],
    )
    def test_round_trip_for_every_entity_type(self, request, fixture_name, dto_class):
        target = request.getfixturevalue(fixture_name)()
        state = snapshot(target)

        assert merge(target, dto_class(**state)) == state


class TestPatchTypes:
    @pytest.mark.parametrize(
        "model, dto_class",
        [
            (ProductCategory, ProductCategoryDTO),
            (Product, ProductDTO),
            (CustomerDetails, CustomerDetailsDTO),
            (ShoppingCart, ShoppingCartDTO),
            (ProductOrder, ProductOrderDTO),
        ],
    )
    def test_every_writable_field_is_patchable(self, model, dto_class):
        assert dto_class.entity_type is model
        for descriptor in fields_of(model):
            assert descriptor.name in dto_class.model_fields

    def test_patch_of_another_type_is_rejected(self, make_cart):
        with pytest.raises(MergeTypeError):
            merge(make_cart(), ProductDTO(name="Shirt"))

    def test_plain_mapping_is_rejected(self, make_cart):
        with pytest.raises(MergeTypeError):
            merge(make_cart(), {"payment_reference": "NEW456"})


class TestStateHelpers:
    def test_full_state_treats_omitted_fields_as_null(self):
        state = full_state(ShoppingCartDTO(id=3, status="PAID"))

        assert state["id"] == 3
        assert state["status"] == OrderStatus.PAID
        assert state["payment_reference"] is None
        assert state["customer_details_id"] is None

    def test_apply_state_writes_scalars_only(self, make_cart, make_customer):
        cart = make_cart()
        owner = cart.customer_details
        other = make_customer()

        apply_state(cart, {"payment_method": PaymentMethod.PAYPAL, "customer_details_id": other.id})

        assert cart.payment_method == PaymentMethod.PAYPAL
        assert cart.customer_details is owner

    def test_changed_fields(self, make_cart):
        cart = make_cart(payment_reference="OLD123")
        state = merge(cart, ShoppingCartDTO(payment_reference="NEW456", status="PAID"))

        assert changed_fields(cart, state) == ["payment_reference"]
