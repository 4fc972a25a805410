"""
Tests for shopping carts and product groups: ownership through the cart,
admin lifecycle management and derived cart prices.
"""

import pytest

from paperbook_backend.exceptions import (
    EntityAlreadyDisabledException,
    ForbiddenException,
    NotFoundException,
)
from paperbook_backend.interfaces import (
    CartItem,
    ProductGroupCreate,
    ProductGroupQuery,
    ProductGroupUpdate,
    ProductUpdate,
    Role,
    ShoppingCartCreate,
    ShoppingCartGet,
    ShoppingCartQuery,
    ShoppingCartUpdate,
)
from paperbook_backend.tests.conftest import ROOT, principal_of


@pytest.fixture
def buyer(make_user):
    return make_user(Role.user)


@pytest.fixture
def seller(make_user):
    return make_user(Role.seller)


@pytest.fixture
def cart(services, buyer):
    return services.shopping_carts.create(ShoppingCartCreate(), principal_of(buyer))


@pytest.mark.unit
class TestShoppingCartLifecycle:

    def test_admin_disable_and_enable_cart(self, services, buyer, cart):
        owner = principal_of(buyer)

        services.shopping_carts.disable(cart.id, ROOT)

        with pytest.raises(NotFoundException):
            services.shopping_carts.get(cart.id, owner)

        services.shopping_carts.enable(cart.id, ROOT)

        assert services.shopping_carts.get(cart.id, owner).id == cart.id

    def test_disable_twice_conflicts(self, services, cart):
        services.shopping_carts.disable(cart.id, ROOT)

        with pytest.raises(EntityAlreadyDisabledException):
            services.shopping_carts.disable(cart.id, ROOT)

    def test_owner_stamped_from_caller(self, buyer, cart):
        assert cart.user_id == buyer.id
        assert cart.price == 0

    def test_payload_cannot_choose_owner(self, services, buyer, make_user):
        other = make_user()
        cart = services.shopping_carts.create({"user_id": other.id, "product_groups": []}, principal_of(buyer))

        assert cart.user_id == buyer.id

    def test_other_user_cannot_read_cart(self, services, cart, make_user):
        other = make_user()

        with pytest.raises(ForbiddenException):
            services.shopping_carts.get(cart.id, principal_of(other))

    def test_list_is_narrowed_to_owner(self, services, buyer, cart, make_user):
        other = make_user()
        services.shopping_carts.create(ShoppingCartCreate(), principal_of(other))

        items, total = services.shopping_carts.list(principal_of(buyer), ShoppingCartQuery())

        assert total == 1
        assert items[0].id == cart.id

        _, admin_total = services.shopping_carts.list(ROOT, ShoppingCartQuery())
        assert admin_total == 2


@pytest.mark.unit
class TestCartPrice:

    def test_inline_items_priced_on_create(self, services, buyer, seller, make_product):
        notebook = make_product(seller, name="Notebook", price=10.0)
        pen = make_product(seller, name="Pen", price=2.5)

        cart = services.shopping_carts.create(
            ShoppingCartCreate(product_groups=[
                CartItem(product_id=notebook.id, amount=2),
                CartItem(product_id=pen.id, amount=4),
            ]),
            principal_of(buyer),
        )

        assert cart.price == 30.0
        assert len(cart.product_groups) == 2

    def test_inline_item_with_disabled_product(self, services, buyer, seller, make_product):
        product = make_product(seller)
        services.products.disable(product.id, principal_of(seller))

        with pytest.raises(NotFoundException):
            services.shopping_carts.create(
                ShoppingCartCreate(product_groups=[CartItem(product_id=product.id)]),
                principal_of(buyer),
            )

    def test_product_group_changes_recompute_price(self, services, buyer, seller, cart, make_product):
        owner = principal_of(buyer)
        notebook = make_product(seller, name="Notebook", price=10.0)
        pen = make_product(seller, name="Pen", price=2.5)

        first = services.product_groups.create(
            ProductGroupCreate(shopping_cart_id=cart.id, product_id=notebook.id, amount=1), owner
        )
        second = services.product_groups.create(
            ProductGroupCreate(shopping_cart_id=cart.id, product_id=pen.id, amount=2), owner
        )
        assert services.shopping_carts.get(cart.id, owner).price == 15.0

        services.product_groups.update(first.id, owner, ProductGroupUpdate(amount=3))
        assert services.shopping_carts.get(cart.id, owner).price == 35.0

        services.product_groups.disable(second.id, owner)
        assert services.shopping_carts.get(cart.id, owner).price == 30.0

        services.product_groups.enable(second.id, owner)
        assert services.shopping_carts.get(cart.id, owner).price == 35.0

        services.product_groups.delete(first.id, owner)
        assert services.shopping_carts.get(cart.id, owner).price == 5.0

    def test_admin_price_correction(self, services, buyer, cart):
        updated = services.shopping_carts.update(cart.id, ROOT, ShoppingCartUpdate(price=9.99))
        assert updated.price == 9.99


@pytest.mark.unit
class TestProductGroups:

    def test_cannot_add_to_foreign_cart(self, services, cart, seller, make_user, make_product):
        other = make_user()
        product = make_product(seller)

        with pytest.raises(ForbiddenException):
            services.product_groups.create(
                ProductGroupCreate(shopping_cart_id=cart.id, product_id=product.id), principal_of(other)
            )

    def test_cannot_add_to_disabled_cart(self, services, buyer, cart, seller, make_product):
        product = make_product(seller)
        services.shopping_carts.disable(cart.id, ROOT)

        with pytest.raises(NotFoundException):
            services.product_groups.create(
                ProductGroupCreate(shopping_cart_id=cart.id, product_id=product.id), principal_of(buyer)
            )

    def test_ownership_follows_cart(self, services, buyer, cart, seller, make_user, make_product):
        other = make_user()
        product = make_product(seller)
        group = services.product_groups.create(
            ProductGroupCreate(shopping_cart_id=cart.id, product_id=product.id), principal_of(buyer)
        )

        assert group.owner_id == buyer.id
        assert services.product_groups.get(group.id, principal_of(buyer)).id == group.id

        with pytest.raises(ForbiddenException):
            services.product_groups.get(group.id, principal_of(other))

        with pytest.raises(ForbiddenException):
            services.product_groups.update(group.id, principal_of(other), ProductGroupUpdate(amount=5))

    def test_list_is_narrowed_through_cart(self, services, buyer, cart, seller, make_user, make_product):
        other = make_user()
        other_cart = services.shopping_carts.create(ShoppingCartCreate(), principal_of(other))
        product = make_product(seller)

        mine = services.product_groups.create(
            ProductGroupCreate(shopping_cart_id=cart.id, product_id=product.id), principal_of(buyer)
        )
        services.product_groups.create(
            ProductGroupCreate(shopping_cart_id=other_cart.id, product_id=product.id), principal_of(other)
        )

        items, total = services.product_groups.list(principal_of(buyer), ProductGroupQuery())
        assert total == 1
        assert items[0].id == mine.id

        _, admin_total = services.product_groups.list(ROOT, ProductGroupQuery())
        assert admin_total == 2

    def test_related_product_groups_of_cart(self, services, buyer, cart, seller, make_user, make_product):
        product = make_product(seller)
        group = services.product_groups.create(
            ProductGroupCreate(shopping_cart_id=cart.id, product_id=product.id), principal_of(buyer)
        )

        items, total = services.shopping_carts.get_related(cart.id, "product-groups", principal_of(buyer))
        assert total == 1
        assert items[0].id == group.id

        with pytest.raises(ForbiddenException):
            services.shopping_carts.get_related(cart.id, "product-groups", principal_of(make_user()))


@pytest.fixture
def stocked_cart(services, buyer, seller, cart, make_product):
    """Cart holding 5 notebooks at 10.0 each."""
    notebook = make_product(seller, name="Notebook", price=10.0)
    group = services.product_groups.create(
        ProductGroupCreate(shopping_cart_id=cart.id, product_id=notebook.id, amount=5), principal_of(buyer)
    )
    return cart, group, notebook


@pytest.mark.unit
class TestDisabledCart:

    def test_groups_of_disabled_cart_are_hidden(self, services, buyer, stocked_cart):
        cart, group, _ = stocked_cart
        owner = principal_of(buyer)
        services.shopping_carts.disable(cart.id, ROOT)

        with pytest.raises(NotFoundException):
            services.product_groups.get(group.id, owner)

        with pytest.raises(NotFoundException):
            services.product_groups.get(group.id, ROOT)

        _, total = services.product_groups.list(owner, ProductGroupQuery())
        assert total == 0

        _, admin_total = services.product_groups.list(ROOT, ProductGroupQuery())
        assert admin_total == 0

    def test_groups_of_disabled_cart_are_not_mutated(self, services, buyer, stocked_cart):
        cart, group, _ = stocked_cart
        owner = principal_of(buyer)
        services.shopping_carts.disable(cart.id, ROOT)

        with pytest.raises(NotFoundException):
            services.product_groups.update(group.id, owner, ProductGroupUpdate(amount=1))

        with pytest.raises(NotFoundException):
            services.product_groups.disable(group.id, owner)

        with pytest.raises(NotFoundException):
            services.product_groups.delete(group.id, owner)

        services.shopping_carts.enable(cart.id, ROOT)

        restored = services.product_groups.get(group.id, owner)
        assert restored.amount == 5
        assert restored.is_active is True
        assert services.shopping_carts.get(cart.id, owner).price == 50.0

    def test_cart_response_lists_active_groups_only(self, services, buyer, seller, stocked_cart, make_product):
        cart, group, _ = stocked_cart
        owner = principal_of(buyer)
        pen = make_product(seller, name="Pen", price=2.0)
        services.product_groups.create(
            ProductGroupCreate(shopping_cart_id=cart.id, product_id=pen.id, amount=1), owner
        )

        services.product_groups.disable(group.id, owner)

        response = ShoppingCartGet.model_validate(services.shopping_carts.get(cart.id, owner), from_attributes=True)
        assert [item.product_id for item in response.product_groups] == [pen.id]
        assert all(item.is_active for item in response.product_groups)
        assert response.price == 2.0


@pytest.mark.unit
class TestProductChangesReprice:

    def test_product_price_change(self, services, buyer, stocked_cart):
        cart, _, notebook = stocked_cart

        services.products.update(notebook.id, ROOT, ProductUpdate(price=12.0))

        assert services.shopping_carts.get(cart.id, principal_of(buyer)).price == 60.0

    def test_product_disable_and_enable(self, services, buyer, stocked_cart):
        cart, _, notebook = stocked_cart
        owner = principal_of(buyer)

        services.products.disable(notebook.id, ROOT)
        assert services.shopping_carts.get(cart.id, owner).price == 0

        services.products.enable(notebook.id, ROOT)
        assert services.shopping_carts.get(cart.id, owner).price == 50.0

    def test_product_delete(self, services, buyer, stocked_cart):
        cart, group, notebook = stocked_cart
        owner = principal_of(buyer)

        services.products.delete(notebook.id, ROOT)

        assert services.shopping_carts.get(cart.id, owner).price == 0
        with pytest.raises(NotFoundException):
            services.product_groups.get(group.id, owner)

    def test_disabled_cart_repriced_on_enable(self, services, buyer, stocked_cart):
        cart, _, notebook = stocked_cart
        services.shopping_carts.disable(cart.id, ROOT)

        services.products.update(notebook.id, ROOT, ProductUpdate(price=1.0))
        assert services.shopping_carts.repository.find_by_id(cart.id).price == 50.0

        services.shopping_carts.enable(cart.id, ROOT)
        assert services.shopping_carts.get(cart.id, principal_of(buyer)).price == 5.0
