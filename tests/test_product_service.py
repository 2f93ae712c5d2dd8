from decimal import Decimal

import pytest

from app.core.exceptions import BusinessRuleError, DuplicateResourceError, ResourceNotFoundError
from app.enums.product_category import ProductCategory
from app.schemas.order import OrderCreate
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.order_service import create_order, pay_order
from app.services.product_service import (
    create_product,
    delete_product,
    get_product,
    list_products,
    total_pages,
    update_product,
)


def _create_payload(name="Laptop", category=ProductCategory.ELECTRONICS, price="15000000.00", stock=10):
    return ProductCreate(name=name, category=category, price=Decimal(price), stock=stock)


def _update_payload(product, **changes):
    fields = {
        "name": product.name,
        "category": product.category,
        "price": Decimal(product.price),
        "stock": product.stock,
        "active": product.active,
    }
    fields.update(changes)
    return ProductUpdate(**fields)


def _order_one(db, customer, product, quantity=1):
    return create_order(
        db,
        OrderCreate(customer_id=customer.id, items=[{"product_id": product.id, "quantity": quantity}]),
    )


def test_create_and_get_product(db):
    created = create_product(db, _create_payload(stock=15))

    fetched = get_product(db, created.id)
    assert fetched.name == "Laptop"
    assert fetched.stock == 15
    assert fetched.active is True
    assert fetched.price == Decimal("15000000.00")


def test_duplicate_name_is_rejected(db):
    create_product(db, _create_payload(name="Phone"))

    with pytest.raises(DuplicateResourceError) as exc:
        create_product(db, _create_payload(name="Phone"))

    assert exc.value.value == "Phone"
    assert exc.value.status_code == 409


def test_food_price_cap(db):
    with pytest.raises(BusinessRuleError) as exc:
        create_product(db, _create_payload(name="Caviar", category=ProductCategory.FOOD, price="1000000.01"))

    assert exc.value.message_key == "product.food.price.exceeded"

    at_limit = create_product(db, _create_payload(name="Truffle", category=ProductCategory.FOOD, price="1000000.00"))
    assert at_limit.id is not None


def test_get_unknown_product(db):
    with pytest.raises(ResourceNotFoundError):
        get_product(db, 404)


def test_update_product_fields(db, make_product):
    product = make_product(name="Old Name", price="100.00", stock=5)

    updated = update_product(db, product.id, _update_payload(product, name="New Name", stock=8))

    assert updated.name == "New Name"
    assert updated.stock == 8


def test_update_to_existing_name_is_rejected(db, make_product):
    make_product(name="Taken")
    other = make_product(name="Free")

    with pytest.raises(DuplicateResourceError):
        update_product(db, other.id, _update_payload(other, name="Taken"))


def test_price_change_blocked_by_paid_orders(db, make_customer, make_product):
    customer = make_customer()
    product = make_product(price="100.00", stock=10)
    order = _order_one(db, customer, product)
    pay_order(db, order.id)
    db.refresh(product)

    with pytest.raises(BusinessRuleError) as exc:
        update_product(db, product.id, _update_payload(product, price=Decimal("120.00")))

    assert exc.value.message_key == "product.price.update.completed.orders"
    db.refresh(product)
    assert product.price == Decimal("100.00")


def test_other_fields_can_change_despite_paid_orders(db, make_customer, make_product):
    customer = make_customer()
    product = make_product(price="100.00", stock=10)
    order = _order_one(db, customer, product)
    pay_order(db, order.id)
    db.refresh(product)

    updated = update_product(db, product.id, _update_payload(product, stock=50))

    assert updated.stock == 50


def test_deactivation_blocked_by_pending_orders(db, make_customer, make_product):
    customer = make_customer()
    product = make_product(stock=10)
    _order_one(db, customer, product)
    db.refresh(product)

    with pytest.raises(BusinessRuleError) as exc:
        update_product(db, product.id, _update_payload(product, active=False))

    assert exc.value.message_key == "product.deactivate.pending.orders"


def test_delete_requires_zero_stock(db, make_product):
    product = make_product(stock=3)

    with pytest.raises(BusinessRuleError) as exc:
        delete_product(db, product.id)

    assert exc.value.message_args == (3,)
    db.refresh(product)
    assert product.active is True


def test_delete_is_soft(db, make_product):
    product = make_product(stock=0)

    deleted = delete_product(db, product.id)

    assert deleted.active is False
    assert get_product(db, product.id).active is False


def test_list_products_pages_active_only(db, make_product):
    for _ in range(5):
        make_product()
    make_product(active=False)

    items, page, size, total = list_products(db, page=1, size=2)

    assert page == 1
    assert size == 2
    assert total == 5
    assert len(items) == 2
    assert all(p.active for p in items)
    assert items[0].id < items[1].id


def test_list_products_clamps_arguments(db, make_product):
    make_product()

    items, page, size, total = list_products(db, page=-3, size=10_000)

    assert page == 0
    assert size == 100
    assert total == 1


@pytest.mark.parametrize("total, size, expected", [(0, 10, 0), (10, 10, 1), (11, 10, 2), (5, 2, 3)])
def test_total_pages(total, size, expected):
    assert total_pages(total, size) == expected
