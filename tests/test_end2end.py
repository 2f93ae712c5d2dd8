from decimal import Decimal
import uuid
import pytest
from app.core.exceptions import InvalidOrderStateError
from app.enums.membership_tiers import MembershipTier
from app.enums.order_status import OrderStatus
from app.enums.product_category import ProductCategory
from app.routes.customers import create as create_customer_route
from app.routes.orders import create_order_route, pay_order_route
from app.routes.products import create as create_product_route
from app.schemas.customer import CustomerCreate
from app.schemas.order import OrderCreate
from app.schemas.product import ProductCreate
from app.services.customer_service import get_customer
from app.services.order_service import cancel_order, create_order, get_order, pay_order
from app.services.product_service import get_product


def _create_test_product(db, price="25000.00", stock=100, category=ProductCategory.ELECTRONICS):

    payload = ProductCreate(
        name=f"E2E Product {uuid.uuid4().hex[:6].upper()}",
        category=category,
        price=Decimal(price),
        stock=stock,
    )
    response = create_product_route(payload, db=db, locale="en")
    return get_product(db, response.data.id)


def _create_test_customer(db):

    payload = CustomerCreate(name="E2E Customer", email=f"e2e_{uuid.uuid4().hex[:8]}@example.com")
    response = create_customer_route(payload, db=db, locale="en")
    return get_customer(db, response.data.id)


def _order(db, customer, *lines):
    return create_order(
        db,
        OrderCreate(
            customer_id=customer.id,
            items=[{"product_id": p.id, "quantity": q} for p, q in lines],
        ),
    )


@pytest.mark.order(1)
def test_create_order_route_handler(db):

    customer = _create_test_customer(db)
    product = _create_test_product(db, price="25000.00", stock=100)

    payload = OrderCreate(
        customer_id=customer.id,
        items=[
            {"product_id": product.id, "quantity": 3},
            {"product_id": product.id, "quantity": 2},
        ],
    )
    response = create_order_route(payload, db=db, locale="en")

    assert response.success is True
    assert len(response.data.items) == 1
    assert response.data.items[0].quantity == 5
    assert response.data.total_amount == Decimal("125000.00")
    assert get_product(db, product.id).stock == 95


@pytest.mark.order(2)
def test_cancel_returns_reserved_stock(db):

    customer = _create_test_customer(db)
    product = _create_test_product(db, stock=100)

    order = _order(db, customer, (product, 5))
    assert get_product(db, product.id).stock == 95

    cancel_order(db, order.id)

    assert get_order(db, order.id).status == OrderStatus.CANCELLED
    assert get_product(db, product.id).stock == 100


@pytest.mark.order(3)
def test_customer_climbs_tiers_through_payments(db):

    customer = _create_test_customer(db)
    product = _create_test_product(db, price="6000000.00", stock=20)

    # REGULAR: 2 x 6,000,000 = 12,000,000, 5% extra -> 11,400,000
    first = _order(db, customer, (product, 2))
    assert first.final_amount == Decimal("11400000.00")
    pay_order_route(first.id, db=db, locale="en")
    assert get_customer(db, customer.id).membership_tier == MembershipTier.GOLD

    # GOLD: 10% + 5% on 36,000,000 -> 30,600,000
    second = _order(db, customer, (product, 6))
    assert second.discount_amount == Decimal("5400000.00")
    pay_order(db, second.id)

    # GOLD: 15% on 12,000,000 -> 10,200,000; spend reaches 52,200,000
    third = _order(db, customer, (product, 2))
    pay_order(db, third.id)

    refreshed = get_customer(db, customer.id)
    assert refreshed.total_spent == Decimal("52200000.00")
    assert refreshed.membership_tier == MembershipTier.PLATINUM

    # PLATINUM: 20% + 5% on 6,000,000
    fourth = _order(db, customer, (product, 1))
    assert fourth.discount_amount == Decimal("1500000.00")
    assert fourth.final_amount == Decimal("4500000.00")


@pytest.mark.order(4)
def test_paid_order_is_terminal(db):

    customer = _create_test_customer(db)
    product = _create_test_product(db, price="1000.00", stock=10)

    order = _order(db, customer, (product, 4))
    pay_order(db, order.id)

    with pytest.raises(InvalidOrderStateError):
        cancel_order(db, order.id)
    with pytest.raises(InvalidOrderStateError):
        pay_order(db, order.id)

    assert get_product(db, product.id).stock == 6
    assert get_customer(db, customer.id).total_spent == Decimal("4000.00")
