"""
Order status machine.

CREATED -> PAID and CREATED -> CANCELLED are the only moves; PAID and
CANCELLED are terminal. Every transition is validated before any side effect
runs, so a rejected transition leaves the order, the customer and the
products exactly as they were.
"""

from typing import Dict, FrozenSet

import structlog
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidOrderStateError, ResourceNotFoundError
from app.enums.order_status import OrderStatus
from app.models.order import Order
from app.repositories import customer_store, order_store, product_store
from app.services import membership_policy, stock_ledger

logger = structlog.get_logger(__name__)

ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.CREATED: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

_TRANSITION_ERROR_KEYS = {
    OrderStatus.PAID: "order.pay.invalid.status",
    OrderStatus.CANCELLED: "order.cancel.invalid.status",
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(OrderStatus(current), frozenset())


def ensure_transition(order: Order, target: OrderStatus) -> None:
    current = OrderStatus(order.status)
    if not can_transition(current, target):
        logger.warning(
            "invalid_status_transition",
            order_id=order.id,
            status=current.value,
            target=target.value,
        )
        raise InvalidOrderStateError(
            _TRANSITION_ERROR_KEYS.get(target, "order.pay.invalid.status"),
            current,
            target,
        )


def mark_paid(db: Session, order: Order) -> Order:
    ensure_transition(order, OrderStatus.PAID)

    customer = customer_store.find_by_id(db, order.customer_id, for_update=True)
    if customer is None:
        raise ResourceNotFoundError("customer.not.found", order.customer_id)

    membership_policy.apply_payment(customer, order.final_amount)
    customer_store.save(db, customer)
    logger.debug(
        "customer_spend_updated",
        customer_id=customer.id,
        total_spent=str(customer.total_spent),
        tier=customer.membership_tier.value,
    )

    order.status = OrderStatus.PAID
    return order_store.save(db, order)


def mark_cancelled(db: Session, order: Order) -> Order:
    ensure_transition(order, OrderStatus.CANCELLED)

    for item in order.items:
        product = product_store.find_by_id(db, item.product_id, for_update=True)
        if product is None:
            raise ResourceNotFoundError("product.not.found", item.product_id)
        stock_ledger.release(product, item.quantity)
        product_store.save(db, product)

    order.status = OrderStatus.CANCELLED
    return order_store.save(db, order)
