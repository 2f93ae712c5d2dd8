"""
Order orchestration: create, pay, cancel and read orders.

Each mutating operation runs as a single unit of work through
`run_in_transaction`: stock debits, customer accrual and order writes commit
together or not at all.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict

import structlog
from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFoundError
from app.database.transaction import run_in_transaction
from app.enums.membership_tiers import MembershipTier
from app.enums.order_status import OrderStatus
from app.models.customer import Customer
from app.models.order import Order, OrderItem
from app.repositories import customer_store, order_store, product_store
from app.schemas.order import OrderCreate
from app.services import order_lifecycle, stock_ledger
from app.services.order_items import consolidate_items
from app.services.pricing_service.discount_engine import calculate_order_pricing

logger = structlog.get_logger(__name__)


# ---------- LOOKUPS ----------

def _find_customer_or_raise(db: Session, customer_id: int) -> Customer:
    customer = customer_store.find_by_id(db, customer_id)
    if customer is None:
        logger.warning("customer_not_found", customer_id=customer_id)
        raise ResourceNotFoundError("customer.not.found", customer_id)
    return customer


def _find_order_or_raise(db: Session, order_id: int, for_update: bool = False) -> Order:
    order = order_store.find_by_id(db, order_id, for_update=for_update)
    if order is None:
        logger.warning("order_not_found", order_id=order_id)
        raise ResourceNotFoundError("order.not.found", order_id)
    return order


# ---------- CREATE ORDER ----------

def _reserve_items(db: Session, order: Order, merged: Dict[int, int]) -> Decimal:
    """Reserve stock for every consolidated line and snapshot its price. Returns the total."""
    total_amount = Decimal("0")

    for product_id, quantity in merged.items():
        product = product_store.find_by_id(db, product_id, for_update=True)
        if product is None:
            logger.warning("product_not_found", product_id=product_id)
            raise ResourceNotFoundError("product.not.found", product_id)

        stock_ledger.reserve(product, quantity)
        product_store.save(db, product)

        item = OrderItem(
            product_id=product.id,
            quantity=quantity,
            price_at_purchase=Decimal(product.price),
        )
        order.items.append(item)
        total_amount += item.subtotal

    return total_amount


def create_order(db: Session, data: OrderCreate) -> Order:
    def work() -> Order:
        customer = _find_customer_or_raise(db, data.customer_id)
        merged = consolidate_items((line.product_id, line.quantity) for line in data.items)

        order = Order(
            customer_id=customer.id,
            status=OrderStatus.CREATED,
            created_at=datetime.utcnow(),
        )
        total_amount = _reserve_items(db, order, merged)

        tier = MembershipTier(customer.membership_tier)
        pricing = calculate_order_pricing(total_amount, tier.discount_rate)
        logger.debug(
            "order_discount_computed",
            customer_id=customer.id,
            tier=tier.value,
            rate=str(pricing.discount_rate),
        )

        order.total_amount = pricing.total_amount
        order.discount_amount = pricing.discount_amount
        order.final_amount = pricing.final_amount
        return order_store.save(db, order)

    order = run_in_transaction(db, work, operation="create_order")
    logger.info(
        "order_created",
        order_id=order.id,
        customer_id=order.customer_id,
        items=len(order.items),
        total=str(order.total_amount),
        discount=str(order.discount_amount),
        final=str(order.final_amount),
    )
    return order


# ---------- STATE TRANSITIONS ----------

def pay_order(db: Session, order_id: int) -> Order:
    def work() -> Order:
        order = _find_order_or_raise(db, order_id, for_update=True)
        return order_lifecycle.mark_paid(db, order)

    order = run_in_transaction(db, work, operation="pay_order")
    logger.info(
        "order_paid",
        order_id=order.id,
        final_amount=str(order.final_amount),
        customer_id=order.customer_id,
    )
    return order


def cancel_order(db: Session, order_id: int) -> Order:
    def work() -> Order:
        order = _find_order_or_raise(db, order_id, for_update=True)
        return order_lifecycle.mark_cancelled(db, order)

    order = run_in_transaction(db, work, operation="cancel_order")
    logger.info("order_cancelled", order_id=order.id, items_restored=len(order.items))
    return order


# ---------- READ ----------

def get_order(db: Session, order_id: int) -> Order:
    order = _find_order_or_raise(db, order_id)
    logger.debug("order_retrieved", order_id=order.id, status=order.status.value)
    return order
