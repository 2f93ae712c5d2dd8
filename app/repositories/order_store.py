from decimal import Decimal
from typing import Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.enums.order_status import OrderStatus
from app.models.order import Order


def find_by_id(db: Session, order_id: int, for_update: bool = False) -> Optional[Order]:
    query = db.query(Order).filter(Order.id == order_id)
    if for_update:
        query = query.with_for_update()
    return query.first()


def save(db: Session, order: Order) -> Order:
    db.add(order)
    db.flush()
    return order


def count_by_status(db: Session) -> Dict[str, int]:
    rows = db.query(Order.status, func.count(Order.id)).group_by(Order.status).all()
    counts = {status.value: 0 for status in OrderStatus}
    for status, count in rows:
        key = status.value if isinstance(status, OrderStatus) else str(status)
        counts[key] = int(count)
    return counts


def paid_revenue(db: Session) -> Decimal:
    total = (
        db.query(func.coalesce(func.sum(Order.final_amount), 0))
        .filter(Order.status == OrderStatus.PAID)
        .scalar()
    )
    return Decimal(str(total or 0))
