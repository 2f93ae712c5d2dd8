from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.enums.order_status import OrderStatus
from app.models.order import Order, OrderItem
from app.models.product import Product


def find_by_id(db: Session, product_id: int, for_update: bool = False) -> Optional[Product]:
    query = db.query(Product).filter(Product.id == product_id)
    if for_update:
        # row lock on backends that have one; the version column covers the rest
        query = query.with_for_update()
    return query.first()


def save(db: Session, product: Product) -> Product:
    db.add(product)
    db.flush()
    return product


def exists_by_name(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Product.id).filter(Product.name == name)
    if exclude_id is not None:
        query = query.filter(Product.id != exclude_id)
    return db.query(query.exists()).scalar()


def has_orders_with_status(db: Session, product_id: int, status: OrderStatus) -> bool:
    query = (
        db.query(OrderItem.id)
        .join(Order, Order.id == OrderItem.order_id)
        .filter(OrderItem.product_id == product_id, Order.status == status)
    )
    return db.query(query.exists()).scalar()


def list_active(db: Session, offset: int, limit: int) -> Tuple[List[Product], int]:
    query = db.query(Product).filter(Product.active.is_(True))
    total = query.with_entities(func.count()).scalar() or 0
    items = query.order_by(Product.id.asc()).offset(offset).limit(limit).all()
    return items, total
