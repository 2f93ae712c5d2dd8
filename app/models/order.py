from decimal import Decimal
from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    Numeric,
    DateTime,
    ForeignKey,
    Enum,
    CheckConstraint,
)
from sqlalchemy.orm import relationship

from app.database.connection import Base
from app.enums.order_status import OrderStatus


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    total_amount = Column(Numeric(19, 2), nullable=False, default=Decimal("0.00"))
    discount_amount = Column(Numeric(19, 2), nullable=False, default=Decimal("0.00"))
    final_amount = Column(Numeric(19, 2), nullable=False, default=Decimal("0.00"))
    status = Column(
        Enum(OrderStatus, native_enum=False, length=20),
        nullable=False,
        default=OrderStatus.CREATED,
        index=True,
    )
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    customer = relationship("Customer")
    # items are owned by the order and never outlive it
    items = relationship(
        "OrderItem",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    __mapper_args__ = {"version_id_col": version}


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    # unit price snapshot taken when the order was created
    price_at_purchase = Column(Numeric(19, 2), nullable=False)

    product = relationship("Product", viewonly=True)

    __table_args__ = (CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),)

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.price_at_purchase) * self.quantity
