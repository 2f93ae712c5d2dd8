from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from app.enums.order_status import OrderStatus


# ---------- Requests ----------

class OrderItemRequest(BaseModel):
    product_id: int
    quantity: int = Field(ge=1)


class OrderCreate(BaseModel):
    customer_id: int
    items: List[OrderItemRequest] = Field(min_length=1)


# ---------- Responses ----------

class OrderItemResponse(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    price_at_purchase: Decimal
    subtotal: Decimal

    @classmethod
    def from_item(cls, item) -> "OrderItemResponse":
        return cls(
            product_id=item.product_id,
            product_name=item.product.name if item.product is not None else "",
            quantity=item.quantity,
            price_at_purchase=item.price_at_purchase,
            subtotal=item.subtotal,
        )


class OrderResponse(BaseModel):
    id: int
    customer_id: int
    customer_name: str
    items: List[OrderItemResponse]
    total_amount: Decimal
    discount_amount: Decimal
    final_amount: Decimal
    status: OrderStatus
    created_at: datetime

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer.name,
            items=[OrderItemResponse.from_item(item) for item in order.items],
            total_amount=order.total_amount,
            discount_amount=order.discount_amount,
            final_amount=order.final_amount,
            status=order.status,
            created_at=order.created_at,
        )
