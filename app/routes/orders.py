from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.messages import resolve_message
from app.database.connection import get_db
from app.dependencies.locale import get_locale
from app.schemas.api_response import ApiResponse
from app.schemas.order import OrderCreate, OrderResponse
from app.services.order_service import cancel_order, create_order, get_order, pay_order

router = APIRouter(prefix="/orders", tags=["Orders"])


# ---------- CREATE ORDER ----------

@router.post(
    "/",
    response_model=ApiResponse[OrderResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_order_route(
    data: OrderCreate,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    """
    Create an order:
    - duplicate product lines are merged
    - stock is reserved per product
    - membership discount, +5% above 5,000,000, capped at 30%
    """
    order = create_order(db, data)
    return ApiResponse.ok(
        resolve_message("order.created.success", locale=locale),
        OrderResponse.from_order(order),
    )


# ---------- GET ORDER ----------

@router.get("/{order_id}", response_model=ApiResponse[OrderResponse], response_model_exclude_none=True)
def get_order_route(
    order_id: int,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    order = get_order(db, order_id)
    return ApiResponse.ok(
        resolve_message("api.response.success", locale=locale),
        OrderResponse.from_order(order),
    )


# ---------- PAY ORDER ----------

@router.post("/{order_id}/pay", response_model=ApiResponse[OrderResponse], response_model_exclude_none=True)
def pay_order_route(
    order_id: int,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    """CREATED -> PAID; accrues the final amount to the customer's spend."""
    order = pay_order(db, order_id)
    return ApiResponse.ok(
        resolve_message("order.paid.success", locale=locale),
        OrderResponse.from_order(order),
    )


# ---------- CANCEL ORDER ----------

@router.post("/{order_id}/cancel", response_model=ApiResponse[OrderResponse], response_model_exclude_none=True)
def cancel_order_route(
    order_id: int,
    db: Session = Depends(get_db),
    locale: str = Depends(get_locale),
):
    """CREATED -> CANCELLED; reserved stock goes back to the products."""
    order = cancel_order(db, order_id)
    return ApiResponse.ok(
        resolve_message("order.cancelled.success", locale=locale),
        OrderResponse.from_order(order),
    )
