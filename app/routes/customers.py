from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.messages import resolve_message
from app.database.connection import get_db
from app.dependencies.locale import get_locale
from app.schemas.api_response import ApiResponse
from app.schemas.customer import CustomerCreate, CustomerResponse
from app.services.customer_service import create_customer, get_customer

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.post(
    "/",
    response_model=ApiResponse[CustomerResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create(data: CustomerCreate, db: Session = Depends(get_db), locale: str = Depends(get_locale)):
    customer = create_customer(db, data)
    return ApiResponse.ok(
        resolve_message("customer.created.success", locale=locale),
        CustomerResponse.model_validate(customer),
    )


@router.get("/{customer_id}", response_model=ApiResponse[CustomerResponse], response_model_exclude_none=True)
def get(customer_id: int, db: Session = Depends(get_db), locale: str = Depends(get_locale)):
    customer = get_customer(db, customer_id)
    return ApiResponse.ok(
        resolve_message("api.response.success", locale=locale),
        CustomerResponse.model_validate(customer),
    )
